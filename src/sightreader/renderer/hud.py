"""Heads-up display: mode counters, timer, feedback and metronome pulse."""

from __future__ import annotations

import pygame

from sightreader.models import AnswerResult, GameMode, GameSnapshot
from sightreader.renderer.colors import CORRECT, HUD_TEXT, INCORRECT, METRONOME_PULSE


def hud_lines(mode: GameMode, snapshot: GameSnapshot) -> list[str]:
    if mode == GameMode.TIMED_CHALLENGE:
        return [
            f"Time: {snapshot.time_remaining}s",
            f"Score: {snapshot.correct_count}",
        ]
    if mode == GameMode.STREAK:
        return [
            f"Streak: {snapshot.current_streak}",
            f"Best: {snapshot.best_streak}",
        ]
    return [
        f"Correct: {snapshot.correct_count}/{snapshot.total_attempts}",
        f"Accuracy: {snapshot.accuracy:.0f}%",
        f"Note {min(snapshot.current_index + 1, len(snapshot.notes))}/{len(snapshot.notes)}",
    ]


def render_hud(surface: pygame.Surface, mode: GameMode, snapshot: GameSnapshot) -> None:
    font = pygame.font.SysFont("monospace", 20)

    y = 10
    for line in hud_lines(mode, snapshot):
        text = font.render(line, True, HUD_TEXT)
        surface.blit(text, (10, y))
        y += 28

    if snapshot.showing_feedback:
        if snapshot.last_answer == AnswerResult.CORRECT:
            msg, color = "Correct!", CORRECT
        else:
            msg, color = "Try again", INCORRECT
        if snapshot.is_game_over:
            msg = "Missed!"
        text = font.render(msg, True, color)
        surface.blit(text, (surface.get_width() // 2 - text.get_width() // 2, 10))

    if snapshot.metronome_beat:
        pygame.draw.circle(surface, METRONOME_PULSE, (surface.get_width() - 30, 30), 12)
