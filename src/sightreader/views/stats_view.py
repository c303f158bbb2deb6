"""Statistics screen: totals, last week, trend and per-note accuracy."""

from __future__ import annotations

from datetime import datetime

import pygame

from sightreader.renderer import colors as colors_mod
from sightreader.views.base import ViewAction, ViewContext

_BAR_MAX_HEIGHT = 120


def format_duration(seconds: int) -> str:
    hours, rest = divmod(seconds, 3600)
    minutes = rest // 60
    if hours:
        return f"{hours}h {minutes}m"
    if minutes:
        return f"{minutes}m"
    return f"{seconds}s"


class StatsView:
    name = "stats"
    display_name = "Statistics"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._font: pygame.font.Font | None = None
        self._confirm_reset = False

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 20)
        self._confirm_reset = False

    def on_exit(self) -> None:
        pass

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN:
            return None
        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="pop")
        if event.key == pygame.K_x:
            if self._confirm_reset:
                self._context.stats.reset_all_stats()
            self._confirm_reset = not self._confirm_reset
        else:
            self._confirm_reset = False
        return None

    def update(self, dt: float) -> ViewAction | None:
        return None

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(colors_mod.BG)
        if not self._font or not self._context:
            return
        stats = self._context.stats
        today = stats.today_stats

        lines = [
            f"Today:     {today.total_notes if today else 0} notes, "
            f"{today.accuracy if today else 0:.0f}% accurate",
            f"All time:  {stats.total_notes_all_time} notes, {stats.overall_accuracy:.0f}% accurate",
            f"Practice:  {format_duration(stats.total_practice_time)}",
            "Needs work: " + (", ".join(
                f"{n.note_name} {n.accuracy:.0f}%" for n in stats.weak_notes) or "-"),
            "Strongest:  " + (", ".join(
                f"{n.note_name} {n.accuracy:.0f}%" for n in stats.strong_notes) or "-"),
            "All notes:  " + (", ".join(
                f"{n.note_name} {n.correct_attempts}/{n.total_attempts}" for n in stats.notes_by_name) or "-"),
            "Trend:      " + "  ".join(
                f"{datetime.strptime(d.date, '%Y-%m-%d').strftime('%a')} {d.accuracy:.0f}%"
                for d in stats.accuracy_trend),
        ]
        y = 30
        for line in lines:
            surface.blit(self._font.render(line, True, colors_mod.HUD_TEXT), (40, y))
            y += 30

        # Last 7 days as bars of notes answered
        week = stats.last_7_days_stats
        peak = max((d.total_notes for d in week), default=0) or 1
        base_y = y + 40 + _BAR_MAX_HEIGHT
        for i, day in enumerate(week):
            x = 60 + i * 90
            height = int(day.total_notes / peak * _BAR_MAX_HEIGHT)
            pygame.draw.rect(surface, colors_mod.CORRECT, pygame.Rect(x, base_y - height, 50, height))
            label = datetime.strptime(day.date, "%Y-%m-%d").strftime("%a")
            surface.blit(self._font.render(label, True, colors_mod.HUD_TEXT), (x + 5, base_y + 8))

        hint = "ESC back  X reset stats" if not self._confirm_reset else "Press X again to erase all stats"
        surface.blit(self._font.render(hint, True, colors_mod.NOTE_DONE), (20, surface.get_height() - 40))
