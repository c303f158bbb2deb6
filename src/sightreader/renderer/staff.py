"""Five-line staff with the round's notes."""

from __future__ import annotations

import pygame

from sightreader.models import AnswerResult, ClefType, GameSnapshot
from sightreader.renderer.colors import (
    CORRECT,
    HUD_TEXT,
    INCORRECT,
    NOTE_CURRENT,
    NOTE_DONE,
    NOTE_HEAD,
    STAFF_LINE,
)
from sightreader.staff import ledger_lines

_LINE_SPACING = 16  # pixels between staff lines
_HALF_STEP = _LINE_SPACING // 2
_NOTE_RADIUS = 7
_CLEF_MARGIN = 70

_CLEF_LABELS = {
    ClefType.TREBLE: "G",
    ClefType.BASS: "F",
    ClefType.RANDOM: "?",
}


def _position_y(center_y: int, position: int) -> int:
    return center_y - position * _HALF_STEP


def render_staff(surface: pygame.Surface, snapshot: GameSnapshot, rect: pygame.Rect) -> None:
    """Draw the staff, clef, notes and ledger lines into ``rect``.

    Notes already answered are dimmed; the current one is highlighted, and
    tinted green or red while answer feedback is showing.
    """
    center_y = rect.centery

    for pos in (-4, -2, 0, 2, 4):
        y = _position_y(center_y, pos)
        pygame.draw.line(surface, STAFF_LINE, (rect.x, y), (rect.right, y), 2)

    clef_font = pygame.font.SysFont("serif", _LINE_SPACING * 4)
    clef_surf = clef_font.render(_CLEF_LABELS[snapshot.current_clef], True, HUD_TEXT)
    surface.blit(clef_surf, (rect.x + 10, center_y - clef_surf.get_height() // 2))

    if not snapshot.notes:
        return

    usable = rect.w - _CLEF_MARGIN - 20
    step = usable / len(snapshot.notes)

    for idx, note in enumerate(snapshot.notes):
        x = int(rect.x + _CLEF_MARGIN + step * (idx + 0.5))
        y = _position_y(center_y, note.position)

        for ledger in ledger_lines(note.position):
            ly = _position_y(center_y, ledger)
            pygame.draw.line(
                surface, STAFF_LINE,
                (x - _NOTE_RADIUS * 2, ly), (x + _NOTE_RADIUS * 2, ly), 2,
            )

        if idx < snapshot.current_index:
            color = NOTE_DONE
        elif idx == snapshot.current_index:
            if snapshot.showing_feedback and snapshot.last_answer == AnswerResult.CORRECT:
                color = CORRECT
            elif snapshot.showing_feedback and snapshot.last_answer == AnswerResult.INCORRECT:
                color = INCORRECT
            else:
                color = NOTE_CURRENT
        else:
            color = NOTE_HEAD

        pygame.draw.ellipse(
            surface, color,
            pygame.Rect(x - _NOTE_RADIUS - 2, y - _NOTE_RADIUS + 1, (_NOTE_RADIUS + 2) * 2, (_NOTE_RADIUS - 1) * 2),
        )

        # Stems point down from the middle line up
        stem_dir = 1 if note.position >= 0 else -1
        stem_x = x - _NOTE_RADIUS - 1 if stem_dir == 1 else x + _NOTE_RADIUS + 1
        pygame.draw.line(surface, color, (stem_x, y), (stem_x, y + stem_dir * _LINE_SPACING * 3), 2)
