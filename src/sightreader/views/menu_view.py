"""Main menu: pick the game settings, start a game or open the stats."""

from __future__ import annotations

from enum import Enum

import pygame

from sightreader.models import (
    ClefType,
    Difficulty,
    GameMode,
    MetronomeSpeed,
    NoteName,
    NoteNotation,
    RoundLength,
)
from sightreader.renderer import colors as colors_mod
from sightreader.settings import GameSettings, save_settings
from sightreader.views.base import ViewAction, ViewContext

# (label, settings attribute, enum cycled through; None = on/off toggle)
_ROWS: list[tuple[str, str, type[Enum] | None]] = [
    ("Mode", "game_mode", GameMode),
    ("Difficulty", "difficulty", Difficulty),
    ("Clef", "clef", ClefType),
    ("Labels", "notation", NoteNotation),
    ("Round", "round_length", RoundLength),
    ("Metronome", "metronome_enabled", None),
    ("Tempo", "metronome_speed", MetronomeSpeed),
    ("Sound", "muted", None),
]

_NOTE_KEYS = {
    pygame.K_1: NoteName.DO, pygame.K_2: NoteName.RE, pygame.K_3: NoteName.MI,
    pygame.K_4: NoteName.FA, pygame.K_5: NoteName.SOL, pygame.K_6: NoteName.LA,
    pygame.K_7: NoteName.SI,
}


def _cycle(enum_cls: type[Enum], current: str, step: int) -> str:
    members = list(enum_cls)
    names = [m.name for m in members]
    idx = names.index(current) if current in names else 0
    return names[(idx + step) % len(names)]


def _display(enum_cls: type[Enum], name: str) -> str:
    if name not in enum_cls.__members__:
        return name
    return enum_cls[name].display_name


class MenuView:
    name = "menu"
    display_name = "Main Menu"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._selected: int = 0
        self._font: pygame.font.Font | None = None
        self._title_font: pygame.font.Font | None = None

    @property
    def _settings(self) -> GameSettings:
        return self._context.settings

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 20)
        self._title_font = pygame.font.SysFont("monospace", 36)

    def on_exit(self) -> None:
        pass

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN:
            return None

        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="quit")
        if event.key == pygame.K_RETURN:
            return ViewAction(kind="push", target="game")
        if event.key == pygame.K_s:
            return ViewAction(kind="push", target="stats")

        if event.key == pygame.K_UP:
            self._selected = (self._selected - 1) % len(_ROWS)
        elif event.key == pygame.K_DOWN:
            self._selected = (self._selected + 1) % len(_ROWS)
        elif event.key in (pygame.K_LEFT, pygame.K_RIGHT):
            self._change(-1 if event.key == pygame.K_LEFT else 1)
        elif event.key in _NOTE_KEYS:
            self._settings.toggle_note(_NOTE_KEYS[event.key])
            save_settings(self._settings)
        return None

    def _change(self, step: int) -> None:
        _, attr, enum_cls = _ROWS[self._selected]
        if enum_cls is None:
            setattr(self._settings, attr, not getattr(self._settings, attr))
        else:
            setattr(self._settings, attr, _cycle(enum_cls, getattr(self._settings, attr), step))
        if attr == "muted" and self._context.audio is not None:
            self._context.audio.muted = self._settings.muted
        save_settings(self._settings)

    def update(self, dt: float) -> ViewAction | None:
        return None

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(colors_mod.BG)
        if not self._font or not self._title_font:
            return

        title = self._title_font.render("SightReader", True, colors_mod.HUD_TEXT)
        surface.blit(title, (surface.get_width() // 2 - title.get_width() // 2, 30))

        y = 110
        for i, (label, attr, enum_cls) in enumerate(_ROWS):
            value = getattr(self._settings, attr)
            if enum_cls is not None:
                shown = _display(enum_cls, value)
            elif attr == "muted":
                shown = "Off" if value else "On"
            else:
                shown = "On" if value else "Off"
            color = colors_mod.HIGHLIGHT if i == self._selected else colors_mod.HUD_TEXT
            text = self._font.render(f"{label:<12} < {shown} >", True, color)
            surface.blit(text, (80, y))
            y += 32

        notation = self._settings.get_notation()
        selected = self._settings.get_selected_notes()
        notes = "  ".join(
            n.display_name(notation) if n in selected else "--" for n in NoteName
        )
        text = self._font.render(f"{'Notes':<12}   {notes}", True, colors_mod.HUD_TEXT)
        surface.blit(text, (80, y + 10))

        hint = self._font.render(
            "UP/DOWN select  LEFT/RIGHT change  1-7 notes  ENTER play  S stats  ESC quit",
            True, colors_mod.NOTE_DONE,
        )
        surface.blit(hint, (20, surface.get_height() - 40))
