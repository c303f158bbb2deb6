"""In-game view: staff, answer input and mode HUD around a GameEngine."""

from __future__ import annotations

import pygame

from sightreader.engine import GameEngine
from sightreader.models import GameConfig, GameSnapshot, NoteName, NoteNotation
from sightreader.renderer import colors as colors_mod
from sightreader.renderer.hud import render_hud
from sightreader.renderer.staff import render_staff
from sightreader.views.base import ViewAction, ViewContext


class GameView:
    name = "game"
    display_name = "Play"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._engine: GameEngine | None = None
        self._config: GameConfig | None = None
        self._snapshot = GameSnapshot()
        self._notation = NoteNotation.SOLFEGE
        self._unsubscribe = None
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 20)
        self._big_font = pygame.font.SysFont("monospace", 40)
        self._config = context.settings.to_config()
        self._notation = context.settings.get_notation()

        self._engine = GameEngine(
            self._config,
            context.scheduler,
            audio=context.audio,
            stats=context.stats,
        )
        self._unsubscribe = self._engine.subscribe(self._on_snapshot)
        if context.keyboard_input is not None:
            # Drop keys typed in the menu
            context.keyboard_input.close()
        context.stats.start_session()
        self._engine.start_session()

    def on_exit(self) -> None:
        if self._engine is not None:
            self._engine.stop_all_timers()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._context is not None:
            self._context.stats.end_session()
        self._engine = None

    def _on_snapshot(self, snapshot: GameSnapshot) -> None:
        self._snapshot = snapshot

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN:
            return None
        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="pop")
        if event.key in (pygame.K_r, pygame.K_SPACE) and self._snapshot.is_game_over:
            self._engine.reset_game()
        elif event.key == pygame.K_m and self._engine is not None:
            metronome = self._engine.metronome
            if metronome.running:
                self._engine.stop_metronome()
            else:
                self._engine.start_metronome()
        return None

    def update(self, dt: float) -> ViewAction | None:
        if self._engine is None or self._context is None:
            return None
        for source in (self._context.keyboard_input, self._context.midi_input):
            if source is None:
                continue
            while (note := source.poll()) is not None:
                self._engine.submit_answer(note)
        return None

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(colors_mod.BG)
        if self._config is None or not self._font:
            return

        w, h = surface.get_size()
        render_staff(surface, self._snapshot, pygame.Rect(40, h // 2 - 140, w - 80, 200))
        render_hud(surface, self._config.game_mode, self._snapshot)
        self._draw_answer_row(surface)

        if self._snapshot.is_game_over and not self._snapshot.showing_feedback:
            over = self._big_font.render("Game Over", True, colors_mod.HIGHLIGHT)
            surface.blit(over, (w // 2 - over.get_width() // 2, 70))
            hint = self._font.render("R to play again, ESC for menu", True, colors_mod.HUD_TEXT)
            surface.blit(hint, (w // 2 - hint.get_width() // 2, 120))

    def _draw_answer_row(self, surface: pygame.Surface) -> None:
        w, h = surface.get_size()
        slot = w // len(NoteName)
        for i, note in enumerate(NoteName):
            label = f"{i + 1} {note.display_name(self._notation)}"
            text = self._font.render(label, True, colors_mod.HUD_TEXT)
            surface.blit(text, (i * slot + slot // 2 - text.get_width() // 2, h - 80))
