"""Top-level application: initializes pygame, builds services, and runs the game loop."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from sightreader.config import FPS, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from sightreader.input import KeyboardInput
from sightreader.scheduler import ManualScheduler
from sightreader.settings import load_settings
from sightreader.stats import StatsAggregator
from sightreader.storage import KeyValueStore, MemoryStore
from sightreader.views.base import ViewContext, ViewManager
from sightreader.views.game_view import GameView
from sightreader.views.menu_view import MenuView
from sightreader.views.stats_view import StatsView

logger = logging.getLogger(__name__)


class App:
    def __init__(self, soundfont: str = "", db_path: Path | None = None) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()

        # Build shared services once; optional subsystems gracefully degrade
        settings = load_settings()
        self.scheduler = ManualScheduler()
        self.audio = self._try_audio(soundfont)
        if self.audio is not None:
            self.audio.muted = settings.muted
        self.store = self._try_store(db_path)
        self.stats = StatsAggregator(self.store)
        self.midi_input = self._try_midi()
        self._keyboard_input = KeyboardInput()

        context = ViewContext(
            screen_size=(WINDOW_WIDTH, WINDOW_HEIGHT),
            scheduler=self.scheduler,
            stats=self.stats,
            settings=settings,
            audio=self.audio,
            midi_input=self.midi_input,
            keyboard_input=self._keyboard_input,
        )

        self.views = ViewManager(context)
        self.views.register(MenuView)
        self.views.register(GameView)
        self.views.register(StatsView)
        self.views.push("menu")

    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    self._keyboard_input.feed_event(event)
                    if not self.views.handle_event(event):
                        running = False
            if running:
                self.scheduler.advance(dt)
                if self.audio is not None:
                    self.audio.flush_pending_offs()
                if not self.views.update(dt):
                    running = False
            self.views.draw(self.screen)
            pygame.display.flip()

        self._cleanup()
        pygame.quit()

    def _cleanup(self) -> None:
        while self.views.active_view:
            self.views.pop()
        if self.midi_input is not None:
            self.midi_input.close()
        if self.audio is not None:
            self.audio.shutdown()
        close = getattr(self.store, "close", None)
        if close is not None:
            close()

    @staticmethod
    def _try_midi():
        from sightreader.input import MidiDeviceError, MidiInput
        try:
            mi = MidiInput()
            mi.open()
            return mi
        except MidiDeviceError as exc:
            logger.info("MIDI input unavailable: %s", exc)
            return None

    @staticmethod
    def _try_audio(soundfont: str):
        try:
            from sightreader.audio import AudioEngine
            return AudioEngine(soundfont or None)
        except Exception as exc:
            logger.warning("Audio disabled: %s", exc)
            return None

    @staticmethod
    def _try_store(db_path: Path | None) -> KeyValueStore:
        import sqlite3

        from sightreader.storage import DEFAULT_DB_PATH, SqliteStore
        try:
            return SqliteStore(db_path or DEFAULT_DB_PATH)
        except (OSError, sqlite3.Error) as exc:
            logger.warning("Stats will not be saved: %s", exc)
            return MemoryStore()
