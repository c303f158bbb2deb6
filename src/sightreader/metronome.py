"""Metronome that ticks on the shared scheduler, independent of scoring."""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from sightreader.config import METRONOME_PULSE_S
from sightreader.models import MetronomeSpeed, NoteName
from sightreader.scheduler import Scheduler, Token


@runtime_checkable
class AudioSink(Protocol):
    """What the engine needs from the audio layer."""

    muted: bool

    def play_note(self, note: NoteName) -> None: ...
    def play_metronome_tick(self) -> None: ...


class Metronome:
    """Fires a click every beat and raises a short visual pulse."""

    def __init__(
        self,
        scheduler: Scheduler,
        audio: AudioSink | None = None,
        speed: MetronomeSpeed = MetronomeSpeed.MODERATE,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.speed = speed
        self.beat = False
        self.beat_count = 0
        self._scheduler = scheduler
        self._audio = audio
        self._on_change = on_change
        self._beat_token: Token | None = None
        self._pulse_token: Token | None = None

    @property
    def running(self) -> bool:
        return self._beat_token is not None

    def start(self) -> None:
        """(Re)start: one beat now, then one every ``60 / bpm`` seconds."""
        self.stop()
        self._beat_token = self._scheduler.schedule_repeating(self.speed.interval, self._tick)
        self._tick()

    def stop(self) -> None:
        self._scheduler.cancel(self._beat_token)
        self._scheduler.cancel(self._pulse_token)
        self._beat_token = None
        self._pulse_token = None
        if self.beat:
            self.beat = False
            self._changed()

    def _tick(self) -> None:
        if self._audio is not None:
            self._audio.play_metronome_tick()
        self.beat_count += 1
        self.beat = True
        self._scheduler.cancel(self._pulse_token)
        self._pulse_token = self._scheduler.schedule_once(METRONOME_PULSE_S, self._end_pulse)
        self._changed()

    def _end_pulse(self) -> None:
        self._pulse_token = None
        self.beat = False
        self._changed()

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
