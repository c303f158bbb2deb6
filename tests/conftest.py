"""Shared fakes for engine and statistics tests."""

from __future__ import annotations

import random
from datetime import datetime

import pytest

from sightreader.models import NoteName
from sightreader.scheduler import ManualScheduler
from sightreader.storage import MemoryStore


class FakeAudio:
    def __init__(self) -> None:
        self.muted = False
        self.notes: list[NoteName] = []
        self.ticks = 0

    def play_note(self, note: NoteName) -> None:
        self.notes.append(note)

    def play_metronome_tick(self) -> None:
        self.ticks += 1


class FakeStats:
    def __init__(self) -> None:
        self.answers: list[tuple[NoteName, bool]] = []

    def record_answer(self, note: NoteName, correct: bool) -> None:
        self.answers.append((note, correct))


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def audio() -> FakeAudio:
    return FakeAudio()


@pytest.fixture
def recorder() -> FakeStats:
    return FakeStats()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 10, 18, 30, 0))
