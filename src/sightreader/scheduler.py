"""Cancellable timed callbacks, driven cooperatively by the frame loop."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable

Token = int


@runtime_checkable
class Scheduler(Protocol):
    """Facility the engine uses for delays, countdowns and the metronome."""

    def schedule_once(self, delay: float, callback: Callable[[], None]) -> Token: ...
    def schedule_repeating(self, interval: float, callback: Callable[[], None]) -> Token: ...
    def cancel(self, token: Token | None) -> None: ...


@dataclass
class _Task:
    token: Token
    due: float
    callback: Callable[[], None]
    interval: float | None = None  # None = one-shot


class ManualScheduler:
    """Scheduler whose clock only moves when ``advance`` is called.

    The app calls ``advance(dt)`` once per frame; tests call it directly.
    Callbacks run on the caller's thread, in deadline order, and may
    schedule or cancel other tasks while running.
    """

    def __init__(self) -> None:
        self.now: float = 0.0
        self._tasks: dict[Token, _Task] = {}
        self._ids = itertools.count(1)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule_once(self, delay: float, callback: Callable[[], None]) -> Token:
        token = next(self._ids)
        self._tasks[token] = _Task(token, self.now + max(0.0, delay), callback)
        return token

    def schedule_repeating(self, interval: float, callback: Callable[[], None]) -> Token:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        token = next(self._ids)
        self._tasks[token] = _Task(token, self.now + interval, callback, interval)
        return token

    def cancel(self, token: Token | None) -> None:
        if token is not None:
            self._tasks.pop(token, None)

    def advance(self, dt: float) -> int:
        """Move the clock forward by ``dt`` seconds. Returns callbacks fired."""
        target = self.now + max(0.0, dt)
        fired = 0
        while True:
            task = self._next_due(target)
            if task is None:
                break
            self.now = task.due
            if task.interval is None:
                del self._tasks[task.token]
            else:
                task.due += task.interval
            task.callback()
            fired += 1
        self.now = target
        return fired

    def _next_due(self, target: float) -> _Task | None:
        due = [t for t in self._tasks.values() if t.due <= target]
        if not due:
            return None
        # Ties go to the task scheduled first
        return min(due, key=lambda t: (t.due, t.token))
