"""Long-term practice statistics: per-day and per-note records."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, fields
from datetime import datetime, timedelta
from typing import Callable

from sightreader.config import MIN_ATTEMPTS_FOR_RANKING, RANKED_NOTES_SHOWN
from sightreader.models import DailyStats, NoteName, NoteStats
from sightreader.storage import KeyValueStore

logger = logging.getLogger(__name__)

DAILY_STATS_KEY = "daily_stats"
NOTE_STATS_KEY = "note_stats"
_DATE_FORMAT = "%Y-%m-%d"


class StatsAggregator:
    """Accumulates answers and practice time, persisting after every change.

    Records keep first-seen order, both in memory and on disk.
    """

    def __init__(
        self,
        store: KeyValueStore,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._now = now
        self._session_start: datetime | None = None
        self.daily_stats: list[DailyStats] = []
        self.note_stats: list[NoteStats] = []
        self.load()

    # -- recording -----------------------------------------------------

    def record_answer(self, note: NoteName, correct: bool) -> None:
        day = self._day(self._today())
        day.total_notes += 1
        if correct:
            day.correct_notes += 1

        stats = self._note(note.value)
        stats.total_attempts += 1
        if correct:
            stats.correct_attempts += 1

        self.save()

    def start_session(self) -> None:
        self._session_start = self._now()

    def end_session(self) -> None:
        if self._session_start is None:
            return
        elapsed = int((self._now() - self._session_start).total_seconds())
        self._session_start = None
        self._day(self._today()).practice_time_seconds += max(0, elapsed)
        self.save()

    def reset_all_stats(self) -> None:
        self.daily_stats = []
        self.note_stats = []
        self.save()

    # -- derived views -------------------------------------------------

    @property
    def today_stats(self) -> DailyStats | None:
        return self._find_day(self._today())

    @property
    def last_7_days_stats(self) -> list[DailyStats]:
        """One entry per day for the past week, oldest first, zeros where idle."""
        today = self._now().date()
        days = []
        for days_ago in range(6, -1, -1):
            date = (today - timedelta(days=days_ago)).strftime(_DATE_FORMAT)
            days.append(self._find_day(date) or DailyStats(date=date))
        return days

    @property
    def total_notes_all_time(self) -> int:
        return sum(d.total_notes for d in self.daily_stats)

    @property
    def total_correct_all_time(self) -> int:
        return sum(d.correct_notes for d in self.daily_stats)

    @property
    def overall_accuracy(self) -> float:
        total = self.total_notes_all_time
        if total == 0:
            return 0.0
        return self.total_correct_all_time / total * 100.0

    @property
    def total_practice_time(self) -> int:
        return sum(d.practice_time_seconds for d in self.daily_stats)

    @property
    def weak_notes(self) -> list[NoteStats]:
        return sorted(self._ranked(), key=lambda n: n.accuracy)[:RANKED_NOTES_SHOWN]

    @property
    def strong_notes(self) -> list[NoteStats]:
        return sorted(self._ranked(), key=lambda n: n.accuracy, reverse=True)[:RANKED_NOTES_SHOWN]

    @property
    def notes_by_name(self) -> list[NoteStats]:
        return sorted(self.note_stats, key=lambda n: n.note_name)

    @property
    def accuracy_trend(self) -> list[DailyStats]:
        """The last three days of the week view, oldest first."""
        return self.last_7_days_stats[-3:]

    def _ranked(self) -> list[NoteStats]:
        return [n for n in self.note_stats if n.total_attempts >= MIN_ATTEMPTS_FOR_RANKING]

    # -- persistence ---------------------------------------------------

    def save(self) -> None:
        self._store.set(DAILY_STATS_KEY, json.dumps([asdict(d) for d in self.daily_stats]))
        self._store.set(NOTE_STATS_KEY, json.dumps([asdict(n) for n in self.note_stats]))

    def load(self) -> None:
        self.daily_stats = self._load_records(DAILY_STATS_KEY, DailyStats)
        self.note_stats = self._load_records(NOTE_STATS_KEY, NoteStats)

    def _load_records(self, key: str, record_type: type) -> list:
        raw = self._store.get(key)
        if raw is None:
            return []
        try:
            records = [record_type(**item) for item in json.loads(raw)]
            for record in records:
                _check_field_types(record)
        except (json.JSONDecodeError, TypeError, KeyError) as exc:
            logger.warning("Discarding unreadable %s: %s", key, exc)
            return []
        return records

    # -- helpers -------------------------------------------------------

    def _today(self) -> str:
        return self._now().strftime(_DATE_FORMAT)

    def _find_day(self, date: str) -> DailyStats | None:
        return next((d for d in self.daily_stats if d.date == date), None)

    def _day(self, date: str) -> DailyStats:
        day = self._find_day(date)
        if day is None:
            day = DailyStats(date=date)
            self.daily_stats.append(day)
        return day

    def _note(self, note_name: str) -> NoteStats:
        stats = next((n for n in self.note_stats if n.note_name == note_name), None)
        if stats is None:
            stats = NoteStats(note_name=note_name)
            self.note_stats.append(stats)
        return stats


_FIELD_TYPES = {"int": int, "str": str}


def _check_field_types(record) -> None:
    """Raise TypeError unless every field holds its declared type (bools are not counts)."""
    for f in fields(record):
        expected = _FIELD_TYPES[f.type]
        value = getattr(record, f.name)
        if not isinstance(value, expected) or isinstance(value, bool):
            raise TypeError(f"{type(record).__name__}.{f.name} must be {f.type}, got {value!r}")
