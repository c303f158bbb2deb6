"""Tests for the statistics aggregator."""

import json
from datetime import timedelta

from sightreader.models import NoteName
from sightreader.stats import DAILY_STATS_KEY, NOTE_STATS_KEY, StatsAggregator
from sightreader.storage import MemoryStore


def test_record_answer_updates_day_and_note(store, clock):
    stats = StatsAggregator(store, now=clock)
    stats.record_answer(NoteName.DO, True)
    stats.record_answer(NoteName.DO, False)
    stats.record_answer(NoteName.MI, True)

    today = stats.today_stats
    assert today.date == "2026-03-10"
    assert today.total_notes == 3
    assert today.correct_notes == 2
    assert [n.note_name for n in stats.note_stats] == ["Do", "Mi"]
    assert stats.note_stats[0].total_attempts == 2
    assert stats.note_stats[0].correct_attempts == 1


def test_every_answer_is_written_through(store, clock):
    stats = StatsAggregator(store, now=clock)
    stats.record_answer(NoteName.LA, True)
    daily = json.loads(store.get(DAILY_STATS_KEY))
    notes = json.loads(store.get(NOTE_STATS_KEY))
    assert daily == [{"date": "2026-03-10", "total_notes": 1, "correct_notes": 1, "practice_time_seconds": 0}]
    assert notes == [{"note_name": "La", "total_attempts": 1, "correct_attempts": 1}]


def test_round_trip_through_storage(store, clock):
    stats = StatsAggregator(store, now=clock)
    for i in range(10):
        stats.record_answer(NoteName.SOL, i % 3 != 0)
    clock.current += timedelta(days=1)
    for i in range(6):
        stats.record_answer(NoteName.SI, i % 2 == 0)

    reloaded = StatsAggregator(store, now=clock)
    assert reloaded.daily_stats == stats.daily_stats
    assert reloaded.note_stats == stats.note_stats
    assert reloaded.total_notes_all_time == 16
    assert reloaded.total_correct_all_time == stats.total_correct_all_time
    assert reloaded.overall_accuracy == stats.overall_accuracy


def test_session_time_is_added_to_today(store, clock):
    stats = StatsAggregator(store, now=clock)
    stats.end_session()
    assert stats.daily_stats == []

    stats.start_session()
    clock.current += timedelta(seconds=95, milliseconds=700)
    stats.end_session()
    assert stats.today_stats.practice_time_seconds == 95
    assert stats.today_stats.total_notes == 0

    stats.end_session()
    assert stats.total_practice_time == 95


def test_last_seven_days_fills_gaps(store, clock):
    stats = StatsAggregator(store, now=clock)
    clock.current -= timedelta(days=3)
    stats.record_answer(NoteName.RE, True)
    clock.current += timedelta(days=3)
    stats.record_answer(NoteName.RE, False)
    stats.record_answer(NoteName.RE, False)

    week = stats.last_7_days_stats
    assert [d.date for d in week] == [
        "2026-03-04", "2026-03-05", "2026-03-06", "2026-03-07",
        "2026-03-08", "2026-03-09", "2026-03-10",
    ]
    assert [d.total_notes for d in week] == [0, 0, 0, 1, 0, 0, 2]


def test_accuracy_is_zero_without_attempts(store, clock):
    stats = StatsAggregator(store, now=clock)
    assert stats.overall_accuracy == 0.0
    assert stats.today_stats is None
    assert stats.weak_notes == []
    assert stats.strong_notes == []


def _answer(stats, note, correct, wrong):
    for _ in range(correct):
        stats.record_answer(note, True)
    for _ in range(wrong):
        stats.record_answer(note, False)


def test_weak_and_strong_notes_need_five_attempts(store, clock):
    stats = StatsAggregator(store, now=clock)
    _answer(stats, NoteName.DO, 0, 4)  # terrible but too few attempts
    _answer(stats, NoteName.RE, 4, 0)  # perfect but too few attempts
    _answer(stats, NoteName.MI, 5, 0)
    _answer(stats, NoteName.FA, 3, 2)
    _answer(stats, NoteName.SOL, 1, 4)
    _answer(stats, NoteName.LA, 4, 1)

    assert [n.note_name for n in stats.weak_notes] == ["Sol", "Fa", "La"]
    assert [n.note_name for n in stats.strong_notes] == ["Mi", "La", "Fa"]


def test_ranking_ties_keep_first_seen_order(store, clock):
    stats = StatsAggregator(store, now=clock)
    for note in (NoteName.SI, NoteName.DO, NoteName.LA, NoteName.RE):
        _answer(stats, note, 3, 2)
    assert [n.note_name for n in stats.weak_notes] == ["Si", "Do", "La"]
    assert [n.note_name for n in stats.strong_notes] == ["Si", "Do", "La"]


def test_reset_clears_and_persists(store, clock):
    stats = StatsAggregator(store, now=clock)
    stats.record_answer(NoteName.FA, True)
    stats.reset_all_stats()
    assert stats.daily_stats == []
    assert StatsAggregator(store, now=clock).note_stats == []


def test_corrupt_data_loads_as_empty(clock):
    store = MemoryStore({DAILY_STATS_KEY: "{not json", NOTE_STATS_KEY: json.dumps([{"bogus": 1}])})
    stats = StatsAggregator(store, now=clock)
    assert stats.daily_stats == []
    assert stats.note_stats == []

    stats.record_answer(NoteName.DO, True)
    assert stats.total_notes_all_time == 1


def test_mistyped_fields_load_as_empty(clock):
    store = MemoryStore({
        DAILY_STATS_KEY: json.dumps([{"date": "2026-03-10", "total_notes": "3", "correct_notes": None}]),
        NOTE_STATS_KEY: json.dumps([{"note_name": "Do", "total_attempts": True, "correct_attempts": 1}]),
    })
    stats = StatsAggregator(store, now=clock)
    assert stats.daily_stats == []
    assert stats.note_stats == []

    stats.record_answer(NoteName.DO, True)
    assert stats.today_stats.total_notes == 1
    assert stats.note_stats[0].total_attempts == 1


def test_notes_by_name_lists_every_note_alphabetically(store, clock):
    stats = StatsAggregator(store, now=clock)
    for note in (NoteName.SI, NoteName.DO, NoteName.LA, NoteName.DO):
        stats.record_answer(note, note != NoteName.LA)
    assert [n.note_name for n in stats.notes_by_name] == ["Do", "La", "Si"]
    assert [n.note_name for n in stats.note_stats] == ["Si", "Do", "La"]
    assert stats.notes_by_name[0].total_attempts == 2


def test_accuracy_trend_covers_the_last_three_days(store, clock):
    stats = StatsAggregator(store, now=clock)
    clock.current -= timedelta(days=2)
    stats.record_answer(NoteName.RE, False)
    clock.current += timedelta(days=2)
    stats.record_answer(NoteName.RE, True)

    trend = stats.accuracy_trend
    assert [d.date for d in trend] == ["2026-03-08", "2026-03-09", "2026-03-10"]
    assert [d.accuracy for d in trend] == [0.0, 0.0, 100.0]
