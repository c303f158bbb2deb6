"""Tests for the key-value stores."""

from sightreader.stats import StatsAggregator
from sightreader.storage import KeyValueStore, MemoryStore, SqliteStore
from sightreader.models import NoteName


def test_memory_store():
    store = MemoryStore()
    assert isinstance(store, KeyValueStore)
    assert store.get("missing") is None
    store.set("k", "v")
    assert store.get("k") == "v"


def test_sqlite_store_overwrites_and_persists(tmp_path):
    path = tmp_path / "nested" / "stats.db"
    store = SqliteStore(path)
    assert store.get("k") is None
    store.set("k", "one")
    store.set("k", "two")
    assert store.get("k") == "two"
    store.close()

    reopened = SqliteStore(path)
    assert reopened.get("k") == "two"
    reopened.close()


def test_stats_survive_a_restart(tmp_path, clock):
    path = tmp_path / "stats.db"
    store = SqliteStore(path)
    stats = StatsAggregator(store, now=clock)
    stats.record_answer(NoteName.SI, True)
    stats.record_answer(NoteName.SI, False)
    store.close()

    store = SqliteStore(path)
    reloaded = StatsAggregator(store, now=clock)
    assert reloaded.note_stats == stats.note_stats
    assert reloaded.today_stats.total_notes == 2
    store.close()


def test_sqlite_errors_are_absorbed(tmp_path):
    store = SqliteStore(tmp_path / "stats.db")
    store.close()
    assert store.get("k") is None
    store.set("k", "v")
