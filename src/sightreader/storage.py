"""Key-value persistence for statistics blobs, backed by SQLite."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Protocol, runtime_checkable

from sightreader.config import DATA_DIR

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = DATA_DIR / "stats.db"


@runtime_checkable
class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process store; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SqliteStore:
    """Stores each key as one row. Database errors are logged, never raised."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH) -> None:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(db_path))
        self._init_db()

    def _init_db(self) -> None:
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        self.conn.commit()

    def get(self, key: str) -> str | None:
        try:
            row = self.conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            logger.warning("Failed to read %r: %s", key, exc)
            return None
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            self.conn.execute(
                """INSERT INTO kv (key, value) VALUES (?, ?)
                   ON CONFLICT(key) DO UPDATE
                   SET value = excluded.value, updated_at = CURRENT_TIMESTAMP""",
                (key, value),
            )
            self.conn.commit()
        except sqlite3.Error as exc:
            logger.warning("Failed to write %r: %s", key, exc)

    def close(self) -> None:
        self.conn.close()
