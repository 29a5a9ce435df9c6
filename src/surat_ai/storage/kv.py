"""Key/value persistence backends."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from types import TracebackType

from ..core.config import StorageSettings
from ..core.interfaces import KeyValueStore

LOGGER = logging.getLogger(__name__)


class SqliteKeyValueStore(KeyValueStore):
    """Persist whole text values by key in a single SQLite table."""

    def __init__(self, settings: StorageSettings) -> None:
        """Open the database and create the table if needed."""
        self._settings = settings
        db_path = Path(settings.db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = sqlite3.connect(db_path, check_same_thread=False)
        self._connection.row_factory = sqlite3.Row
        self._apply_migrations()

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> SqliteKeyValueStore:
        """Enter context manager scope."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Ensure the connection is closed when exiting context manager."""
        self.close()

    # KeyValueStore API -------------------------------------------------------
    def get(self, key: str) -> str | None:
        """Return the stored value for ``key``."""
        row = self._connection.execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return None
        return str(row["value"])

    def set(self, key: str, value: str) -> None:
        """Replace the value stored under ``key`` in one transaction."""
        LOGGER.debug("Writing key %s (%d chars)", key, len(value))
        with self._connection:
            self._connection.execute(
                """
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                (key, value),
            )

    def remove(self, key: str) -> None:
        """Delete ``key`` if stored."""
        with self._connection:
            self._connection.execute("DELETE FROM kv_store WHERE key = ?", (key,))

    def close(self) -> None:
        """Close the underlying SQLite connection."""
        self._connection.close()

    def _apply_migrations(self) -> None:
        with self._connection:
            self._connection.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary backed store for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


__all__ = ["InMemoryKeyValueStore", "SqliteKeyValueStore"]
