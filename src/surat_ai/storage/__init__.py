"""Storage backends for the letter archive and settings."""

from .archive import ARCHIVE_KEY, ArchiveCounts, ArchiveStore, matches
from .kv import InMemoryKeyValueStore, SqliteKeyValueStore
from .preferences import SETTINGS_KEY, PreferencesStore

__all__ = [
    "ARCHIVE_KEY",
    "ArchiveCounts",
    "ArchiveStore",
    "InMemoryKeyValueStore",
    "PreferencesStore",
    "SETTINGS_KEY",
    "SqliteKeyValueStore",
    "matches",
]
