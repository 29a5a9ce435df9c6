"""Ordered archive of finalized letters on top of a key/value store."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.interfaces import KeyValueStore, StorageError
from ..core.models import LetterRecord, LetterType

LOGGER = logging.getLogger(__name__)

ARCHIVE_KEY = "suratAI_data"

LetterPredicate = Callable[[LetterRecord], bool]


@dataclass(slots=True, frozen=True)
class ArchiveCounts:
    """Dashboard totals for the archive."""

    incoming: int
    outgoing: int
    total: int


class ArchiveStore:
    """Most-recent-first collection of :class:`LetterRecord` values.

    Every mutation reads the whole collection, computes the new one, and
    writes it back as a single value.
    """

    def __init__(self, store: KeyValueStore, *, key: str = ARCHIVE_KEY) -> None:
        self._store = store
        self._key = key

    def append(self, record: LetterRecord) -> None:
        """Add ``record`` to the front of the archive and persist it."""
        records = [record, *self.all()]
        self._write(records)
        LOGGER.info("Archived letter %s (%s)", record.id, record.file_name)

    def all(self) -> list[LetterRecord]:
        """Return every archived letter, newest first."""
        raw = self._store.get(self._key)
        if raw is None:
            return []
        try:
            payload = json.loads(raw)
            if not isinstance(payload, list):
                raise ValueError("archive must be a JSON array")
            return [LetterRecord.from_dict(item) for item in payload]
        except (ValueError, KeyError, TypeError) as exc:
            raise StorageError("Stored archive could not be read") from exc

    def clear(self) -> None:
        """Drop every archived letter."""
        self._store.remove(self._key)
        LOGGER.info("Archive cleared")

    def filtered_sorted(self, predicate: LetterPredicate) -> list[LetterRecord]:
        """Return letters matching ``predicate`` ordered by date, newest first."""
        matches = [record for record in self.all() if predicate(record)]
        return sorted(matches, key=lambda record: record.date, reverse=True)

    def search(
        self, letter_type: LetterType | None = None, term: str = ""
    ) -> list[LetterRecord]:
        """Filter by type and a case-insensitive search term."""
        return self.filtered_sorted(matches(letter_type, term))

    def recent(self, limit: int = 10) -> list[LetterRecord]:
        """Return the ``limit`` most recently archived letters."""
        return self.all()[:limit]

    def counts(self) -> ArchiveCounts:
        """Count archived letters per type."""
        records = self.all()
        incoming = sum(1 for record in records if record.type is LetterType.INCOMING)
        outgoing = sum(1 for record in records if record.type is LetterType.OUTGOING)
        return ArchiveCounts(incoming=incoming, outgoing=outgoing, total=len(records))

    def _write(self, records: list[LetterRecord]) -> None:
        self._store.set(
            self._key, json.dumps([record.to_dict() for record in records])
        )


def matches(letter_type: LetterType | None = None, term: str = "") -> LetterPredicate:
    """Build a predicate for the archive list view."""
    needle = term.strip().lower()

    def predicate(record: LetterRecord) -> bool:
        if letter_type is not None and record.type is not letter_type:
            return False
        if not needle:
            return True
        return any(
            needle in value.lower()
            for value in (
                record.subject,
                record.sender,
                record.recipient,
                record.reference_number,
            )
        )

    return predicate


__all__ = ["ARCHIVE_KEY", "ArchiveCounts", "ArchiveStore", "matches"]
