"""Letter intake orchestration: analyse, review, finalize, archive."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.config import WorkspaceSettings
from ..core.interfaces import LetterExtractor
from ..core.models import LetterDraft, LetterRecord
from ..filing import apply_extraction
from ..storage.archive import ArchiveStore
from ..storage.preferences import PreferencesStore

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class SourceDocument:
    """What the user submitted for analysis."""

    filename: str | None = None
    mime_type: str | None = None
    text: str | None = None


@dataclass(slots=True)
class IntakeSession:
    """A draft under review together with its source."""

    draft: LetterDraft
    source: SourceDocument


class LetterIntake:
    """Coordinate extraction, the review draft, and archival."""

    def __init__(
        self,
        extractor: LetterExtractor,
        archive: ArchiveStore,
        preferences: PreferencesStore,
    ) -> None:
        """Wire the intake flow to its collaborators."""
        self._extractor = extractor
        self._archive = archive
        self._preferences = preferences

    def new_draft(self, settings: WorkspaceSettings | None = None) -> LetterDraft:
        """Return an empty draft seeded with the custom field templates."""
        workspace = settings or self._preferences.load()
        return LetterDraft.from_templates(workspace.default_custom_fields)

    async def analyze_document(
        self,
        data: bytes,
        mime_type: str,
        filename: str | None = None,
        draft: LetterDraft | None = None,
    ) -> IntakeSession:
        """Extract metadata from an uploaded document into a draft."""
        settings = self._preferences.load()
        target = draft or self.new_draft(settings)
        result = await self._extractor.extract_from_media(data, mime_type)
        apply_extraction(target, result, settings.sender_abbreviations)
        return IntakeSession(
            draft=target,
            source=SourceDocument(filename=filename, mime_type=mime_type),
        )

    async def analyze_text(
        self, text: str, draft: LetterDraft | None = None
    ) -> IntakeSession:
        """Extract metadata from pasted letter text into a draft."""
        settings = self._preferences.load()
        target = draft or self.new_draft(settings)
        result = await self._extractor.extract_from_text(text)
        apply_extraction(target, result, settings.sender_abbreviations)
        return IntakeSession(draft=target, source=SourceDocument(text=text))

    def save(
        self, draft: LetterDraft, source: SourceDocument | None = None
    ) -> LetterRecord:
        """Finalize ``draft`` and append the record to the archive."""
        settings = self._preferences.load()
        origin = source or SourceDocument()
        record = draft.finalize(
            settings.sender_abbreviations,
            original_filename=origin.filename,
            mime_type=origin.mime_type,
            content=origin.text,
        )
        self._archive.append(record)
        return record


__all__ = ["IntakeSession", "LetterIntake", "SourceDocument"]
