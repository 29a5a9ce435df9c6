"""Finalization of reviewed drafts into archived letter records."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime

from surat_ai.core.config import SenderAbbreviation
from surat_ai.core.datetime_utils import today_iso, truncate_to_minutes
from surat_ai.core.interfaces import ValidationError
from surat_ai.core.models import ExtractionResult, LetterDraft, LetterRecord

from .abbreviations import normalize_sender
from .event_time import resolve_event_window
from .filenames import extension_of, synthesize_filename

LOGGER = logging.getLogger(__name__)

DEFAULT_REFERENCE_NUMBER = "-"


def _new_id() -> str:
    return str(uuid.uuid4())


def assemble_record(
    draft: LetterDraft,
    abbreviations: Sequence[SenderAbbreviation] = (),
    *,
    original_filename: str | None = None,
    mime_type: str | None = None,
    content: str | None = None,
    now: datetime | None = None,
    id_factory: Callable[[], str] = _new_id,
) -> LetterRecord:
    """Validate ``draft`` and build the immutable record to archive.

    ``original_filename`` only contributes its extension to the synthesized
    file name. ``content`` carries the pasted text when the letter was
    analysed in text mode.
    """
    missing = tuple(
        name
        for name, value in (("sender", draft.sender), ("subject", draft.subject))
        if not value or not value.strip()
    )
    if missing:
        raise ValidationError(missing)

    event_start, event_end = resolve_event_window(
        draft.event_start or None, draft.event_end or None
    )
    file_name = synthesize_filename(
        draft.date,
        draft.sender,
        draft.reference_number,
        abbreviations,
        extension_of(original_filename),
        now=now,
    )
    stamp = now or datetime.now()
    record = LetterRecord(
        id=id_factory(),
        type=draft.type,
        reference_number=draft.reference_number or DEFAULT_REFERENCE_NUMBER,
        sender=draft.sender,
        recipient=draft.recipient or "",
        date=draft.date or today_iso(stamp.date()),
        subject=draft.subject,
        event_start=event_start,
        event_end=event_end,
        location=draft.location or "",
        summary=draft.summary or "",
        tags=tuple(draft.tags),
        custom_fields=tuple(draft.custom_fields),
        document_url=draft.document_url or "",
        file_name=file_name,
        mime_type=mime_type or None,
        content=content or None,
        created_at=int(stamp.timestamp() * 1000),
    )
    LOGGER.debug("Assembled letter %s as %s", record.id, record.file_name)
    return record


def apply_extraction(
    draft: LetterDraft,
    result: ExtractionResult,
    abbreviations: Sequence[SenderAbbreviation] = (),
) -> LetterDraft:
    """Merge an extraction into ``draft`` in place and return it.

    The sender is abbreviated, event times are cut to minute precision, and
    the draft keeps its own custom fields and previous event times when the
    extraction has none.
    """
    draft.type = result.type
    draft.reference_number = result.reference_number
    draft.sender = normalize_sender(result.sender, abbreviations)
    draft.recipient = result.recipient
    draft.date = result.date
    draft.subject = result.subject
    draft.summary = result.summary
    draft.tags = list(dict.fromkeys(result.tags))
    if result.location is not None:
        draft.location = result.location
    draft.event_start = truncate_to_minutes(result.event_start) or draft.event_start
    draft.event_end = truncate_to_minutes(result.event_end) or draft.event_end
    return draft


__all__ = ["DEFAULT_REFERENCE_NUMBER", "apply_extraction", "assemble_record"]
