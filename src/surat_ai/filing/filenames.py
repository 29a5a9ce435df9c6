"""Canonical archive file naming."""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import datetime

from surat_ai.core.config import SenderAbbreviation
from surat_ai.core.datetime_utils import current_year

from .abbreviations import lookup_short_name

DEFAULT_EXTENSION = "pdf"
NO_SENDER = "NoSender"
NO_REFERENCE = "NoRef"

_SENDER_DISALLOWED = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE_RUN = re.compile(r"\s+")
_REFERENCE_DISALLOWED = re.compile(r'[/\\:*?"<>|]')
_YEAR = re.compile(r"\d{4}")


def extension_of(filename: str | None) -> str:
    """Return the text after the last dot of ``filename``, or ``pdf``."""
    if not filename:
        return DEFAULT_EXTENSION
    parts = filename.split(".")
    if len(parts) > 1 and parts[-1]:
        return parts[-1]
    return DEFAULT_EXTENSION


def safe_sender(sender: str, abbreviations: Sequence[SenderAbbreviation]) -> str:
    """Reduce ``sender`` to letters, digits and underscores."""
    name = sender or NO_SENDER
    short = lookup_short_name(name, abbreviations)
    if short is not None:
        name = short
    stripped = _SENDER_DISALLOWED.sub("", name)
    return _WHITESPACE_RUN.sub("_", stripped)


def safe_reference(reference_number: str) -> str:
    """Replace path-hostile characters of a reference number."""
    return _REFERENCE_DISALLOWED.sub("_", reference_number or NO_REFERENCE)


def synthesize_filename(
    letter_date: str | None,
    sender: str,
    reference_number: str,
    abbreviations: Sequence[SenderAbbreviation],
    extension: str | None = None,
    *,
    now: datetime | None = None,
) -> str:
    """Build ``{YEAR}_{SENDER}_{REF}.{EXT}`` for an archived letter.

    ``extension`` is the original upload's extension, see :func:`extension_of`.
    """
    match = _YEAR.search(letter_date or "")
    year = match.group(0) if match else str(current_year(now))
    return (
        f"{year}_{safe_sender(sender, abbreviations)}_"
        f"{safe_reference(reference_number)}.{extension or DEFAULT_EXTENSION}"
    )


__all__ = [
    "DEFAULT_EXTENSION",
    "extension_of",
    "safe_reference",
    "safe_sender",
    "synthesize_filename",
]
