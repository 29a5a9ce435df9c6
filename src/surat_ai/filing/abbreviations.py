"""Sender name abbreviation rules."""

from __future__ import annotations

import re
from collections.abc import Sequence

from surat_ai.core.config import SenderAbbreviation


def normalize_sender(sender: str, abbreviations: Sequence[SenderAbbreviation]) -> str:
    """Replace every configured full name in ``sender`` with its short form.

    Rules run in order and each one sees the output of the previous rule.
    Names are matched literally and case-insensitively; rules with a blank
    full or short name are ignored.
    """
    result = sender
    for rule in abbreviations:
        if not rule.full or not rule.short:
            continue
        pattern = re.compile(re.escape(rule.full), re.IGNORECASE)
        short = rule.short
        result = pattern.sub(lambda _match: short, result)
    return result


def lookup_short_name(
    sender: str, abbreviations: Sequence[SenderAbbreviation]
) -> str | None:
    """Return the short form whose full name equals ``sender`` exactly."""
    lowered = sender.lower()
    for rule in abbreviations:
        if rule.full.lower() == lowered:
            return rule.short
    return None


__all__ = ["lookup_short_name", "normalize_sender"]
