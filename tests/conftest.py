"""Shared fixtures for the test-suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from surat_ai.core.models import CustomField, LetterRecord, LetterType


@pytest.fixture
def make_record() -> Callable[..., LetterRecord]:
    """Return a factory building archived letters with sensible defaults."""

    def factory(**overrides: object) -> LetterRecord:
        values: dict[str, object] = {
            "id": "1",
            "type": LetterType.INCOMING,
            "reference_number": "001/INV/2023",
            "sender": "PT. Teknologi Maju",
            "recipient": "Direktur Utama",
            "date": "2023-10-25",
            "subject": "Undangan Seminar AI",
            "event_start": None,
            "event_end": None,
            "location": "",
            "summary": "Undangan seminar teknologi AI.",
            "tags": ("Undangan", "Event"),
            "custom_fields": (),
            "document_url": "",
            "file_name": "2023_PT_Teknologi_Maju_001_INV_2023.pdf",
            "mime_type": None,
            "content": None,
            "created_at": 1698200000000,
        }
        values.update(overrides)
        return LetterRecord(**values)  # type: ignore[arg-type]

    return factory


@pytest.fixture
def sample_custom_fields() -> tuple[CustomField, ...]:
    return (CustomField("Anggaran", "Rp 5.000.000"), CustomField("PIC", "Sari"))
