"""Tests for draft finalization and extraction merging."""

from __future__ import annotations

from datetime import datetime

import pytest

from surat_ai.core.config import SenderAbbreviation
from surat_ai.core.interfaces import ValidationError
from surat_ai.core.models import CustomField, ExtractionResult, LetterDraft, LetterType
from surat_ai.filing.assembler import apply_extraction, assemble_record

RULES = [
    SenderAbbreviation(full="Badan Perencanaan Pembangunan Daerah", short="Bappeda"),
]
NOW = datetime(2023, 10, 27, 8, 30)


def _draft(**overrides: object) -> LetterDraft:
    draft = LetterDraft(
        type=LetterType.INCOMING,
        reference_number="001/INV/2023",
        sender="Badan Perencanaan Pembangunan Daerah",
        recipient="Direktur Utama",
        date="2023-10-25",
        subject="Undangan Seminar AI",
        summary="Undangan seminar.",
    )
    for key, value in overrides.items():
        setattr(draft, key, value)
    return draft


def test_assembles_complete_record() -> None:
    draft = _draft(event_start="2023-10-30T09:00", tags=["Undangan"])
    draft.add_custom_field("Anggaran", "5 juta")

    record = assemble_record(
        draft,
        RULES,
        original_filename="scan.png",
        mime_type="image/png",
        now=NOW,
        id_factory=lambda: "letter-1",
    )

    assert record.id == "letter-1"
    assert record.file_name == "2023_Bappeda_001_INV_2023.png"
    assert record.event_start == "2023-10-30T09:00"
    assert record.event_end == "2023-10-30T13:00"
    assert record.tags == ("Undangan",)
    assert record.custom_fields == (CustomField("Anggaran", "5 juta"),)
    assert record.mime_type == "image/png"
    assert record.content is None
    assert record.created_at == int(NOW.timestamp() * 1000)
    # the archived sender is kept as typed; only the file name is abbreviated
    assert record.sender == "Badan Perencanaan Pembangunan Daerah"


def test_defaults_fill_optional_fields() -> None:
    draft = _draft(reference_number="", location="", document_url="", date="")

    record = assemble_record(draft, now=NOW)

    assert record.reference_number == "-"
    assert record.date == "2023-10-27"
    assert record.location == ""
    assert record.document_url == ""
    assert record.event_start is None and record.event_end is None
    assert record.file_name == "2023_Badan_Perencanaan_Pembangunan_Daerah_NoRef.pdf"


def test_each_record_gets_a_fresh_id() -> None:
    first = assemble_record(_draft())
    second = assemble_record(_draft())

    assert first.id != second.id


@pytest.mark.parametrize(
    ("sender", "subject", "missing"),
    [
        ("", "Perihal", ("sender",)),
        ("   ", "Perihal", ("sender",)),
        ("Bappeda", "", ("subject",)),
        ("Bappeda", "\t", ("subject",)),
        ("", " ", ("sender", "subject")),
    ],
)
def test_rejects_missing_sender_or_subject(
    sender: str, subject: str, missing: tuple[str, ...]
) -> None:
    draft = _draft(sender=sender, subject=subject, event_start="2023-10-30T09:00")

    with pytest.raises(ValidationError) as excinfo:
        assemble_record(draft, RULES)

    assert excinfo.value.missing == missing


def test_finalize_delegates_to_assembler() -> None:
    record = _draft().finalize(RULES, content="Teks surat", now=NOW)

    assert record.file_name == "2023_Bappeda_001_INV_2023.pdf"
    assert record.content == "Teks surat"


def _extraction(**overrides: object) -> ExtractionResult:
    values: dict[str, object] = {
        "type": LetterType.OUTGOING,
        "reference_number": "099/KEL/2023",
        "sender": "Kepala Badan Perencanaan Pembangunan Daerah",
        "recipient": "Bpk. Ahmad Fauzi",
        "date": "2023-10-26",
        "subject": "Surat Keputusan",
        "summary": "Ringkasan.",
        "tags": ("SK", "HRD", "SK"),
        "event_start": "2023-11-01T09:00:00.000Z",
        "event_end": None,
        "location": "Zoom https://zoom.us/j/1 ID 1 Pass 2",
    }
    values.update(overrides)
    return ExtractionResult(**values)  # type: ignore[arg-type]


def test_apply_extraction_normalises_sender_and_times() -> None:
    draft = LetterDraft.from_templates(["Anggaran"])
    draft.event_end = "2023-11-01T15:00"

    apply_extraction(draft, _extraction(), RULES)

    assert draft.type is LetterType.OUTGOING
    assert draft.sender == "Kepala Bappeda"
    assert draft.recipient == "Bpk. Ahmad Fauzi"
    assert draft.event_start == "2023-11-01T09:00"
    assert draft.event_end == "2023-11-01T15:00"
    assert draft.tags == ["SK", "HRD"]
    assert draft.location.startswith("Zoom")
    assert draft.custom_fields == [CustomField("Anggaran", "")]


def test_apply_extraction_keeps_previous_event_start_when_absent() -> None:
    draft = LetterDraft(event_start="2023-11-02T08:00")

    apply_extraction(draft, _extraction(event_start=None, location=None), RULES)

    assert draft.event_start == "2023-11-02T08:00"
    assert draft.location == ""


def test_rejects_event_start_that_is_not_a_date_time() -> None:
    draft = _draft(event_start="30 Oktober 2023 ")

    with pytest.raises(ValidationError) as excinfo:
        assemble_record(draft, RULES, now=NOW)

    assert excinfo.value.missing == ("eventStart",)
