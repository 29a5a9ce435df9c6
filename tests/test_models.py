"""Tests for domain model serialisation and the editable draft."""

from __future__ import annotations

import pytest

from surat_ai.core.models import (
    CustomField,
    ExtractionResult,
    LetterDraft,
    LetterRecord,
    LetterType,
)


def test_letter_type_parse_accepts_labels_and_names() -> None:
    assert LetterType.parse("Masuk") is LetterType.INCOMING
    assert LetterType.parse("outgoing") is LetterType.OUTGOING
    with pytest.raises(ValueError):
        LetterType.parse("Internal")


def test_record_round_trips_through_stored_format() -> None:
    record = LetterRecord(
        id="1",
        type=LetterType.INCOMING,
        reference_number="001/INV/2023",
        sender="PT. Teknologi Maju",
        recipient="Direktur Utama",
        date="2023-10-25",
        subject="Undangan Seminar AI",
        event_start="2023-10-30T09:00",
        event_end="2023-10-30T13:00",
        location="Hotel Mulia",
        summary="Undangan seminar.",
        tags=("Undangan", "Event"),
        custom_fields=(CustomField("PIC", "Budi"),),
        document_url="https://drive.google.com/drive/u/0/my-drive",
        file_name="2023_PT_Teknologi_Maju_001_INV_2023.pdf",
        mime_type="application/pdf",
        content=None,
        created_at=1698200000000,
    )

    stored = record.to_dict()

    assert stored["referenceNumber"] == "001/INV/2023"
    assert stored["type"] == "Masuk"
    assert stored["customFields"] == [{"key": "PIC", "value": "Budi"}]
    assert "content" not in stored
    assert LetterRecord.from_dict(stored) == record


def test_record_from_legacy_payload_fills_defaults() -> None:
    record = LetterRecord.from_dict(
        {
            "id": "2",
            "type": "Keluar",
            "referenceNumber": "099/KEL/2023",
            "sender": "HRD Manager",
            "recipient": "Bpk. Ahmad Fauzi",
            "date": "2023-10-26",
            "subject": "Surat Keputusan Pengangkatan",
            "summary": "SK.",
            "tags": ["HRD"],
            "fileName": "SK_Ahmad.pdf",
            "createdAt": 1698200000000,
        }
    )

    assert record.type is LetterType.OUTGOING
    assert record.event_start is None
    assert record.custom_fields == ()
    assert record.location == ""


def test_extraction_payload_validation() -> None:
    payload = {
        "type": "Masuk",
        "referenceNumber": "005/UND/2024",
        "sender": "Dinas Pendidikan",
        "recipient": "Kepala Sekolah",
        "date": "2024-02-01",
        "subject": "Rapat Koordinasi",
        "summary": "Rapat.",
        "tags": ["Rapat"],
        "eventStart": "2024-02-05T09:00",
    }

    result = ExtractionResult.from_payload(payload)

    assert result.type is LetterType.INCOMING
    assert result.event_start == "2024-02-05T09:00"
    assert result.event_end is None

    with pytest.raises(ValueError, match="subject"):
        ExtractionResult.from_payload({k: v for k, v in payload.items() if k != "subject"})
    with pytest.raises(ValueError, match="tags"):
        ExtractionResult.from_payload({**payload, "tags": "Rapat"})


def test_draft_setters_and_collections() -> None:
    draft = LetterDraft.from_templates(["Anggaran", "PIC"])

    draft.set_field("referenceNumber", "12/AB")
    draft.set_field("subject", "Perihal")
    assert draft.add_tag("Penting")
    assert not draft.add_tag("Penting")
    draft.update_custom_field(1, value="Sari")
    draft.remove_custom_field(0)
    draft.add_custom_field("Kode Proyek")

    assert draft.reference_number == "12/AB"
    assert draft.tags == ["Penting"]
    assert draft.custom_fields == [CustomField("PIC", "Sari"), CustomField("Kode Proyek")]
    with pytest.raises(KeyError):
        draft.set_field("id", "x")


def test_draft_from_dict_round_trip() -> None:
    draft = LetterDraft.from_dict(
        {
            "type": "Keluar",
            "sender": "HRD",
            "subject": "SK",
            "eventStart": "2023-11-01T09:00",
            "tags": ["SK", "SK"],
            "customFields": [{"key": "PIC", "value": "Budi"}],
        }
    )

    payload = draft.to_dict()

    assert payload["type"] == "Keluar"
    assert payload["eventStart"] == "2023-11-01T09:00"
    assert payload["tags"] == ["SK"]
    assert payload["customFields"] == [{"key": "PIC", "value": "Budi"}]
