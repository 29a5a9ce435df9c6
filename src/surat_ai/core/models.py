"""Core domain models used across the application."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .datetime_utils import today_iso

if TYPE_CHECKING:
    from .config import SenderAbbreviation


class LetterType(str, Enum):
    """Direction of a letter; values are the persisted wire labels."""

    INCOMING = "Masuk"
    OUTGOING = "Keluar"

    @classmethod
    def parse(cls, raw: str | LetterType) -> LetterType:
        """Resolve a wire label or member name into a ``LetterType``."""
        if isinstance(raw, LetterType):
            return raw
        cleaned = raw.strip()
        for member in cls:
            if cleaned == member.value or cleaned.upper() == member.name:
                return member
        raise ValueError(f"Unknown letter type: {raw!r}")


@dataclass(slots=True, frozen=True)
class CustomField:
    """User supplied value for a named recap column."""

    key: str
    value: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "value": self.value}


# pylint: disable=too-many-instance-attributes
@dataclass(slots=True, frozen=True)
class LetterRecord:
    """Finalized, archived letter."""

    id: str
    type: LetterType
    reference_number: str
    sender: str
    recipient: str
    date: str
    subject: str
    event_start: str | None
    event_end: str | None
    location: str
    summary: str
    tags: tuple[str, ...]
    custom_fields: tuple[CustomField, ...]
    document_url: str
    file_name: str
    mime_type: str | None
    content: str | None
    created_at: int

    def to_dict(self) -> dict[str, Any]:
        """Serialise using the camelCase keys of the stored archive."""
        payload: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "referenceNumber": self.reference_number,
            "sender": self.sender,
            "recipient": self.recipient,
            "date": self.date,
            "subject": self.subject,
            "location": self.location,
            "summary": self.summary,
            "tags": list(self.tags),
            "customFields": [item.to_dict() for item in self.custom_fields],
            "documentUrl": self.document_url,
            "fileName": self.file_name,
            "createdAt": self.created_at,
        }
        if self.event_start:
            payload["eventStart"] = self.event_start
        if self.event_end:
            payload["eventEnd"] = self.event_end
        if self.mime_type:
            payload["mimeType"] = self.mime_type
        if self.content is not None:
            payload["content"] = self.content
        return payload

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> LetterRecord:
        """Rebuild a record from its stored representation."""
        return cls(
            id=str(payload["id"]),
            type=LetterType.parse(payload["type"]),
            reference_number=payload.get("referenceNumber") or "-",
            sender=payload.get("sender") or "",
            recipient=payload.get("recipient") or "",
            date=payload.get("date") or "",
            subject=payload.get("subject") or "",
            event_start=payload.get("eventStart") or None,
            event_end=payload.get("eventEnd") or None,
            location=payload.get("location") or "",
            summary=payload.get("summary") or "",
            tags=tuple(payload.get("tags") or ()),
            custom_fields=tuple(
                CustomField(key=item.get("key", ""), value=item.get("value", ""))
                for item in payload.get("customFields") or ()
            ),
            document_url=payload.get("documentUrl") or "",
            file_name=payload.get("fileName") or "",
            mime_type=payload.get("mimeType") or None,
            content=payload.get("content"),
            created_at=int(payload.get("createdAt") or 0),
        )


_REQUIRED_EXTRACTION_KEYS = (
    "type",
    "referenceNumber",
    "sender",
    "recipient",
    "date",
    "subject",
    "summary",
    "tags",
)


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Structured fields returned by the extraction service, as received."""

    type: LetterType
    reference_number: str
    sender: str
    recipient: str
    date: str
    subject: str
    summary: str
    tags: tuple[str, ...]
    event_start: str | None = None
    event_end: str | None = None
    location: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> ExtractionResult:
        """Validate a decoded JSON object against the response schema."""
        if not isinstance(payload, Mapping):
            raise ValueError("Extraction payload must be a JSON object")
        missing = [key for key in _REQUIRED_EXTRACTION_KEYS if key not in payload]
        if missing:
            raise ValueError("Extraction payload missing: " + ", ".join(missing))
        if not isinstance(payload["type"], str):
            raise ValueError("Extraction 'type' must be a string")
        tags = payload["tags"]
        if not isinstance(tags, list) or any(not isinstance(t, str) for t in tags):
            raise ValueError("Extraction 'tags' must be a list of strings")
        for key in _REQUIRED_EXTRACTION_KEYS[1:-1]:
            if not isinstance(payload[key], str):
                raise ValueError(f"Extraction '{key}' must be a string")
        optional: dict[str, str | None] = {}
        for key in ("eventStart", "eventEnd", "location"):
            value = payload.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Extraction '{key}' must be a string")
            optional[key] = value or None
        return cls(
            type=LetterType.parse(payload["type"]),
            reference_number=payload["referenceNumber"],
            sender=payload["sender"],
            recipient=payload["recipient"],
            date=payload["date"],
            subject=payload["subject"],
            summary=payload["summary"],
            tags=tuple(tags),
            event_start=optional["eventStart"],
            event_end=optional["eventEnd"],
            location=optional["location"],
        )


_DRAFT_TEXT_FIELDS: Mapping[str, str] = {
    "referenceNumber": "reference_number",
    "sender": "sender",
    "recipient": "recipient",
    "date": "date",
    "subject": "subject",
    "summary": "summary",
    "eventStart": "event_start",
    "eventEnd": "event_end",
    "location": "location",
    "documentUrl": "document_url",
}


@dataclass(slots=True)
class LetterDraft:
    """Editable letter under review, before finalization."""

    type: LetterType = LetterType.INCOMING
    reference_number: str = ""
    sender: str = ""
    recipient: str = ""
    date: str = field(default_factory=today_iso)
    subject: str = ""
    summary: str = ""
    event_start: str = ""
    event_end: str = ""
    location: str = ""
    document_url: str = ""
    tags: list[str] = field(default_factory=list)
    custom_fields: list[CustomField] = field(default_factory=list)

    @classmethod
    def from_templates(cls, custom_field_names: Iterable[str]) -> LetterDraft:
        """Create an empty draft with one blank custom field per template."""
        return cls(custom_fields=[CustomField(key=name) for name in custom_field_names])

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> LetterDraft:
        """Build a draft from a camelCase form payload."""
        draft = cls()
        if payload.get("type"):
            draft.type = LetterType.parse(payload["type"])
        for key in _DRAFT_TEXT_FIELDS:
            value = payload.get(key)
            if value is not None:
                draft.set_field(key, value)
        for tag in payload.get("tags") or ():
            draft.add_tag(tag)
        for item in payload.get("customFields") or ():
            draft.add_custom_field(item.get("key", ""), item.get("value", ""))
        return draft

    def set_field(self, name: str, value: str) -> None:
        """Set a text field by camelCase or attribute name."""
        attribute = _DRAFT_TEXT_FIELDS.get(name, name)
        if attribute not in _DRAFT_TEXT_FIELDS.values():
            raise KeyError(f"Unknown draft field: {name}")
        setattr(self, attribute, value if value is not None else "")

    def add_tag(self, tag: str) -> bool:
        """Append ``tag`` unless blank or already present."""
        cleaned = tag.strip()
        if not cleaned or cleaned in self.tags:
            return False
        self.tags.append(cleaned)
        return True

    def remove_tag(self, index: int) -> None:
        del self.tags[index]

    def add_custom_field(self, key: str = "", value: str = "") -> None:
        self.custom_fields.append(CustomField(key=key, value=value))

    def update_custom_field(
        self, index: int, *, key: str | None = None, value: str | None = None
    ) -> None:
        """Replace the key and/or value of the custom field at ``index``."""
        current = self.custom_fields[index]
        self.custom_fields[index] = CustomField(
            key=current.key if key is None else key,
            value=current.value if value is None else value,
        )

    def remove_custom_field(self, index: int) -> None:
        del self.custom_fields[index]

    def finalize(
        self,
        abbreviations: Sequence[SenderAbbreviation] = (),
        **kwargs: Any,
    ) -> LetterRecord:
        """Validate and convert the draft into an archived record."""
        # pylint: disable=import-outside-toplevel,cyclic-import
        from surat_ai.filing.assembler import assemble_record

        return assemble_record(self, abbreviations, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the draft with camelCase keys for form rendering."""
        payload: dict[str, Any] = {"type": self.type.value}
        for key, attribute in _DRAFT_TEXT_FIELDS.items():
            payload[key] = getattr(self, attribute)
        payload["tags"] = list(self.tags)
        payload["customFields"] = [item.to_dict() for item in self.custom_fields]
        return payload


__all__ = [
    "CustomField",
    "ExtractionResult",
    "LetterDraft",
    "LetterRecord",
    "LetterType",
]
