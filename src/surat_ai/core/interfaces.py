"""Protocol interfaces and error types shared by the intake pipeline."""

from __future__ import annotations

from typing import Protocol

from .models import ExtractionResult


class SuratError(RuntimeError):
    """Base class for recoverable intake and archive failures."""


class ValidationError(SuratError):
    """Raised when a draft lacks a field required for finalization."""

    def __init__(self, missing: tuple[str, ...], message: str | None = None) -> None:
        self.missing = missing
        text = message or "Missing required field(s): " + ", ".join(missing)
        super().__init__(text)


class ExtractionError(SuratError):
    """Raised when the extraction service cannot produce a result."""


class EmptyResponse(ExtractionError):
    """The service answered but returned no usable content."""


class ServiceError(ExtractionError):
    """Transport failure, rejected request, or malformed service response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        size_related: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.size_related = size_related


class SizeLimitExceeded(ExtractionError):
    """Submitted media is larger than the accepted ceiling."""

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"File too large ({size_bytes / (1024 * 1024):.2f} MB). "
            f"Maximum is {limit_bytes // (1024 * 1024)} MB."
        )


class ExportFailure(SuratError):
    """Raised when the archive cannot be exported."""


class StorageError(SuratError):
    """Raised when persisted data cannot be read back."""


class KeyValueStore(Protocol):
    """Whole-value key/value persistence."""

    def get(self, key: str) -> str | None:
        """Return the stored text for ``key`` or ``None``."""
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``."""
        raise NotImplementedError

    def remove(self, key: str) -> None:
        """Delete ``key`` if present."""
        raise NotImplementedError


class LetterExtractor(Protocol):
    """Derives structured letter metadata from a document or text."""

    async def extract_from_media(self, data: bytes, mime_type: str) -> ExtractionResult:
        """Analyse binary document content."""
        raise NotImplementedError

    async def extract_from_text(self, text: str) -> ExtractionResult:
        """Analyse pasted letter text."""
        raise NotImplementedError


__all__ = [
    "EmptyResponse",
    "ExportFailure",
    "ExtractionError",
    "KeyValueStore",
    "LetterExtractor",
    "ServiceError",
    "SizeLimitExceeded",
    "StorageError",
    "SuratError",
    "ValidationError",
]
