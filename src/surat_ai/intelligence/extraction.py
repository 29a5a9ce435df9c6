"""Letter metadata extraction through the Gemini service."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, Protocol

from surat_ai.core.interfaces import (
    EmptyResponse,
    LetterExtractor,
    ServiceError,
    SizeLimitExceeded,
    ValidationError,
)
from surat_ai.core.models import ExtractionResult

from .gemini import inline_part, text_part
from .prompts import MEDIA_PROMPT, RESPONSE_SCHEMA, SAFETY_SETTINGS, build_text_prompt

LOGGER = logging.getLogger(__name__)

MAX_MEDIA_BYTES = 20 * 1024 * 1024


class JsonGenerationClient(Protocol):
    """Minimal surface of a schema-constrained generation client."""

    @property
    def provider_id(self) -> str:
        raise NotImplementedError

    async def generate_json(
        self,
        parts: Sequence[dict[str, Any]],
        *,
        schema: dict[str, Any],
        safety_settings: Sequence[dict[str, str]] = (),
    ) -> str | None:
        raise NotImplementedError


class ExtractionAdapter(LetterExtractor):
    """Turn documents or pasted text into :class:`ExtractionResult` values.

    Each call issues exactly one request. Failures surface as
    :class:`EmptyResponse` or :class:`ServiceError` and are never retried
    here.
    """

    def __init__(
        self, client: JsonGenerationClient, *, max_media_bytes: int = MAX_MEDIA_BYTES
    ) -> None:
        self._client = client
        self._max_media_bytes = max_media_bytes

    async def extract_from_media(self, data: bytes, mime_type: str) -> ExtractionResult:
        """Analyse an image or PDF document."""
        check_media_size(len(data), self._max_media_bytes)
        LOGGER.info(
            "Analysing %s document (%d bytes) with %s",
            mime_type,
            len(data),
            self._client.provider_id,
        )
        parts = [inline_part(data, mime_type), text_part(MEDIA_PROMPT)]
        return await self._run(parts, "document")

    async def extract_from_text(self, text: str) -> ExtractionResult:
        """Analyse pasted letter text."""
        if not text or not text.strip():
            raise ValidationError(("content",), "No letter text supplied")
        LOGGER.info("Analysing pasted text (%d chars)", len(text))
        return await self._run([text_part(build_text_prompt(text))], "text")

    async def _run(self, parts: list[dict[str, Any]], label: str) -> ExtractionResult:
        try:
            raw = await self._client.generate_json(
                parts, schema=RESPONSE_SCHEMA, safety_settings=SAFETY_SETTINGS
            )
        except ServiceError as exc:
            LOGGER.error("Extraction of %s failed: %s", label, exc)
            raise

        if raw is None or not raw.strip():
            raise EmptyResponse(
                "The AI returned no response; the document may be unreadable "
                "or filtered."
            )
        return parse_extraction(raw)


def parse_extraction(raw: str) -> ExtractionResult:
    """Decode and validate the service's JSON answer."""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ServiceError("Extraction response was not valid JSON") from exc
    try:
        return ExtractionResult.from_payload(payload)
    except ValueError as exc:
        raise ServiceError(f"Extraction response rejected: {exc}") from exc


def check_media_size(size_bytes: int, limit_bytes: int = MAX_MEDIA_BYTES) -> None:
    """Raise :class:`SizeLimitExceeded` when ``size_bytes`` is over the limit."""
    if size_bytes > limit_bytes:
        raise SizeLimitExceeded(size_bytes, limit_bytes)


__all__ = [
    "ExtractionAdapter",
    "JsonGenerationClient",
    "MAX_MEDIA_BYTES",
    "check_media_size",
    "parse_extraction",
]
