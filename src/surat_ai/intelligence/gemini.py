"""Async client for the Gemini ``generateContent`` REST endpoint."""

from __future__ import annotations

import base64
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx

from surat_ai.core.config import GeminiSettings
from surat_ai.core.interfaces import ServiceError

LOGGER = logging.getLogger(__name__)

_SIZE_STATUS_CODES = frozenset({400, 413})
_SIZE_HINTS = ("size", "limit", "too large")


def inline_part(data: bytes, mime_type: str) -> dict[str, Any]:
    """Return a content part carrying base64 encoded binary data."""
    return {
        "inline_data": {
            "mime_type": mime_type,
            "data": base64.b64encode(data).decode("ascii"),
        }
    }


def text_part(text: str) -> dict[str, Any]:
    """Return a plain text content part."""
    return {"text": text}


@dataclass(slots=True)
class GeminiClient:
    """Thin client issuing one JSON-constrained generation request per call."""

    settings: GeminiSettings
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)

    @property
    def provider_id(self) -> str:
        """Return a human readable identifier for the configured model."""
        return f"gemini:{self.settings.model}"

    async def generate_json(
        self,
        parts: Sequence[dict[str, Any]],
        *,
        schema: dict[str, Any],
        safety_settings: Sequence[dict[str, str]] = (),
    ) -> str | None:
        """Return the JSON text of the first candidate, or ``None`` if empty."""
        if not self.settings.api_key:
            raise ServiceError("Gemini API key is not configured")

        generation_config: dict[str, Any] = {
            "responseMimeType": "application/json",
            "responseSchema": schema,
        }
        if self.settings.temperature is not None:
            generation_config["temperature"] = self.settings.temperature
        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": list(parts)}],
            "generationConfig": generation_config,
        }
        if safety_settings:
            payload["safetySettings"] = list(safety_settings)

        try:
            async with httpx.AsyncClient(
                base_url=self.settings.base_url,
                timeout=self.settings.timeout_seconds,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    _endpoint_path(self.settings.model),
                    json=payload,
                    headers={"x-goog-api-key": self.settings.api_key},
                )
        except httpx.HTTPError as exc:
            raise ServiceError(f"Gemini request failed: {exc}") from exc

        if response.is_error:
            raise _status_error(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise ServiceError("Gemini returned invalid JSON") from exc
        if not isinstance(data, dict):
            raise ServiceError("Gemini response was not a JSON object")

        text = collect_candidate_text(data)
        if text is None:
            LOGGER.warning(
                "Empty response from Gemini (block reason: %s, finish reason: %s)",
                (data.get("promptFeedback") or {}).get("blockReason"),
                _first_finish_reason(data),
            )
        return text


def collect_candidate_text(payload: dict[str, Any]) -> str | None:
    """Join the text parts of the first candidate."""
    candidates = payload.get("candidates") or []
    if not candidates:
        return None
    if not isinstance(candidates, list) or not isinstance(candidates[0], dict):
        raise ServiceError("Gemini candidate was not a JSON object")

    content = candidates[0].get("content") or {}
    if not isinstance(content, dict):
        raise ServiceError("Gemini candidate content was not a JSON object")
    parts = content.get("parts") or []
    extracted: list[str] = []
    for part in parts:
        text = part.get("text") if isinstance(part, dict) else None
        if isinstance(text, str) and text.strip():
            extracted.append(text.strip())

    if extracted:
        return "\n".join(extracted)
    return None


def _first_finish_reason(payload: dict[str, Any]) -> str | None:
    candidates = payload.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return None
    return candidates[0].get("finishReason")


def _endpoint_path(model: str) -> str:
    return f"/v1beta/models/{model}:generateContent"


def _status_error(response: httpx.Response) -> ServiceError:
    message = ""
    try:
        body = response.json()
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            message = str(body["error"].get("message") or "")
    except ValueError:
        message = response.text[:200]
    lowered = message.lower()
    size_related = response.status_code in _SIZE_STATUS_CODES or any(
        hint in lowered for hint in _SIZE_HINTS
    )
    detail = f": {message}" if message else ""
    return ServiceError(
        f"Gemini returned HTTP {response.status_code}{detail}",
        status_code=response.status_code,
        size_related=size_related,
    )


__all__ = ["GeminiClient", "collect_candidate_text", "inline_part", "text_part"]
