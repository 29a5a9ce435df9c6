"""FastAPI application exposing the letter intake workflow."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import FastAPI, File, Request, UploadFile, status as http_status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.responses import Response

from surat_ai.core import AppSettings, WorkspaceSettings, load_app_settings
from surat_ai.core.interfaces import (
    EmptyResponse,
    ExportFailure,
    KeyValueStore,
    LetterExtractor,
    ServiceError,
    SizeLimitExceeded,
    StorageError,
    ValidationError,
)
from surat_ai.core.models import LetterDraft, LetterType
from surat_ai.export import export_archive
from surat_ai.ingestion import IntakeSession, LetterIntake, SourceDocument
from surat_ai.intelligence import ExtractionAdapter, GeminiClient, check_media_size
from surat_ai.storage import ArchiveStore, PreferencesStore, SqliteKeyValueStore

LOGGER = logging.getLogger(__name__)

RECENT_LIMIT = 10
DEFAULT_MIME_TYPE = "application/octet-stream"
_TYPE_FILTERS: Mapping[str, LetterType | None] = {
    "all": None,
    "incoming": LetterType.INCOMING,
    "outgoing": LetterType.OUTGOING,
    LetterType.INCOMING.value.lower(): LetterType.INCOMING,
    LetterType.OUTGOING.value.lower(): LetterType.OUTGOING,
}

ANALYZE_FAILED_MESSAGE = (
    "Failed to analyse the letter. Make sure the document is clearly readable."
)
SIZE_FAILED_MESSAGE = (
    "Processing failed: the file may be too large or its format is not "
    "supported by the AI."
)
INVALID_JSON_MESSAGE = "Request body is not valid JSON."


def create_app(
    settings: AppSettings | None = None,
    *,
    store: KeyValueStore | None = None,
    extractor: LetterExtractor | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = settings or load_app_settings()
    app = FastAPI(title="Surat AI")

    owned_store: SqliteKeyValueStore | None = None
    if store is None:
        owned_store = SqliteKeyValueStore(app_settings.storage)
        store = owned_store
    archive = ArchiveStore(store)
    preferences = PreferencesStore(store)
    max_upload_bytes = app_settings.intake.max_upload_bytes
    letter_extractor = extractor or ExtractionAdapter(
        GeminiClient(app_settings.gemini), max_media_bytes=max_upload_bytes
    )
    intake = LetterIntake(letter_extractor, archive, preferences)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        """Close the key/value store on app shutdown."""
        if owned_store is not None:
            owned_store.close()
            LOGGER.info("Storage closed")

    @app.get("/api/dashboard")
    async def dashboard() -> dict[str, Any]:
        counts = archive.counts()
        return {
            "incoming": counts.incoming,
            "outgoing": counts.outgoing,
            "total": counts.total,
            "recent": [
                record.to_dict()
                for record in sorted(
                    archive.recent(RECENT_LIMIT),
                    key=lambda record: record.date,
                    reverse=True,
                )
            ],
        }

    @app.get("/api/letters")
    async def list_letters(request: Request) -> Response:
        raw_type = (request.query_params.get("type") or "all").strip().lower()
        if raw_type not in _TYPE_FILTERS:
            return _error(
                http_status.HTTP_400_BAD_REQUEST, f"Unknown letter type: {raw_type}"
            )
        term = request.query_params.get("q") or ""
        records = archive.search(_TYPE_FILTERS[raw_type], term)
        return JSONResponse(
            {"letters": [record.to_dict() for record in records], "total": len(records)}
        )

    @app.post("/api/letters")
    async def save_letter(request: Request) -> Response:
        """Finalize a reviewed draft and archive it."""
        try:
            body = await request.json()
        except ValueError:
            return _error(http_status.HTTP_400_BAD_REQUEST, INVALID_JSON_MESSAGE)
        if not isinstance(body, dict):
            return _error(http_status.HTTP_400_BAD_REQUEST, "Expected a JSON object")
        try:
            draft = LetterDraft.from_dict(body.get("draft") or {})
            source = _parse_source(body.get("source") or {})
            record = intake.save(draft, source)
        except ValidationError as exc:
            return _error(
                http_status.HTTP_422_UNPROCESSABLE_ENTITY,
                str(exc),
                missing=list(exc.missing),
            )
        except (KeyError, ValueError, AttributeError) as exc:
            return _error(http_status.HTTP_400_BAD_REQUEST, f"Invalid draft: {exc}")
        return JSONResponse(record.to_dict(), status_code=http_status.HTTP_201_CREATED)

    @app.delete("/api/letters")
    async def clear_letters() -> dict[str, Any]:
        archive.clear()
        return {"success": True}

    @app.get("/api/drafts/new")
    async def new_draft() -> dict[str, Any]:
        settings_doc = preferences.load()
        return {
            "draft": intake.new_draft(settings_doc).to_dict(),
            "suggestedTags": settings_doc.predefined_tags,
        }

    @app.post("/api/analyze/file")
    async def analyze_file(file: UploadFile = File(...)) -> Response:  # noqa: B008
        """Analyse an uploaded image or PDF."""
        data = await file.read()
        try:
            check_media_size(len(data), max_upload_bytes)
            session = await intake.analyze_document(
                data,
                file.content_type or DEFAULT_MIME_TYPE,
                filename=file.filename,
            )
        except SizeLimitExceeded as exc:
            return _error(
                http_status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                str(exc),
                sizeBytes=exc.size_bytes,
            )
        except (EmptyResponse, ServiceError) as exc:
            return _extraction_error(exc)
        return JSONResponse(_serialize_session(session))

    @app.post("/api/analyze/text")
    async def analyze_text(request: Request) -> Response:
        """Analyse pasted letter text."""
        try:
            body = await request.json()
        except ValueError:
            return _error(http_status.HTTP_400_BAD_REQUEST, INVALID_JSON_MESSAGE)
        text = body.get("text") if isinstance(body, dict) else None
        if not isinstance(text, str) or not text.strip():
            return _error(
                http_status.HTTP_400_BAD_REQUEST,
                "Please provide a document or text first.",
            )
        try:
            session = await intake.analyze_text(text)
        except (EmptyResponse, ServiceError) as exc:
            return _extraction_error(exc)
        return JSONResponse(_serialize_session(session))

    @app.get("/api/export")
    async def export_letters() -> Response:
        try:
            filename, content = export_archive(archive)
        except ExportFailure as exc:
            return _error(http_status.HTTP_404_NOT_FOUND, str(exc))
        return Response(
            content=content,
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/api/settings")
    async def get_settings() -> dict[str, Any]:
        return preferences.load().to_document()

    @app.put("/api/settings")
    async def put_settings(request: Request) -> Response:
        try:
            body = await request.json()
        except ValueError:
            return _error(http_status.HTTP_400_BAD_REQUEST, INVALID_JSON_MESSAGE)
        try:
            updated = WorkspaceSettings.model_validate(body)
        except PydanticValidationError as exc:
            return _error(
                http_status.HTTP_422_UNPROCESSABLE_ENTITY,
                "Invalid settings",
                errors=exc.errors(include_url=False, include_context=False),
            )
        preferences.save(updated)
        return JSONResponse(updated.to_document())

    @app.delete("/api/settings")
    async def reset_settings() -> dict[str, Any]:
        preferences.reset()
        return preferences.load().to_document()

    @app.exception_handler(StorageError)
    async def storage_error_handler(_request: Request, exc: StorageError) -> Response:
        LOGGER.error("Storage failure: %s", exc)
        return _error(http_status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    return app


def _parse_source(payload: Mapping[str, Any]) -> SourceDocument:
    return SourceDocument(
        filename=payload.get("filename") or payload.get("fileName") or None,
        mime_type=payload.get("mimeType") or None,
        text=payload.get("text") or None,
    )


def _serialize_session(session: IntakeSession) -> dict[str, Any]:
    return {
        "draft": session.draft.to_dict(),
        "source": {
            "filename": session.source.filename,
            "mimeType": session.source.mime_type,
            "text": session.source.text,
        },
    }


def _extraction_error(exc: EmptyResponse | ServiceError) -> Response:
    if isinstance(exc, EmptyResponse):
        LOGGER.warning("Extraction returned no content: %s", exc)
        return _error(
            http_status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc), retryable=True
        )
    LOGGER.error("Extraction failed: %s", exc)
    message = SIZE_FAILED_MESSAGE if exc.size_related else ANALYZE_FAILED_MESSAGE
    return _error(http_status.HTTP_502_BAD_GATEWAY, message, retryable=True)


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse({"detail": message, **extra}, status_code=status_code)


__all__ = ["create_app"]
