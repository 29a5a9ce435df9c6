"""AI-powered letter extraction services."""

from surat_ai.core.interfaces import EmptyResponse, ServiceError, SizeLimitExceeded

from .extraction import ExtractionAdapter, MAX_MEDIA_BYTES, check_media_size
from .gemini import GeminiClient

__all__ = [
    "EmptyResponse",
    "ExtractionAdapter",
    "GeminiClient",
    "MAX_MEDIA_BYTES",
    "ServiceError",
    "SizeLimitExceeded",
    "check_media_size",
]
