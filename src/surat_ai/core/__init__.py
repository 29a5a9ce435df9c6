"""Core utilities for configuration, logging, and domain types."""

from .config import (
    AppSettings,
    SenderAbbreviation,
    WorkspaceSettings,
    load_app_settings,
)
from .logging import configure_logging

__all__ = [
    "AppSettings",
    "SenderAbbreviation",
    "WorkspaceSettings",
    "configure_logging",
    "load_app_settings",
]
