"""Application configuration models and loader utilities."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, cast

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field


class GeminiSettings(BaseModel):
    """Settings for the Gemini extraction service."""

    api_key: str | None = Field(default=None, description="Gemini API key")
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com",
        description="Generative Language API root URL",
    )
    model: str = Field(default="gemini-2.5-flash", description="Model identifier")
    timeout_seconds: int = Field(
        default=120, description="Request timeout for extraction calls"
    )
    temperature: float | None = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="Sampling temperature; provider default when unset",
    )


class StorageSettings(BaseModel):
    """Settings for local persistence."""

    db_path: Path = Field(
        default=Path("./surat_ai.db"), description="SQLite database path"
    )


class LoggingSettings(BaseModel):
    """Logging preferences."""

    level: str = Field(default="INFO", description="Root logging level")
    structured: bool = Field(
        default=False, description="Toggle JSON structured logging"
    )


class IntakeSettings(BaseModel):
    """Limits applied to documents submitted for extraction."""

    max_upload_mb: int = Field(
        default=20, ge=1, description="Largest document accepted for analysis"
    )

    @property
    def max_upload_bytes(self) -> int:
        """Return the upload ceiling in bytes."""
        return self.max_upload_mb * 1024 * 1024


class AppSettings(BaseModel):
    """Aggregated application configuration."""

    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    intake: IntakeSettings = Field(default_factory=IntakeSettings)


class SenderAbbreviation(BaseModel):
    """Rule rewriting a full sender name to its short form."""

    model_config = ConfigDict(frozen=True)

    full: str
    short: str


DEFAULT_PREDEFINED_TAGS: tuple[str, ...] = (
    "Penting",
    "Segera",
    "Rahasia",
    "Undangan",
    "Dinas",
)
DEFAULT_CUSTOM_FIELDS: tuple[str, ...] = ("Anggaran", "Narahubung", "Kode Proyek")
DEFAULT_SENDER_ABBREVIATIONS: tuple[SenderAbbreviation, ...] = (
    SenderAbbreviation(
        full="Kementerian Dalam Negeri Republik Indonesia", short="Kemendagri"
    ),
    SenderAbbreviation(full="Badan Perencanaan Pembangunan Daerah", short="Bappeda"),
)


class WorkspaceSettings(BaseModel):
    """User-editable preferences consumed by the intake pipeline.

    Field aliases match the camelCase keys of the persisted JSON document so
    that previously stored settings load unchanged.
    """

    model_config = ConfigDict(populate_by_name=True)

    google_drive_folder_id: str = Field(default="", alias="googleDriveFolderId")
    google_sheet_url: str | None = Field(default="", alias="googleSheetUrl")
    auto_upload_to_drive: bool = Field(default=True, alias="autoUploadToDrive")
    theme: Literal["light", "dark"] = Field(default="light")
    predefined_tags: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PREDEFINED_TAGS), alias="predefinedTags"
    )
    default_custom_fields: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CUSTOM_FIELDS),
        alias="defaultCustomFields",
    )
    sender_abbreviations: list[SenderAbbreviation] = Field(
        default_factory=lambda: list(DEFAULT_SENDER_ABBREVIATIONS),
        alias="senderAbbreviations",
    )

    def add_tag(self, tag: str) -> bool:
        """Append ``tag`` to the vocabulary unless blank or already present."""
        cleaned = tag.strip()
        if not cleaned or cleaned in self.predefined_tags:
            return False
        self.predefined_tags.append(cleaned)
        return True

    def remove_tag(self, tag: str) -> None:
        """Drop every occurrence of ``tag`` from the vocabulary."""
        self.predefined_tags = [item for item in self.predefined_tags if item != tag]

    def add_custom_field(self, name: str) -> bool:
        """Append a custom field template unless blank or already present."""
        cleaned = name.strip()
        if not cleaned or cleaned in self.default_custom_fields:
            return False
        self.default_custom_fields.append(cleaned)
        return True

    def remove_custom_field(self, name: str) -> None:
        """Drop a custom field template."""
        self.default_custom_fields = [
            item for item in self.default_custom_fields if item != name
        ]

    def add_abbreviation(self, full: str, short: str) -> bool:
        """Append an abbreviation rule when both names are non-blank."""
        full_clean = full.strip()
        short_clean = short.strip()
        if not full_clean or not short_clean:
            return False
        self.sender_abbreviations.append(
            SenderAbbreviation(full=full_clean, short=short_clean)
        )
        return True

    def remove_abbreviation(self, index: int) -> None:
        """Remove the abbreviation rule at ``index``."""
        if 0 <= index < len(self.sender_abbreviations):
            del self.sender_abbreviations[index]

    def to_document(self) -> dict[str, Any]:
        """Return the camelCase JSON document stored for these settings."""
        return self.model_dump(mode="json", by_alias=True)


ENV_PREFIX = "SURAT_AI_"


def _normalize_key(raw_key: str) -> list[str]:
    """Convert an environment variable key into a nested attribute path."""
    trimmed = raw_key.removeprefix(ENV_PREFIX)
    return [segment.lower() for segment in trimmed.split("__") if segment]


def _merge_into_tree(tree: dict[str, Any], path: list[str], value: Any) -> None:
    """Assign a value to a nested dictionary given a path."""
    cursor = tree
    for segment in path[:-1]:
        next_node = cursor.setdefault(segment, {})
        cursor = cast(dict[str, Any], next_node)
    cursor[path[-1]] = value


def _collect_env_values(
    env_file: Path | str | None, *, include_environment: bool = True
) -> dict[str, Any]:
    """Load configuration values from environment variables and optional file."""
    collected: dict[str, Any] = {}

    file_values = {}
    if env_file:
        env_path = Path(env_file)
        if env_path.is_file():
            file_values = {
                key: value
                for key, value in dotenv_values(env_path).items()
                if key and key.startswith(ENV_PREFIX)
            }

    env_values = {}
    if include_environment:
        env_values = {
            key: value
            for key, value in os.environ.items()
            if key.startswith(ENV_PREFIX)
        }

    combined: dict[str, Any] = {**file_values, **env_values}

    for key, value in combined.items():
        path = _normalize_key(key)
        if not path:
            continue
        normalized_value: Any = value
        if isinstance(value, str) and value == "":
            normalized_value = None
        elif isinstance(value, str):
            lowercase_value = value.lower()
            if lowercase_value == "true":
                normalized_value = True
            elif lowercase_value == "false":
                normalized_value = False
        _merge_into_tree(collected, path, normalized_value)

    return collected


@lru_cache(maxsize=1)
def load_app_settings(
    env_file: Path | str | None = None,
    *,
    include_environment: bool = True,
    **overrides: Any,
) -> AppSettings:
    """Load application settings, applying env files and overrides."""
    collected = _collect_env_values(env_file, include_environment=include_environment)
    if overrides:
        collected.update(overrides)
    return AppSettings.model_validate(collected)


__all__ = [
    "AppSettings",
    "DEFAULT_CUSTOM_FIELDS",
    "DEFAULT_PREDEFINED_TAGS",
    "DEFAULT_SENDER_ABBREVIATIONS",
    "GeminiSettings",
    "IntakeSettings",
    "LoggingSettings",
    "SenderAbbreviation",
    "StorageSettings",
    "WorkspaceSettings",
    "load_app_settings",
]
