"""Persistence of workspace settings."""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError as PydanticValidationError

from ..core.config import WorkspaceSettings
from ..core.interfaces import KeyValueStore, StorageError

LOGGER = logging.getLogger(__name__)

SETTINGS_KEY = "suratAI_settings"


class PreferencesStore:
    """Load and save :class:`WorkspaceSettings` as one JSON document."""

    def __init__(self, store: KeyValueStore, *, key: str = SETTINGS_KEY) -> None:
        self._store = store
        self._key = key

    def load(self) -> WorkspaceSettings:
        """Return stored settings merged over the defaults."""
        raw = self._store.get(self._key)
        if raw is None:
            return WorkspaceSettings()
        try:
            stored = json.loads(raw)
            if not isinstance(stored, dict):
                raise ValueError("settings must be a JSON object")
            merged = {**WorkspaceSettings().to_document(), **stored}
            return WorkspaceSettings.model_validate(merged)
        except (ValueError, PydanticValidationError) as exc:
            raise StorageError("Stored settings could not be read") from exc

    def save(self, settings: WorkspaceSettings) -> None:
        """Persist the whole settings document."""
        self._store.set(self._key, json.dumps(settings.to_document()))
        LOGGER.info("Workspace settings saved")

    def reset(self) -> None:
        """Forget stored settings so defaults apply again."""
        self._store.remove(self._key)


__all__ = ["PreferencesStore", "SETTINGS_KEY"]
