"""Tests for workspace settings persistence."""

from __future__ import annotations

import json

import pytest

from surat_ai.core.config import WorkspaceSettings
from surat_ai.core.interfaces import StorageError
from surat_ai.storage import SETTINGS_KEY, InMemoryKeyValueStore, PreferencesStore


def test_missing_settings_load_defaults() -> None:
    settings = PreferencesStore(InMemoryKeyValueStore()).load()

    assert settings == WorkspaceSettings()


def test_stored_settings_are_merged_over_defaults() -> None:
    legacy = {"googleDriveFolderId": "folder-1", "predefinedTags": ["Arsip"]}
    store = InMemoryKeyValueStore({SETTINGS_KEY: json.dumps(legacy)})

    settings = PreferencesStore(store).load()

    assert settings.google_drive_folder_id == "folder-1"
    assert settings.predefined_tags == ["Arsip"]
    assert settings.default_custom_fields == ["Anggaran", "Narahubung", "Kode Proyek"]
    assert len(settings.sender_abbreviations) == 2


def test_save_and_reset() -> None:
    store = InMemoryKeyValueStore()
    preferences = PreferencesStore(store)
    settings = preferences.load()
    settings.add_abbreviation("Dinas Kesehatan", "Dinkes")
    settings.theme = "dark"

    preferences.save(settings)
    reloaded = preferences.load()
    assert reloaded.theme == "dark"
    assert reloaded.sender_abbreviations[-1].short == "Dinkes"

    preferences.reset()
    assert store.get(SETTINGS_KEY) is None
    assert preferences.load().theme == "light"


def test_invalid_settings_raise_storage_error() -> None:
    store = InMemoryKeyValueStore({SETTINGS_KEY: json.dumps({"theme": "blue"})})

    with pytest.raises(StorageError):
        PreferencesStore(store).load()
