"""Tests for configuration and dataset loading."""

import json
from pathlib import Path

import pytest

from npoconnect.config import BUNDLED_DATASET, DEFAULT_MODEL, Settings, create_client, load_settings
from npoconnect.dataset import load_organizations
from npoconnect.errors import ConfigurationError


class TestSettings:
    def test_defaults(self):
        settings = load_settings({})
        assert settings.api_key is None
        assert settings.model == DEFAULT_MODEL
        assert settings.dataset_path == BUNDLED_DATASET

    def test_gemini_key_preferred(self):
        settings = load_settings({"GEMINI_API_KEY": "g-key", "API_KEY": "a-key"})
        assert settings.api_key == "g-key"

    def test_api_key_fallback(self):
        assert load_settings({"API_KEY": "a-key"}).api_key == "a-key"

    def test_overrides(self):
        settings = load_settings({
            "NPOCONNECT_MODEL": "gemini-2.5-pro",
            "NPOCONNECT_DATA": "/tmp/npos.json",
            "NPOCONNECT_STORAGE": "/tmp/store.json",
        })
        assert settings.model == "gemini-2.5-pro"
        assert settings.dataset_path == Path("/tmp/npos.json")
        assert settings.storage_path == Path("/tmp/store.json")

    def test_missing_key_is_fatal_for_generation(self):
        with pytest.raises(ConfigurationError):
            create_client(Settings())


class TestLoadOrganizations:
    def test_bundled_dataset(self):
        records = load_organizations()
        assert len(records) == 10
        assert records[0].name == "Sunshine Youth Center"
        assert len({r.id for r in records}) == 10

    def test_wrapped_list(self, tmp_path):
        path = tmp_path / "npos.json"
        path.write_text(json.dumps({"organizations": [{"id": 1, "name": "A"}]}))
        assert [r.name for r in load_organizations(path)] == ["A"]

    def test_duplicate_ids(self, tmp_path):
        path = tmp_path / "npos.json"
        path.write_text(json.dumps([{"id": 1, "name": "A"}, {"id": 1, "name": "B"}]))
        with pytest.raises(ValueError):
            load_organizations(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_organizations(tmp_path / "absent.json")
