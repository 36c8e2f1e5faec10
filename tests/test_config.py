"""
Tests for journaltask.config module.
"""

from dataclasses import fields
from pathlib import Path
from unittest.mock import patch

import pytest

from journaltask.config import (
    CLIENT_ID_SUFFIX,
    DEFAULT_DATA_DIR,
    ImportConfig,
    fetch_api_key,
    get_data_dir,
    load_model_config,
)
from journaltask.errors import ImportConfigError

VALID_ID = "1234-abc.apps.googleusercontent.com"


class TestFetchApiKey:
    """Tests for fetch_api_key function."""

    def test_returns_provided_key(self):
        assert fetch_api_key("direct-key") == "direct-key"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "env-key")

        assert fetch_api_key() == "env-key"

    def test_raises_without_key(self, monkeypatch):
        """Should raise ValueError if no API key is available."""
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
            fetch_api_key()


class TestLoadModelConfig:
    """Tests for load_model_config function."""

    def test_loads_yaml(self, temp_dir):
        config_path = temp_dir / "config.yaml"
        config_path.write_text("model: claude-test\ntemperature: 0.5\n")

        with patch("journaltask.config.CONFIG_PATH", config_path):
            assert load_model_config() == {"model": "claude-test", "temperature": 0.5}

    def test_missing_file_returns_empty(self, temp_dir):
        with patch("journaltask.config.CONFIG_PATH", temp_dir / "missing.yaml"):
            assert load_model_config() == {}

    def test_empty_file_returns_empty(self, temp_dir):
        config_path = temp_dir / "config.yaml"
        config_path.write_text("")

        with patch("journaltask.config.CONFIG_PATH", config_path):
            assert load_model_config() == {}


class TestGetDataDir:
    """Tests for get_data_dir function."""

    def test_uses_environment(self, temp_dir, monkeypatch):
        monkeypatch.setenv("JOURNALTASK_HOME", str(temp_dir / "custom"))

        assert get_data_dir() == temp_dir / "custom"

    def test_defaults_to_home(self, monkeypatch):
        monkeypatch.delenv("JOURNALTASK_HOME", raising=False)

        assert get_data_dir() == DEFAULT_DATA_DIR

    def test_blank_environment_uses_default(self, monkeypatch):
        monkeypatch.setenv("JOURNALTASK_HOME", "  ")

        assert get_data_dir() == DEFAULT_DATA_DIR

    def test_expands_user(self, monkeypatch):
        monkeypatch.setenv("JOURNALTASK_HOME", "~/journals")

        assert get_data_dir() == Path.home() / "journals"


class TestImportConfigResolve:
    """Tests for ImportConfig.resolve precedence."""

    def test_empty_when_nothing_configured(self):
        assert ImportConfig.resolve() == ImportConfig(client_id="", client_secret="")

    def test_explicit_argument_wins(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CLIENT_ID", "env.apps.googleusercontent.com")

        config = ImportConfig.resolve(stored_client_id="stored.apps.googleusercontent.com", client_id="arg")

        assert config.client_id == "arg"

    def test_stored_value_beats_environment(self, monkeypatch):
        """A user-saved client ID takes precedence over .env."""
        monkeypatch.setenv("GOOGLE_CLIENT_ID", "env.apps.googleusercontent.com")

        config = ImportConfig.resolve(stored_client_id=" stored.apps.googleusercontent.com ")

        assert config.client_id == "stored.apps.googleusercontent.com"

    def test_environment_fallbacks(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_OAUTH_CLIENT_ID", "legacy.apps.googleusercontent.com")

        assert ImportConfig.resolve().client_id == "legacy.apps.googleusercontent.com"

        monkeypatch.setenv("GOOGLE_CLIENT_ID", "primary.apps.googleusercontent.com")

        assert ImportConfig.resolve().client_id == "primary.apps.googleusercontent.com"

    def test_blank_values_are_skipped(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CLIENT_ID", "env.apps.googleusercontent.com")

        assert ImportConfig.resolve(stored_client_id="   ", client_id="").client_id == "env.apps.googleusercontent.com"

    def test_secret_from_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_OAUTH_CLIENT_SECRET", "secret")

        config = ImportConfig.resolve()

        assert config.client_secret == "secret"

    def test_holds_only_oauth_client_settings(self, monkeypatch):
        """The import flow needs only the OAuth client ID and secret."""
        monkeypatch.setenv("GOOGLE_API_KEY", "api-key")

        config = ImportConfig.resolve(client_id=VALID_ID)

        assert [f.name for f in fields(config)] == ["client_id", "client_secret"]


class TestImportConfigValidate:
    """Tests for ImportConfig.validate."""

    def test_valid_client_id(self):
        ImportConfig(client_id=VALID_ID).validate()

    def test_missing_client_id(self):
        with pytest.raises(ImportConfigError, match="missing"):
            ImportConfig().validate()

    def test_wrong_suffix(self):
        """An API key pasted in place of the client ID is rejected."""
        with pytest.raises(ImportConfigError, match=CLIENT_ID_SUFFIX):
            ImportConfig(client_id="AIzaSyExample").validate()
