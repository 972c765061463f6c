"""Tests for settings loading."""

from pathlib import Path

import pytest

from rental_store.config import Settings, get_settings


LOCAL_CONFIG = Path(__file__).resolve().parents[2] / "resources" / "config" / "local.yaml"


class TestGetSettings:

    def test_defaults_without_config(self, monkeypatch):
        monkeypatch.delenv("CONFIG", raising=False)
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("SESSION_CACHE_KEY", raising=False)

        settings = get_settings()

        assert settings.database_url == "sqlite+aiosqlite:///data/rental_store.db"
        assert settings.session_cache_key == "currentUser"
        assert settings.password_hash_scheme == "pbkdf2_sha256"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.delenv("CONFIG", raising=False)
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.setenv("DATABASE_ECHO", "true")

        settings = get_settings()

        assert settings.log_level == "WARNING"
        assert settings.database_echo is True

    def test_yaml_config(self, monkeypatch, tmp_path):
        config_file = tmp_path / "local.yaml"
        config_file.write_text(
            "LOG_LEVEL: DEBUG\n"
            "LOG_FORMAT: text\n"
            "DATABASE_URL: \"sqlite+aiosqlite:///:memory:\"\n"
        )
        monkeypatch.setenv("CONFIG", str(config_file))

        settings = get_settings()

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "text"
        assert settings.database_url == "sqlite+aiosqlite:///:memory:"

    def test_empty_yaml_uses_defaults(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        settings = Settings.from_yaml(str(config_file))

        assert settings.log_backup_count == 5

    def test_missing_config_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CONFIG", str(tmp_path / "missing.yaml"))

        with pytest.raises(FileNotFoundError):
            get_settings()

    def test_shipped_local_config(self, monkeypatch):
        monkeypatch.setenv("CONFIG", str(LOCAL_CONFIG))

        settings = get_settings()

        assert settings.app_debug is True
        assert settings.log_format == "text"


class TestSettingsValidation:

    def test_log_level_is_normalized(self):
        assert Settings(LOG_LEVEL="debug").log_level == "DEBUG"

    def test_unknown_log_format(self):
        with pytest.raises(ValueError):
            Settings(LOG_FORMAT="xml")

    def test_unknown_log_level(self):
        with pytest.raises(ValueError):
            Settings(LOG_LEVEL="chatty")
