"""Unit tests for configuration helpers."""
import logging
import os

import pytest

from src.utils import config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without settings in the environment."""
    for key in ("REGISTRATION_STORE_FILE", "MAX_INSCRIPTIONS", "SUBMIT_DELAY_SECONDS", "LOG_LEVEL"):
        # setenv first so values written by load_env are undone at teardown
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    # Treat .env as already loaded so a developer's file doesn't leak in
    monkeypatch.setattr(config, "_ENV_LOADED", True)


class TestDefaults:
    """Test fallback values."""

    def test_defaults(self):
        assert config.get_store_file() == "data/local_store.json"
        assert config.get_max_inscriptions() == 50
        assert config.get_submit_delay() == 0.5
        assert config.get_log_level() == logging.INFO


class TestEnvironmentOverrides:
    """Test values read from os.environ."""

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("REGISTRATION_STORE_FILE", "/tmp/other.json")
        monkeypatch.setenv("MAX_INSCRIPTIONS", "10")
        monkeypatch.setenv("SUBMIT_DELAY_SECONDS", "0")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert config.get_store_file() == "/tmp/other.json"
        assert config.get_max_inscriptions() == 10
        assert config.get_submit_delay() == 0.0
        assert config.get_log_level() == logging.DEBUG

    @pytest.mark.parametrize("raw", ["abc", "0", "-5", ""])
    def test_invalid_capacity_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("MAX_INSCRIPTIONS", raw)
        assert config.get_max_inscriptions() == 50

    @pytest.mark.parametrize("raw", ["soon", "-1"])
    def test_invalid_delay_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("SUBMIT_DELAY_SECONDS", raw)
        assert config.get_submit_delay() == 0.5

    def test_unknown_log_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "CHATTY")
        assert config.get_log_level() == logging.INFO


class TestLoadEnv:
    """Test .env file loading."""

    def test_loads_known_keys_only(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# settings\n"
            "MAX_INSCRIPTIONS=20\n"
            "SUBMIT_DELAY_SECONDS='0.1'\n"
            "UNRELATED_SECRET=hidden\n"
            "malformed line\n",
            encoding="utf-8",
        )
        monkeypatch.delenv("UNRELATED_SECRET", raising=False)
        monkeypatch.setattr(config, "_ENV_LOADED", False)

        config.load_env(str(env_file))

        assert config.get_max_inscriptions() == 20
        assert config.get_submit_delay() == 0.1
        assert "UNRELATED_SECRET" not in os.environ

    def test_environment_wins_over_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("MAX_INSCRIPTIONS=20\n", encoding="utf-8")
        monkeypatch.setenv("MAX_INSCRIPTIONS", "30")
        monkeypatch.setattr(config, "_ENV_LOADED", False)

        config.load_env(str(env_file))

        assert config.get_max_inscriptions() == 30
