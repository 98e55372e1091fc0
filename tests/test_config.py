"""Tests for configuration and logging setup."""

import logging

import pytest

from vogue_tryon.config import AppConfig, GenerationConfig, load_config
from vogue_tryon.logging_setup import configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY", "GENERATION__TIMEOUT", "DOWNLOAD_PREFIX"):
        monkeypatch.delenv(name, raising=False)


class TestAppConfig:

    def test_defaults(self):
        config = AppConfig(_env_file=None)

        assert config.api_key is None
        assert not config.has_credential
        assert config.generation.model == "gemini-2.5-flash-image"
        assert config.generation.aspect_ratio == "3:4"
        assert config.generation.default_media_type == "image/jpeg"
        assert config.download_prefix == "vogue-ai-tryon"

    @pytest.mark.parametrize("env_name", ["API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"])
    def test_credential_from_environment(self, monkeypatch, env_name):
        monkeypatch.setenv(env_name, "secret")

        config = load_config()

        assert config.api_key == "secret"
        assert config.has_credential

    def test_blank_credential_is_missing(self):
        assert not AppConfig(api_key="  ", _env_file=None).has_credential

    def test_nested_generation_settings(self, monkeypatch):
        monkeypatch.setenv("GENERATION__TIMEOUT", "30")

        config = AppConfig(_env_file=None)

        assert config.generation.timeout == 30.0

    def test_generation_config_standalone(self):
        assert GenerationConfig(aspect_ratio="1:1").aspect_ratio == "1:1"


class TestLogging:

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_configure_logging_sets_level(self):
        configure_logging("debug")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        configure_logging("chatty")

        assert logging.getLogger().level == logging.INFO
