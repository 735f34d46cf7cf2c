"""Tests for settings and request loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from marketlens.config import Settings
from marketlens.models.request import ResearchRequest

_ENV_KEYS = [
    "MARKETLENS_GEMINI_MODEL",
    "MARKETLENS_GEMINI_API_KEY",
    "MARKETLENS_RETRY_ATTEMPTS",
    "MARKETLENS_DB_PATH",
    "MARKETLENS_TEXT_PROVIDER",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "OPENAI_API_KEY",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Environment without any marketlens or provider variables."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self, clean_env) -> None:
        settings = Settings.from_env()
        assert settings.gemini_model == "gemini-2.5-flash"
        assert settings.retry_attempts == 1
        assert settings.gemini_api_key == ""

    def test_prefixed_variables(self, clean_env) -> None:
        clean_env.setenv("MARKETLENS_GEMINI_MODEL", "gemini-2.0-flash")
        clean_env.setenv("MARKETLENS_RETRY_ATTEMPTS", "3")
        clean_env.setenv("MARKETLENS_DB_PATH", "/tmp/research.db")
        settings = Settings.from_env()
        assert settings.gemini_model == "gemini-2.0-flash"
        assert settings.retry_attempts == 3
        assert settings.db_path == Path("/tmp/research.db")

    def test_provider_key_fallbacks(self, clean_env) -> None:
        clean_env.setenv("GOOGLE_API_KEY", "google-key")
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        settings = Settings.from_env()
        assert settings.gemini_api_key == "google-key"
        assert settings.openai_api_key == "sk-test"

    def test_prefixed_key_wins(self, clean_env) -> None:
        clean_env.setenv("GEMINI_API_KEY", "plain")
        clean_env.setenv("MARKETLENS_GEMINI_API_KEY", "prefixed")
        assert Settings.from_env().gemini_api_key == "prefixed"

    def test_yaml_overlay(self, clean_env, tmp_path: Path) -> None:
        clean_env.setenv("MARKETLENS_GEMINI_MODEL", "from-env")
        config = tmp_path / "marketlens.yaml"
        config.write_text(
            "gemini_model: from-yaml\n"
            "competitor_webhook_url: https://workflows.example.com/webhook/x\n"
            "unknown_key: ignored\n"
        )
        settings = Settings.from_env(config)
        assert settings.gemini_model == "from-yaml"
        assert settings.competitor_webhook_url == "https://workflows.example.com/webhook/x"

    def test_retry_attempts_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(retry_attempts=0)


class TestResearchRequest:
    """Tests for ResearchRequest.from_yaml."""

    def test_nested_client_block(self, tmp_path: Path) -> None:
        path = tmp_path / "request.yaml"
        path.write_text(
            "client:\n"
            "  name: Siam Clinic\n"
            "  website_url: siamclinic.co.th\n"
            "market: Thailand\n"
            "product_focus: Botox\n"
            "user_competitors:\n"
            "  - Glow Aesthetic\n"
        )
        request = ResearchRequest.from_yaml(path)
        assert request.client_name == "Siam Clinic"
        assert request.website_url == "siamclinic.co.th"
        assert request.market == "Thailand"
        assert request.user_competitors == ["Glow Aesthetic"]

    def test_flat_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "request.yaml"
        path.write_text("client_name: Glow\nmarket: Thailand\n")
        request = ResearchRequest.from_yaml(path)
        assert request.client_name == "Glow"
        assert request.product_focus is None

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "request.yaml"
        path.write_text("")
        assert ResearchRequest.from_yaml(path).client_name is None
