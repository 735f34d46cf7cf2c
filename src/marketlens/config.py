"""Runtime settings from environment variables, optionally overlaid by YAML."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

_ENV_PREFIX = "MARKETLENS_"


class Settings(BaseModel):
    """Endpoints, credentials and retry policy for outbound calls."""

    competitor_webhook_url: str = ""
    facebook_webhook_url: str = ""

    text_provider: str = Field(default="gemini", description="gemini | openai")
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    temperature: float = 1.0

    db_path: Path = Path("marketlens.db")
    http_timeout: float = 120.0

    # One attempt means no retry
    retry_attempts: int = Field(default=1, ge=1)
    retry_backoff_max: float = 8.0

    @classmethod
    def from_env(cls, yaml_path: Optional[str | Path] = None) -> "Settings":
        """
        Build settings from MARKETLENS_* environment variables.
        Provider keys also fall back to GEMINI_API_KEY / OPENAI_API_KEY.
        Values from yaml_path, when given, override the environment.
        """
        data: dict = {}
        for name in cls.model_fields:
            value = os.environ.get(f"{_ENV_PREFIX}{name.upper()}")
            if value is not None:
                data[name] = value
        if "gemini_api_key" not in data:
            key = os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY")
            if key:
                data["gemini_api_key"] = key
        if "openai_api_key" not in data and os.environ.get("OPENAI_API_KEY"):
            data["openai_api_key"] = os.environ["OPENAI_API_KEY"]

        if yaml_path is not None:
            overlay = yaml.safe_load(Path(yaml_path).read_text()) or {}
            data.update({k: v for k, v in overlay.items() if k in cls.model_fields})
        return cls.model_validate(data)
