from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://the-one-api.dev/v2"
DEFAULT_TIMEOUT_SECONDS = 10.0


class TheOneApiError(Exception):
    pass


class TheOneApiConfigError(TheOneApiError, ValueError):
    pass


class ClientConfig(BaseModel):
    api_key: str | None = Field(default=None)
    base_url: str = Field(default=DEFAULT_BASE_URL, min_length=1)
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)


def require_api_key(api_key: str | None) -> str:
    if not isinstance(api_key, str) or not api_key.strip():
        raise TheOneApiConfigError("You must provide a valid API key")
    return api_key


def _config_path() -> Path:
    override = os.getenv("THEONEAPI_CONFIG")
    if override:
        return Path(override)
    return Path.cwd() / "config" / "theoneapi.yml"


def _env_path() -> Path:
    return Path.cwd() / ".env"


def _load_yaml_config() -> dict[str, Any]:
    path = _config_path()
    if not path.exists():
        return {}

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        return raw
    return {}


def get_client_config() -> ClientConfig:
    load_dotenv(_env_path(), override=False)

    config = ClientConfig(**_load_yaml_config())

    env_api_key = os.getenv("THEONEAPI_API_KEY")
    env_base_url = os.getenv("THEONEAPI_BASE_URL")
    env_timeout_seconds = os.getenv("THEONEAPI_TIMEOUT_SECONDS")

    if env_api_key is not None:
        config.api_key = env_api_key
    if env_base_url:
        config.base_url = env_base_url
    if env_timeout_seconds is not None:
        config.timeout_seconds = float(env_timeout_seconds)

    return config
