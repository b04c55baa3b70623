from typing import Any

import httpx
import pytest

from theoneapi import ClientConfig, TheOneApi, TheOneApiConfigError
from theoneapi.core.config import DEFAULT_BASE_URL, get_client_config

_ENV_VARS = ("THEONEAPI_API_KEY", "THEONEAPI_BASE_URL", "THEONEAPI_TIMEOUT_SECONDS", "THEONEAPI_CONFIG")


def _isolate_env(monkeypatch: Any, tmp_path: Any) -> None:
    monkeypatch.chdir(tmp_path)
    # setenv first so values written by load_dotenv are removed on teardown
    for name in _ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults_without_files_or_env(monkeypatch: Any, tmp_path: Any) -> None:
    _isolate_env(monkeypatch, tmp_path)

    config = get_client_config()

    assert config.api_key is None
    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout_seconds == 10.0


def test_yaml_file_then_env_overrides(monkeypatch: Any, tmp_path: Any) -> None:
    _isolate_env(monkeypatch, tmp_path)
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "theoneapi.yml").write_text(
        "api_key: from-yaml\nbase_url: http://mirror.local/v2\ntimeout_seconds: 3\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("THEONEAPI_TIMEOUT_SECONDS", "7.5")

    config = get_client_config()

    assert config.api_key == "from-yaml"
    assert config.base_url == "http://mirror.local/v2"
    assert config.timeout_seconds == 7.5


def test_config_path_override_and_dotenv(monkeypatch: Any, tmp_path: Any) -> None:
    _isolate_env(monkeypatch, tmp_path)
    custom = tmp_path / "custom.yml"
    custom.write_text("timeout_seconds: 2\n", encoding="utf-8")
    (tmp_path / ".env").write_text("THEONEAPI_API_KEY=from-dotenv\n", encoding="utf-8")
    monkeypatch.setenv("THEONEAPI_CONFIG", str(custom))

    config = get_client_config()

    assert config.api_key == "from-dotenv"
    assert config.timeout_seconds == 2.0


def test_from_config_fails_fast_without_key(monkeypatch: Any, tmp_path: Any) -> None:
    _isolate_env(monkeypatch, tmp_path)

    with pytest.raises(TheOneApiConfigError, match="valid API key"):
        TheOneApi.from_config()


def test_from_config_uses_configured_endpoint() -> None:
    client = TheOneApi.from_config(
        ClientConfig(api_key="abc", base_url="http://localhost:9000/v2", timeout_seconds=1.5),
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"docs": []})),
    )

    assert client.base_url == "http://localhost:9000/v2"
    assert client.book.resource.value == "/book"


def test_config_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        TheOneApi(api_key="")
