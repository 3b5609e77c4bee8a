from __future__ import annotations

from pathlib import Path

import pytest

from tristream.config import Settings, get_settings
from tristream.errors import (
    ConfigurationError,
    EndpointNotConfiguredError,
    InvalidSettingError,
    ModelNotConfiguredError,
)

_ENV_NAMES = (
    "TRITON_URL",
    "MODEL_NAME",
    "ROUTER_MODEL",
    "SYSTEM_PROMPT",
    "REQUEST_ID",
    "TIMEOUT_SECONDS",
    "TRISTREAM_LOG_LEVEL",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    settings = get_settings()

    assert settings.triton_url == "localhost:8001"
    assert settings.model_name == "gpt-oss-20b"
    assert settings.router_model == "llm-router"
    assert settings.timeout_seconds is None
    assert settings.log_level == "WARNING"


def test_environment_overrides_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRITON_URL", "triton:9001")
    monkeypatch.setenv("MODEL_NAME", "mistral-streaming")
    monkeypatch.setenv("TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("TRISTREAM_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.triton_url == "triton:9001"
    assert settings.model_name == "mistral-streaming"
    assert settings.timeout_seconds == 2.5
    assert settings.log_level == "debug"


def test_dotenv_file_is_read(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("ROUTER_MODEL=ensemble\n", encoding="utf-8")

    assert Settings().router_model == "ensemble"


def test_explicit_overrides_win_and_none_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRITON_URL", "triton:9001")

    settings = get_settings(triton_url="other:8001", model_name=None)

    assert settings.triton_url == "other:8001"
    assert settings.model_name == "gpt-oss-20b"


def test_blank_endpoint_is_rejected() -> None:
    with pytest.raises(EndpointNotConfiguredError):
        get_settings(triton_url=" ")


@pytest.mark.parametrize("field", ["model_name", "router_model"])
def test_blank_model_is_rejected(field: str) -> None:
    with pytest.raises(ModelNotConfiguredError) as exc_info:
        get_settings(**{field: ""})

    assert isinstance(exc_info.value, ConfigurationError)


def test_unknown_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRISTREAM_LOG_LEVEL", "verbose")

    with pytest.raises(InvalidSettingError, match="verbose"):
        get_settings()


def test_unparsable_value_is_a_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEOUT_SECONDS", "soon")

    with pytest.raises(ConfigurationError):
        get_settings()
