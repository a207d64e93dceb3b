"""Tests for environment-driven configuration loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from review_ping.config import (
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_TIMEZONE_NAME,
    ConfigError,
    RunConfig,
    load_dotenv_file,
    load_run_config,
)

CONFIG_ENV_VARS = (
    "GITHUB_USERNAME",
    "GITHUB_TOKEN",
    "GH_TOKEN",
    "TELEGRAM_TOKEN",
    "TELEGRAM_CHAT_ID",
    "REVIEW_PING_TIMEZONE",
    "REVIEW_PING_TIMEOUT_SECONDS",
    "REVIEW_PING_INTERVAL_SECONDS",
)


def make_environ(**overrides: str) -> dict[str, str]:
    environ = {
        "GITHUB_USERNAME": "alice",
        "TELEGRAM_TOKEN": "123:bot-secret",
        "TELEGRAM_CHAT_ID": "-1001",
    }
    environ.update(overrides)
    return environ


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Clear config variables and run from an empty working directory."""
    for key in CONFIG_ENV_VARS:
        # setenv first so values loaded from .env are removed at teardown.
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.mark.unit
def test_load_run_config_reads_required_values_and_defaults() -> None:
    config = load_run_config(make_environ())

    assert config == RunConfig(
        reviewer_handle="alice",
        telegram_token="123:bot-secret",
        telegram_chat_id="-1001",
    )
    assert config.github_token is None
    assert config.timezone_name == DEFAULT_TIMEZONE_NAME
    assert config.request_timeout_seconds == DEFAULT_REQUEST_TIMEOUT_SECONDS
    assert config.poll_interval_seconds == DEFAULT_POLL_INTERVAL_SECONDS == 14400.0


@pytest.mark.unit
@pytest.mark.parametrize("missing_key", ["GITHUB_USERNAME", "TELEGRAM_TOKEN", "TELEGRAM_CHAT_ID"])
def test_load_run_config_fails_when_required_value_missing(missing_key: str) -> None:
    environ = make_environ()
    del environ[missing_key]

    with pytest.raises(ConfigError, match=missing_key):
        load_run_config(environ)


@pytest.mark.unit
def test_load_run_config_lists_every_missing_value_and_treats_blank_as_missing() -> None:
    with pytest.raises(ConfigError) as error_info:
        load_run_config({"GITHUB_USERNAME": "   "})

    message = str(error_info.value)
    assert "GITHUB_USERNAME" in message
    assert "TELEGRAM_TOKEN" in message
    assert "TELEGRAM_CHAT_ID" in message


@pytest.mark.unit
def test_load_run_config_prefers_github_token_over_gh_token() -> None:
    config = load_run_config(make_environ(GITHUB_TOKEN="primary", GH_TOKEN="fallback"))
    assert config.github_token == "primary"

    config = load_run_config(make_environ(GH_TOKEN="fallback"))
    assert config.github_token == "fallback"


@pytest.mark.unit
def test_load_run_config_reads_optional_overrides() -> None:
    config = load_run_config(
        make_environ(
            REVIEW_PING_TIMEZONE="America/New_York",
            REVIEW_PING_TIMEOUT_SECONDS="7.5",
            REVIEW_PING_INTERVAL_SECONDS="600",
        )
    )

    assert config.timezone_name == "America/New_York"
    assert config.request_timeout_seconds == 7.5
    assert config.poll_interval_seconds == 600.0


@pytest.mark.unit
@pytest.mark.parametrize("raw_value", ["soon", "0", "-5"])
def test_load_run_config_rejects_invalid_interval(raw_value: str) -> None:
    with pytest.raises(ConfigError, match="REVIEW_PING_INTERVAL_SECONDS"):
        load_run_config(make_environ(REVIEW_PING_INTERVAL_SECONDS=raw_value))


@pytest.mark.unit
def test_run_config_repr_hides_credentials() -> None:
    config = load_run_config(make_environ(GITHUB_TOKEN="gh-secret"))

    rendered = repr(config)
    assert "bot-secret" not in rendered
    assert "gh-secret" not in rendered
    assert "github_token=set" in rendered


@pytest.mark.unit
def test_load_dotenv_file_reports_missing_file(
    clean_env: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.INFO, logger="review_ping.config"):
        assert load_dotenv_file() is False

    assert "No .env file found" in caplog.text


@pytest.mark.unit
def test_load_run_config_reads_dotenv_without_overriding_environment(
    clean_env: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (clean_env / ".env").write_text(
        "GITHUB_USERNAME=from-file\nTELEGRAM_TOKEN=file-token\nTELEGRAM_CHAT_ID=42\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GITHUB_USERNAME", "from-env")

    config = load_run_config()

    assert config.reviewer_handle == "from-env"
    assert config.telegram_token == "file-token"
    assert config.telegram_chat_id == "42"


@pytest.mark.unit
def test_load_run_config_without_dotenv_fails_fast(clean_env: Path) -> None:
    with pytest.raises(ConfigError):
        load_run_config()
