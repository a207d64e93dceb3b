"""Runtime configuration loaded from the process environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

GITHUB_USERNAME_ENV_VAR = "GITHUB_USERNAME"
GITHUB_TOKEN_ENV_VAR = "GITHUB_TOKEN"
GH_TOKEN_ENV_VAR = "GH_TOKEN"
TELEGRAM_TOKEN_ENV_VAR = "TELEGRAM_TOKEN"
TELEGRAM_CHAT_ID_ENV_VAR = "TELEGRAM_CHAT_ID"
TIMEZONE_ENV_VAR = "REVIEW_PING_TIMEZONE"
TIMEOUT_SECONDS_ENV_VAR = "REVIEW_PING_TIMEOUT_SECONDS"
INTERVAL_SECONDS_ENV_VAR = "REVIEW_PING_INTERVAL_SECONDS"

DEFAULT_TIMEZONE_NAME = "Europe/Madrid"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 20.0
DEFAULT_POLL_INTERVAL_SECONDS = 4 * 60 * 60.0
DEFAULT_DOTENV_FILENAME = ".env"


class ConfigError(ValueError):
    """Raised when required runtime configuration is missing or invalid."""


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Process-wide settings, read once at startup."""

    reviewer_handle: str
    telegram_token: str
    telegram_chat_id: str
    github_token: str | None = None
    timezone_name: str = DEFAULT_TIMEZONE_NAME
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS

    def __repr__(self) -> str:
        # Credentials stay out of logs and tracebacks.
        return (
            f"RunConfig(reviewer_handle={self.reviewer_handle!r}, "
            f"telegram_chat_id={self.telegram_chat_id!r}, "
            f"github_token={'set' if self.github_token else 'unset'}, "
            f"timezone_name={self.timezone_name!r}, "
            f"request_timeout_seconds={self.request_timeout_seconds}, "
            f"poll_interval_seconds={self.poll_interval_seconds})"
        )


def load_dotenv_file(dotenv_path: Path | None = None) -> bool:
    """Load a local definitions file if present; return whether one was found."""
    path = dotenv_path or Path.cwd() / DEFAULT_DOTENV_FILENAME
    if not path.is_file():
        logger.info("No %s file found at %s, relying on environment variables.", path.name, path)
        return False
    load_dotenv(dotenv_path=path, override=False)
    logger.debug("Loaded environment definitions from %s.", path)
    return True


def _read_value(environ: Mapping[str, str], key: str) -> str | None:
    """Return a stripped environment value, treating blank as absent."""
    value = environ.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _read_positive_float(environ: Mapping[str, str], key: str, default: float) -> float:
    """Read an optional positive number from the environment."""
    raw_value = _read_value(environ, key)
    if raw_value is None:
        return default
    try:
        parsed_value = float(raw_value)
    except ValueError as error:
        raise ConfigError(f"{key} must be a number, got '{raw_value}'.") from error
    if parsed_value <= 0:
        raise ConfigError(f"{key} must be greater than zero, got '{raw_value}'.")
    return parsed_value


def load_run_config(
    environ: Mapping[str, str] | None = None,
    *,
    dotenv_path: Path | None = None,
) -> RunConfig:
    """Build the run configuration and fail fast if required values are absent.

    When ``environ`` is omitted, the local ``.env`` file is loaded first and the
    process environment is read. Values already set in the environment win over
    the file.
    """
    if environ is None:
        load_dotenv_file(dotenv_path)
        environ = os.environ

    reviewer_handle = _read_value(environ, GITHUB_USERNAME_ENV_VAR)
    telegram_token = _read_value(environ, TELEGRAM_TOKEN_ENV_VAR)
    telegram_chat_id = _read_value(environ, TELEGRAM_CHAT_ID_ENV_VAR)

    missing = [
        key
        for key, value in (
            (GITHUB_USERNAME_ENV_VAR, reviewer_handle),
            (TELEGRAM_TOKEN_ENV_VAR, telegram_token),
            (TELEGRAM_CHAT_ID_ENV_VAR, telegram_chat_id),
        )
        if value is None
    ]
    if missing:
        raise ConfigError(
            "Missing required environment variables: " + ", ".join(missing) + "."
        )

    github_token = _read_value(environ, GITHUB_TOKEN_ENV_VAR) or _read_value(
        environ, GH_TOKEN_ENV_VAR
    )
    if github_token is None:
        logger.info(
            "No GitHub token configured; search requests will use unauthenticated rate limits."
        )

    return RunConfig(
        reviewer_handle=reviewer_handle,
        telegram_token=telegram_token,
        telegram_chat_id=telegram_chat_id,
        github_token=github_token,
        timezone_name=_read_value(environ, TIMEZONE_ENV_VAR) or DEFAULT_TIMEZONE_NAME,
        request_timeout_seconds=_read_positive_float(
            environ, TIMEOUT_SECONDS_ENV_VAR, DEFAULT_REQUEST_TIMEOUT_SECONDS
        ),
        poll_interval_seconds=_read_positive_float(
            environ, INTERVAL_SECONDS_ENV_VAR, DEFAULT_POLL_INTERVAL_SECONDS
        ),
    )
