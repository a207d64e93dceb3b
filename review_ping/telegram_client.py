"""Telegram Bot API client used to deliver review reminders."""

from __future__ import annotations

import httpx

TELEGRAM_API_BASE_URL = "https://api.telegram.org"
SEND_MESSAGE_METHOD = "sendMessage"


class DeliveryError(RuntimeError):
    """Raised when a chat message could not be delivered."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def _send_message_path(bot_token: str) -> str:
    return f"/bot{bot_token}/{SEND_MESSAGE_METHOD}"


def send_message(*, client: httpx.Client, bot_token: str, chat_id: str, text: str) -> None:
    """Deliver ``text`` to ``chat_id`` with one form-encoded POST."""
    try:
        response = client.post(
            _send_message_path(bot_token),
            data={"chat_id": chat_id, "text": text},
        )
    except httpx.HTTPError as error:
        # The request URL embeds the bot token, so only the error type is reported.
        raise DeliveryError(
            f"Telegram {SEND_MESSAGE_METHOD} request failed: {type(error).__name__}."
        ) from error

    if response.status_code != httpx.codes.OK:
        raise DeliveryError(
            f"Telegram {SEND_MESSAGE_METHOD} failed with status {response.status_code}.",
            status_code=response.status_code,
            body=response.text,
        )


def build_telegram_client(
    *,
    timeout_seconds: float = 20,
    trust_env: bool = True,
) -> httpx.Client:
    """Build an HTTP client for the Telegram Bot API."""
    return httpx.Client(
        base_url=TELEGRAM_API_BASE_URL,
        timeout=timeout_seconds,
        trust_env=trust_env,
    )
