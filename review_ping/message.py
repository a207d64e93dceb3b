"""Chat message rendering for review reminders."""

from __future__ import annotations

from collections.abc import Iterable

from review_ping.github_client import ReviewRequest

MESSAGE_HEADER = "Pull requests requiring review:"
# Telegram counts sendMessage text length in UTF-16 code units.
TELEGRAM_MESSAGE_LIMIT = 4096


def message_length(text: str) -> int:
    """Return the length of ``text`` as Telegram measures it."""
    return len(text.encode("utf-16-le")) // 2


def _overflow_line(count: int) -> str:
    return f"...and {count} more\n"


def render_review_message(
    review_requests: Iterable[ReviewRequest],
    *,
    max_length: int = TELEGRAM_MESSAGE_LIMIT,
) -> str:
    """Render the header followed by one title/url block per request, in order.

    When the full message would exceed ``max_length``, trailing blocks are
    replaced by a single ``...and N more`` line so the text is still accepted
    by the chat API.
    """
    blocks = [f"- {review_request.title}\n{review_request.url}\n" for review_request in review_requests]
    message = f"{MESSAGE_HEADER}\n" + "".join(blocks)
    if message_length(message) <= max_length:
        return message

    message = f"{MESSAGE_HEADER}\n"
    for shown, block in enumerate(blocks):
        remaining_after = len(blocks) - shown - 1
        tail = _overflow_line(remaining_after) if remaining_after else ""
        if message_length(message + block + tail) > max_length:
            return message + _overflow_line(len(blocks) - shown)
        message += block
    return message
