"""One review-reminder cycle and its time-of-day gate."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, tzinfo

import httpx

from review_ping.config import RunConfig
from review_ping.github_client import FetchError, fetch_review_requests
from review_ping.message import render_review_message
from review_ping.scheduler import TimeWindow
from review_ping.schema import CycleOutcome
from review_ping.telegram_client import DeliveryError, send_message

logger = logging.getLogger(__name__)


def run_review_cycle(
    config: RunConfig,
    *,
    github_client: httpx.Client,
    telegram_client: httpx.Client,
) -> CycleOutcome:
    """Fetch pending reviews and notify the chat when there are any.

    Fetch and delivery failures are logged and reported as outcomes so the
    polling loop keeps running.
    """
    logger.info("Checking pull requests for review by '%s'...", config.reviewer_handle)
    try:
        review_requests = fetch_review_requests(
            client=github_client,
            reviewer_handle=config.reviewer_handle,
        )
    except FetchError as error:
        logger.error("Error fetching pull requests: %s %s", error, error.body)
        return CycleOutcome.FETCH_FAILED

    if not review_requests:
        logger.info("No pull requests requiring review found.")
        return CycleOutcome.NO_REVIEWS

    message = render_review_message(review_requests)
    try:
        send_message(
            client=telegram_client,
            bot_token=config.telegram_token,
            chat_id=config.telegram_chat_id,
            text=message,
        )
    except DeliveryError as error:
        logger.error("Error sending Telegram message: %s %s", error, error.body)
        return CycleOutcome.DELIVERY_FAILED

    logger.info("Message sent successfully for %d pull request(s).", len(review_requests))
    return CycleOutcome.NOTIFIED


def handle_tick(
    *,
    timezone: tzinfo | None,
    cycle: Callable[[], CycleOutcome],
    window: TimeWindow = TimeWindow(),
    now: Callable[[tzinfo | None], datetime] = datetime.now,
) -> CycleOutcome:
    """Run ``cycle`` only when the current time in ``timezone`` is inside ``window``.

    With ``timezone=None`` the host's local zone is consulted on each tick, so
    daylight-saving changes are picked up while the process keeps running.
    """
    current = now(timezone)
    if timezone is None:
        current = current.astimezone()
    if not window.contains(current):
        logger.info(
            "Skipping execution. Current time %s is outside allowed hours (%s - %s %s).",
            current.strftime("%H:%M"),
            window.start.strftime("%H:%M"),
            window.end.strftime("%H:%M"),
            timezone or "host local time",
        )
        return CycleOutcome.SKIPPED
    return cycle()
