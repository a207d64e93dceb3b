"""Typer CLI for the review reminder service."""

from __future__ import annotations

import logging
from contextlib import ExitStack
from functools import partial
from typing import Annotated, NoReturn

import typer

from review_ping.config import ConfigError, RunConfig, load_run_config
from review_ping.github_client import FetchError, build_github_client, fetch_review_requests
from review_ping.message import render_review_message
from review_ping.observability import DEFAULT_LOG_LEVEL, setup_logging
from review_ping.scheduler import resolve_timezone, run_schedule
from review_ping.service import handle_tick, run_review_cycle
from review_ping.telegram_client import DeliveryError, build_telegram_client, send_message

logger = logging.getLogger(__name__)

app = typer.Typer(help="Remind a Telegram chat about pull requests awaiting your review.")

LogLevelOption = Annotated[
    str, typer.Option("--log-level", help="Logging level: DEBUG|INFO|WARNING|ERROR.")
]
TrustEnvOption = Annotated[
    bool,
    typer.Option(
        "--trust-env/--no-trust-env",
        help="Use proxy/SSL environment variables from the current shell.",
    ),
]


PROXY_TRANSPORT_HINT = (
    "proxy transport dependency is missing. "
    "Try `review-ping {command} --no-trust-env`, or install `httpx[socks]`."
)


def _exit_for_missing_proxy_transport(command: str, error: ImportError) -> NoReturn:
    typer.echo(f"Review {command} failed: " + PROXY_TRANSPORT_HINT.format(command=command), err=True)
    raise typer.Exit(code=1) from error


def _load_config_or_exit() -> RunConfig:
    try:
        return load_run_config()
    except ConfigError as error:
        typer.echo(f"Configuration error: {error}", err=True)
        raise typer.Exit(code=1) from error


@app.command("run")
def run_command(
    run_immediately: Annotated[
        bool,
        typer.Option(help="Check once at startup instead of waiting a full interval."),
    ] = False,
    log_level: LogLevelOption = DEFAULT_LOG_LEVEL,
    trust_env: TrustEnvOption = True,
) -> None:
    """Poll for pending reviews on a fixed interval, inside allowed hours."""
    setup_logging(log_level)
    config = _load_config_or_exit()
    timezone = resolve_timezone(config.timezone_name)
    logger.info(
        "Starting review reminders for '%s' every %.0f seconds.",
        config.reviewer_handle,
        config.poll_interval_seconds,
    )

    with ExitStack() as stack:
        try:
            github_client = stack.enter_context(
                build_github_client(
                    config.github_token,
                    timeout_seconds=config.request_timeout_seconds,
                    trust_env=trust_env,
                )
            )
            telegram_client = stack.enter_context(
                build_telegram_client(
                    timeout_seconds=config.request_timeout_seconds,
                    trust_env=trust_env,
                )
            )
        except ImportError as error:
            _exit_for_missing_proxy_transport("run", error)

        cycle = partial(
            run_review_cycle,
            config,
            github_client=github_client,
            telegram_client=telegram_client,
        )
        try:
            run_schedule(
                partial(handle_tick, timezone=timezone, cycle=cycle),
                period_seconds=config.poll_interval_seconds,
                run_immediately=run_immediately,
            )
        except KeyboardInterrupt:
            logger.info("Interrupted, shutting down.")


@app.command("check")
def check_command(
    send: Annotated[
        bool, typer.Option(help="Deliver the message to Telegram instead of printing it.")
    ] = False,
    log_level: LogLevelOption = "WARNING",
    trust_env: TrustEnvOption = True,
) -> None:
    """Run one fetch now, ignoring allowed hours, and print or send the message."""
    setup_logging(log_level)
    config = _load_config_or_exit()

    try:
        with build_github_client(
            config.github_token,
            timeout_seconds=config.request_timeout_seconds,
            trust_env=trust_env,
        ) as github_client:
            review_requests = fetch_review_requests(
                client=github_client,
                reviewer_handle=config.reviewer_handle,
            )
    except FetchError as error:
        typer.echo(f"Review check failed: {error}", err=True)
        raise typer.Exit(code=1) from error
    except ImportError as error:
        _exit_for_missing_proxy_transport("check", error)

    if not review_requests:
        typer.echo(f"No pull requests requiring review found for '{config.reviewer_handle}'.")
        return

    message = render_review_message(review_requests)
    if not send:
        typer.echo(message, nl=False)
        return

    try:
        with build_telegram_client(
            timeout_seconds=config.request_timeout_seconds,
            trust_env=trust_env,
        ) as telegram_client:
            send_message(
                client=telegram_client,
                bot_token=config.telegram_token,
                chat_id=config.telegram_chat_id,
                text=message,
            )
    except DeliveryError as error:
        typer.echo(f"Review check failed: {error}", err=True)
        raise typer.Exit(code=1) from error
    except ImportError as error:
        _exit_for_missing_proxy_transport("check", error)

    typer.echo(f"Sent {len(review_requests)} pull request(s) to Telegram.")
