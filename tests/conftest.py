"""Shared pytest fixtures and test-run configuration."""

from __future__ import annotations

import os
from collections.abc import Callable

import httpx
import pytest
from review_ping.config import RunConfig

HttpHandler = Callable[[httpx.Request], httpx.Response]


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add a flag that enables live-service tests."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked as integration (live GitHub API).",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly enabled."""
    if config.getoption("--run-integration") or os.getenv("RUN_INTEGRATION_TESTS") == "1":
        return

    skip_marker = pytest.mark.skip(
        reason="Integration tests need --run-integration or RUN_INTEGRATION_TESTS=1."
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_marker)


@pytest.fixture
def make_mock_client() -> Callable[..., httpx.Client]:
    """Return a factory for HTTP clients backed by mock transport."""

    def _make(handler: HttpHandler, *, base_url: str) -> httpx.Client:
        return httpx.Client(base_url=base_url, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def run_config() -> RunConfig:
    """Configuration for reviewer ``alice`` with fake credentials."""
    return RunConfig(
        reviewer_handle="alice",
        telegram_token="123:bot-secret",
        telegram_chat_id="-1001",
        github_token="gh-secret",
    )
