"""Live GitHub search checks (opt-in)."""

from __future__ import annotations

import os

import pytest
from review_ping.github_client import build_github_client, fetch_review_requests


@pytest.mark.integration
def test_fetch_review_requests_against_live_search() -> None:
    reviewer_handle = os.getenv("GITHUB_USERNAME", "octocat")
    token = os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN")

    with build_github_client(token, timeout_seconds=20) as client:
        review_requests = fetch_review_requests(client=client, reviewer_handle=reviewer_handle)

    for review_request in review_requests:
        assert review_request.url.startswith("https://github.com/")
        assert "/pull/" in review_request.url
