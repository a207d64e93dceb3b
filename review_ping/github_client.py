"""GitHub search client for pull requests awaiting review."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote_plus

import httpx
from pydantic import ValidationError

from review_ping.schema import SearchIssuesResponse

GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_SEARCH_ISSUES_PATH = "/search/issues"
REVIEW_QUERY_TEMPLATE = "is:open is:pr review-requested:{handle}"


class FetchError(RuntimeError):
    """Raised when the review search cannot produce a result list."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str,
        status_code: int | None = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body


@dataclass(frozen=True, slots=True)
class ReviewRequest:
    """Open pull request with a pending review request."""

    title: str
    url: str


def build_review_query(reviewer_handle: str) -> str:
    """Return the search query for PRs awaiting review by ``reviewer_handle``."""
    handle = reviewer_handle.strip()
    if not handle:
        raise FetchError("Reviewer handle must not be empty.", endpoint=GITHUB_SEARCH_ISSUES_PATH)
    return REVIEW_QUERY_TEMPLATE.format(handle=handle)


def build_search_endpoint(reviewer_handle: str) -> str:
    """Return the search endpoint path with a form-escaped query string."""
    query = quote_plus(build_review_query(reviewer_handle))
    return f"{GITHUB_SEARCH_ISSUES_PATH}?q={query}"


def _parse_search_response(response: httpx.Response, endpoint: str) -> SearchIssuesResponse:
    """Validate a successful search body."""
    try:
        return SearchIssuesResponse.model_validate_json(response.content)
    except ValidationError as error:
        raise FetchError(
            f"Could not decode GitHub search response for '{endpoint}'.",
            endpoint=endpoint,
            status_code=response.status_code,
            body=response.text,
        ) from error


def fetch_review_requests(*, client: httpx.Client, reviewer_handle: str) -> tuple[ReviewRequest, ...]:
    """Fetch open PRs awaiting review, in the order GitHub returns them.

    Only the first page of results is read. Any non-200 status, transport
    failure or malformed body raises ``FetchError``.
    """
    endpoint = build_search_endpoint(reviewer_handle)
    try:
        response = client.get(endpoint)
    except httpx.HTTPError as error:
        raise FetchError(
            f"GitHub search request failed for '{endpoint}': {error}",
            endpoint=endpoint,
        ) from error

    if response.status_code != httpx.codes.OK:
        raise FetchError(
            f"GitHub search failed with status {response.status_code} for '{endpoint}'.",
            endpoint=endpoint,
            status_code=response.status_code,
            body=response.text,
        )

    payload = _parse_search_response(response, endpoint)
    return tuple(ReviewRequest(title=item.title, url=item.html_url) for item in payload.items)


def build_github_client(
    token: str | None = None,
    *,
    timeout_seconds: float = 20,
    trust_env: bool = True,
) -> httpx.Client:
    """Build a GitHub HTTP client, authenticated only when a token is given."""
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
    }
    if token:
        headers["Authorization"] = f"token {token}"
    return httpx.Client(
        base_url=GITHUB_API_BASE_URL,
        headers=headers,
        timeout=timeout_seconds,
        trust_env=trust_env,
    )
