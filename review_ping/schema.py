"""Payload contracts for the search API and cycle results."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class CycleOutcome(StrEnum):
    """Result of one scheduler tick."""

    SKIPPED = "skipped"
    NO_REVIEWS = "no_reviews"
    NOTIFIED = "notified"
    FETCH_FAILED = "fetch_failed"
    DELIVERY_FAILED = "delivery_failed"


class SearchIssueItem(BaseModel):
    """One issue search hit; only the fields the notifier needs."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str
    html_url: str = Field(min_length=1)


class SearchIssuesResponse(BaseModel):
    """Response body of the issue search endpoint."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    total_count: int = Field(ge=0)
    items: list[SearchIssueItem]
