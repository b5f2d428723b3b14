"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations

from datetime import datetime


class RepoInsightsError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidReferenceError(RepoInsightsError):
    """The supplied URL does not identify an ``owner/name`` repository."""


class UnauthorizedError(RepoInsightsError):
    """The admin shared secret was missing or did not match."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class UpstreamRequestError(RepoInsightsError):
    """GitHub answered with a non-success status.

    Carries the original status code and reason phrase so callers can tell
    "not found" from "rate limited" from "upstream down".
    """

    def __init__(
        self,
        status_code: int,
        status_text: str,
        *,
        rate_limited: bool = False,
        reset_at: datetime | None = None,
    ) -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.rate_limited = rate_limited
        self.reset_at = reset_at
        super().__init__(f"GitHub request failed: {status_code} {status_text}".rstrip())

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class UpstreamUnavailableError(RepoInsightsError):
    """GitHub could not be reached at all (DNS, connect, timeout)."""


class StatsStillPendingError(RepoInsightsError):
    """GitHub kept computing a statistic past the polling budget."""

    def __init__(self, attempts: int, retry_after_seconds: float) -> None:
        self.attempts = attempts
        self.retry_after_seconds = retry_after_seconds
        super().__init__(
            f"GitHub is still computing statistics after {attempts} attempts. "
            "Try again later."
        )


# ── Persistence errors ──────────────────────────────────────────────────────


class PersistenceError(RepoInsightsError):
    """The project store rejected or failed an operation."""
