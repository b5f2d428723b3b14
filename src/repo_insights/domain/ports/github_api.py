"""Port: GitHub API — defined by the domain, implemented by infrastructure.

Every call is classified into exactly one of three outcomes.  Callers decide
what "pending" means for them; the API client never retries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Protocol, Union


@dataclass(frozen=True, slots=True)
class ApiOk:
    """2xx other than 202. ``body`` is the decoded JSON, ``None`` if empty."""

    body: Any


@dataclass(frozen=True, slots=True)
class ApiPending:
    """202 Accepted: GitHub is computing the result in the background."""


@dataclass(frozen=True, slots=True)
class ApiFailed:
    """Any non-2xx response."""

    status_code: int
    status_text: str
    rate_limited: bool = False
    reset_at: datetime | None = None

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


ApiResult = Union[ApiOk, ApiPending, ApiFailed]


class GitHubApi(Protocol):
    """Abstract contract for issuing classified GitHub REST requests."""

    async def request(
        self, path: str, params: Mapping[str, str | int] | None = None
    ) -> ApiResult:
        """GET *path* with optional query parameters and classify the response."""
        ...
