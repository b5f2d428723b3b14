"""GitHub REST API client — implements the GitHubApi port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Mapping

import httpx

from repo_insights.domain.exceptions import UpstreamUnavailableError
from repo_insights.domain.ports.github_api import (
    ApiFailed,
    ApiOk,
    ApiPending,
    ApiResult,
)

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"


class GitHubApiClient:
    """Concrete GitHubApi backed by the GitHub v3 REST API.

    Attaches the bearer token and version headers to every call and turns
    the response into an :class:`ApiOk`, :class:`ApiPending` or
    :class:`ApiFailed`.  It never retries and keeps no state between calls
    beyond the shared ``httpx.AsyncClient`` it was handed.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str,
        base_url: str = GITHUB_API,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": "repo-insights/1.0",
        }

    async def request(
        self, path: str, params: Mapping[str, str | int] | None = None
    ) -> ApiResult:
        """GET *path* and classify the response."""
        url = f"{self._base_url}{path}"
        request = self._client.build_request(
            "GET", url, headers=self._api_headers, params=params
        )
        logger.debug("GET %s params=%s", path, dict(params or {}))

        try:
            resp = await self._client.send(request, stream=True)
            try:
                # Drain the body even for 202, whose payload is never used,
                # so the connection goes back to the pool.
                await resp.aread()
            finally:
                await resp.aclose()
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(
                f"Network error fetching {path}: {exc}"
            ) from exc

        return _classify(resp, path)


def _classify(resp: httpx.Response, path: str) -> ApiResult:
    if resp.status_code == 202:
        return ApiPending()

    if resp.is_success:
        if not resp.content:
            return ApiOk(body=None)
        try:
            return ApiOk(body=resp.json())
        except ValueError as exc:
            raise UpstreamUnavailableError(
                f"GitHub returned a malformed JSON body for {path}"
            ) from exc

    return ApiFailed(
        status_code=resp.status_code,
        status_text=resp.reason_phrase,
        rate_limited=_is_rate_limited(resp),
        reset_at=_rate_limit_reset(resp),
    )


def _is_rate_limited(resp: httpx.Response) -> bool:
    if resp.status_code == 429:
        return True
    return (
        resp.status_code == 403
        and resp.headers.get("x-ratelimit-remaining", "") == "0"
    )


def _rate_limit_reset(resp: httpx.Response) -> datetime | None:
    reset_raw = resp.headers.get("x-ratelimit-reset", "")
    if not reset_raw:
        return None
    try:
        return datetime.fromtimestamp(int(reset_raw), tz=timezone.utc)
    except (ValueError, OSError, OverflowError):
        return None
