"""Repository statistics use case — the entry point for the aggregation core.

Depends only on the :class:`GitHubApi` port and the pure service modules.
The interface layer injects the concrete client and the settings-derived
limits at runtime.
"""

from __future__ import annotations

import asyncio
import logging

from repo_insights.domain.entities import CodeFrequencyTotals, CommitRecord, RepoMeta
from repo_insights.domain.ports.github_api import GitHubApi
from repo_insights.domain.value_objects import RepoRef
from repo_insights.services.code_frequency import Sleep, poll_code_frequency
from repo_insights.services.commit_collector import collect_commits
from repo_insights.services.upstream import unwrap

logger = logging.getLogger(__name__)


class RepoStatsUseCase:
    """Fetches and normalises repository data from GitHub.

    Parameters
    ----------
    api:
        Adapter that issues classified GitHub REST requests.
    commits_page_size:
        ``per_page`` used when walking the commit listing.
    stats_max_attempts:
        How many times to ask for a statistic that GitHub is still computing.
    stats_retry_delay:
        Seconds to wait between those attempts.
    sleep:
        Awaitable used for that wait; replaced in tests.
    """

    def __init__(
        self,
        api: GitHubApi,
        commits_page_size: int = 100,
        stats_max_attempts: int = 15,
        stats_retry_delay: float = 5.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._api = api
        self._page_size = commits_page_size
        self._max_attempts = stats_max_attempts
        self._retry_delay = stats_retry_delay
        self._sleep = sleep

    async def get_repo_meta(self, ref: RepoRef) -> RepoMeta:
        """GET /repos/{owner}/{repo} → RepoMeta."""
        data = unwrap(await self._api.request(f"/repos/{ref.owner}/{ref.name}"))
        return RepoMeta(size_kb=int((data or {}).get("size", 0)))

    async def get_languages(self, ref: RepoRef) -> dict[str, int]:
        """GET /repos/{owner}/{repo}/languages → {lang: bytes}."""
        data = unwrap(await self._api.request(f"/repos/{ref.owner}/{ref.name}/languages"))
        return dict(data or {})

    async def list_commits(
        self,
        ref: RepoRef,
        since: str,
        until: str,
        author: str | None = None,
    ) -> list[CommitRecord]:
        """Every commit in the window, newest first."""
        logger.info("Listing commits for %s (%s → %s)", ref.full_name, since, until)
        return await collect_commits(
            self._api, ref, since, until, author, page_size=self._page_size
        )

    async def get_code_frequency(self, ref: RepoRef) -> CodeFrequencyTotals:
        """Total additions / deletions over the repository's history."""
        return await poll_code_frequency(
            self._api,
            ref,
            max_attempts=self._max_attempts,
            retry_delay=self._retry_delay,
            sleep=self._sleep,
        )
