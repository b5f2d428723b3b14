"""Code-frequency poller — waits out GitHub's background stats computation.

``/stats/code_frequency`` is computed lazily: the first call often returns
``202 Accepted`` and kicks off a job.  We poll at a constant interval for a
bounded number of attempts, then reduce the weekly rows to two totals.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from repo_insights.domain.entities import CodeFrequencyTotals
from repo_insights.domain.exceptions import StatsStillPendingError
from repo_insights.domain.ports.github_api import ApiFailed, ApiOk, GitHubApi
from repo_insights.domain.value_objects import RepoRef
from repo_insights.services.upstream import to_error

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


async def poll_code_frequency(
    api: GitHubApi,
    ref: RepoRef,
    *,
    max_attempts: int = 15,
    retry_delay: float = 5.0,
    sleep: Sleep = asyncio.sleep,
) -> CodeFrequencyTotals:
    """Fetch weekly churn for *ref* and return the summed totals.

    Raises :class:`StatsStillPendingError` once *max_attempts* calls have all
    come back ``202``, and the matching upstream error straight away on any
    other failure.
    """
    path = f"/repos/{ref.owner}/{ref.name}/stats/code_frequency"

    for attempt in range(1, max_attempts + 1):
        result = await api.request(path)

        if isinstance(result, ApiOk):
            logger.debug("%s: code frequency ready on attempt %d", ref.full_name, attempt)
            return reduce_code_frequency(result.body or [])

        if isinstance(result, ApiFailed):
            raise to_error(result)

        logger.debug(
            "%s: code frequency pending (attempt %d/%d)",
            ref.full_name,
            attempt,
            max_attempts,
        )
        if attempt < max_attempts:
            await sleep(retry_delay)

    raise StatsStillPendingError(attempts=max_attempts, retry_after_seconds=retry_delay)


def reduce_code_frequency(weeks: Sequence[Sequence[int]]) -> CodeFrequencyTotals:
    """Sum ``[week, additions, deletions]`` rows.

    Deletions are accumulated as magnitudes whatever sign a row uses.
    """
    additions = 0
    deletions = 0
    for _week, added, deleted in weeks:
        additions += added
        deletions += abs(deleted)
    return CodeFrequencyTotals(additions=additions, deletions=deletions)
