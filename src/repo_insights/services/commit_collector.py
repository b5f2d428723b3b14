"""Commit collector — walks the paginated commit listing to the end.

Pages are requested one after another: GitHub does not report a total up
front, so the next request only makes sense once the previous page turned
out to be full.  The listing is all-or-nothing; a failure on any page
discards what was gathered so a truncated history is never mistaken for a
complete one.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping

from repo_insights.domain.entities import CommitRecord
from repo_insights.domain.ports.github_api import GitHubApi
from repo_insights.domain.value_objects import RepoRef
from repo_insights.services.upstream import unwrap

logger = logging.getLogger(__name__)


async def collect_commits(
    api: GitHubApi,
    ref: RepoRef,
    since: str,
    until: str,
    author: str | None = None,
    *,
    page_size: int = 100,
) -> list[CommitRecord]:
    """Return every commit in ``[since, until]``, newest first.

    *since* and *until* go to GitHub verbatim; GitHub validates them.
    """
    path = f"/repos/{ref.owner}/{ref.name}/commits"
    commits: list[CommitRecord] = []
    page = 1

    while True:
        params: dict[str, str | int] = {
            "since": since,
            "until": until,
            "per_page": page_size,
            "page": page,
        }
        if author:
            params["author"] = author

        batch = unwrap(await api.request(path, params)) or []
        if not batch:
            break

        commits.extend(to_commit_record(raw) for raw in batch)
        logger.debug("%s: page %d returned %d commits", ref.full_name, page, len(batch))

        if len(batch) < page_size:
            break
        page += 1

    logger.info("Collected %d commits for %s in %d page request(s)", len(commits), ref.full_name, page)
    return commits


def to_commit_record(raw: Mapping[str, Any]) -> CommitRecord:
    """Project one raw commit object into a :class:`CommitRecord`."""
    commit = raw.get("commit") or {}
    author = commit.get("author") or {}
    return CommitRecord(
        sha=raw.get("sha", ""),
        author_date=_parse_timestamp(author.get("date")),
        author_name=author.get("name") or "",
        author_email=author.get("email") or "",
        message=commit.get("message") or "",
    )


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    # GitHub uses a trailing "Z"; fromisoformat only accepts it from 3.11 on.
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
