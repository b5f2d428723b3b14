"""FastAPI dependency injection wiring."""

from __future__ import annotations

import logging

import httpx
from fastapi import Depends, Header

from repo_insights.infrastructure.config import Settings, get_settings
from repo_insights.infrastructure.github_client import GitHubApiClient
from repo_insights.infrastructure.sqlite_project_store import SqliteProjectStore
from repo_insights.services.project_registry import ProjectRegistryUseCase
from repo_insights.services.repo_stats import RepoStatsUseCase

logger = logging.getLogger(__name__)

_http_client: httpx.AsyncClient | None = None
_project_store: SqliteProjectStore | None = None


def create_http_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Shared client for GitHub calls.

    Redirects are followed: GitHub answers ``301`` for renamed or
    transferred repositories.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        transport=transport,
    )


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager.

    Loading the settings here makes a missing ``GITHUB_TOKEN`` or
    ``ADMIN_SECRET`` abort startup instead of surfacing on the first request.
    """
    global _http_client, _project_store  # noqa: PLW0603

    settings = get_settings()
    _http_client = create_http_client(settings)
    _project_store = SqliteProjectStore(settings.database_path)
    _project_store.init_schema()
    logger.info("Using GitHub API at %s", settings.github_api_base)


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _project_store  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    if _project_store:
        _project_store.close()
        _project_store = None


def get_repo_stats() -> RepoStatsUseCase:
    """Build the stats use case around the shared HTTP client."""
    settings = get_settings()

    assert _http_client is not None, "startup() was not called"

    api = GitHubApiClient(
        client=_http_client,
        token=settings.github_token.get_secret_value(),
        base_url=settings.github_api_base,
    )
    return RepoStatsUseCase(
        api=api,
        commits_page_size=settings.commits_page_size,
        stats_max_attempts=settings.stats_max_attempts,
        stats_retry_delay=settings.stats_retry_delay_seconds,
    )


def get_project_registry() -> ProjectRegistryUseCase:
    settings = get_settings()

    assert _project_store is not None, "startup() was not called"

    return ProjectRegistryUseCase(
        store=_project_store,
        admin_secret=settings.admin_secret.get_secret_value(),
    )


def require_admin(
    authorization: str = Header(""),
    registry: ProjectRegistryUseCase = Depends(get_project_registry),
) -> str:
    """Check ``Authorization: Bearer <ADMIN_SECRET>`` before the body is validated."""
    token = authorization[len("Bearer "):] if authorization.startswith("Bearer ") else ""
    registry.authorize(token)
    return token
