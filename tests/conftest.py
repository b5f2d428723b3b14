"""Shared pytest fixtures."""

from __future__ import annotations

from typing import Callable, Iterator, Mapping

import pytest

from repo_insights.domain.ports.github_api import ApiResult
from repo_insights.infrastructure.config import get_settings

Responder = Callable[[str, Mapping[str, str | int]], ApiResult]


class FakeGitHubApi:
    """Scripted stand-in for ``GitHubApiClient`` that records every call."""

    def __init__(self, responder: Responder) -> None:
        self._responder = responder
        self.calls: list[tuple[str, dict[str, str | int]]] = []

    async def request(
        self, path: str, params: Mapping[str, str | int] | None = None
    ) -> ApiResult:
        params = dict(params or {})
        self.calls.append((path, params))
        return self._responder(path, params)


class RecordingSleep:
    """Async sleep replacement that returns immediately."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def app_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Minimal valid environment for ``Settings``."""
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test_token")
    monkeypatch.setenv("ADMIN_SECRET", "s3cret")
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "db" / "projects.db"))
    monkeypatch.setenv("STATS_RETRY_DELAY_SECONDS", "0")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def commit_payload(index: int) -> dict:
    return {
        "sha": f"sha{index:04d}",
        "commit": {
            "author": {
                "name": f"Dev {index}",
                "email": f"dev{index}@example.com",
                "date": "2024-03-01T12:00:00Z",
            },
            "message": f"Commit number {index}",
        },
        "author": {"login": f"dev{index}"},
        "parents": [],
    }
