from __future__ import annotations

from datetime import datetime, timezone

import pytest

from conftest import FakeGitHubApi, commit_payload
from repo_insights.domain.exceptions import UpstreamRequestError
from repo_insights.domain.ports.github_api import ApiFailed, ApiOk, ApiPending
from repo_insights.domain.value_objects import RepoRef
from repo_insights.services.commit_collector import collect_commits, to_commit_record

REF = RepoRef(owner="psf", name="requests")


def _paged(total: int, page_size: int = 100):
    commits = [commit_payload(i) for i in range(total)]

    def responder(path, params):
        start = (int(params["page"]) - 1) * page_size
        return ApiOk(body=commits[start:start + page_size])

    return responder


async def test_short_last_page_stops_collection() -> None:
    api = FakeGitHubApi(_paged(250))

    commits = await collect_commits(api, REF, "2024-01-01T00:00:00Z", "2024-12-31T00:00:00Z")

    assert len(commits) == 250
    assert [params["page"] for _, params in api.calls] == [1, 2, 3]
    assert commits[0].sha == "sha0000"
    assert commits[-1].sha == "sha0249"


async def test_exact_multiple_needs_empty_page_to_stop() -> None:
    api = FakeGitHubApi(_paged(300))

    commits = await collect_commits(api, REF, "a", "b")

    assert len(commits) == 300
    assert len(api.calls) == 4


async def test_no_commits_makes_a_single_request() -> None:
    api = FakeGitHubApi(_paged(0))

    assert await collect_commits(api, REF, "a", "b") == []
    assert len(api.calls) == 1


async def test_query_parameters_are_passed_verbatim() -> None:
    api = FakeGitHubApi(_paged(3))

    await collect_commits(api, REF, "yesterday", "2024-99-99", author="octocat")

    path, params = api.calls[0]
    assert path == "/repos/psf/requests/commits"
    assert params == {
        "since": "yesterday",
        "until": "2024-99-99",
        "per_page": 100,
        "page": 1,
        "author": "octocat",
    }


async def test_author_is_omitted_when_not_given() -> None:
    api = FakeGitHubApi(_paged(3))

    await collect_commits(api, REF, "a", "b")

    assert "author" not in api.calls[0][1]


async def test_failure_mid_listing_discards_collected_pages() -> None:
    commits = [commit_payload(i) for i in range(250)]

    def responder(path, params):
        if params["page"] == 2:
            return ApiFailed(status_code=500, status_text="Internal Server Error")
        return ApiOk(body=commits[:100])

    api = FakeGitHubApi(responder)

    with pytest.raises(UpstreamRequestError) as excinfo:
        await collect_commits(api, REF, "a", "b")

    assert excinfo.value.status_code == 500
    assert len(api.calls) == 2


async def test_invalid_window_surfaces_upstream_rejection() -> None:
    api = FakeGitHubApi(lambda path, params: ApiFailed(422, "Unprocessable Entity"))

    with pytest.raises(UpstreamRequestError) as excinfo:
        await collect_commits(api, REF, "not-a-date", "b")

    assert excinfo.value.status_code == 422


async def test_pending_page_is_a_failure() -> None:
    api = FakeGitHubApi(lambda path, params: ApiPending())

    with pytest.raises(UpstreamRequestError) as excinfo:
        await collect_commits(api, REF, "a", "b")

    assert excinfo.value.status_code == 202


async def test_custom_page_size() -> None:
    api = FakeGitHubApi(_paged(5, page_size=2))

    commits = await collect_commits(api, REF, "a", "b", page_size=2)

    assert len(commits) == 5
    assert [params["per_page"] for _, params in api.calls] == [2, 2, 2]


def test_to_commit_record_projects_nested_fields() -> None:
    record = to_commit_record(commit_payload(7))

    assert record.sha == "sha0007"
    assert record.author_name == "Dev 7"
    assert record.author_email == "dev7@example.com"
    assert record.message == "Commit number 7"
    assert record.author_date == datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_to_commit_record_tolerates_missing_author() -> None:
    record = to_commit_record({"sha": "abc", "commit": {"author": None, "message": "m"}})

    assert record.author_name == ""
    assert record.author_email == ""
    assert record.author_date is None
