from __future__ import annotations

import pytest

from conftest import FakeGitHubApi
from repo_insights.domain.entities import CodeFrequencyTotals
from repo_insights.domain.exceptions import StatsStillPendingError, UpstreamRequestError
from repo_insights.domain.ports.github_api import ApiFailed, ApiOk, ApiPending
from repo_insights.domain.value_objects import RepoRef
from repo_insights.services.code_frequency import poll_code_frequency, reduce_code_frequency

REF = RepoRef(owner="psf", name="requests")


def _pending_then(n_pending: int, final):
    state = {"calls": 0}

    def responder(path, params):
        state["calls"] += 1
        if state["calls"] <= n_pending:
            return ApiPending()
        return final

    return responder


async def test_ready_after_pending_attempts(recording_sleep) -> None:
    api = FakeGitHubApi(_pending_then(3, ApiOk(body=[[0, 10, -4], [1, 5, -1]])))

    totals = await poll_code_frequency(api, REF, sleep=recording_sleep)

    assert totals == CodeFrequencyTotals(additions=15, deletions=5)
    assert len(api.calls) == 4
    assert recording_sleep.delays == [5.0, 5.0, 5.0]
    assert api.calls[0][0] == "/repos/psf/requests/stats/code_frequency"


async def test_gives_up_after_max_attempts(recording_sleep) -> None:
    api = FakeGitHubApi(lambda path, params: ApiPending())

    with pytest.raises(StatsStillPendingError) as excinfo:
        await poll_code_frequency(api, REF, sleep=recording_sleep)

    assert len(api.calls) == 15
    assert excinfo.value.attempts == 15
    assert len(recording_sleep.delays) == 14


async def test_injected_policy_is_respected(recording_sleep) -> None:
    api = FakeGitHubApi(lambda path, params: ApiPending())

    with pytest.raises(StatsStillPendingError):
        await poll_code_frequency(
            api, REF, max_attempts=3, retry_delay=0.5, sleep=recording_sleep
        )

    assert len(api.calls) == 3
    assert recording_sleep.delays == [0.5, 0.5]


async def test_failure_stops_polling_immediately(recording_sleep) -> None:
    api = FakeGitHubApi(_pending_then(1, ApiFailed(404, "Not Found")))

    with pytest.raises(UpstreamRequestError) as excinfo:
        await poll_code_frequency(api, REF, sleep=recording_sleep)

    assert excinfo.value.status_code == 404
    assert excinfo.value.status_text == "Not Found"
    assert len(api.calls) == 2


async def test_empty_ready_payload_is_zero(recording_sleep) -> None:
    api = FakeGitHubApi(lambda path, params: ApiOk(body=None))

    totals = await poll_code_frequency(api, REF, sleep=recording_sleep)

    assert totals == CodeFrequencyTotals(additions=0, deletions=0)
    assert recording_sleep.delays == []


@pytest.mark.parametrize(
    "weeks",
    [
        [[0, 3, -7], [1, 0, 0]],
        [[0, 3, 7], [1, 0, -0]],
        [[0, 3, -2], [1, 0, 5]],
    ],
)
def test_deletions_are_never_negative(weeks) -> None:
    totals = reduce_code_frequency(weeks)

    assert totals.additions == 3
    assert totals.deletions == 7


def test_reduce_empty() -> None:
    assert reduce_code_frequency([]) == CodeFrequencyTotals(0, 0)
