"""Translate classified API results into domain values or domain errors."""

from __future__ import annotations

from typing import Any

from repo_insights.domain.exceptions import UpstreamRequestError
from repo_insights.domain.ports.github_api import ApiFailed, ApiOk, ApiPending, ApiResult


def to_error(failed: ApiFailed) -> UpstreamRequestError:
    return UpstreamRequestError(
        failed.status_code,
        failed.status_text,
        rate_limited=failed.rate_limited,
        reset_at=failed.reset_at,
    )


def unwrap(result: ApiResult) -> Any:
    """Return the body of an :class:`ApiOk`, raise for anything else.

    A 202 on an endpoint that is not polled is reported as a failure with
    its own status rather than silently treated as empty data.
    """
    if isinstance(result, ApiOk):
        return result.body
    if isinstance(result, ApiPending):
        raise UpstreamRequestError(202, "Accepted")
    raise to_error(result)
