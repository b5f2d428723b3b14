"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "..."}`` envelope.  Upstream
failures additionally carry GitHub's own status so clients can tell a
missing repository from a rate limit from an outage.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repo_insights.domain.exceptions import (
    InvalidReferenceError,
    PersistenceError,
    RepoInsightsError,
    StatsStillPendingError,
    UnauthorizedError,
    UpstreamRequestError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[RepoInsightsError], int]] = [
    (InvalidReferenceError, 422),
    (UnauthorizedError, 401),
    (UpstreamUnavailableError, 502),
    (PersistenceError, 500),
]


def _error_json(
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
    **extra: Any,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message, **extra},
        headers=headers,
    )


def upstream_status(exc: UpstreamRequestError) -> int:
    """HTTP status we answer with for a failed GitHub call."""
    if exc.rate_limited:
        return 429
    if exc.not_found:
        return 404
    return 502


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    for exc_type, code in _EXCEPTION_STATUS:

        def _make_handler(
            status_code: int,
        ):  # type: ignore[no-untyped-def]
            async def handler(request: Request, exc: Exception) -> JSONResponse:
                logger.warning("%s: %s", type(exc).__name__, exc)
                return _error_json(status_code, str(exc))

            return handler

        app.add_exception_handler(exc_type, _make_handler(code))

    @app.exception_handler(UpstreamRequestError)
    async def upstream_handler(
        request: Request, exc: UpstreamRequestError
    ) -> JSONResponse:
        logger.warning("UpstreamRequestError: %s", exc)
        headers = None
        if exc.rate_limited and exc.reset_at is not None:
            headers = {"X-RateLimit-Reset": str(int(exc.reset_at.timestamp()))}
        return _error_json(
            upstream_status(exc),
            str(exc),
            headers=headers,
            upstreamStatus=exc.status_code,
            upstreamStatusText=exc.status_text,
        )

    @app.exception_handler(StatsStillPendingError)
    async def pending_handler(
        request: Request, exc: StatsStillPendingError
    ) -> JSONResponse:
        logger.warning("StatsStillPendingError: %s", exc)
        return _error_json(
            503,
            str(exc),
            headers={"Retry-After": str(math.ceil(exc.retry_after_seconds))},
            attempts=exc.attempts,
        )

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
