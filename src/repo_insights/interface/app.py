"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from repo_insights.interface.dependencies import shutdown, startup
from repo_insights.interface.error_handlers import register_error_handlers
from repo_insights.interface.routes import projects_router, repos_router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="Repo Insights",
        version="1.0.0",
        description=(
            "Normalised GitHub repository statistics (size, languages, "
            "commit history, code churn) and a small project registry."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(repos_router)
    app.include_router(projects_router)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root() -> str:
        return "Repo Insights API"

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
