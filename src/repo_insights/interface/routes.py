"""API routes — thin controllers that delegate to the use cases."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from repo_insights.domain.value_objects import resolve
from repo_insights.interface.dependencies import (
    get_project_registry,
    get_repo_stats,
    require_admin,
)
from repo_insights.interface.schemas import (
    CodeFrequencyResponse,
    CommitsResponse,
    CreateProjectRequest,
    ErrorResponse,
    LanguagesResponse,
    ProjectCreatedResponse,
    ProjectListResponse,
    ProjectOut,
    RepoMetaResponse,
)
from repo_insights.services.project_registry import ProjectRegistryUseCase
from repo_insights.services.repo_stats import RepoStatsUseCase

_UPSTREAM_ERRORS = {
    422: {"model": ErrorResponse, "description": "Invalid repository URL"},
    404: {"model": ErrorResponse, "description": "Repository not found on GitHub"},
    429: {"model": ErrorResponse, "description": "GitHub API rate limit exceeded"},
    502: {"model": ErrorResponse, "description": "GitHub request failed or GitHub unreachable"},
}

repos_router = APIRouter(prefix="/api/repos", tags=["repos"])
projects_router = APIRouter(prefix="/api/projects", tags=["projects"])

RepoUrl = Annotated[
    str,
    Query(alias="repoUrl", min_length=1, description="Repository URL, e.g. https://github.com/psf/requests"),
]


@repos_router.get("/meta", response_model=RepoMetaResponse, responses=_UPSTREAM_ERRORS)
async def repo_meta(
    repo_url: RepoUrl,
    use_case: RepoStatsUseCase = Depends(get_repo_stats),
) -> RepoMetaResponse:
    """Repository size in KB."""
    ref = resolve(repo_url)
    return RepoMetaResponse.from_domain(ref, await use_case.get_repo_meta(ref))


@repos_router.get("/languages", response_model=LanguagesResponse, responses=_UPSTREAM_ERRORS)
async def repo_languages(
    repo_url: RepoUrl,
    use_case: RepoStatsUseCase = Depends(get_repo_stats),
) -> LanguagesResponse:
    """Bytes of code per language."""
    ref = resolve(repo_url)
    return LanguagesResponse.from_domain(ref, await use_case.get_languages(ref))


@repos_router.get("/commits", response_model=CommitsResponse, responses=_UPSTREAM_ERRORS)
async def repo_commits(
    repo_url: RepoUrl,
    since: str = Query(..., description="ISO-8601 lower bound, passed to GitHub as-is"),
    until: str = Query(..., description="ISO-8601 upper bound, passed to GitHub as-is"),
    author: str | None = Query(None, description="GitHub login or email to filter by"),
    use_case: RepoStatsUseCase = Depends(get_repo_stats),
) -> CommitsResponse:
    """Every commit in the time window, newest first."""
    ref = resolve(repo_url)
    commits = await use_case.list_commits(ref, since, until, author)
    return CommitsResponse.from_domain(ref, commits, since, until, author)


@repos_router.get(
    "/code-frequency",
    response_model=CodeFrequencyResponse,
    responses={
        **_UPSTREAM_ERRORS,
        503: {"model": ErrorResponse, "description": "GitHub is still computing statistics; retry later"},
    },
)
async def repo_code_frequency(
    repo_url: RepoUrl,
    use_case: RepoStatsUseCase = Depends(get_repo_stats),
) -> CodeFrequencyResponse:
    """Total lines added and deleted."""
    ref = resolve(repo_url)
    return CodeFrequencyResponse.from_domain(ref, await use_case.get_code_frequency(ref))


# ── Project registry ────────────────────────────────────────────────────────


@projects_router.get(
    "",
    response_model=ProjectListResponse,
    responses={500: {"model": ErrorResponse, "description": "Project store failure"}},
)
def list_projects(
    registry: ProjectRegistryUseCase = Depends(get_project_registry),
) -> ProjectListResponse:
    """All registered projects, by name."""
    return ProjectListResponse(
        projects=[ProjectOut.from_domain(p) for p in registry.list_projects()]
    )


@projects_router.post(
    "/admin",
    response_model=ProjectCreatedResponse,
    status_code=201,
    responses={
        401: {"model": ErrorResponse, "description": "Missing or wrong admin secret"},
        500: {"model": ErrorResponse, "description": "Project store failure"},
    },
)
def create_project(
    body: CreateProjectRequest,
    token: str = Depends(require_admin),
    registry: ProjectRegistryUseCase = Depends(get_project_registry),
) -> ProjectCreatedResponse:
    """Register a project (requires ``Authorization: Bearer <ADMIN_SECRET>``)."""
    project = registry.create_project(token, body.name, body.repo_url)
    return ProjectCreatedResponse(project=ProjectOut.from_domain(project))
