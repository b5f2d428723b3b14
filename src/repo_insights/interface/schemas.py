"""Pydantic request / response DTOs for the API boundary.

The response models are the outward projection of the domain results: each
bundles the resolved repository with one payload.  Field names are
camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from repo_insights.domain.entities import (
    CodeFrequencyTotals,
    CommitRecord,
    Project,
    RepoMeta,
)
from repo_insights.domain.value_objects import RepoRef


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RepoRefOut(_CamelModel):
    owner: str
    name: str

    @classmethod
    def from_domain(cls, ref: RepoRef) -> RepoRefOut:
        return cls(owner=ref.owner, name=ref.name)


class RepoMetaResponse(_CamelModel):
    """Response of ``GET /api/repos/meta``."""

    repo: RepoRefOut
    size_kb: int

    @classmethod
    def from_domain(cls, ref: RepoRef, meta: RepoMeta) -> RepoMetaResponse:
        return cls(repo=RepoRefOut.from_domain(ref), size_kb=meta.size_kb)


class LanguagesResponse(_CamelModel):
    """Response of ``GET /api/repos/languages``."""

    repo: RepoRefOut
    languages: dict[str, int]

    @classmethod
    def from_domain(cls, ref: RepoRef, languages: dict[str, int]) -> LanguagesResponse:
        return cls(repo=RepoRefOut.from_domain(ref), languages=languages)


class CommitOut(_CamelModel):
    sha: str
    author_date: datetime | None
    author_name: str
    author_email: str
    message: str

    @classmethod
    def from_domain(cls, record: CommitRecord) -> CommitOut:
        return cls(
            sha=record.sha,
            author_date=record.author_date,
            author_name=record.author_name,
            author_email=record.author_email,
            message=record.message,
        )


class CommitsResponse(_CamelModel):
    """Response of ``GET /api/repos/commits``."""

    repo: RepoRefOut
    since: str
    until: str
    author: str | None = None
    count: int
    commits: list[CommitOut]

    @classmethod
    def from_domain(
        cls,
        ref: RepoRef,
        commits: list[CommitRecord],
        since: str,
        until: str,
        author: str | None,
    ) -> CommitsResponse:
        return cls(
            repo=RepoRefOut.from_domain(ref),
            since=since,
            until=until,
            author=author,
            count=len(commits),
            commits=[CommitOut.from_domain(c) for c in commits],
        )


class CodeFrequencyResponse(_CamelModel):
    """Response of ``GET /api/repos/code-frequency``."""

    repo: RepoRefOut
    additions: int
    deletions: int

    @classmethod
    def from_domain(cls, ref: RepoRef, totals: CodeFrequencyTotals) -> CodeFrequencyResponse:
        return cls(
            repo=RepoRefOut.from_domain(ref),
            additions=totals.additions,
            deletions=totals.deletions,
        )


# ── Project registry ────────────────────────────────────────────────────────


class ProjectOut(_CamelModel):
    id: int
    name: str
    repo_url: str

    @classmethod
    def from_domain(cls, project: Project) -> ProjectOut:
        return cls(id=project.id, name=project.name, repo_url=project.repo_url)


class ProjectListResponse(BaseModel):
    projects: list[ProjectOut]


class ProjectCreatedResponse(BaseModel):
    project: ProjectOut


class CreateProjectRequest(_CamelModel):
    """Request body for ``POST /api/projects/admin``."""

    name: str
    repo_url: str

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, v: str) -> str:
        if not v:
            msg = "name must not be empty."
            raise ValueError(msg)
        return v

    @field_validator("repo_url")
    @classmethod
    def _must_be_url(cls, v: str) -> str:
        try:
            parts = urlsplit(v)
        except ValueError as exc:
            msg = f"Invalid URL: '{v}'."
            raise ValueError(msg) from exc
        if not parts.scheme or not parts.netloc:
            msg = f"Invalid URL: '{v}'."
            raise ValueError(msg)
        return v


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
