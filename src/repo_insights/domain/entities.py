"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class RepoMeta:
    """Minimal projection of ``GET /repos/{owner}/{repo}``."""

    size_kb: int


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """One commit from the listing endpoint, reduced to what callers need."""

    sha: str
    author_date: datetime | None
    author_name: str
    author_email: str
    message: str


@dataclass(frozen=True, slots=True)
class CodeFrequencyTotals:
    """Lines added and removed across every reported week.

    ``deletions`` is a magnitude; GitHub reports it as a negative number.
    """

    additions: int
    deletions: int


@dataclass(frozen=True, slots=True)
class Project:
    """A row of the project registry."""

    id: int
    name: str
    repo_url: str
