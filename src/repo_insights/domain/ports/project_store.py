"""Port: project store — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_insights.domain.entities import Project


class ProjectStore(Protocol):
    """Abstract contract for the flat project registry table."""

    def list_projects(self) -> list[Project]:
        """Return every project ordered by name."""
        ...

    def insert_project(self, name: str, repo_url: str) -> Project:
        """Insert a row and return it with its generated id."""
        ...
