"""Project registry use case — listing and admin-only creation."""

from __future__ import annotations

import hmac
import logging

from repo_insights.domain.entities import Project
from repo_insights.domain.exceptions import UnauthorizedError
from repo_insights.domain.ports.project_store import ProjectStore

logger = logging.getLogger(__name__)


class ProjectRegistryUseCase:
    """Reads and writes the project table, gating writes on a shared secret."""

    def __init__(self, store: ProjectStore, admin_secret: str) -> None:
        self._store = store
        self._admin_secret = admin_secret

    def authorize(self, token: str) -> None:
        """Raise :class:`UnauthorizedError` unless *token* is the admin secret."""
        if not hmac.compare_digest(token.encode(), self._admin_secret.encode()):
            raise UnauthorizedError("Unauthorized")

    def list_projects(self) -> list[Project]:
        return self._store.list_projects()

    def create_project(self, token: str, name: str, repo_url: str) -> Project:
        """Insert a project if *token* matches the admin secret."""
        self.authorize(token)

        project = self._store.insert_project(name, repo_url)
        logger.info("Registered project %d (%s)", project.id, project.name)
        return project
