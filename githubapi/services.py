from __future__ import annotations
import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.db import DatabaseError, transaction

from portfolio.models import Project

from .client import GitHubClient
from .exceptions import ConfigurationError, PersistenceError
from .merge import ProjectUpsert, merge_repositories

logger = logging.getLogger(__name__)

UPDATE_FIELDS = [f.name for f in dataclasses.fields(ProjectUpsert) if f.name != "repo_name"]


def build_client() -> GitHubClient:
    """Client configured from settings, read at call time."""
    return GitHubClient(
        token=getattr(settings, "GITHUB_API_TOKEN", None),
        timeout=getattr(settings, "GITHUB_TIMEOUT_SECONDS", 20),
        cache_timeout=getattr(settings, "GITHUB_CACHE_SECONDS", 3600),
        max_pages=getattr(settings, "GITHUB_MAX_PAGES", 10),
    )


@dataclass
class SyncResult:
    synced: int
    projects: List[Project] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "synced": self.synced,
            "projects": [p.as_dict() for p in self.projects],
        }


class ProjectSyncService:
    """Fetch, merge and upsert an owner's repositories into projects.

    The three phases run strictly in order: the merge needs the complete
    remote list and a full snapshot of existing projects, and the write only
    starts once the batch is fully formed.
    """

    def __init__(self, client: Optional[GitHubClient] = None) -> None:
        self.client = client or build_client()

    def sync(self, owner: Optional[str], refresh: bool = False) -> SyncResult:
        owner = (owner or "").strip()
        if not owner:
            raise ConfigurationError("GitHub username not configured")

        logger.info("Syncing GitHub repositories for %s", owner)
        remote = self.client.list_repositories(owner, refresh=refresh)
        existing = self._existing_projects()
        batch = merge_repositories(remote, existing)
        projects = self._write(batch)
        logger.info("Synced %s projects for %s", len(projects), owner)
        return SyncResult(synced=len(projects), projects=projects)

    def _existing_projects(self) -> List[Project]:
        try:
            return list(Project.objects.all())
        except DatabaseError as e:
            logger.error("Failed to fetch existing projects: %s", e)
            raise PersistenceError(f"Failed to fetch existing projects: {e}") from e

    def _write(self, batch: List[ProjectUpsert]) -> List[Project]:
        if not batch:
            return []
        rows = [Project(**item.as_dict()) for item in batch]
        names = [item.repo_name for item in batch]
        try:
            with transaction.atomic():
                Project.objects.bulk_create(
                    rows,
                    update_conflicts=True,
                    unique_fields=["repo_name"],
                    update_fields=UPDATE_FIELDS,
                )
            return list(Project.objects.filter(repo_name__in=names).order_by("order_index", "id"))
        except DatabaseError as e:
            logger.error("Failed to upsert projects: %s", e)
            raise PersistenceError(f"Failed to upsert projects: {e}") from e
