"""
Merge fetched GitHub repositories into project rows.

GitHub owns the provenance fields (stars, forks, language, topics); the
admin owns the presentation fields (title, description, live URL, featured,
visibility, order) once they hold a value. Projects missing from the remote
list are left out of the batch entirely and are never deleted or hidden.
"""
from __future__ import annotations
import datetime
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from django.utils import timezone

from .client import RemoteRepository


@dataclass
class ProjectUpsert:
    repo_name: str
    title: str
    description: Optional[str]
    github_url: str
    live_url: Optional[str]
    featured: bool
    visible: bool
    order_index: int
    stars: int
    forks: int
    language: Optional[str]
    topics: List[str] = field(default_factory=list)
    updated_at: Optional[datetime.datetime] = None

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _value(record: Any, name: str) -> Any:
    if record is None:
        return None
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def merge_repositories(
    remote: Iterable[RemoteRepository],
    existing: Iterable[Any],
    now: Optional[datetime.datetime] = None,
) -> List[ProjectUpsert]:
    """Build one upsert per remote repository, matched on ``repo_name``.

    ``existing`` may hold Project instances or plain mappings. The function
    does no I/O; ``now`` defaults to the current time and only feeds
    ``updated_at``.
    """
    now = now or timezone.now()
    by_name = {}
    for record in existing:
        name = _value(record, "repo_name")
        if name:
            by_name[name] = record

    batch: List[ProjectUpsert] = []
    seen = set()
    for index, repo in enumerate(remote):
        if repo.name in seen:
            continue
        seen.add(repo.name)
        current = by_name.get(repo.name)

        featured = _value(current, "featured")
        visible = _value(current, "visible")
        order_index = _value(current, "order_index")

        batch.append(
            ProjectUpsert(
                repo_name=repo.name,
                title=_value(current, "title") or repo.name,
                description=_value(current, "description") or repo.description,
                github_url=repo.html_url,
                live_url=_value(current, "live_url") or repo.homepage,
                featured=featured if featured is not None else False,
                visible=visible if visible is not None else True,
                order_index=order_index if order_index is not None else index,
                stars=repo.stargazers_count,
                forks=repo.forks_count,
                language=repo.language,
                topics=list(repo.topics),
                updated_at=now,
            )
        )
    return batch
