"""View and click counters for projects.

Increments run as a single ``UPDATE ... SET n = n + 1`` so simultaneous
viewers never lose updates. There is no read-then-write fallback. Failures
are logged and swallowed by the ``track_*`` helpers so page flows never see
them.
"""
import logging

from django.db import DatabaseError, transaction
from django.db.models import F

from .models import Project

logger = logging.getLogger(__name__)

COUNTER_FIELDS = ("view_count", "click_count")


class TrackingError(Exception):
    pass


def increment_counter(project_id, field: str) -> None:
    if field not in COUNTER_FIELDS:
        raise TrackingError(f"Unknown counter {field!r}")
    try:
        with transaction.atomic():
            updated = Project.objects.filter(pk=project_id).update(**{field: F(field) + 1})
    except (DatabaseError, ValueError, TypeError) as e:
        raise TrackingError(f"Failed to increment {field} for project {project_id}: {e}") from e
    if not updated:
        raise TrackingError(f"Project {project_id} does not exist")


def _track(project_id, field: str) -> bool:
    try:
        increment_counter(project_id, field)
    except TrackingError as e:
        logger.warning("Failed to track %s: %s", field, e)
        return False
    return True


def track_project_view(project_id) -> bool:
    return _track(project_id, "view_count")


def track_project_click(project_id) -> bool:
    return _track(project_id, "click_count")
