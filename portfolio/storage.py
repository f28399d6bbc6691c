import logging
import os
import uuid
from typing import Iterable, List

from django.core.files.storage import default_storage
from django.db import transaction
from django.db.models import Max

from .models import Project, ProjectMedia

logger = logging.getLogger(__name__)

MEDIA_PREFIX = "project-media"


def media_type_for(content_type: str) -> str:
    if (content_type or "").startswith("video"):
        return ProjectMedia.TYPE_VIDEO
    return ProjectMedia.TYPE_IMAGE


def build_storage_path(project: Project, filename: str) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    return f"{MEDIA_PREFIX}/{project.pk}/{uuid.uuid4().hex}{ext}"


def upload_media(project: Project, files: Iterable) -> List[ProjectMedia]:
    """Store uploaded files and append them to the project's gallery."""
    created: List[ProjectMedia] = []
    last_index = project.media.aggregate(m=Max("order_index"))["m"]
    next_index = 0 if last_index is None else last_index + 1
    for upload in files:
        path = default_storage.save(build_storage_path(project, upload.name), upload)
        try:
            with transaction.atomic():
                media = ProjectMedia.objects.create(
                    project=project,
                    type=media_type_for(getattr(upload, "content_type", "")),
                    url=default_storage.url(path),
                    storage_path=path,
                    order_index=next_index,
                )
        except Exception:
            # Don't leave an unreferenced object behind.
            default_storage.delete(path)
            raise
        logger.info("Uploaded %s for project %s", path, project.pk)
        created.append(media)
        next_index += 1
    return created


def delete_media(media: ProjectMedia) -> None:
    path = media.storage_path
    media.delete()
    if path:
        default_storage.delete(path)
        logger.info("Deleted %s", path)


def delete_project(project: Project) -> None:
    """Delete a project together with its stored media objects."""
    paths = [p for p in project.media.values_list("storage_path", flat=True) if p]
    project.delete()
    for path in paths:
        default_storage.delete(path)
    logger.info("Deleted project %s and %s media objects", project.repo_name, len(paths))
