import logging

from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from accounts.decorators import admin_required

from .exceptions import GitHubError, SyncError
from .services import ProjectSyncService, build_client

logger = logging.getLogger(__name__)


@require_POST
@admin_required
def sync_repositories(request):
    username = getattr(settings, "GITHUB_USERNAME", None)
    if not username:
        return JsonResponse({"error": "GitHub username not configured"}, status=500)

    refresh = request.GET.get("refresh") in ("1", "true", "yes")
    try:
        result = ProjectSyncService().sync(username, refresh=refresh)
    except SyncError as e:
        logger.error("Sync error: %s", e)
        return JsonResponse({"error": str(e) or "Failed to sync repositories"}, status=e.status_code)
    return JsonResponse(result.as_dict())


@require_GET
@admin_required
def rate_limit(request):
    try:
        info = build_client().get_rate_limit()
    except GitHubError as e:
        logger.error("Rate limit lookup failed: %s", e)
        return JsonResponse({"error": str(e)}, status=e.status_code)
    return JsonResponse(info.as_dict())
