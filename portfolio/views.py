import json
import logging

from django.http import JsonResponse, QueryDict
from django.views.decorators.http import require_GET, require_POST

from .forms import ContactMessageForm
from .models import Project
from .site_config import get_all_config, get_config
from .tracking import track_project_click, track_project_view

logger = logging.getLogger(__name__)


def request_data(request):
    """Form data, or the decoded body for JSON requests."""
    if request.content_type == "application/json":
        try:
            payload = json.loads(request.body or b"{}")
        except ValueError:
            return None
        return payload if isinstance(payload, dict) else None
    return request.POST


def not_found(message="Not found"):
    return JsonResponse({"error": message}, status=404)


@require_GET
def project_list(request):
    projects = Project.objects.filter(visible=True).prefetch_related("media").order_by("order_index", "id")
    if request.GET.get("featured") in ("1", "true", "yes"):
        projects = projects.filter(featured=True)
    return JsonResponse({"projects": [p.as_dict(include_media=True) for p in projects]})


@require_GET
def project_detail(request, pk: int):
    project = Project.objects.filter(pk=pk, visible=True).prefetch_related("media").first()
    if project is None:
        return not_found("Project not found")
    track_project_view(project.pk)
    return JsonResponse(project.as_dict(include_media=True))


@require_POST
def project_click(request, pk: int):
    # Outbound clicks are best effort; the caller navigates away regardless.
    tracked = track_project_click(pk)
    return JsonResponse({"ok": True, "tracked": tracked})


@require_POST
def contact_submit(request):
    data = request_data(request)
    if data is None:
        return JsonResponse({"error": "Invalid JSON body"}, status=400)
    if not isinstance(data, QueryDict):
        data = {k: v for k, v in data.items() if v is not None}
    form = ContactMessageForm(data)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors.get_json_data()}, status=400)
    message = form.save()
    logger.info("New contact message %s from %s", message.pk, message.email)
    return JsonResponse({"id": message.pk, "status": message.status}, status=201)


@require_GET
def site_config(request):
    return JsonResponse(get_all_config())


@require_GET
def site_config_value(request, key: str):
    value = get_config(key)
    if value is None:
        return not_found("Setting not found")
    return JsonResponse({"key": key, "value": value})
