"""JSON endpoints behind the admin back-office."""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Max
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from accounts.decorators import admin_required

from .forms import ProjectForm
from .models import ContactMessage, Project, ProjectMedia
from .site_config import save_config
from .storage import delete_media, delete_project, upload_media
from .views import not_found, request_data

logger = logging.getLogger(__name__)


@require_GET
@admin_required
def project_list(request):
    projects = Project.objects.prefetch_related("media").order_by("order_index", "id")
    return JsonResponse({"projects": [p.as_dict(include_media=True) for p in projects]})


@require_POST
@admin_required
def project_create(request):
    form = ProjectForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors.get_json_data()}, status=400)
    project = form.save(commit=False)
    last_index = Project.objects.aggregate(m=Max("order_index"))["m"]
    project.order_index = 0 if last_index is None else last_index + 1
    project.stars = 0
    project.forks = 0
    project.save()
    logger.info("Created project %s", project.repo_name)
    return JsonResponse(project.as_dict(include_media=True), status=201)


@require_POST
@admin_required
def project_update(request, pk: int):
    project = Project.objects.filter(pk=pk).first()
    if project is None:
        return not_found("Project not found")
    form = ProjectForm(request.POST, instance=project)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors.get_json_data()}, status=400)
    project = form.save()
    return JsonResponse(project.as_dict(include_media=True))


@require_POST
@admin_required
def project_delete(request, pk: int):
    project = Project.objects.filter(pk=pk).first()
    if project is None:
        return not_found("Project not found")
    delete_project(project)
    return JsonResponse({"ok": True})


def _toggle(pk: int, field: str):
    project = Project.objects.filter(pk=pk).first()
    if project is None:
        return not_found("Project not found")
    setattr(project, field, not getattr(project, field))
    project.save(update_fields=[field])
    return JsonResponse({"id": project.pk, field: getattr(project, field)})


@require_POST
@admin_required
def toggle_visible(request, pk: int):
    return _toggle(pk, "visible")


@require_POST
@admin_required
def toggle_featured(request, pk: int):
    return _toggle(pk, "featured")


@require_POST
@admin_required
def reorder_projects(request):
    # Expect: { order: [project_id, ...] }
    data = request_data(request)
    if data is None:
        return JsonResponse({"error": "Invalid JSON body"}, status=400)
    order = data.getlist("order[]") if hasattr(data, "getlist") else data.get("order") or []
    if not isinstance(order, list):
        return JsonResponse({"error": "order must be a list of project ids"}, status=400)
    with transaction.atomic():
        for idx, project_id in enumerate(order):
            try:
                Project.objects.filter(pk=int(project_id)).update(order_index=idx)
            except (TypeError, ValueError):
                continue
    return JsonResponse({"ok": True})


@require_POST
@admin_required
def media_upload(request, pk: int):
    project = Project.objects.filter(pk=pk).first()
    if project is None:
        return not_found("Project not found")
    files = request.FILES.getlist("files")
    if not files:
        return JsonResponse({"error": "No files uploaded"}, status=400)
    media = upload_media(project, files)
    return JsonResponse({"media": [m.as_dict() for m in media]}, status=201)


@require_POST
@admin_required
def media_delete(request, pk: int):
    media = ProjectMedia.objects.filter(pk=pk).first()
    if media is None:
        return not_found("Media not found")
    delete_media(media)
    return JsonResponse({"ok": True})


@require_GET
@admin_required
def message_list(request):
    messages = ContactMessage.objects.all()
    status = request.GET.get("status")
    if status:
        messages = messages.filter(status=status)
    return JsonResponse({"messages": [m.as_dict() for m in messages]})


@require_POST
@admin_required
def message_status(request, pk: int):
    message = ContactMessage.objects.filter(pk=pk).first()
    if message is None:
        return not_found("Message not found")
    data = request_data(request)
    status = data.get("status") if data is not None else None
    if status not in dict(ContactMessage.STATUS_CHOICES):
        return JsonResponse({"error": f"Invalid status {status!r}"}, status=400)
    message.status = status
    message.save(update_fields=["status"])
    return JsonResponse(message.as_dict())


@require_POST
@admin_required
def message_delete(request, pk: int):
    deleted, _ = ContactMessage.objects.filter(pk=pk).delete()
    if not deleted:
        return not_found("Message not found")
    return JsonResponse({"ok": True})


@require_POST
@admin_required
def site_config_save(request, key: str):
    data = request_data(request)
    if data is None or "value" not in data:
        return JsonResponse({"error": "Expected a JSON body with a value"}, status=400)
    try:
        row = save_config(key, data["value"])
    except ValidationError as e:
        return JsonResponse({"error": " ".join(e.messages)}, status=400)
    return JsonResponse({"key": row.key, "value": row.value, "updated_at": row.updated_at.isoformat()})
