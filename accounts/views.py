import logging

from django.contrib.auth import authenticate, login, logout
from django.db.models import Sum
from django.http import JsonResponse
from django.shortcuts import redirect
from django.urls import reverse
from django.views.decorators.http import require_GET, require_POST

from accounts.decorators import admin_required
from accounts.forms import LoginForm
from portfolio.models import ContactMessage, Project

logger = logging.getLogger(__name__)


@require_POST
def login_view(request):
    form = LoginForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form.errors.get_json_data()}, status=400)
    user = authenticate(request, email=form.cleaned_data["email"], password=form.cleaned_data["password"])
    if user is None:
        logger.info("Failed sign-in for %s", form.cleaned_data["email"])
        return JsonResponse({"error": "Invalid email or password"}, status=401)
    login(request, user, backend="accounts.backends.EmailBackend")
    return JsonResponse({"ok": True, "email": user.email, "is_staff": user.is_staff})


@require_POST
def logout_view(request):
    logout(request)
    return JsonResponse({"ok": True})


@require_GET
@admin_required
def dashboard(request):
    totals = Project.objects.aggregate(stars=Sum("stars"), views=Sum("view_count"), clicks=Sum("click_count"))
    stats = {
        "total": Project.objects.count(),
        "visible": Project.objects.filter(visible=True).count(),
        "featured": Project.objects.filter(featured=True).count(),
        "total_stars": totals["stars"] or 0,
        "total_views": totals["views"] or 0,
        "total_clicks": totals["clicks"] or 0,
        "unread_messages": ContactMessage.objects.filter(status=ContactMessage.STATUS_UNREAD).count(),
    }
    return JsonResponse(stats)


def connect_github(request):
    return redirect(reverse("social:begin", args=["github"]))
