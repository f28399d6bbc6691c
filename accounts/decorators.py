from functools import wraps

from django.http import JsonResponse


def admin_required(view_func):
    """Gate a JSON view on a signed-in staff user.

    Unlike ``login_required`` this answers with a JSON error instead of a
    redirect, since the admin pages call these views from scripts.
    """

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        user = request.user
        if not user.is_authenticated:
            return JsonResponse({"error": "Unauthorized"}, status=401)
        if not user.is_staff:
            return JsonResponse({"error": "Forbidden"}, status=403)
        return view_func(request, *args, **kwargs)

    return _wrapped
