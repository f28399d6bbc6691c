from django.urls import path
from . import views

urlpatterns = [
    path("sync/", views.sync_repositories, name="sync_repositories"),
    path("github/rate-limit/", views.rate_limit, name="github_rate_limit"),
]
