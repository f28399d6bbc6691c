from unittest.mock import patch

import pytest
from social_core.backends.github import GithubOAuth2

from accounts.backends import EmailBackend
from portfolio.models import ContactMessage, Project

pytestmark = pytest.mark.django_db


@pytest.fixture
def staff_user(django_user_model):
    return django_user_model.objects.create_user(
        "owner", "Owner@Example.com", "s3cret-pass", is_staff=True
    )


def test_email_backend_authenticates(staff_user):
    backend = EmailBackend()

    assert backend.authenticate(None, email="owner@example.com", password="s3cret-pass") == staff_user
    assert backend.authenticate(None, email="owner@example.com", password="wrong") is None
    assert backend.authenticate(None, email="nobody@example.com", password="s3cret-pass") is None


def test_inactive_user_cannot_sign_in(staff_user):
    staff_user.is_active = False
    staff_user.save()

    assert EmailBackend().authenticate(None, email="owner@example.com", password="s3cret-pass") is None


def test_login_and_logout(client, staff_user):
    resp = client.post("/accounts/login/", {"email": "OWNER@example.com", "password": "s3cret-pass"})

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "email": "Owner@example.com", "is_staff": True}
    assert client.get("/accounts/dashboard/").status_code == 200

    assert client.post("/accounts/logout/").status_code == 200
    assert client.get("/accounts/dashboard/").status_code == 401


def test_login_rejects_bad_credentials(client, staff_user):
    wrong = client.post("/accounts/login/", {"email": "owner@example.com", "password": "nope"})
    malformed = client.post("/accounts/login/", {"email": "not-an-email", "password": ""})

    assert wrong.status_code == 401
    assert wrong.json() == {"error": "Invalid email or password"}
    assert malformed.status_code == 400


def test_dashboard_requires_staff(client, django_user_model):
    user = django_user_model.objects.create_user("visitor", "visitor@example.com", "pw")
    client.force_login(user)

    assert client.get("/accounts/dashboard/").status_code == 403


def test_dashboard_stats(admin_client):
    Project.objects.create(repo_name="a", github_url="https://github.com/o/a", stars=5, view_count=10, click_count=2)
    Project.objects.create(
        repo_name="b", github_url="https://github.com/o/b", stars=1, featured=True, visible=False, view_count=1
    )
    ContactMessage.objects.create(name="A", email="a@example.com", message="hi")
    ContactMessage.objects.create(name="B", email="b@example.com", message="yo", status="read")

    stats = admin_client.get("/accounts/dashboard/").json()

    assert stats == {
        "total": 2,
        "visible": 1,
        "featured": 1,
        "total_stars": 6,
        "total_views": 11,
        "total_clicks": 2,
        "unread_messages": 1,
    }


def test_dashboard_with_no_projects(admin_client):
    stats = admin_client.get("/accounts/dashboard/").json()

    assert stats["total"] == 0
    assert stats["total_stars"] == 0


def test_connect_github_starts_oauth(client):
    resp = client.get("/accounts/connect-github/")

    assert resp.status_code == 302
    assert resp["Location"] == "/auth/login/github/"


GITHUB_PROFILE = {"id": 4242, "login": "octo-owner", "name": "Owner", "email": "owner@example.com"}


@pytest.fixture
def github_oauth(settings):
    """Complete the GitHub OAuth callback without talking to GitHub."""
    settings.SOCIAL_AUTH_GITHUB_WHITELISTED_EMAILS = ["owner@example.com"]
    profile = dict(GITHUB_PROFILE)

    def auth_complete(self, *args, **kwargs):
        return self.do_auth("gho_token", *args, **kwargs)

    with patch.object(GithubOAuth2, "auth_complete", auth_complete), \
            patch.object(GithubOAuth2, "user_data", lambda self, token, *a, **kw: dict(profile)):
        yield profile


def test_github_sign_in_reuses_staff_account(client, staff_user, github_oauth, django_user_model):
    resp = client.get("/auth/complete/github/")

    assert resp.status_code == 302
    assert client.session["_auth_user_id"] == str(staff_user.pk)
    assert django_user_model.objects.count() == 1
    assert staff_user.social_auth.get(provider="github").uid == "4242"
    assert client.get("/accounts/dashboard/").status_code == 200


def test_github_sign_in_rejects_unlisted_email(client, staff_user, github_oauth, django_user_model):
    github_oauth["email"] = "stranger@example.com"

    client.get("/auth/complete/github/")

    assert "_auth_user_id" not in client.session
    assert django_user_model.objects.count() == 1
    assert client.get("/accounts/dashboard/").status_code == 401
