import json

import pytest
import requests
from django.core.cache import cache

from githubapi.client import RemoteRepository


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path / "media")
    return tmp_path / "media"


@pytest.fixture
def make_response():
    """Build a real ``requests.Response`` the way the GitHub API would answer."""

    def _make(status=200, payload=None, headers=None, url="https://api.github.com/users/octo/repos", raw=None):
        resp = requests.Response()
        resp.status_code = status
        resp.url = url
        resp.reason = {200: "OK", 401: "Unauthorized", 403: "Forbidden", 404: "Not Found",
                       429: "Too Many Requests", 500: "Internal Server Error"}.get(status, "")
        if raw is not None:
            resp._content = raw
        else:
            resp._content = json.dumps(payload if payload is not None else {}).encode("utf-8")
        resp.headers.update(headers or {})
        return resp

    return _make


@pytest.fixture
def repo_payload():
    def _make(name, **overrides):
        data = {
            "id": abs(hash(name)) % 100000,
            "name": name,
            "full_name": f"octo/{name}",
            "description": f"{name} description",
            "html_url": f"https://github.com/octo/{name}",
            "homepage": None,
            "stargazers_count": 0,
            "forks_count": 0,
            "language": "Python",
            "topics": [],
            "created_at": "2023-01-01T00:00:00Z",
            "updated_at": "2024-01-01T00:00:00Z",
            "pushed_at": "2024-01-02T00:00:00Z",
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def remote_repo():
    def _make(name, **overrides):
        fields = {
            "id": 1,
            "name": name,
            "full_name": f"octo/{name}",
            "html_url": f"https://github.com/octo/{name}",
            "description": None,
            "homepage": None,
            "stargazers_count": 0,
            "forks_count": 0,
            "language": None,
            "topics": [],
        }
        fields.update(overrides)
        return RemoteRepository(**fields)

    return _make
