import logging
import time
from unittest.mock import MagicMock

import pytest
import requests

from githubapi.client import GitHubClient, RemoteRepository
from githubapi.exceptions import (
    GitHubNotFound,
    GitHubRateLimited,
    GitHubUnauthorized,
    GitHubUpstreamError,
)


def client_with(responses, **kwargs):
    client = GitHubClient(**kwargs)
    client.session.get = MagicMock(side_effect=responses)
    return client


def test_sends_bearer_token_and_api_headers():
    client = GitHubClient(token="secret-token")

    assert client.session.headers["Authorization"] == "Bearer secret-token"
    assert client.session.headers["Accept"] == "application/vnd.github+json"
    assert client.session.headers["X-GitHub-Api-Version"] == GitHubClient.API_VERSION
    assert client.hourly_limit == 5000


def test_anonymous_client_warns_about_lower_limit(make_response, repo_payload, caplog):
    client = client_with([make_response(payload=[repo_payload("alpha")])], token=None)

    with caplog.at_level(logging.WARNING, logger="githubapi.client"):
        repos = client.list_repositories("octo")

    assert "Authorization" not in client.session.headers
    assert client.hourly_limit == 60
    assert [r.name for r in repos] == ["alpha"]
    assert "60 per hour" in caplog.text
    assert "secret" not in caplog.text


def test_requests_100_per_page_with_timeout(make_response, repo_payload):
    client = client_with([make_response(payload=[repo_payload("alpha")])], token="t", timeout=12)

    client.list_repositories("octo")

    client.session.get.assert_called_once_with(
        "https://api.github.com/users/octo/repos",
        params={"per_page": 100, "sort": "updated"},
        timeout=12,
    )


def test_follows_pagination_links(make_response, repo_payload):
    next_url = "https://api.github.com/user/1/repos?per_page=100&page=2"
    first = make_response(
        payload=[repo_payload(f"repo-{i}") for i in range(100)],
        headers={"Link": f'<{next_url}>; rel="next", <{next_url}>; rel="last"'},
    )
    second = make_response(payload=[repo_payload("repo-100")], url=next_url)
    client = client_with([first, second], token="t")

    repos = client.list_repositories("octo")

    assert len(repos) == 101
    assert repos[-1].name == "repo-100"
    second_call = client.session.get.call_args_list[1]
    assert second_call.args[0] == next_url
    assert second_call.kwargs["params"] is None


def test_listing_longer_than_max_pages_is_an_error(make_response, repo_payload):
    next_url = "https://api.github.com/user/1/repos?page=2"
    pages = [
        make_response(payload=[repo_payload(f"r{i}")], headers={"Link": f'<{next_url}>; rel="next"'})
        for i in range(3)
    ]
    client = client_with(pages, token="t", max_pages=2)

    with pytest.raises(GitHubUpstreamError) as exc:
        client.list_repositories("octo")

    assert "GITHUB_MAX_PAGES" in str(exc.value)
    assert client.session.get.call_count == 2
    # A truncated listing is never cached.
    client.session.get.side_effect = [make_response(payload=[repo_payload("only")])]
    assert [r.name for r in client.list_repositories("octo")] == ["only"]


def test_normalises_repository_payload(make_response, repo_payload):
    payload = repo_payload(
        "alpha",
        homepage="",
        stargazers_count=5,
        forks_count=2,
        topics=["django", "api"],
        pushed_at="2024-03-04T05:06:07Z",
    )
    client = client_with([make_response(payload=[payload])], token="t")

    [repo] = client.list_repositories("octo")

    assert isinstance(repo, RemoteRepository)
    assert repo.homepage is None
    assert repo.stargazers_count == 5
    assert repo.forks_count == 2
    assert repo.topics == ["django", "api"]
    assert repo.pushed_at.year == 2024 and repo.pushed_at.tzinfo is not None


def test_from_api_tolerates_missing_fields():
    repo = RemoteRepository.from_api({"id": 3, "name": "bare", "html_url": "https://github.com/o/bare"})

    assert repo.description is None
    assert repo.topics == []
    assert repo.stargazers_count == 0
    assert repo.created_at is None


def test_caches_listing_until_refresh(make_response, repo_payload):
    client = client_with(
        [make_response(payload=[repo_payload("alpha")]), make_response(payload=[repo_payload("beta")])],
        token="t",
    )

    assert [r.name for r in client.list_repositories("octo")] == ["alpha"]
    assert [r.name for r in client.list_repositories("octo")] == ["alpha"]
    assert client.session.get.call_count == 1

    assert [r.name for r in client.list_repositories("octo", refresh=True)] == ["beta"]
    assert client.session.get.call_count == 2


def test_cache_disabled(make_response, repo_payload):
    client = client_with(
        [make_response(payload=[repo_payload("alpha")]), make_response(payload=[repo_payload("alpha")])],
        token="t",
        cache_timeout=0,
    )

    client.list_repositories("octo")
    client.list_repositories("octo")

    assert client.session.get.call_count == 2


def test_not_found(make_response):
    client = client_with([make_response(404, {"message": "Not Found"})])

    with pytest.raises(GitHubNotFound) as exc:
        client.list_repositories("nobody")
    assert "not found" in str(exc.value).lower()


def test_unauthorized(make_response):
    client = client_with([make_response(401, {"message": "Bad credentials"})], token="bad")

    with pytest.raises(GitHubUnauthorized) as exc:
        client.list_repositories("octo")
    assert "authentication failed" in str(exc.value).lower()


def test_rate_limited_when_quota_exhausted(make_response):
    reset = int(time.time()) + 120
    resp = make_response(
        403,
        {"message": "API rate limit exceeded for 1.2.3.4."},
        headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Limit": "60", "X-RateLimit-Reset": str(reset)},
    )
    client = client_with([resp])

    with pytest.raises(GitHubRateLimited) as exc:
        client.list_repositories("octo")
    assert "rate limit exceeded" in str(exc.value).lower()
    assert 0 < exc.value.reset_seconds <= 120
    assert "GITHUB_API_TOKEN" in str(exc.value)


def test_secondary_rate_limit_429(make_response):
    client = client_with([make_response(429, {"message": "You have exceeded a secondary rate limit"})], token="t")

    with pytest.raises(GitHubRateLimited):
        client.list_repositories("octo")


def test_forbidden_without_rate_limit_is_generic(make_response):
    resp = make_response(403, {"message": "Repository access blocked"}, headers={"X-RateLimit-Remaining": "4999"})
    client = client_with([resp], token="t")

    with pytest.raises(GitHubUpstreamError) as exc:
        client.list_repositories("octo")
    assert not isinstance(exc.value, GitHubRateLimited)
    assert "Repository access blocked" in str(exc.value)


def test_server_error_is_generic(make_response):
    client = client_with([make_response(502, raw=b"<html>bad gateway</html>")], token="t")

    with pytest.raises(GitHubUpstreamError) as exc:
        client.list_repositories("octo")
    assert "502" in str(exc.value)


def test_timeout_is_generic():
    client = client_with(requests.exceptions.Timeout("slow"), token="t", timeout=5)

    with pytest.raises(GitHubUpstreamError) as exc:
        client.list_repositories("octo")
    assert "timed out" in str(exc.value)


def test_network_failure_is_generic():
    client = client_with(requests.exceptions.ConnectionError("dns"), token="t")

    with pytest.raises(GitHubUpstreamError):
        client.list_repositories("octo")


def test_malformed_json_is_generic(make_response):
    client = client_with([make_response(200, raw=b"not json")], token="t")

    with pytest.raises(GitHubUpstreamError):
        client.list_repositories("octo")


def test_error_kinds_have_distinct_messages(make_response):
    messages = set()
    for status, headers in ((404, {}), (401, {}), (403, {"X-RateLimit-Remaining": "0"}), (500, {})):
        client = client_with([make_response(status, {"message": "x"}, headers=headers)], token="t")
        with pytest.raises(Exception) as exc:
            client.list_repositories("octo")
        messages.add(str(exc.value))
    assert len(messages) == 4


def test_get_rate_limit(make_response):
    payload = {"resources": {"core": {"limit": 5000, "remaining": 4990, "used": 10, "reset": int(time.time()) + 60}}}
    client = client_with([make_response(payload=payload, url="https://api.github.com/rate_limit")], token="t")

    info = client.get_rate_limit()

    assert (info.limit, info.remaining, info.used) == (5000, 4990, 10)
    assert not info.is_exceeded()
    assert info.as_dict()["reset_seconds"] <= 60


def test_get_repository(make_response, repo_payload):
    client = client_with([make_response(payload=repo_payload("alpha", stargazers_count=9))], token="t")

    repo = client.get_repository("octo", "alpha")

    assert repo.name == "alpha" and repo.stargazers_count == 9
    assert client.session.get.call_args.args[0] == "https://api.github.com/repos/octo/alpha"
