from __future__ import annotations
import datetime
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests
from django.core.cache import cache

from .exceptions import (
    GitHubNotFound,
    GitHubRateLimited,
    GitHubUnauthorized,
    GitHubUpstreamError,
)
from .rate_limit import ANONYMOUS_HOURLY_LIMIT, AUTHENTICATED_HOURLY_LIMIT, RateLimitInfo

logger = logging.getLogger(__name__)


@dataclass
class RemoteRepository:
    """A repository as listed by the GitHub API, normalised for syncing."""

    id: int
    name: str
    html_url: str
    full_name: str = ""
    description: Optional[str] = None
    homepage: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    language: Optional[str] = None
    topics: List[str] = field(default_factory=list)
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None
    pushed_at: Optional[datetime.datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RemoteRepository":
        name = data.get("name") or ""
        return cls(
            id=data.get("id") or 0,
            name=name,
            full_name=data.get("full_name") or name,
            description=data.get("description"),
            html_url=data.get("html_url") or "",
            # GitHub reports an unset homepage as either null or "".
            homepage=data.get("homepage") or None,
            stargazers_count=data.get("stargazers_count") or 0,
            forks_count=data.get("forks_count") or 0,
            language=data.get("language"),
            topics=list(data.get("topics") or []),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
            pushed_at=parse_datetime(data.get("pushed_at")),
        )


def parse_datetime(value: Optional[str]) -> Optional[datetime.datetime]:
    if not value:
        return None
    try:
        return datetime.datetime.fromisoformat(value.replace("Z", "+00:00")).astimezone(datetime.timezone.utc)
    except (TypeError, ValueError):
        return None


class GitHubClient:
    API_BASE = "https://api.github.com"
    API_VERSION = "2022-11-28"
    ACCEPT = "application/vnd.github+json"

    def __init__(
        self,
        token: Optional[str] = None,
        timeout: float = 20,
        cache_timeout: int = 3600,
        per_page: int = 100,
        max_pages: int = 10,
    ) -> None:
        self.token = token or None
        self.timeout = timeout
        self.cache_timeout = cache_timeout
        self.per_page = per_page
        self.max_pages = max_pages
        self.session = requests.Session()
        self.session.headers.update({"Accept": self.ACCEPT, "X-GitHub-Api-Version": self.API_VERSION})
        if self.token:
            self.session.headers.update({"Authorization": f"Bearer {self.token}"})

    @property
    def hourly_limit(self) -> int:
        return AUTHENTICATED_HOURLY_LIMIT if self.token else ANONYMOUS_HOURLY_LIMIT

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        if not url.startswith("http"):
            url = f"{self.API_BASE}{url}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise GitHubUpstreamError(f"GitHub API request timed out after {self.timeout} seconds.") from e
        except requests.exceptions.RequestException as e:
            raise GitHubUpstreamError(f"Could not reach the GitHub API: {e}") from e

        if resp.status_code >= 400:
            self._raise_for_status(resp)
        return resp

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._decode(self.get(url, params=params))

    def list_repositories(self, owner: str, refresh: bool = False) -> List[RemoteRepository]:
        """Return every repository of ``owner``, following pagination links."""
        cache_key = f"githubapi:repos:{owner.lower()}:{'auth' if self.token else 'anon'}"
        if self.cache_timeout and not refresh:
            cached = cache.get(cache_key)
            if cached is not None:
                logger.debug("Using cached repository list for %s", owner)
                return cached

        if not self.token:
            logger.warning(
                "GITHUB_API_TOKEN is not set; GitHub requests are limited to %s per hour.",
                self.hourly_limit,
            )

        logger.info("Fetching repositories for %s", owner)
        repos: List[RemoteRepository] = []
        url: Optional[str] = f"/users/{owner}/repos"
        params: Optional[Dict[str, Any]] = {"per_page": self.per_page, "sort": "updated"}
        pages = 0
        while url and pages < self.max_pages:
            resp = self.get(url, params=params)
            payload = self._decode(resp)
            if not isinstance(payload, list):
                raise GitHubUpstreamError("GitHub API returned an unexpected repository listing.")
            repos.extend(RemoteRepository.from_api(item) for item in payload if isinstance(item, dict))
            pages += 1
            url = (resp.links or {}).get("next", {}).get("url")
            # The next link already carries the query string.
            params = None

        if url:
            logger.error("Repository listing for %s has more than %s pages", owner, self.max_pages)
            raise GitHubUpstreamError(
                f"Repository listing exceeded GITHUB_MAX_PAGES ({self.max_pages} pages). Raise the limit and sync again."
            )
        logger.info("Fetched %s repositories for %s", len(repos), owner)

        if self.cache_timeout:
            cache.set(cache_key, repos, self.cache_timeout)
        return repos

    def get_repository(self, owner: str, name: str) -> RemoteRepository:
        return RemoteRepository.from_api(self.get_json(f"/repos/{owner}/{name}"))

    def get_rate_limit(self) -> RateLimitInfo:
        return RateLimitInfo.from_payload(self.get_json("/rate_limit"))

    @staticmethod
    def _decode(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise GitHubUpstreamError("GitHub API returned a malformed response.") from e

    def _raise_for_status(self, resp: requests.Response) -> None:
        rate_info = RateLimitInfo.from_response(resp)
        message = _error_message(resp)
        status = resp.status_code
        logger.error("GitHub API error (%s): %s", status, message or "no message")

        if status == 404:
            raise GitHubNotFound("GitHub user or repository not found. Check GITHUB_USERNAME.")
        if status == 401:
            raise GitHubUnauthorized("GitHub authentication failed. GITHUB_API_TOKEN may be invalid or expired.")
        if status == 429 or (status == 403 and (rate_info.is_exceeded() or "rate limit" in message.lower())):
            reset_seconds = rate_info.get_reset_seconds()
            hint = "" if self.token else " Set GITHUB_API_TOKEN for a higher limit."
            raise GitHubRateLimited(
                f"GitHub API rate limit exceeded. Resets in {reset_seconds} seconds.{hint}",
                reset_seconds=reset_seconds,
            )
        raise GitHubUpstreamError(f"GitHub API error ({status}): {message or resp.reason or 'unknown error'}")


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        return str(body.get("message") or "")
    return ""
