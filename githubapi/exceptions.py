"""Error types raised by the GitHub fetcher and the project sync."""
from typing import Optional


class SyncError(Exception):
    """Base class for everything the sync endpoint reports to the admin."""

    status_code = 500


class ConfigurationError(SyncError):
    pass


class PersistenceError(SyncError):
    pass


class GitHubError(SyncError):
    pass


class GitHubNotFound(GitHubError):
    pass


class GitHubUnauthorized(GitHubError):
    pass


class GitHubRateLimited(GitHubError):
    def __init__(self, message: str, reset_seconds: Optional[int] = None) -> None:
        super().__init__(message)
        self.reset_seconds = reset_seconds


class GitHubUpstreamError(GitHubError):
    pass
