"""Rate limit handling utilities for GitHub API"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

ANONYMOUS_HOURLY_LIMIT = 60
AUTHENTICATED_HOURLY_LIMIT = 5000


@dataclass
class RateLimitInfo:
    remaining: Optional[int]
    limit: Optional[int]
    reset_time: Optional[datetime]
    used: Optional[int]

    @classmethod
    def from_response(cls, response: requests.Response) -> "RateLimitInfo":
        headers = response.headers
        reset = _to_int(headers.get("X-RateLimit-Reset"))
        return cls(
            remaining=_to_int(headers.get("X-RateLimit-Remaining")),
            limit=_to_int(headers.get("X-RateLimit-Limit")),
            reset_time=datetime.fromtimestamp(reset, tz=timezone.utc) if reset is not None else None,
            used=_to_int(headers.get("X-RateLimit-Used")),
        )

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RateLimitInfo":
        """Build from the ``core`` bucket of a ``/rate_limit`` response."""
        core = (payload.get("resources") or {}).get("core") or payload.get("rate") or {}
        reset = _to_int(core.get("reset"))
        return cls(
            remaining=_to_int(core.get("remaining")),
            limit=_to_int(core.get("limit")),
            reset_time=datetime.fromtimestamp(reset, tz=timezone.utc) if reset is not None else None,
            used=_to_int(core.get("used")),
        )

    def is_exceeded(self) -> bool:
        # Responses without rate limit headers say nothing about the quota.
        return self.remaining is not None and self.remaining <= 0

    def get_reset_seconds(self) -> int:
        if self.reset_time is None:
            return 0
        now = datetime.now(timezone.utc)
        return max(0, int((self.reset_time - now).total_seconds()))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "remaining": self.remaining,
            "limit": self.limit,
            "used": self.used,
            "reset_time": self.reset_time.isoformat() if self.reset_time else None,
            "reset_seconds": self.get_reset_seconds(),
        }


def _to_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
