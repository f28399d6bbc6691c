"""Site-wide key/value settings with defaults for the keys the site reads."""
from typing import Any, Dict

from django.core.exceptions import ValidationError

from .models import SiteConfig

LIVE_STATUS = "live_status"
SOCIAL_LINKS = "social_links"

LIVE_STATUS_COLORS = ("green", "yellow", "red", "blue")

DEFAULTS: Dict[str, Any] = {
    LIVE_STATUS: {"status": "", "color": "green"},
    SOCIAL_LINKS: {"github": "", "linkedin": "", "twitter": "", "instagram": ""},
}


def validate_live_status(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        raise ValidationError("live_status must be an object.")
    status = value.get("status")
    color = value.get("color", "green")
    if not isinstance(status, str):
        raise ValidationError("live_status.status must be text.")
    if color not in LIVE_STATUS_COLORS:
        raise ValidationError(f"live_status.color must be one of {', '.join(LIVE_STATUS_COLORS)}.")
    return {"status": status.strip(), "color": color}


def validate_social_links(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        raise ValidationError("social_links must be an object.")
    links = {}
    for name, url in value.items():
        if not isinstance(url, str):
            raise ValidationError(f"social_links.{name} must be text.")
        links[str(name)] = url.strip()
    return links


VALIDATORS = {
    LIVE_STATUS: validate_live_status,
    SOCIAL_LINKS: validate_social_links,
}


def get_config(key: str, default: Any = None) -> Any:
    row = SiteConfig.objects.filter(key=key).first()
    if row is not None:
        return row.value
    return DEFAULTS.get(key, default)


def get_all_config() -> Dict[str, Any]:
    values = dict(DEFAULTS)
    values.update({row.key: row.value for row in SiteConfig.objects.all()})
    return values


def save_config(key: str, value: Any) -> SiteConfig:
    """Validate known keys and upsert the value by key."""
    key = (key or "").strip()
    if not key:
        raise ValidationError("A settings key is required.")
    validator = VALIDATORS.get(key)
    if validator is not None:
        value = validator(value)
    row, _ = SiteConfig.objects.update_or_create(key=key, defaults={"value": value})
    return row
