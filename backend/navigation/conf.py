from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULTS = {
    "ROOT_PATH": "/dashboard",
    "LOGIN_PATH": "/login",
    "DEFAULT_EXPANDED": (),
    "PRUNE_EMPTY_GROUPS": False,
}


def navigation_settings() -> dict:
    configured = getattr(settings, "NAVIGATION", None) or {}
    unknown = set(configured) - set(DEFAULTS)
    if unknown:
        raise ImproperlyConfigured(f"Unknown NAVIGATION settings: {', '.join(sorted(unknown))}.")
    return {**DEFAULTS, **configured}
