from __future__ import annotations

import logging
from dataclasses import dataclass

from django.contrib.auth import logout as auth_logout
from .roles import Role, normalize_role

logger = logging.getLogger(__name__)


class LogoutError(Exception):
    """The server-side session could not be closed."""


@dataclass(frozen=True)
class LogoutResult:
    error: LogoutError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls) -> LogoutResult:
        return cls()

    @classmethod
    def failure(cls, error: LogoutError) -> LogoutResult:
        return cls(error=error)


class RequestIdentityProvider:
    """Acting-user identity backed by Django's authenticated request user."""

    def __init__(self, request):
        self.request = request

    @property
    def user(self):
        user = getattr(self.request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return None
        return user

    @property
    def role(self) -> Role | None:
        user = self.user
        if user is None:
            return None
        return normalize_role(getattr(user, "role", None))

    @property
    def display_name(self) -> str:
        user = self.user
        if user is None:
            return ""
        return getattr(user, "display_name", "") or user.get_username()

    def logout(self) -> LogoutResult:
        username = self.user.get_username() if self.user is not None else ""
        try:
            auth_logout(self.request)
        except Exception as exc:
            logger.warning("Logout for %r failed: %s", username, exc)
            return LogoutResult.failure(LogoutError(str(exc)))
        logger.info("Logged out %r", username)
        return LogoutResult.success()
