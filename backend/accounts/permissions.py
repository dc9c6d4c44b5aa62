from __future__ import annotations

from typing import Iterable

from django.contrib import messages
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect

from .roles import normalize_role


def _build_denial_message(*, area: str) -> str:
    return f"You do not have permission to access {area}."


def has_any_role(user, roles: Iterable[str]) -> bool:
    if user is None or not getattr(user, "is_authenticated", False):
        return False
    role = normalize_role(getattr(user, "role", None))
    return role is not None and role in set(roles)


def require_roles(
    request: HttpRequest,
    allowed_roles: Iterable[str],
    *,
    redirect_to: str,
    area: str,
) -> HttpResponse | None:
    if has_any_role(request.user, allowed_roles):
        return None

    messages.error(request, _build_denial_message(area=area))
    return redirect(redirect_to)
