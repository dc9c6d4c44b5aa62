from __future__ import annotations

from django.db import models


class Role(models.TextChoices):
    ADMIN = "admin", "Admin"
    HR = "hr", "HR"
    EMPLOYEE = "employee", "Employee"


ALL_ROLES = frozenset(Role.values)
PEOPLE_OPS_ROLES = frozenset({Role.ADMIN, Role.HR})


def normalize_role(value) -> Role | None:
    """Map a raw role value onto the closed role set.

    Matching is case-insensitive. Anything outside the set, including ``None``
    and the empty string, means "no role".
    """
    if value is None:
        return None
    candidate = str(value).strip().lower()
    if candidate not in ALL_ROLES:
        return None
    return Role(candidate)
