"""Actor role resolution for authenticated users.

Superusers act as ``admin``.  Everybody else gets the highest-precedence
role among their Django group names.  No matching group means no role,
and therefore no allowed transitions.
"""

from __future__ import annotations

from typing import Any

from modules.fulfillment.constants import ROLE_PRECEDENCE, Role, as_role


def resolve_user_role(user: Any) -> Role | None:
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    if getattr(user, "is_superuser", False):
        return Role.ADMIN

    groups = getattr(user, "groups", None)
    if groups is None:
        return None

    names = {as_role(name) for name in groups.values_list("name", flat=True)}
    for role in ROLE_PRECEDENCE:
        if role in names:
            return role
    return None
