"""Dismissal roles and their capabilities.

Roles are Django auth groups named after `DismissalRole` values. A user's role
is resolved once per request; capability checks are a pure lookup.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final

from django.contrib.auth.models import AbstractBaseUser, AnonymousUser


class DismissalRole(StrEnum):
    """Roles a dismissal user can hold."""

    superadmin = "superadmin"
    admin = "admin"
    operator = "operator"
    allocator = "allocator"
    dispatcher = "dispatcher"
    viewer = "viewer"


class Capability(StrEnum):
    """Actions gated by role.

    `allocate` and `dispatch` are not checked inside this project; they gate the
    pickup-queue clients that consume `resolve_role` and `has_capability`.
    """

    view_dashboard = "view_dashboard"
    run_diagnostics = "run_diagnostics"
    manage_metrics = "manage_metrics"
    allocate = "allocate"
    dispatch = "dispatch"


# Highest privilege first; the first group a user belongs to wins.
ROLE_PRIORITY: Final[tuple[DismissalRole, ...]] = tuple(DismissalRole)

ROLE_CAPABILITIES: Final[dict[DismissalRole, frozenset[Capability]]] = {
    DismissalRole.superadmin: frozenset(Capability),
    DismissalRole.admin: frozenset(
        {
            Capability.view_dashboard,
            Capability.run_diagnostics,
            Capability.allocate,
            Capability.dispatch,
        }
    ),
    DismissalRole.operator: frozenset({Capability.allocate, Capability.dispatch}),
    DismissalRole.allocator: frozenset({Capability.allocate}),
    DismissalRole.dispatcher: frozenset({Capability.dispatch}),
    DismissalRole.viewer: frozenset(),
}


def capabilities_for(role: DismissalRole) -> frozenset[Capability]:
    """Return the capability set granted to `role`."""

    return ROLE_CAPABILITIES[role]


def has_capability(role: DismissalRole, capability: Capability) -> bool:
    """Return True when `role` grants `capability`."""

    return capability in ROLE_CAPABILITIES[role]


def resolve_role(user: AbstractBaseUser | AnonymousUser) -> DismissalRole:
    """Resolve a user's dismissal role from their auth groups.

    Args:
        user: Authenticated or anonymous Django user.

    Returns:
        `superadmin` for superusers, otherwise the highest-privilege role
        whose group the user belongs to, falling back to `viewer`.
    """

    if not getattr(user, "is_authenticated", False):
        return DismissalRole.viewer
    if getattr(user, "is_superuser", False):
        return DismissalRole.superadmin

    group_names = set(user.groups.values_list("name", flat=True))
    for role in ROLE_PRIORITY:
        if role.value in group_names:
            return role
    return DismissalRole.viewer
