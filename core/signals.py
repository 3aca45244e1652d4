"""Signals for dismissal authorization scaffolding."""

from __future__ import annotations

from django.contrib.auth.models import Group
from django.db.models.signals import post_migrate
from django.dispatch import receiver

from core.roles import DismissalRole


@receiver(post_migrate)
def ensure_role_groups(sender, **kwargs) -> None:
    """Ensure one auth group exists per dismissal role.

    This runs on every `post_migrate` invocation; `get_or_create` keeps it
    idempotent.
    """

    for role in DismissalRole:
        Group.objects.get_or_create(name=role.value)
