"""App configuration for the dismissals Django app."""

from __future__ import annotations

from django.apps import AppConfig


class DismissalsConfig(AppConfig):
    """Configuration for the `dismissals` app (raw dismissal event store)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "dismissals"
