"""Admin registrations for dismissal events."""

from __future__ import annotations

from django.contrib import admin

from dismissals.models import DismissalEvent


@admin.register(DismissalEvent)
class DismissalEventAdmin(admin.ModelAdmin):
    """Admin configuration for DismissalEvent."""

    list_display = ("date", "campus_location", "car_number", "lane", "wait_time_seconds")
    list_filter = ("campus_location", "lane")
    search_fields = ("campus_location", "car_number", "date")
    ordering = ("-date", "queued_at")
