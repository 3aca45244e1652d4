"""Admin registrations for derived dashboard tables.

Derived rows are rebuilt by the aggregation job; editing them by hand requires
the `manage_metrics` capability.
"""

from __future__ import annotations

from django.contrib import admin
from django.http import HttpRequest

from core.models import DashboardMetric, DashboardProcessedDate, DashboardTopArrivals
from core.roles import Capability, has_capability, resolve_role


class ManageMetricsAdminMixin:
    """Restrict add/change/delete on derived tables to `manage_metrics` holders."""

    def _can_manage(self, request: HttpRequest) -> bool:
        return has_capability(resolve_role(request.user), Capability.manage_metrics)

    def has_add_permission(self, request: HttpRequest) -> bool:
        return self._can_manage(request)

    def has_change_permission(self, request: HttpRequest, obj=None) -> bool:
        return self._can_manage(request)

    def has_delete_permission(self, request: HttpRequest, obj=None) -> bool:
        return self._can_manage(request)


@admin.register(DashboardMetric)
class DashboardMetricAdmin(ManageMetricsAdminMixin, admin.ModelAdmin):
    """Admin configuration for DashboardMetric."""

    list_display = ("metric_type", "campus_location", "month", "record_count", "last_updated_at")
    list_filter = ("metric_type", "month")
    search_fields = ("campus_location",)
    readonly_fields = ("last_updated_at",)


@admin.register(DashboardTopArrivals)
class DashboardTopArrivalsAdmin(ManageMetricsAdminMixin, admin.ModelAdmin):
    """Admin configuration for DashboardTopArrivals."""

    list_display = ("campus_location", "month", "last_updated_at")
    list_filter = ("month",)
    search_fields = ("campus_location",)
    readonly_fields = ("last_updated_at",)


@admin.register(DashboardProcessedDate)
class DashboardProcessedDateAdmin(ManageMetricsAdminMixin, admin.ModelAdmin):
    """Admin configuration for DashboardProcessedDate."""

    list_display = ("date", "processed_at")
    ordering = ("-date",)
