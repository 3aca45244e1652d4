"""Database models for derived dashboard metrics.

These tables are owned by the aggregation job and are only read or written
through `core.metric_store.DashboardMetricStore`. A NULL `campus_location` or
`month` means "all campuses" or "all time"; an empty string is a real (blank)
campus name.
"""

from __future__ import annotations

from django.db import models
from django.db.models import Q

from analysis.categories import MetricType


class DashboardMetric(models.Model):
    """One aggregated metric for a (metric type, campus, month) scope."""

    metric_type = models.CharField(max_length=32, choices=[(value.value, value.value) for value in MetricType])
    campus_location = models.CharField(max_length=255, null=True, blank=True)
    month = models.CharField(max_length=16, null=True, blank=True)
    record_count = models.PositiveIntegerField(default=0)
    total_events = models.PositiveIntegerField(null=True, blank=True)
    total_wait_seconds = models.BigIntegerField(null=True, blank=True)
    avg_wait_seconds = models.IntegerField(null=True, blank=True)
    total_session_seconds = models.BigIntegerField(null=True, blank=True)
    avg_session_seconds = models.IntegerField(null=True, blank=True)
    days_count = models.PositiveIntegerField(null=True, blank=True)
    last_updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Dashboard Metric"
        verbose_name_plural = "Dashboard Metrics"
        ordering = ["metric_type", "campus_location", "month"]
        # One partial constraint per scope shape; NULLs never collide in a plain unique index.
        constraints = [
            models.UniqueConstraint(
                fields=["metric_type", "campus_location", "month"],
                condition=Q(campus_location__isnull=False, month__isnull=False),
                name="uniq_dashboard_metric_scope",
            ),
            models.UniqueConstraint(
                fields=["metric_type", "campus_location"],
                condition=Q(campus_location__isnull=False, month__isnull=True),
                name="uniq_dashboard_metric_campus_all_time",
            ),
            models.UniqueConstraint(
                fields=["metric_type", "month"],
                condition=Q(campus_location__isnull=True, month__isnull=False),
                name="uniq_dashboard_metric_all_campuses_month",
            ),
            models.UniqueConstraint(
                fields=["metric_type"],
                condition=Q(campus_location__isnull=True, month__isnull=True),
                name="uniq_dashboard_metric_global",
            ),
        ]

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        campus = "*" if self.campus_location is None else self.campus_location
        month = "*" if self.month is None else self.month
        return f"DashboardMetric({self.metric_type}, campus={campus}, month={month})"


class DashboardTopArrivals(models.Model):
    """Daily top-arrival entries for one (campus, month) bucket."""

    campus_location = models.CharField(max_length=255)
    month = models.CharField(max_length=16)
    entries = models.JSONField(default=list, blank=True)
    last_updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Dashboard Top Arrivals"
        verbose_name_plural = "Dashboard Top Arrivals"
        ordering = ["campus_location", "month"]
        constraints = [
            models.UniqueConstraint(fields=["campus_location", "month"], name="uniq_top_arrivals_campus_month"),
        ]

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return f"DashboardTopArrivals(campus={self.campus_location}, month={self.month})"


class DashboardProcessedDate(models.Model):
    """Marker for a calendar day reduced by the aggregation job."""

    date = models.CharField(max_length=32, unique=True)
    processed_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Dashboard Processed Date"
        verbose_name_plural = "Dashboard Processed Dates"
        ordering = ["date"]

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return f"DashboardProcessedDate({self.date})"
