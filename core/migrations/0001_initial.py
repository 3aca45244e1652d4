"""Create the derived dashboard tables."""

from __future__ import annotations

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies: list[tuple[str, str]] = []

    operations = [
        migrations.CreateModel(
            name="DashboardMetric",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "metric_type",
                    models.CharField(
                        choices=[
                            ("campus_activity", "campus_activity"),
                            ("avg_wait_time", "avg_wait_time"),
                            ("session_duration", "session_duration"),
                        ],
                        max_length=32,
                    ),
                ),
                ("campus_location", models.CharField(blank=True, max_length=255, null=True)),
                ("month", models.CharField(blank=True, max_length=16, null=True)),
                ("record_count", models.PositiveIntegerField(default=0)),
                ("total_events", models.PositiveIntegerField(blank=True, null=True)),
                ("total_wait_seconds", models.BigIntegerField(blank=True, null=True)),
                ("avg_wait_seconds", models.IntegerField(blank=True, null=True)),
                ("total_session_seconds", models.BigIntegerField(blank=True, null=True)),
                ("avg_session_seconds", models.IntegerField(blank=True, null=True)),
                ("days_count", models.PositiveIntegerField(blank=True, null=True)),
                ("last_updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Dashboard Metric",
                "verbose_name_plural": "Dashboard Metrics",
                "ordering": ["metric_type", "campus_location", "month"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("campus_location__isnull", False), ("month__isnull", False)),
                        fields=("metric_type", "campus_location", "month"),
                        name="uniq_dashboard_metric_scope",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("campus_location__isnull", False), ("month__isnull", True)),
                        fields=("metric_type", "campus_location"),
                        name="uniq_dashboard_metric_campus_all_time",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("campus_location__isnull", True), ("month__isnull", False)),
                        fields=("metric_type", "month"),
                        name="uniq_dashboard_metric_all_campuses_month",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("campus_location__isnull", True), ("month__isnull", True)),
                        fields=("metric_type",),
                        name="uniq_dashboard_metric_global",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="DashboardTopArrivals",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("campus_location", models.CharField(max_length=255)),
                ("month", models.CharField(max_length=16)),
                ("entries", models.JSONField(blank=True, default=list)),
                ("last_updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Dashboard Top Arrivals",
                "verbose_name_plural": "Dashboard Top Arrivals",
                "ordering": ["campus_location", "month"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("campus_location", "month"),
                        name="uniq_top_arrivals_campus_month",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="DashboardProcessedDate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.CharField(max_length=32, unique=True)),
                ("processed_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Dashboard Processed Date",
                "verbose_name_plural": "Dashboard Processed Dates",
                "ordering": ["date"],
            },
        ),
    ]
