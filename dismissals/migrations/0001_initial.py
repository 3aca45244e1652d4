"""Create the raw dismissal event table."""

from __future__ import annotations

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies: list[tuple[str, str]] = []

    operations = [
        migrations.CreateModel(
            name="DismissalEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.CharField(db_index=True, help_text="Calendar day (YYYY-MM-DD).", max_length=32)),
                ("campus_location", models.CharField(db_index=True, max_length=255)),
                ("car_number", models.IntegerField()),
                (
                    "queued_at",
                    models.BigIntegerField(help_text="Epoch milliseconds when the car joined the queue."),
                ),
                ("completed_at", models.BigIntegerField(help_text="Epoch milliseconds when pickup completed.")),
                ("wait_time_seconds", models.IntegerField()),
                ("student_ids", models.JSONField(blank=True, default=list)),
                ("student_names", models.JSONField(blank=True, default=list)),
                (
                    "lane",
                    models.CharField(
                        blank=True,
                        choices=[("left", "Left"), ("right", "Right")],
                        default="",
                        max_length=8,
                    ),
                ),
                ("added_by", models.CharField(blank=True, default="", max_length=255)),
                ("removed_by", models.CharField(blank=True, default="", max_length=255)),
            ],
            options={
                "verbose_name": "Dismissal Event",
                "verbose_name_plural": "Dismissal Events",
                "ordering": ["date", "queued_at", "id"],
                "indexes": [
                    models.Index(fields=["campus_location", "date"], name="dismissal_campus_date_idx"),
                ],
            },
        ),
    ]
