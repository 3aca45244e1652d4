"""Database models for raw dismissal events."""

from __future__ import annotations

from django.db import models


class DismissalEvent(models.Model):
    """One completed pickup: a car queued at a campus and later dismissed.

    Rows are append-only history. Field values are stored as received so the
    diagnostics can report bad data instead of rejecting it at write time.
    """

    class Lane(models.TextChoices):
        LEFT = "left", "Left"
        RIGHT = "right", "Right"

    date = models.CharField(max_length=32, db_index=True, help_text="Calendar day (YYYY-MM-DD).")
    campus_location = models.CharField(max_length=255, db_index=True)
    car_number = models.IntegerField()
    queued_at = models.BigIntegerField(help_text="Epoch milliseconds when the car joined the queue.")
    completed_at = models.BigIntegerField(help_text="Epoch milliseconds when pickup completed.")
    wait_time_seconds = models.IntegerField()
    student_ids = models.JSONField(default=list, blank=True)
    student_names = models.JSONField(default=list, blank=True)
    lane = models.CharField(max_length=8, choices=Lane.choices, blank=True, default="")
    added_by = models.CharField(max_length=255, blank=True, default="")
    removed_by = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        verbose_name = "Dismissal Event"
        verbose_name_plural = "Dismissal Events"
        ordering = ["date", "queued_at", "id"]
        indexes = [
            models.Index(fields=["campus_location", "date"], name="dismissal_campus_date_idx"),
        ]

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return f"DismissalEvent(campus={self.campus_location!r}, date={self.date}, car={self.car_number})"
