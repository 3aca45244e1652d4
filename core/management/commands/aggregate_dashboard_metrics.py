"""Recompute derived dashboard metrics from the raw dismissal events.

The run replaces every metric and top-arrival row by key, drops rows whose
scope no longer exists, and marks each reduced day as processed. Do not run it
concurrently with `clear_dashboard_metrics`.
"""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from analysis.events import DismissalRecordError
from core.services import aggregate_dashboard_metrics


class Command(BaseCommand):
    """Aggregate dismissal events into dashboard metrics."""

    help = "Recompute dashboard metrics and top arrivals from all dismissal events."

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        try:
            result = aggregate_dashboard_metrics()
        except DismissalRecordError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(
            "[AGGREGATE] "
            f"processed_dates={result.processed_dates} total_records={result.total_records} "
            f"metrics={result.metrics_written} top_arrival_buckets={result.top_arrival_buckets} "
            f"pruned={result.pruned_rows}"
        )
        return None
