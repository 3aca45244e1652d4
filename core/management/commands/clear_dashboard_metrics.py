"""Delete derived dashboard rows (metrics, top arrivals, processed dates).

Raw dismissal events are never touched. Schedule this between aggregation runs
only.
"""

from __future__ import annotations

from dataclasses import asdict

from django.core.management.base import BaseCommand, CommandError

from core.metric_store import DashboardMetricStore
from core.services import clear_dashboard_metrics


class Command(BaseCommand):
    """Clear the derived dashboard tables."""

    help = "Delete dashboard metrics, top arrivals and processed-date markers."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "--check",
            action="store_true",
            help="Dry-run: print what would be deleted.",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Required to actually delete rows.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        check: bool = options["check"]
        force: bool = options["force"]

        if check and force:
            raise CommandError("Use either --check or --force, not both.")
        if not check and not force:
            raise CommandError("Refusing to delete without explicit intent; pass --check or --force.")

        if check:
            counts = DashboardMetricStore().counts()
            self.stdout.write(f"[CHECK] would_delete={asdict(counts)}")
            return None

        result = clear_dashboard_metrics()
        self.stdout.write(f"[DELETE] deleted={asdict(result)}")
        return None
