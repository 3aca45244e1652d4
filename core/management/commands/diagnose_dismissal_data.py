"""Print dismissal data diagnostics as JSON."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import asdict

from django.core.management.base import BaseCommand, CommandError

from analysis.events import DismissalRecordError
from core import services

SECTIONS: dict[str, Callable[[], object]] = {
    "inventory": services.get_data_inventory,
    "integrity": services.validate_field_integrity,
    "outliers": services.detect_outliers,
    "health": services.get_data_health_report,
}


class Command(BaseCommand):
    """Run the dismissal data diagnostics."""

    help = "Print inventory, field-integrity, outlier and health reports as JSON."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "--section",
            choices=sorted(SECTIONS),
            action="append",
            help="Report to print (repeatable). Defaults to every report.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        sections: list[str] = options["section"] or list(SECTIONS)
        payload: dict[str, object] = {}
        try:
            for section in sections:
                payload[section] = asdict(SECTIONS[section]())
        except DismissalRecordError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(json.dumps(payload, indent=2, sort_keys=True))
        return None
