"""Rename a campus on stored dismissal events (e.g. casing variants)."""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from core.services import normalize_campus_names


class Command(BaseCommand):
    """Normalize a campus name across dismissal history."""

    help = "Replace one campus name with another on every dismissal event."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("--from", dest="source", required=True, help="Exact campus name to replace.")
        parser.add_argument("--to", dest="target", required=True, help="Replacement campus name.")
        parser.add_argument(
            "--check",
            action="store_true",
            help="Dry-run: report how many records would change.",
        )
        parser.add_argument(
            "--write",
            action="store_true",
            help="Write changes to the database.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        source: str = options["source"]
        target: str = options["target"]
        check: bool = options["check"]
        write: bool = options["write"]

        if check and write:
            raise CommandError("Use either --check or --write, not both.")
        if not check and not write:
            raise CommandError("Refusing to write without explicit intent; pass --check or --write.")

        try:
            count = normalize_campus_names(source=source, target=target, write=write)
        except ValueError as exc:
            raise CommandError(str(exc)) from exc

        mode = "CHECK" if check else "WRITE"
        self.stdout.write(f"[{mode}] from={source!r} to={target!r} records={count}")
        return None
