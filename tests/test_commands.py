"""Integration tests for dismissal management commands."""

from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from core.models import DashboardMetric
from dismissals.models import DismissalEvent

pytestmark = pytest.mark.integration


@pytest.mark.django_db
def test_aggregate_command_reports_counts(create_event) -> None:
    """The aggregation command prints a one-line summary."""

    create_event()
    out = StringIO()

    call_command("aggregate_dashboard_metrics", stdout=out)

    assert out.getvalue().strip() == (
        "[AGGREGATE] processed_dates=1 total_records=1 metrics=12 top_arrival_buckets=1 pruned=0"
    )
    assert DashboardMetric.objects.count() == 12


@pytest.mark.django_db
def test_clear_command_requires_explicit_intent() -> None:
    """Clearing needs exactly one of --check or --force."""

    with pytest.raises(CommandError, match="explicit intent"):
        call_command("clear_dashboard_metrics")
    with pytest.raises(CommandError, match="not both"):
        call_command("clear_dashboard_metrics", "--check", "--force")


@pytest.mark.django_db
def test_clear_command_check_then_force(create_event) -> None:
    """--check only reports; --force deletes derived rows."""

    create_event()
    call_command("aggregate_dashboard_metrics", stdout=StringIO())

    out = StringIO()
    call_command("clear_dashboard_metrics", "--check", stdout=out)
    assert "[CHECK] would_delete=" in out.getvalue()
    assert "'deleted_metrics': 12" in out.getvalue()
    assert DashboardMetric.objects.count() == 12

    out = StringIO()
    call_command("clear_dashboard_metrics", "--force", stdout=out)
    assert "[DELETE] deleted=" in out.getvalue()
    assert DashboardMetric.objects.count() == 0
    assert DismissalEvent.objects.count() == 1


@pytest.mark.django_db
def test_diagnose_command_prints_selected_sections(create_event) -> None:
    """Sections are emitted as a JSON object keyed by section name."""

    create_event(car_number=0)
    out = StringIO()

    call_command("diagnose_dismissal_data", "--section", "inventory", "--section", "integrity", stdout=out)

    payload = json.loads(out.getvalue())
    assert set(payload) == {"inventory", "integrity"}
    assert payload["inventory"]["total_records"] == 1
    assert payload["integrity"]["summary"]["issues_by_type"] == {"INVALID_CAR_NUMBER": 1}


@pytest.mark.django_db
def test_diagnose_command_defaults_to_every_section() -> None:
    """Without --section every report is printed."""

    out = StringIO()

    call_command("diagnose_dismissal_data", stdout=out)

    payload = json.loads(out.getvalue())
    assert set(payload) == {"inventory", "integrity", "outliers", "health"}
    assert payload["health"]["status"] == "NO_DATA"


@pytest.mark.django_db
def test_normalize_command_check_and_write(create_event) -> None:
    """--check counts matches; --write renames them."""

    create_event(campus_location="north campus")
    create_event(campus_location="north campus")

    out = StringIO()
    call_command("normalize_campus_names", "--from", "north campus", "--to", "North Campus", "--check", stdout=out)
    assert out.getvalue().strip() == "[CHECK] from='north campus' to='North Campus' records=2"
    assert DismissalEvent.objects.filter(campus_location="north campus").count() == 2

    out = StringIO()
    call_command("normalize_campus_names", "--from", "north campus", "--to", "North Campus", "--write", stdout=out)
    assert out.getvalue().strip() == "[WRITE] from='north campus' to='North Campus' records=2"
    assert DismissalEvent.objects.filter(campus_location="North Campus").count() == 2


@pytest.mark.django_db
def test_normalize_command_rejects_identical_names() -> None:
    """Service validation errors surface as CommandError."""

    with pytest.raises(CommandError, match="identical"):
        call_command("normalize_campus_names", "--from", "North", "--to", "North", "--write")
