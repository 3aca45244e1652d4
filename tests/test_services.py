"""Integration tests for the core service layer."""

from __future__ import annotations

import pytest

from analysis.categories import HealthStatus
from core import services
from core.models import DashboardMetric, DashboardProcessedDate, DashboardTopArrivals
from dismissals.models import DismissalEvent
from conftest import at

pytestmark = pytest.mark.integration


@pytest.fixture
def seeded(create_event):
    """Two North events and one South event on the same day."""

    create_event(campus_location="North", car_number=1, queued_at=at(0, 13, 0), wait_time_seconds=300)
    create_event(
        campus_location="North",
        car_number=2,
        queued_at=at(0, 13, 5),
        wait_time_seconds=600,
        student_ids=["s-2", "s-3"],
        student_names=["Luis Garcia", "Ana Garcia"],
    )
    create_event(campus_location="South", car_number=3, queued_at=at(0, 13, 0), wait_time_seconds=120)


@pytest.mark.django_db
def test_aggregate_writes_metrics_buckets_and_processed_dates(seeded) -> None:
    """A run stores every scope, the top-arrival buckets and the processed day."""

    result = services.aggregate_dashboard_metrics()

    assert result.total_records == 3
    assert result.processed_dates == 1
    assert result.metrics_written == 18
    assert result.top_arrival_buckets == 2
    assert result.pruned_rows == 0
    assert DashboardMetric.objects.count() == 18
    assert DashboardTopArrivals.objects.count() == 2
    assert list(DashboardProcessedDate.objects.values_list("date", flat=True)) == ["2025-03-03"]


@pytest.mark.django_db
def test_aggregate_is_idempotent(seeded) -> None:
    """Re-running over an unchanged snapshot yields identical rows."""

    services.aggregate_dashboard_metrics()
    first = sorted(DashboardMetric.objects.values_list("metric_type", "campus_location", "month", "record_count"))

    result = services.aggregate_dashboard_metrics()
    second = sorted(DashboardMetric.objects.values_list("metric_type", "campus_location", "month", "record_count"))

    assert first == second
    assert result.pruned_rows == 0


@pytest.mark.django_db
def test_scope_getters_read_stored_metrics(seeded) -> None:
    """Dashboard getters return the stored metric for an exact scope."""

    services.aggregate_dashboard_metrics()

    north = services.get_campus_activity(campus="North", month="2025-03")
    assert north is not None
    assert north.total_events == 2

    overall_wait = services.get_average_wait_time()
    assert overall_wait is not None
    assert (overall_wait.total_wait_seconds, overall_wait.avg_wait_seconds) == (1020, 340)

    session = services.get_session_duration(campus="North")
    assert session is not None
    assert session.total_session_seconds == 900

    assert services.get_campus_activity(campus="West") is None


@pytest.mark.django_db
def test_top_arrivals_and_campus_podium(seeded) -> None:
    """Leaderboards are ranked on read; campus activity is ordered for a podium."""

    services.aggregate_dashboard_metrics()

    (leaderboard,) = services.get_top_arrivals(campus="North", month="2025-03")
    assert [entry.car_number for entry in leaderboard.entries] == [1, 2]
    assert leaderboard.entries[1].student_names == ("Luis Garcia", "Ana Garcia")

    ranking = services.get_all_campus_activity(month="2025-03")
    assert [metric.campus_location for metric in ranking.podium] == ["North", "South"]


@pytest.mark.django_db
def test_renamed_campus_rows_are_pruned_on_next_run(seeded) -> None:
    """Scopes that vanish from the raw data are removed by the next aggregation."""

    services.aggregate_dashboard_metrics()

    assert services.normalize_campus_names(source="South", target="North", write=True) == 1
    result = services.aggregate_dashboard_metrics()

    assert result.metrics_written == 12
    assert result.pruned_rows == 7
    assert DashboardMetric.objects.count() == 12
    assert not DashboardMetric.objects.filter(campus_location="South").exists()
    assert not DashboardTopArrivals.objects.filter(campus_location="South").exists()


@pytest.mark.django_db
def test_clear_removes_derived_rows_only(seeded) -> None:
    """Clearing reports per-table counts and leaves raw events intact."""

    services.aggregate_dashboard_metrics()

    result = services.clear_dashboard_metrics()

    assert (result.deleted_metrics, result.deleted_top_arrivals, result.deleted_processed_dates) == (18, 2, 1)
    assert DashboardMetric.objects.count() == 0
    assert DismissalEvent.objects.count() == 3


@pytest.mark.django_db
def test_normalize_campus_names_check_mode_does_not_write(seeded) -> None:
    """Check mode counts matches without renaming."""

    assert services.normalize_campus_names(source="North", target="North Campus", write=False) == 2
    assert DismissalEvent.objects.filter(campus_location="North").count() == 2


@pytest.mark.django_db
@pytest.mark.parametrize(("source", "target"), [("", "North"), ("North", "  "), ("North", "North")])
def test_normalize_campus_names_rejects_bad_names(source, target) -> None:
    """Blank or identical names are refused."""

    with pytest.raises(ValueError):
        services.normalize_campus_names(source=source, target=target, write=True)


@pytest.mark.django_db
def test_diagnostics_read_stored_events(seeded, create_event) -> None:
    """Diagnostics run over every stored event."""

    create_event(campus_location="north", car_number=0)

    inventory = services.get_data_inventory()
    assert inventory.total_records == 4
    assert inventory.campus_name_variations == ("North", "north")

    integrity = services.validate_field_integrity()
    assert integrity.summary.issues_by_type == {"INVALID_CAR_NUMBER": 1}

    report = services.get_data_health_report()
    assert report.status == HealthStatus.WARNING
    assert report.health_score == 75

    assert services.detect_outliers().events_per_day.stats.count == 3


@pytest.mark.django_db
def test_health_report_without_data() -> None:
    """An empty store reports NO_DATA."""

    report = services.get_data_health_report()

    assert report.status == HealthStatus.NO_DATA
    assert report.total_records == 0


@pytest.mark.django_db
def test_blank_campus_does_not_overwrite_all_campus_metrics(seeded, create_event) -> None:
    """Records with an empty campus name get their own scope next to the global rows."""

    create_event(campus_location="", car_number=4, queued_at=at(0, 13, 30), wait_time_seconds=60)

    services.aggregate_dashboard_metrics()

    overall = services.get_campus_activity()
    assert overall is not None
    assert overall.total_events == 4

    blank = services.get_campus_activity(campus="")
    assert blank is not None
    assert blank.total_events == 1

    assert services.get_average_wait_time().total_wait_seconds == 1080
    ranking = services.get_all_campus_activity()
    assert [metric.campus_location for metric in ranking.podium] == ["North", "", "South"]
