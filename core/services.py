"""Service-layer functions for the core app.

Services in `core` coordinate Django persistence concerns (ORM, transactions)
with the pure `analysis` engine. Every diagnostic reads the full dismissal
snapshot once and hands it to the engine; dashboard reads go through the
metric store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction

from analysis.aggregations import build_dashboard_aggregate
from analysis.categories import MetricType
from analysis.dto import (
    CampusActivityRanking,
    DashboardMetricValues,
    DataInventory,
    FieldIntegrityReport,
    HealthReport,
    OutlierReport,
    TopArrivalLeaderboard,
)
from analysis.health import build_health_report
from analysis.inventory import build_data_inventory
from analysis.outliers import detect_outliers as detect_outliers_in
from analysis.rankings import rank_campus_activity, rank_top_arrivals
from analysis.validation import validate_field_integrity as validate_field_integrity_of
from core.metric_store import ClearResult, DashboardMetricStore
from core.thresholds import load_thresholds
from dismissals.models import DismissalEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AggregationResult:
    """Summary of one aggregation run.

    Attributes:
        processed_dates: Calendar days reduced in this run.
        total_records: Dismissal events read.
        metrics_written: Metric rows inserted or replaced.
        top_arrival_buckets: (campus, month) top-arrival rows written.
        pruned_rows: Stale derived rows removed because their scope vanished.
    """

    processed_dates: int
    total_records: int
    metrics_written: int
    top_arrival_buckets: int
    pruned_rows: int


def load_dismissal_events() -> list[DismissalEvent]:
    """Return every stored dismissal event (full-collection scan)."""

    return list(DismissalEvent.objects.all())


def get_data_inventory() -> DataInventory:
    """Return record counts, date coverage and campus-name groupings."""

    return build_data_inventory(load_dismissal_events())


def validate_field_integrity() -> FieldIntegrityReport:
    """Validate every stored dismissal event."""

    return validate_field_integrity_of(load_dismissal_events(), thresholds=load_thresholds())


def detect_outliers() -> OutlierReport:
    """Run outlier detection over every stored dismissal event."""

    return detect_outliers_in(load_dismissal_events(), thresholds=load_thresholds())


def get_data_health_report() -> HealthReport:
    """Build the Data Health report for every stored dismissal event."""

    return build_health_report(load_dismissal_events(), thresholds=load_thresholds())


def get_campus_activity(*, campus: str | None = None, month: str | None = None) -> DashboardMetricValues | None:
    """Return the stored campus-activity metric for an exact scope."""

    return _find_metric(MetricType.campus_activity, campus=campus, month=month)


def get_average_wait_time(*, campus: str | None = None, month: str | None = None) -> DashboardMetricValues | None:
    """Return the stored average-wait-time metric for an exact scope."""

    return _find_metric(MetricType.avg_wait_time, campus=campus, month=month)


def get_session_duration(*, campus: str | None = None, month: str | None = None) -> DashboardMetricValues | None:
    """Return the stored session-duration metric for an exact scope."""

    return _find_metric(MetricType.session_duration, campus=campus, month=month)


def get_top_arrivals(*, campus: str | None = None, month: str | None = None) -> tuple[TopArrivalLeaderboard, ...]:
    """Rank stored daily top arrivals into monthly leaderboards.

    Args:
        campus: Optional campus filter.
        month: Optional `YYYY-MM` filter.

    Returns:
        One leaderboard per stored (campus, month) bucket matching the filters.
    """

    buckets = DashboardMetricStore().read_top_arrivals(campus_location=campus, month=month)
    return tuple(
        TopArrivalLeaderboard(
            campus_location=bucket.campus_location,
            month=bucket.month,
            entries=rank_top_arrivals(bucket.entries),
        )
        for bucket in buckets
    )


def get_all_campus_activity(*, month: str | None = None) -> CampusActivityRanking:
    """Return per-campus activity for a month (or all time) ordered for a podium."""

    return rank_campus_activity(DashboardMetricStore().read_all_metrics(), month=month)


def aggregate_dashboard_metrics() -> AggregationResult:
    """Recompute every derived dashboard row from the raw events.

    The run replaces metric and top-arrival rows by key, removes rows whose
    scope no longer exists, and writes processed-date markers, all in one
    transaction.

    Returns:
        AggregationResult with row counts.

    Raises:
        DismissalRecordError: When a stored record cannot be read.
    """

    events = load_dismissal_events()
    aggregate = build_dashboard_aggregate(events, thresholds=load_thresholds())
    store = DashboardMetricStore()

    with transaction.atomic():
        for values in aggregate.metrics:
            store.upsert_metric(values)
        for bucket in aggregate.top_arrivals:
            store.upsert_top_arrivals(bucket)
        pruned = store.prune(keep_metrics=aggregate.metrics, keep_buckets=aggregate.top_arrivals)
        store.mark_dates_processed(aggregate.processed_dates)

    result = AggregationResult(
        processed_dates=len(aggregate.processed_dates),
        total_records=len(events),
        metrics_written=len(aggregate.metrics),
        top_arrival_buckets=len(aggregate.top_arrivals),
        pruned_rows=pruned,
    )
    logger.info(
        "[Dashboard Init] Processed %s dates with %s records (%s metrics, %s top-arrival buckets)",
        result.processed_dates,
        result.total_records,
        result.metrics_written,
        result.top_arrival_buckets,
    )
    return result


def clear_dashboard_metrics() -> ClearResult:
    """Delete every derived metric, top-arrival and processed-date row.

    Must not run concurrently with `aggregate_dashboard_metrics`.
    """

    result = DashboardMetricStore().bulk_clear()
    logger.info(
        "[Dashboard Clear] Deleted %s metrics, %s top arrivals, and %s processed dates",
        result.deleted_metrics,
        result.deleted_top_arrivals,
        result.deleted_processed_dates,
    )
    return result


def normalize_campus_names(*, source: str, target: str, write: bool) -> int:
    """Rename a campus on stored dismissal events.

    Args:
        source: Exact campus name to replace.
        target: Replacement campus name.
        write: When False, only count the affected records.

    Returns:
        Number of records that match `source` (and were renamed when `write`).

    Raises:
        ValueError: When either name is blank or both are equal.
    """

    if not source.strip() or not target.strip():
        raise ValueError("Campus names must not be blank.")
    if source == target:
        raise ValueError("Source and target campus names are identical.")

    matching = DismissalEvent.objects.filter(campus_location=source)
    if not write:
        return matching.count()

    with transaction.atomic():
        updated = matching.update(campus_location=target)
    logger.info("[Migration] Updated %s records from %r to %r", updated, source, target)
    return updated


def _find_metric(metric_type: MetricType, *, campus: str | None, month: str | None) -> DashboardMetricValues | None:
    return DashboardMetricStore().find_metric(metric_type=metric_type, campus_location=campus, month=month)
