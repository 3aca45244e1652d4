"""Dashboard metric aggregation for dismissal events.

Aggregation is a wholesale reduction of the full record snapshot. Records are
first reduced per calendar day (per campus and across campuses), then the daily
reductions are summed into four scopes for every metric type:

- `(campus, month)`
- `(campus, None)` (campus, all time)
- `(None, month)` (all campuses, month)
- `(None, None)` (all campuses, all time)

Each metric family filters records on its own terms:

- campus activity counts every record;
- average wait time only uses records with a plausible wait (see
  `is_valid_for_wait_time`);
- session duration only uses records queued and completed on the same UTC day.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .categories import MetricType
from .dto import DailyTopArrival, DashboardAggregate, DashboardMetricValues, DismissalEventInput, TopArrivalBucket
from .events import coerce_events, is_same_utc_day
from .months import month_of
from .rankings import daily_top_arrivals
from .stats import round_half_up
from .thresholds import DEFAULT_THRESHOLDS, AnalysisThresholds

Scope = tuple[str | None, str | None]


@dataclass(slots=True)
class _DailyReduction:
    total_events: int = 0
    total_wait_seconds: int = 0
    valid_wait_count: int = 0
    first_arrival: int | None = None
    last_pickup: int | None = None

    def add(self, event: DismissalEventInput, *, thresholds: AnalysisThresholds) -> None:
        self.total_events += 1
        if is_valid_for_wait_time(event, thresholds=thresholds):
            self.total_wait_seconds += event.wait_time_seconds
            self.valid_wait_count += 1
        if is_same_utc_day(event):
            if self.first_arrival is None or event.queued_at < self.first_arrival:
                self.first_arrival = event.queued_at
            if self.last_pickup is None or event.completed_at > self.last_pickup:
                self.last_pickup = event.completed_at


@dataclass(slots=True)
class _ScopeTotals:
    total_events: int = 0
    total_wait_seconds: int = 0
    valid_wait_count: int = 0
    total_session_seconds: int = 0
    days_count: int = 0

    def add_day(self, day: _DailyReduction) -> None:
        self.total_events += day.total_events
        self.total_wait_seconds += day.total_wait_seconds
        self.valid_wait_count += day.valid_wait_count
        seconds = session_seconds(day.first_arrival, day.last_pickup)
        if seconds > 0:
            self.total_session_seconds += seconds
            self.days_count += 1


def is_valid_for_wait_time(
    event: DismissalEventInput,
    *,
    thresholds: AnalysisThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Return True when an event's stored wait can feed wait-time averages.

    Negative waits, waits above `thresholds.max_wait_seconds`, and inverted
    timestamps are excluded.
    """

    if event.wait_time_seconds < 0 or event.wait_time_seconds > thresholds.max_wait_seconds:
        return False
    return event.completed_at >= event.queued_at


def session_seconds(first_arrival: int | None, last_pickup: int | None) -> int:
    """Return `floor((last_pickup - first_arrival) / 1000)`, or 0 without data."""

    if first_arrival is None or last_pickup is None:
        return 0
    return (last_pickup - first_arrival) // 1000


def average(total: int, count: int) -> int:
    """Return the rounded mean, or 0 when `count` is 0."""

    return round_half_up(total / count) if count > 0 else 0


def build_dashboard_aggregate(
    records: Iterable[object],
    *,
    thresholds: AnalysisThresholds = DEFAULT_THRESHOLDS,
) -> DashboardAggregate:
    """Reduce the full record snapshot into dashboard metrics and top arrivals.

    Args:
        records: Event-like objects (see `analysis.events.coerce_events`).
        thresholds: Threshold configuration.

    Returns:
        DashboardAggregate with metrics for every scope that has at least one
        event, daily top-arrival entries per (campus, month), and the sorted
        list of processed calendar days.

    Raises:
        DismissalRecordError: When a record cannot be read.
    """

    events = coerce_events(records)
    by_date: dict[str, list[DismissalEventInput]] = {}
    for event in events:
        by_date.setdefault(event.date, []).append(event)

    totals: dict[Scope, _ScopeTotals] = {}
    buckets: dict[tuple[str, str], list[DailyTopArrival]] = {}

    for date in sorted(by_date):
        month = month_of(date)
        global_day = _DailyReduction()
        campus_days: dict[str, _DailyReduction] = {}
        campus_events: dict[str, list[DismissalEventInput]] = {}
        for event in by_date[date]:
            global_day.add(event, thresholds=thresholds)
            campus_days.setdefault(event.campus_location, _DailyReduction()).add(event, thresholds=thresholds)
            campus_events.setdefault(event.campus_location, []).append(event)

        for scope in ((None, None), (None, month)):
            totals.setdefault(scope, _ScopeTotals()).add_day(global_day)
        for campus, day in campus_days.items():
            for scope in ((campus, None), (campus, month)):
                totals.setdefault(scope, _ScopeTotals()).add_day(day)

            same_day = [event for event in campus_events[campus] if is_same_utc_day(event)]
            daily = daily_top_arrivals(same_day, date=date)
            if daily:
                buckets.setdefault((campus, month), []).extend(daily)

    metrics: list[DashboardMetricValues] = []
    for metric_type in MetricType:
        for (campus, month), scope_totals in totals.items():
            metrics.append(_metric_values(metric_type, campus, month, scope_totals))

    return DashboardAggregate(
        metrics=tuple(metrics),
        top_arrivals=tuple(
            TopArrivalBucket(campus_location=campus, month=month, entries=tuple(entries))
            for (campus, month), entries in buckets.items()
        ),
        processed_dates=tuple(date for date in sorted(by_date) if date),
    )


def _metric_values(
    metric_type: MetricType,
    campus: str | None,
    month: str | None,
    totals: _ScopeTotals,
) -> DashboardMetricValues:
    if metric_type is MetricType.campus_activity:
        return DashboardMetricValues(
            metric_type=metric_type,
            campus_location=campus,
            month=month,
            record_count=totals.total_events,
            total_events=totals.total_events,
        )
    if metric_type is MetricType.avg_wait_time:
        return DashboardMetricValues(
            metric_type=metric_type,
            campus_location=campus,
            month=month,
            record_count=totals.valid_wait_count,
            total_wait_seconds=totals.total_wait_seconds,
            avg_wait_seconds=average(totals.total_wait_seconds, totals.valid_wait_count),
        )
    return DashboardMetricValues(
        metric_type=metric_type,
        campus_location=campus,
        month=month,
        record_count=totals.total_events,
        total_session_seconds=totals.total_session_seconds,
        avg_session_seconds=average(totals.total_session_seconds, totals.days_count),
        days_count=totals.days_count,
    )


def metrics_for_scope(
    metrics: Sequence[DashboardMetricValues],
    *,
    metric_type: MetricType,
    campus_location: str | None,
    month: str | None,
) -> DashboardMetricValues | None:
    """Return the metric stored for an exact scope, or None."""

    for metric in metrics:
        if (
            metric.metric_type == metric_type
            and metric.campus_location == campus_location
            and metric.month == month
        ):
            return metric
    return None
