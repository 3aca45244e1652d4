"""Statistical and threshold-based outlier detection for dismissal events.

Three independent analyses run over the same snapshot: per-record wait time,
event volume per (date, campus), and session duration per (date, campus).
Absence of data yields zeroed stats and empty samples; nothing here raises for
data-quality reasons.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .dto import (
    DayCountSample,
    DismissalEventInput,
    EventsPerDayOutliers,
    EventsPerDayThresholds,
    OutlierReport,
    RecordSample,
    SessionDurationOutliers,
    SessionDurationThresholds,
    SessionSample,
    WaitTimeOutliers,
    WaitTimeThresholds,
)
from .events import coerce_events
from .stats import compute_stats
from .thresholds import DEFAULT_THRESHOLDS, AnalysisThresholds


@dataclass(slots=True)
class _DayCampusGroup:
    count: int
    first_queued_at: int
    last_completed_at: int


def detect_outliers(
    records: Iterable[object],
    *,
    thresholds: AnalysisThresholds = DEFAULT_THRESHOLDS,
) -> OutlierReport:
    """Run the wait-time, events-per-day, and session-duration analyses.

    Args:
        records: Event-like objects (see `analysis.events.coerce_events`).
        thresholds: Threshold configuration.

    Returns:
        OutlierReport with stats, thresholds, and samples capped at
        `thresholds.outlier_sample_limit` per bucket.

    Raises:
        DismissalRecordError: When a record cannot be read.
    """

    events = coerce_events(records)
    groups = group_by_day_campus(events)
    return OutlierReport(
        wait_time=_wait_time_outliers(events, thresholds=thresholds),
        events_per_day=_events_per_day_outliers(groups, thresholds=thresholds),
        session_duration=_session_duration_outliers(groups, thresholds=thresholds),
    )


def group_by_day_campus(events: Sequence[DismissalEventInput]) -> dict[str, dict[str, _DayCampusGroup]]:
    """Group events by date, then campus, preserving first-seen order.

    Every record participates, including ones flagged elsewhere as cross-day
    or otherwise invalid.
    """

    groups: dict[str, dict[str, _DayCampusGroup]] = {}
    for event in events:
        by_campus = groups.setdefault(event.date, {})
        group = by_campus.get(event.campus_location)
        if group is None:
            by_campus[event.campus_location] = _DayCampusGroup(
                count=1,
                first_queued_at=event.queued_at,
                last_completed_at=event.completed_at,
            )
            continue
        group.count += 1
        group.first_queued_at = min(group.first_queued_at, event.queued_at)
        group.last_completed_at = max(group.last_completed_at, event.completed_at)
    return groups


def _wait_time_outliers(
    events: Sequence[DismissalEventInput],
    *,
    thresholds: AnalysisThresholds,
) -> WaitTimeOutliers:
    stats = compute_stats(event.wait_time_seconds for event in events)
    cutoffs = WaitTimeThresholds(
        too_short=thresholds.short_wait_seconds,
        too_long=thresholds.max_wait_seconds,
        statistical_high=stats.mean + thresholds.statistical_sigma * stats.std_dev,
    )
    limit = thresholds.outlier_sample_limit

    too_short: list[RecordSample] = []
    too_long: list[RecordSample] = []
    statistical: list[RecordSample] = []
    for event in events:
        wait = event.wait_time_seconds
        sample = RecordSample(record_id=event.id, value=wait, date=event.date, campus=event.campus_location)
        if wait < cutoffs.too_short and len(too_short) < limit:
            too_short.append(sample)
        if wait > cutoffs.too_long and len(too_long) < limit:
            too_long.append(sample)
        if wait > cutoffs.statistical_high and len(statistical) < limit:
            statistical.append(sample)

    return WaitTimeOutliers(
        stats=stats,
        thresholds=cutoffs,
        too_short=tuple(too_short),
        too_long=tuple(too_long),
        statistical_outliers=tuple(statistical),
    )


def _events_per_day_outliers(
    groups: dict[str, dict[str, _DayCampusGroup]],
    *,
    thresholds: AnalysisThresholds,
) -> EventsPerDayOutliers:
    cutoffs = EventsPerDayThresholds(too_few=thresholds.min_daily_events, too_many=thresholds.max_daily_events)
    limit = thresholds.outlier_sample_limit

    counts: list[int] = []
    too_few: list[DayCountSample] = []
    too_many: list[DayCountSample] = []
    for date, by_campus in groups.items():
        for campus, group in by_campus.items():
            counts.append(group.count)
            if group.count < cutoffs.too_few and len(too_few) < limit:
                too_few.append(DayCountSample(date=date, campus=campus, count=group.count))
            if group.count > cutoffs.too_many and len(too_many) < limit:
                too_many.append(DayCountSample(date=date, campus=campus, count=group.count))

    return EventsPerDayOutliers(
        stats=compute_stats(counts),
        thresholds=cutoffs,
        too_few=tuple(too_few),
        too_many=tuple(too_many),
    )


def _session_duration_outliers(
    groups: dict[str, dict[str, _DayCampusGroup]],
    *,
    thresholds: AnalysisThresholds,
) -> SessionDurationOutliers:
    cutoffs = SessionDurationThresholds(
        too_short=thresholds.min_session_seconds,
        too_long=thresholds.max_session_seconds,
    )
    limit = thresholds.outlier_sample_limit

    durations: list[float] = []
    too_short: list[SessionSample] = []
    too_long: list[SessionSample] = []
    for date, by_campus in groups.items():
        for campus, group in by_campus.items():
            duration = (group.last_completed_at - group.first_queued_at) / 1000
            if duration <= 0:
                continue
            durations.append(duration)
            if duration < cutoffs.too_short and len(too_short) < limit:
                too_short.append(SessionSample(date=date, campus=campus, duration=duration))
            if duration > cutoffs.too_long and len(too_long) < limit:
                too_long.append(SessionSample(date=date, campus=campus, duration=duration))

    return SessionDurationOutliers(
        stats=compute_stats(durations),
        thresholds=cutoffs,
        too_short=tuple(too_short),
        too_long=tuple(too_long),
    )
