"""DTO types consumed and returned by the dismissal analysis engine.

DTOs are plain data containers used to transport analysis results to services,
views, and management commands. They intentionally avoid any Django/ORM
dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .categories import HealthStatus, IssueField, IssueKind, MetricType, Severity


@dataclass(frozen=True, slots=True)
class DismissalEventInput:
    """A raw dismissal event as seen by the engine.

    Attributes:
        id: Opaque record identifier.
        date: Calendar day string (`YYYY-MM-DD` when well formed).
        campus_location: Free-text campus name.
        car_number: Car number shown on the pickup tag.
        queued_at: Epoch milliseconds when the car joined the queue.
        completed_at: Epoch milliseconds when pickup completed.
        wait_time_seconds: Stored wait time in seconds.
        student_ids: Ordered student ids, or None when the field is missing.
        student_names: Ordered student names, or None when the field is missing.
    """

    id: str
    date: str
    campus_location: str
    car_number: int
    queued_at: int
    completed_at: int
    wait_time_seconds: int
    student_ids: tuple[str, ...] | None = ()
    student_names: tuple[str, ...] | None = ()


@dataclass(frozen=True, slots=True)
class Stats:
    """Descriptive statistics over a numeric sample.

    All values except `count` are rounded to the nearest integer.
    """

    count: int = 0
    min: int = 0
    max: int = 0
    mean: int = 0
    median: int = 0
    std_dev: int = 0


@dataclass(frozen=True, slots=True)
class FieldIssue:
    """A single field-integrity violation found on one record."""

    record_id: str
    field: IssueField
    issue_kind: IssueKind
    value: object
    date: str
    campus_location: str


@dataclass(frozen=True, slots=True)
class FieldIntegritySummary:
    """Counts describing a field-integrity run.

    Attributes:
        total_records: Number of records inspected.
        records_with_issues: Records with at least one issue.
        issues_by_field: Issue counts keyed by field label.
        issues_by_type: Issue counts keyed by issue kind.
    """

    total_records: int
    records_with_issues: int
    issues_by_field: dict[str, int] = field(default_factory=dict)
    issues_by_type: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class FieldIntegrityReport:
    """Result of field-integrity validation.

    Attributes:
        summary: Aggregate counts over every issue found.
        issues: The first issues found, capped for presentation.
        total_issues: Uncapped issue count; may exceed `len(issues)`.
    """

    summary: FieldIntegritySummary
    issues: tuple[FieldIssue, ...]
    total_issues: int


@dataclass(frozen=True, slots=True)
class RecordSample:
    """A sampled record for a wait-time outlier bucket."""

    record_id: str
    value: int
    date: str
    campus: str


@dataclass(frozen=True, slots=True)
class DayCountSample:
    """A sampled (date, campus) group for the events-per-day analysis."""

    date: str
    campus: str
    count: int


@dataclass(frozen=True, slots=True)
class SessionSample:
    """A sampled (date, campus) session for the session-duration analysis."""

    date: str
    campus: str
    duration: float


@dataclass(frozen=True, slots=True)
class WaitTimeThresholds:
    """Cut-offs applied by the wait-time analysis."""

    too_short: int
    too_long: int
    statistical_high: int


@dataclass(frozen=True, slots=True)
class WaitTimeOutliers:
    """Wait-time statistics, thresholds, and bounded samples."""

    stats: Stats
    thresholds: WaitTimeThresholds
    too_short: tuple[RecordSample, ...] = ()
    too_long: tuple[RecordSample, ...] = ()
    statistical_outliers: tuple[RecordSample, ...] = ()


@dataclass(frozen=True, slots=True)
class EventsPerDayThresholds:
    """Cut-offs applied to daily event counts per campus."""

    too_few: int
    too_many: int


@dataclass(frozen=True, slots=True)
class EventsPerDayOutliers:
    """Daily event-volume statistics, thresholds, and bounded samples."""

    stats: Stats
    thresholds: EventsPerDayThresholds
    too_few: tuple[DayCountSample, ...] = ()
    too_many: tuple[DayCountSample, ...] = ()


@dataclass(frozen=True, slots=True)
class SessionDurationThresholds:
    """Cut-offs applied to daily session durations per campus."""

    too_short: int
    too_long: int


@dataclass(frozen=True, slots=True)
class SessionDurationOutliers:
    """Session-duration statistics, thresholds, and bounded samples."""

    stats: Stats
    thresholds: SessionDurationThresholds
    too_short: tuple[SessionSample, ...] = ()
    too_long: tuple[SessionSample, ...] = ()


@dataclass(frozen=True, slots=True)
class OutlierReport:
    """Three independent outlier analyses over one record snapshot."""

    wait_time: WaitTimeOutliers
    events_per_day: EventsPerDayOutliers
    session_duration: SessionDurationOutliers


@dataclass(frozen=True, slots=True)
class HealthIssue:
    """A categorized Data Health finding.

    Attributes:
        severity: Fixed severity of the check that produced the issue.
        category: Field label the issue belongs to.
        message: Human-readable description.
        count: Number of affected records (or variant names for campus naming).
        percentage: `count / total_records * 100`; always 0 for campus naming.
    """

    severity: Severity
    category: IssueField
    message: str
    count: int
    percentage: float


@dataclass(frozen=True, slots=True)
class HealthSummary:
    """Critical/warning tallies behind a health score."""

    critical_issues: int = 0
    warning_issues: int = 0
    clean_records: int = 0


@dataclass(frozen=True, slots=True)
class HealthReport:
    """Composite Data Health report.

    Attributes:
        status: Overall classification derived from `health_score`.
        total_records: Number of records inspected.
        health_score: 0-100 score.
        summary: Critical/warning tallies.
        issues: Issues sorted critical, then warning, then info.
        recommendations: Static remediation hints per affected category.
    """

    status: HealthStatus
    total_records: int
    health_score: int
    summary: HealthSummary = field(default_factory=HealthSummary)
    issues: tuple[HealthIssue, ...] = ()
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive range of calendar-day strings; empty strings when unknown."""

    earliest: str = ""
    latest: str = ""


@dataclass(frozen=True, slots=True)
class CampusInventory:
    """Inventory entry for a single campus name."""

    count: int
    date_range: DateRange
    months: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class MonthInventory:
    """Inventory entry for a single `YYYY-MM` month."""

    count: int
    campuses: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DataInventory:
    """Record counts, date ranges, and campus-name groupings."""

    total_records: int
    date_range: DateRange = field(default_factory=DateRange)
    by_campus: dict[str, CampusInventory] = field(default_factory=dict)
    by_month: dict[str, MonthInventory] = field(default_factory=dict)
    campus_name_variations: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DashboardMetricValues:
    """Aggregated values for one dashboard metric scope.

    Attributes:
        metric_type: Metric family.
        campus_location: Campus name, or None for all campuses.
        month: `YYYY-MM`, or None for all time.
        record_count: Records backing the metric.
        total_events: Event count (campus activity).
        total_wait_seconds: Sum of valid wait times (average wait time).
        avg_wait_seconds: Rounded mean of valid wait times.
        total_session_seconds: Sum of daily session durations.
        avg_session_seconds: Rounded mean daily session duration.
        days_count: Days with a positive session duration.
    """

    metric_type: MetricType
    campus_location: str | None
    month: str | None
    record_count: int
    total_events: int | None = None
    total_wait_seconds: int | None = None
    avg_wait_seconds: int | None = None
    total_session_seconds: int | None = None
    avg_session_seconds: int | None = None
    days_count: int | None = None


@dataclass(frozen=True, slots=True)
class DailyTopArrival:
    """One of the earliest-queued cars on a single day at one campus.

    Attributes:
        date: Calendar day of the entry.
        car_number: Car number.
        queued_at: Epoch milliseconds when the car was queued.
        student_names: Students picked up by the car.
        position: 1-based rank within that day.
    """

    date: str
    car_number: int
    queued_at: int
    student_names: tuple[str, ...]
    position: int


@dataclass(frozen=True, slots=True)
class TopArrivalBucket:
    """Daily top-arrival entries for one (campus, month) bucket."""

    campus_location: str
    month: str
    entries: tuple[DailyTopArrival, ...] = ()


@dataclass(frozen=True, slots=True)
class TopArrivalEntry:
    """A ranked monthly leaderboard entry.

    Attributes:
        car_number: Car number.
        queued_at: Earliest queued time among the car's daily entries.
        student_names: Students from the car's first daily entry.
        appearances: Distinct days the car reached the daily top 5.
        position: 1-based rank in the final leaderboard order.
    """

    car_number: int
    queued_at: int
    student_names: tuple[str, ...]
    appearances: int
    position: int


@dataclass(frozen=True, slots=True)
class TopArrivalLeaderboard:
    """Ranked leaderboard for one (campus, month) bucket."""

    campus_location: str
    month: str
    entries: tuple[TopArrivalEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class CampusActivityRanking:
    """Campus activity metrics ordered for a podium presentation.

    Attributes:
        month: Month filter used, or None for all time.
        podium: The three most active campuses, most active first.
        rest: Remaining campuses in the same order.
    """

    month: str | None
    podium: tuple[DashboardMetricValues, ...] = ()
    rest: tuple[DashboardMetricValues, ...] = ()


@dataclass(frozen=True, slots=True)
class DashboardAggregate:
    """Everything one aggregation run derives from the raw events.

    Attributes:
        metrics: Metric values for every scope.
        top_arrivals: Daily top-arrival entries per (campus, month).
        processed_dates: Calendar days that were reduced, sorted.
    """

    metrics: tuple[DashboardMetricValues, ...] = ()
    top_arrivals: tuple[TopArrivalBucket, ...] = ()
    processed_dates: tuple[str, ...] = ()
