"""Data Health reporting for dismissal events.

The reporter runs a fixed battery of checks. Each check contributes at most one
HealthIssue and a fixed severity; the tallies feed a 0-100 score:

    score = max(0, round(100 - (critical + 0.5 * warning) / total * 100))
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Final

from .categories import SEVERITY_ORDER, HealthStatus, IssueField, Severity
from .dto import DismissalEventInput, HealthIssue, HealthReport, HealthSummary
from .events import coerce_events, is_same_utc_day, recalculated_wait_seconds
from .inventory import campus_name_variation_groups
from .stats import round_half_up
from .thresholds import DEFAULT_THRESHOLDS, AnalysisThresholds

RECOMMENDATIONS: Final[dict[IssueField, tuple[str, ...]]] = {
    IssueField.wait_time_seconds: (
        "Run migration to recalculate waitTimeSeconds from timestamps",
        "Add filter in dashboard queries to exclude records with waitTimeSeconds < 0 or > 7200",
    ),
    IssueField.timestamps: (
        "Review cross-day records and consider excluding from session duration calculations",
        "Fix inverted timestamps or mark records as invalid",
    ),
    IssueField.students: (
        "Review records with empty student arrays - may need to be excluded from metrics",
    ),
    IssueField.campus_location: (
        "Run campus name normalization migration to standardize naming",
    ),
    IssueField.car_number: (
        "Review and fix records with invalid car numbers",
    ),
}


def duration_label(seconds: int) -> str:
    """Return a human label for a whole-second duration ("2 hours", "90 minutes")."""

    amount, unit = seconds, "second"
    if seconds and seconds % 3600 == 0:
        amount, unit = seconds // 3600, "hour"
    elif seconds and seconds % 60 == 0:
        amount, unit = seconds // 60, "minute"
    return f"{amount} {unit}" if amount == 1 else f"{amount} {unit}s"


_RecordCheck = tuple[Severity, IssueField, str, Callable[[DismissalEventInput], bool]]


def _record_checks(thresholds: AnalysisThresholds) -> tuple[_RecordCheck, ...]:
    """Return the per-record checks in report order."""

    tolerance = thresholds.wait_mismatch_tolerance_seconds
    return (
        (
            Severity.critical,
            IssueField.wait_time_seconds,
            "Records with negative wait time",
            lambda e: e.wait_time_seconds < 0,
        ),
        (
            Severity.warning,
            IssueField.wait_time_seconds,
            "Records with zero wait time",
            lambda e: e.wait_time_seconds == 0,
        ),
        (
            Severity.warning,
            IssueField.wait_time_seconds,
            f"Records with wait time > {duration_label(thresholds.max_wait_seconds)}",
            lambda e: e.wait_time_seconds > thresholds.max_wait_seconds,
        ),
        (
            Severity.critical,
            IssueField.timestamps,
            "Records where completedAt < queuedAt",
            lambda e: e.completed_at < e.queued_at,
        ),
        (
            Severity.warning,
            IssueField.timestamps,
            "Records spanning multiple days",
            lambda e: not is_same_utc_day(e),
        ),
        (
            Severity.critical,
            IssueField.wait_time_seconds,
            "Records where stored wait time != calculated",
            lambda e: abs(e.wait_time_seconds - recalculated_wait_seconds(e)) > tolerance,
        ),
        (
            Severity.warning,
            IssueField.students,
            "Records with empty studentIds",
            lambda e: not e.student_ids,
        ),
        (
            Severity.critical,
            IssueField.car_number,
            "Records with invalid car number (<= 0)",
            lambda e: e.car_number <= 0,
        ),
    )


def build_health_report(
    records: Iterable[object],
    *,
    thresholds: AnalysisThresholds = DEFAULT_THRESHOLDS,
) -> HealthReport:
    """Build a Data Health report for a record snapshot.

    Args:
        records: Event-like objects (see `analysis.events.coerce_events`).
        thresholds: Threshold configuration.

    Returns:
        HealthReport. An empty snapshot short-circuits to `NO_DATA` with a
        score of 0 before any check runs.

    Raises:
        DismissalRecordError: When a record cannot be read.
    """

    events = coerce_events(records)
    total = len(events)
    if total == 0:
        return HealthReport(status=HealthStatus.NO_DATA, total_records=0, health_score=0)

    issues: list[HealthIssue] = []
    critical_count = 0
    warning_count = 0

    for severity, category, message, predicate in _record_checks(thresholds):
        count = sum(1 for event in events if predicate(event))
        if count == 0:
            continue
        if severity is Severity.critical:
            critical_count += count
        elif severity is Severity.warning:
            warning_count += count
        issues.append(
            HealthIssue(
                severity=severity,
                category=category,
                message=message,
                count=count,
                percentage=count / total * 100,
            )
        )

    variation_issue = _campus_name_variation_issue(events)
    if variation_issue is not None:
        issues.append(variation_issue)

    health_score = health_score_for(critical=critical_count, warning=warning_count, total=total)
    issues.sort(key=lambda issue: SEVERITY_ORDER[issue.severity])

    return HealthReport(
        status=health_status_for(health_score, thresholds=thresholds),
        total_records=total,
        health_score=health_score,
        summary=HealthSummary(
            critical_issues=critical_count,
            warning_issues=warning_count,
            clean_records=total - critical_count - warning_count,
        ),
        issues=tuple(issues),
        recommendations=recommendations_for(issues),
    )


def health_score_for(*, critical: int, warning: int, total: int) -> int:
    """Return the 0-100 health score for critical/warning tallies."""

    if total <= 0:
        return 0
    corrupt_percentage = (critical + warning * 0.5) / total * 100
    return max(0, round_half_up(100 - corrupt_percentage))


def health_status_for(score: int, *, thresholds: AnalysisThresholds = DEFAULT_THRESHOLDS) -> HealthStatus:
    """Classify a health score; boundaries resolve upwards (`>=`)."""

    if score >= thresholds.healthy_score:
        return HealthStatus.HEALTHY
    if score >= thresholds.warning_score:
        return HealthStatus.WARNING
    return HealthStatus.CRITICAL


def recommendations_for(issues: Iterable[HealthIssue]) -> tuple[str, ...]:
    """Return static recommendations for every category present in `issues`."""

    categories = {issue.category for issue in issues}
    recommendations: list[str] = []
    for category, texts in RECOMMENDATIONS.items():
        if category in categories:
            recommendations.extend(texts)
    return tuple(recommendations)


def _campus_name_variation_issue(events: Sequence[DismissalEventInput]) -> HealthIssue | None:
    """Return a single warning when campus names collide after normalization.

    The issue counts variant names rather than records, so it carries a zero
    percentage and does not feed the warning tally.
    """

    variations = campus_name_variation_groups(event.campus_location for event in events)
    if not variations:
        return None
    described = "; ".join(" vs ".join(names) for names in variations)
    return HealthIssue(
        severity=Severity.warning,
        category=IssueField.campus_location,
        message=f"Campus name variations detected: {described}",
        count=sum(len(names) for names in variations),
        percentage=0,
    )
