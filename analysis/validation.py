"""Field integrity validation for dismissal events.

Each record is checked independently; a record may yield zero or many issues
and no check short-circuits another (except the documented else-if chains for
wait time and car number).
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable

from .categories import IssueField, IssueKind
from .dto import DismissalEventInput, FieldIntegrityReport, FieldIntegritySummary, FieldIssue
from .events import coerce_events, recalculated_wait_seconds, utc_day
from .thresholds import DEFAULT_THRESHOLDS, AnalysisThresholds

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def validate_field_integrity(
    records: Iterable[object],
    *,
    thresholds: AnalysisThresholds = DEFAULT_THRESHOLDS,
) -> FieldIntegrityReport:
    """Validate every record and summarize the issues found.

    Args:
        records: Event-like objects (see `analysis.events.coerce_events`).
        thresholds: Threshold configuration.

    Returns:
        FieldIntegrityReport whose `issues` list is capped at
        `thresholds.issue_list_limit`; `total_issues` is the uncapped count.

    Raises:
        DismissalRecordError: When a record cannot be read.
    """

    events = coerce_events(records)
    issues: list[FieldIssue] = []
    records_with_issues = 0
    by_field: Counter[str] = Counter()
    by_type: Counter[str] = Counter()

    for event in events:
        record_issues = record_field_issues(event, thresholds=thresholds)
        if record_issues:
            records_with_issues += 1
            issues.extend(record_issues)
        for issue in record_issues:
            by_field[issue.field] += 1
            by_type[issue.issue_kind] += 1

    return FieldIntegrityReport(
        summary=FieldIntegritySummary(
            total_records=len(events),
            records_with_issues=records_with_issues,
            issues_by_field={str(key): count for key, count in by_field.items()},
            issues_by_type={str(key): count for key, count in by_type.items()},
        ),
        issues=tuple(issues[: thresholds.issue_list_limit]),
        total_issues=len(issues),
    )


def record_field_issues(
    event: DismissalEventInput,
    *,
    thresholds: AnalysisThresholds = DEFAULT_THRESHOLDS,
) -> list[FieldIssue]:
    """Return every field-integrity issue for a single event, in check order."""

    found: list[FieldIssue] = []

    def flag(field: IssueField, kind: IssueKind, value: object, *, campus: str | None = None) -> None:
        found.append(
            FieldIssue(
                record_id=event.id,
                field=field,
                issue_kind=kind,
                value=value,
                date=event.date,
                campus_location=event.campus_location if campus is None else campus,
            )
        )

    wait = event.wait_time_seconds
    if wait < 0:
        flag(IssueField.wait_time_seconds, IssueKind.NEGATIVE_VALUE, wait)
    elif wait == 0:
        flag(IssueField.wait_time_seconds, IssueKind.ZERO_VALUE, wait)
    elif wait > thresholds.max_wait_seconds:
        flag(IssueField.wait_time_seconds, IssueKind.EXCEEDS_2_HOURS, wait)

    if event.completed_at < event.queued_at:
        flag(
            IssueField.timestamps,
            IssueKind.COMPLETED_BEFORE_QUEUED,
            {"queued_at": event.queued_at, "completed_at": event.completed_at},
        )

    queued_date = utc_day(event.queued_at)
    completed_date = utc_day(event.completed_at)
    if queued_date != completed_date:
        flag(
            IssueField.timestamps,
            IssueKind.CROSS_DAY_RECORD,
            {"queued_date": queued_date, "completed_date": completed_date},
        )

    calculated = recalculated_wait_seconds(event)
    diff = abs(wait - calculated)
    if diff > thresholds.wait_mismatch_tolerance_seconds:
        flag(
            IssueField.wait_time_seconds,
            IssueKind.CALCULATION_MISMATCH,
            {"stored": wait, "calculated": calculated, "diff": diff},
        )

    if not _DATE_RE.fullmatch(event.date):
        flag(IssueField.date, IssueKind.INVALID_FORMAT, event.date)

    if event.date != completed_date:
        flag(
            IssueField.date,
            IssueKind.DATE_MISMATCH_WITH_COMPLETED,
            {"stored_date": event.date, "calculated_date": completed_date},
        )

    if not event.campus_location.strip():
        flag(
            IssueField.campus_location,
            IssueKind.EMPTY_VALUE,
            event.campus_location,
            campus=event.campus_location or "(empty)",
        )

    if event.car_number <= 0:
        flag(IssueField.car_number, IssueKind.INVALID_CAR_NUMBER, event.car_number)
    elif event.car_number > thresholds.max_car_number:
        flag(IssueField.car_number, IssueKind.SUSPICIOUS_HIGH_CAR_NUMBER, event.car_number)

    if not event.student_ids:
        flag(IssueField.student_ids, IssueKind.EMPTY_ARRAY, _list_or_none(event.student_ids))
    if not event.student_names:
        flag(IssueField.student_names, IssueKind.EMPTY_ARRAY, _list_or_none(event.student_names))

    if (
        event.student_ids is not None
        and event.student_names is not None
        and len(event.student_ids) != len(event.student_names)
    ):
        flag(
            IssueField.students,
            IssueKind.IDS_NAMES_LENGTH_MISMATCH,
            {"ids_count": len(event.student_ids), "names_count": len(event.student_names)},
        )

    return found


def _list_or_none(values: tuple[str, ...] | None) -> list[str] | None:
    return None if values is None else list(values)
