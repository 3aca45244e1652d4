"""Shared category definitions for dismissal analysis.

Values are stable identifiers that appear in reports, persisted rows, and JSON
responses, so they must not be renamed casually.
"""

from __future__ import annotations

from enum import StrEnum


class IssueKind(StrEnum):
    """Kind of field-integrity violation found on a single record."""

    NEGATIVE_VALUE = "NEGATIVE_VALUE"
    ZERO_VALUE = "ZERO_VALUE"
    EXCEEDS_2_HOURS = "EXCEEDS_2_HOURS"
    COMPLETED_BEFORE_QUEUED = "COMPLETED_BEFORE_QUEUED"
    CROSS_DAY_RECORD = "CROSS_DAY_RECORD"
    CALCULATION_MISMATCH = "CALCULATION_MISMATCH"
    INVALID_FORMAT = "INVALID_FORMAT"
    DATE_MISMATCH_WITH_COMPLETED = "DATE_MISMATCH_WITH_COMPLETED"
    EMPTY_VALUE = "EMPTY_VALUE"
    INVALID_CAR_NUMBER = "INVALID_CAR_NUMBER"
    SUSPICIOUS_HIGH_CAR_NUMBER = "SUSPICIOUS_HIGH_CAR_NUMBER"
    EMPTY_ARRAY = "EMPTY_ARRAY"
    IDS_NAMES_LENGTH_MISMATCH = "IDS_NAMES_LENGTH_MISMATCH"


class IssueField(StrEnum):
    """Field label attached to issues.

    The same labels double as Data Health categories, which is why they keep
    the record-store spelling rather than Python attribute names.
    """

    wait_time_seconds = "waitTimeSeconds"
    timestamps = "timestamps"
    date = "date"
    campus_location = "campusLocation"
    car_number = "carNumber"
    student_ids = "studentIds"
    student_names = "studentNames"
    students = "students"


class Severity(StrEnum):
    """Severity of a Data Health issue, ordered critical > warning > info."""

    critical = "critical"
    warning = "warning"
    info = "info"


SEVERITY_ORDER: dict[Severity, int] = {
    Severity.critical: 0,
    Severity.warning: 1,
    Severity.info: 2,
}


class HealthStatus(StrEnum):
    """Overall Data Health classification."""

    NO_DATA = "NO_DATA"
    HEALTHY = "HEALTHY"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class MetricType(StrEnum):
    """Dashboard metric families produced by the aggregator."""

    campus_activity = "campus_activity"
    avg_wait_time = "avg_wait_time"
    session_duration = "session_duration"
