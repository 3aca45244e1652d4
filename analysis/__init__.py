"""Pure analysis package for campusDismissal.

This package contains deterministic, testable computations that operate on
in-memory dismissal records and return DTOs. It must not import Django or
perform any database I/O.
"""

from .aggregations import build_dashboard_aggregate
from .events import DismissalRecordError
from .health import build_health_report
from .inventory import build_data_inventory
from .outliers import detect_outliers
from .rankings import rank_campus_activity, rank_top_arrivals
from .thresholds import DEFAULT_THRESHOLDS, AnalysisThresholds
from .validation import validate_field_integrity

__all__ = [
    "AnalysisThresholds",
    "DEFAULT_THRESHOLDS",
    "DismissalRecordError",
    "build_dashboard_aggregate",
    "build_data_inventory",
    "build_health_report",
    "detect_outliers",
    "rank_campus_activity",
    "rank_top_arrivals",
    "validate_field_integrity",
]
