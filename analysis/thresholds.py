"""Named thresholds shared by the validator, detector, reporter and aggregator.

Every numeric cut-off used by the engine lives here so tests and deployments
can substitute values without touching the analysis logic.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace


@dataclass(frozen=True, slots=True)
class AnalysisThresholds:
    """Threshold configuration for dismissal analysis.

    Attributes:
        max_wait_seconds: Longest plausible wait (2 hours).
        wait_mismatch_tolerance_seconds: Allowed drift between stored and
            recalculated wait time.
        max_car_number: Highest car number considered plausible.
        short_wait_seconds: Waits below this are sampled as too short.
        statistical_sigma: Standard deviations above the mean that mark a
            statistical wait-time outlier.
        min_daily_events: Campus days with fewer events are sampled.
        max_daily_events: Campus days with more events are sampled.
        min_session_seconds: Shorter campus sessions are sampled.
        max_session_seconds: Longer campus sessions are sampled.
        outlier_sample_limit: Cap for every outlier sample list.
        issue_list_limit: Cap for the returned field-integrity issue list.
        healthy_score: Lowest score classified HEALTHY.
        warning_score: Lowest score classified WARNING.
    """

    max_wait_seconds: int = 7200
    wait_mismatch_tolerance_seconds: int = 1
    max_car_number: int = 9999
    short_wait_seconds: int = 30
    statistical_sigma: int = 3
    min_daily_events: int = 5
    max_daily_events: int = 500
    min_session_seconds: int = 300
    max_session_seconds: int = 28800
    outlier_sample_limit: int = 10
    issue_list_limit: int = 100
    healthy_score: int = 90
    warning_score: int = 70

    def with_overrides(self, overrides: Mapping[str, object]) -> AnalysisThresholds:
        """Return a copy with selected values replaced.

        Args:
            overrides: Mapping of attribute name to integer value.

        Returns:
            New AnalysisThresholds instance.

        Raises:
            ValueError: When a key is unknown or a value is not an integer.
        """

        known = {f.name for f in fields(self)}
        cleaned: dict[str, int] = {}
        for key, value in overrides.items():
            if key not in known:
                raise ValueError(f"Unknown analysis threshold: {key!r}.")
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Threshold {key!r} must be an integer, got {value!r}.")
            cleaned[key] = value
        return replace(self, **cleaned)


DEFAULT_THRESHOLDS = AnalysisThresholds()
