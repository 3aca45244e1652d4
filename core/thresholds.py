"""Load analysis thresholds, optionally overridden from a YAML file."""

from __future__ import annotations

from pathlib import Path

import yaml
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from analysis.thresholds import DEFAULT_THRESHOLDS, AnalysisThresholds


def load_thresholds(path: str | Path | None = None) -> AnalysisThresholds:
    """Return the thresholds for this deployment.

    Args:
        path: Optional YAML file path. Defaults to
            `settings.DISMISSAL_THRESHOLDS_FILE`; when neither is set the
            built-in defaults are returned.

    Returns:
        AnalysisThresholds with any overrides from the YAML mapping applied.

    Raises:
        ImproperlyConfigured: When the file is missing, is not valid YAML, is
            not a mapping, or names an unknown threshold or a non-integer value.
    """

    source = path if path is not None else getattr(settings, "DISMISSAL_THRESHOLDS_FILE", None)
    if not source:
        return DEFAULT_THRESHOLDS

    threshold_path = Path(source)
    try:
        raw = threshold_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ImproperlyConfigured(f"Cannot read thresholds file {threshold_path}: {exc}") from exc

    try:
        payload = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ImproperlyConfigured(f"Thresholds file {threshold_path} is not valid YAML: {exc}") from exc
    if not isinstance(payload, dict):
        raise ImproperlyConfigured(f"Thresholds file {threshold_path} must contain a mapping.")
    try:
        return DEFAULT_THRESHOLDS.with_overrides(payload)
    except ValueError as exc:
        raise ImproperlyConfigured(f"Invalid thresholds file {threshold_path}: {exc}") from exc
