"""Tests for threshold configuration."""

from __future__ import annotations

import pytest
from django.core.exceptions import ImproperlyConfigured

from analysis.thresholds import DEFAULT_THRESHOLDS
from core.thresholds import load_thresholds


@pytest.mark.unit
def test_with_overrides_replaces_selected_values() -> None:
    """Overrides produce a new instance; defaults are untouched."""

    custom = DEFAULT_THRESHOLDS.with_overrides({"max_wait_seconds": 3600, "max_car_number": 500})

    assert custom.max_wait_seconds == 3600
    assert custom.max_car_number == 500
    assert custom.min_daily_events == DEFAULT_THRESHOLDS.min_daily_events
    assert DEFAULT_THRESHOLDS.max_wait_seconds == 7200


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [{"unknown_threshold": 1}, {"max_wait_seconds": "7200"}, {"healthy_score": True}],
)
def test_with_overrides_rejects_bad_input(overrides) -> None:
    """Unknown keys and non-integer values are rejected."""

    with pytest.raises(ValueError):
        DEFAULT_THRESHOLDS.with_overrides(overrides)


@pytest.mark.integration
def test_load_thresholds_defaults_without_file(settings) -> None:
    """No configured file means the built-in defaults."""

    settings.DISMISSAL_THRESHOLDS_FILE = None

    assert load_thresholds() is DEFAULT_THRESHOLDS


@pytest.mark.integration
def test_load_thresholds_reads_yaml_from_settings(settings, tmp_path) -> None:
    """Values in the configured YAML file override the defaults."""

    path = tmp_path / "thresholds.yaml"
    path.write_text("max_daily_events: 250\nstatistical_sigma: 2\n", encoding="utf-8")
    settings.DISMISSAL_THRESHOLDS_FILE = str(path)

    thresholds = load_thresholds()

    assert thresholds.max_daily_events == 250
    assert thresholds.statistical_sigma == 2
    assert thresholds.max_wait_seconds == 7200


@pytest.mark.integration
def test_load_thresholds_empty_file_uses_defaults(tmp_path) -> None:
    """An empty YAML document applies no overrides."""

    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_thresholds(path) == DEFAULT_THRESHOLDS


@pytest.mark.integration
@pytest.mark.parametrize(
    "content",
    [
        "- 1\n- 2\n",
        "no_such_threshold: 3\n",
        "max_wait_seconds: soon\n",
        "max_wait_seconds: [1,\n",
    ],
)
def test_load_thresholds_rejects_invalid_files(tmp_path, content) -> None:
    """Malformed YAML, lists, unknown keys and non-integers are configuration errors."""

    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ImproperlyConfigured):
        load_thresholds(path)


@pytest.mark.integration
def test_load_thresholds_missing_file(tmp_path) -> None:
    """A configured path that does not exist is a configuration error."""

    with pytest.raises(ImproperlyConfigured, match="Cannot read thresholds file"):
        load_thresholds(tmp_path / "missing.yaml")
