"""Unit tests for display formatting helpers."""

from __future__ import annotations

import pytest

from analysis.formatting import format_student_surnames

pytestmark = pytest.mark.unit


def test_format_student_surnames_deduplicates_in_first_seen_order() -> None:
    """Siblings share one surname entry; blank names are skipped."""

    names = ["Ana Garcia", "Luis Garcia", "Sofia  Lopez ", "", "Mia"]

    assert format_student_surnames(names) == "Garcia, Lopez, Mia"


def test_format_student_surnames_empty() -> None:
    """No names formats to an empty string."""

    assert format_student_surnames([]) == ""
