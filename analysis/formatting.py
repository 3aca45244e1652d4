"""Display formatting helpers for dashboard payloads."""

from __future__ import annotations

from collections.abc import Iterable


def format_student_surnames(student_names: Iterable[str]) -> str:
    """Format student names as de-duplicated surnames for compact display.

    The surname is the last whitespace-separated token of each name. Blank
    names are skipped and surnames keep their first-seen order.

    Args:
        student_names: Full student names.

    Returns:
        Comma-separated surnames, e.g. `"Garcia, Lopez"`; empty when no name
        has a surname.
    """

    surnames: dict[str, None] = {}
    for name in student_names:
        parts = name.split()
        if parts:
            surnames[parts[-1]] = None
    return ", ".join(surnames)
