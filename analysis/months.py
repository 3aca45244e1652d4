"""Month helpers for dashboard scopes.

Dashboard metrics are bucketed by `YYYY-MM` strings derived from the event
`date` field. These helpers stay pure so views and commands can share the same
validation.
"""

from __future__ import annotations

import re

_MONTH_RE = re.compile(r"[0-9]{4}-(0[1-9]|1[0-2])")

UNKNOWN_MONTH = "unknown"


def parse_month(value: str) -> str:
    """Validate a `YYYY-MM` month filter.

    Args:
        value: Raw month string (surrounding whitespace is ignored).

    Returns:
        The normalized month string.

    Raises:
        ValueError: When the value is not a valid `YYYY-MM` month.
    """

    cleaned = value.strip()
    if not _MONTH_RE.fullmatch(cleaned):
        raise ValueError(f"Invalid month {value!r}; expected YYYY-MM.")
    return cleaned


def month_of(date: str) -> str:
    """Return the `YYYY-MM` prefix of a calendar-day string.

    Empty dates map to `UNKNOWN_MONTH` so they stay visible in inventories.
    """

    if not date:
        return UNKNOWN_MONTH
    return date[:7]
