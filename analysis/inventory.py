"""Data inventory for dismissal events.

The inventory answers "what data do we have": record counts, date coverage per
campus and per month, and campus names that only differ by casing or spacing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .dto import CampusInventory, DataInventory, DateRange, MonthInventory
from .events import coerce_events
from .months import month_of

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_campus_key(name: str) -> str:
    """Return the comparison key for a campus name (lowercase, collapsed spaces)."""

    return _WHITESPACE_RE.sub(" ", name.lower()).strip()


def campus_name_variation_groups(names: Iterable[str]) -> tuple[tuple[str, ...], ...]:
    """Group distinct campus names that normalize to the same key.

    Args:
        names: Campus names, possibly repeated.

    Returns:
        One tuple per key shared by two or more distinct names, each listing
        the names in first-seen order. Groups are ordered by first sighting.
    """

    by_key: dict[str, list[str]] = {}
    for name in dict.fromkeys(names):
        by_key.setdefault(normalize_campus_key(name), []).append(name)
    return tuple(tuple(group) for group in by_key.values() if len(group) > 1)


def build_data_inventory(records: Iterable[object]) -> DataInventory:
    """Summarize record counts and coverage.

    Args:
        records: Event-like objects (see `analysis.events.coerce_events`).

    Returns:
        DataInventory. `by_month` is ordered by month key; records with an
        empty date are counted under `"unknown"`. Date ranges ignore empty
        dates.

    Raises:
        DismissalRecordError: When a record cannot be read.
    """

    events = coerce_events(records)
    if not events:
        return DataInventory(total_records=0)

    campus_counts: dict[str, int] = {}
    campus_dates: dict[str, list[str]] = {}
    month_counts: dict[str, int] = {}
    month_campuses: dict[str, dict[str, None]] = {}

    for event in events:
        campus = event.campus_location
        campus_counts[campus] = campus_counts.get(campus, 0) + 1
        dates = campus_dates.setdefault(campus, [])
        if event.date:
            dates.append(event.date)

        month = month_of(event.date)
        month_counts[month] = month_counts.get(month, 0) + 1
        month_campuses.setdefault(month, {})[campus] = None

    by_campus = {
        campus: CampusInventory(
            count=count,
            date_range=_date_range(campus_dates[campus]),
            months=tuple(sorted({date[:7] for date in campus_dates[campus]})),
        )
        for campus, count in campus_counts.items()
    }
    by_month = {
        month: MonthInventory(count=month_counts[month], campuses=tuple(month_campuses[month]))
        for month in sorted(month_counts)
    }
    all_dates = [date for dates in campus_dates.values() for date in dates]
    variations = campus_name_variation_groups(campus_counts)

    return DataInventory(
        total_records=len(events),
        date_range=_date_range(all_dates),
        by_campus=by_campus,
        by_month=by_month,
        campus_name_variations=tuple(name for group in variations for name in group),
    )


def _date_range(dates: list[str]) -> DateRange:
    if not dates:
        return DateRange()
    return DateRange(earliest=min(dates), latest=max(dates))
