"""Top-arrival and campus-activity rankings.

The monthly leaderboard is ranked from the union of daily top-5 entries for a
(campus, month) bucket. Ranking uses a total order:

1. `appearances` descending (distinct days in the daily top 5),
2. `position` ascending (best daily rank),
3. `queued_at` ascending (earliest queued time),
4. `car_number` ascending.

Output positions are reassigned `1..N` from the final order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from .categories import MetricType
from .dto import CampusActivityRanking, DailyTopArrival, DashboardMetricValues, DismissalEventInput, TopArrivalEntry

DAILY_TOP_SIZE: Final[int] = 5
LEADERBOARD_SIZE: Final[int] = 5
PODIUM_SIZE: Final[int] = 3


@dataclass(slots=True)
class _CarTally:
    car_number: int
    student_names: tuple[str, ...]
    queued_at: int
    best_position: int
    days: set[str]


def daily_top_arrivals(
    events: Iterable[DismissalEventInput],
    *,
    date: str,
    limit: int = DAILY_TOP_SIZE,
) -> tuple[DailyTopArrival, ...]:
    """Return the earliest-queued cars of one campus-day.

    Args:
        events: Events for a single (campus, date); callers pass only
            same-day records.
        date: Calendar day the events belong to.
        limit: Number of entries to keep.

    Returns:
        Entries ordered by `queued_at` (ties by car number, then record id)
        with positions `1..N`.
    """

    ordered = sorted(events, key=lambda event: (event.queued_at, event.car_number, event.id))
    return tuple(
        DailyTopArrival(
            date=date,
            car_number=event.car_number,
            queued_at=event.queued_at,
            student_names=tuple(event.student_names or ()),
            position=index,
        )
        for index, event in enumerate(ordered[:limit], start=1)
    )


def rank_top_arrivals(
    entries: Iterable[DailyTopArrival],
    *,
    limit: int = LEADERBOARD_SIZE,
) -> tuple[TopArrivalEntry, ...]:
    """Rank daily top-arrival entries into a monthly leaderboard.

    Args:
        entries: Union of daily top-5 entries for one (campus, month).
        limit: Leaderboard length.

    Returns:
        Up to `limit` entries in rank order with contiguous positions.
    """

    tallies: dict[int, _CarTally] = {}
    for entry in entries:
        tally = tallies.get(entry.car_number)
        if tally is None:
            tallies[entry.car_number] = _CarTally(
                car_number=entry.car_number,
                student_names=entry.student_names,
                queued_at=entry.queued_at,
                best_position=entry.position,
                days={entry.date},
            )
            continue
        tally.days.add(entry.date)
        tally.queued_at = min(tally.queued_at, entry.queued_at)
        tally.best_position = min(tally.best_position, entry.position)

    ranked = sorted(
        tallies.values(),
        key=lambda tally: (-len(tally.days), tally.best_position, tally.queued_at, tally.car_number),
    )
    return tuple(
        TopArrivalEntry(
            car_number=tally.car_number,
            queued_at=tally.queued_at,
            student_names=tally.student_names,
            appearances=len(tally.days),
            position=index,
        )
        for index, tally in enumerate(ranked[:limit], start=1)
    )


def rank_campus_activity(
    metrics: Iterable[DashboardMetricValues],
    *,
    month: str | None,
    podium_size: int = PODIUM_SIZE,
) -> CampusActivityRanking:
    """Order per-campus activity metrics for a podium presentation.

    Args:
        metrics: Stored metric values of any type and scope.
        month: Month scope to rank, or None for all time.
        podium_size: Number of campuses on the podium.

    Returns:
        CampusActivityRanking sorted by `total_events` descending, ties by
        campus name.
    """

    campus_metrics = [
        metric
        for metric in metrics
        if metric.metric_type == MetricType.campus_activity
        and metric.campus_location is not None
        and metric.month == month
    ]
    campus_metrics.sort(key=lambda metric: (-(metric.total_events or 0), metric.campus_location))
    return CampusActivityRanking(
        month=month,
        podium=tuple(campus_metrics[:podium_size]),
        rest=tuple(campus_metrics[podium_size:]),
    )
