"""Unit tests for top-arrival and campus-activity rankings."""

from __future__ import annotations

import pytest

from analysis.categories import MetricType
from analysis.dto import DailyTopArrival, DashboardMetricValues
from analysis.rankings import daily_top_arrivals, rank_campus_activity, rank_top_arrivals
from conftest import at, build_event, day

pytestmark = pytest.mark.unit


def _entry(car: int, *, date_offset: int, position: int, minute: int = 0) -> DailyTopArrival:
    return DailyTopArrival(
        date=day(date_offset),
        car_number=car,
        queued_at=at(date_offset, 13, minute),
        student_names=(f"Student {car}",),
        position=position,
    )


def test_daily_top_arrivals_keeps_five_earliest_queued() -> None:
    """Daily entries are the earliest five by queue time with positions 1..5."""

    events = [build_event(car_number=car, queued_at=at(0, 13, 60 - car)) for car in range(1, 8)]

    entries = daily_top_arrivals(events, date=day(0))

    assert [entry.car_number for entry in entries] == [7, 6, 5, 4, 3]
    assert [entry.position for entry in entries] == [1, 2, 3, 4, 5]
    assert entries[0].student_names == ("Ana Garcia",)


def test_daily_top_arrivals_breaks_queue_ties_by_car_number() -> None:
    """Cars queued at the same instant are ordered by car number."""

    events = [build_event(car_number=9, queued_at=at(0, 13)), build_event(car_number=2, queued_at=at(0, 13))]

    entries = daily_top_arrivals(events, date=day(0))

    assert [entry.car_number for entry in entries] == [2, 9]


def test_more_appearances_rank_above_better_positions() -> None:
    """A car with 5 appearances beats a car with 3 regardless of position or time."""

    entries = [_entry(50, date_offset=offset, position=5, minute=59) for offset in range(5)]
    entries += [_entry(10, date_offset=offset, position=1, minute=0) for offset in range(3)]

    ranked = rank_top_arrivals(entries)

    assert [(entry.car_number, entry.appearances) for entry in ranked] == [(50, 5), (10, 3)]


def test_equal_appearances_rank_by_best_position() -> None:
    """When appearances tie, the better daily rank wins."""

    entries = [
        _entry(30, date_offset=0, position=3, minute=1),
        _entry(30, date_offset=1, position=2, minute=1),
        _entry(20, date_offset=0, position=1, minute=5),
        _entry(20, date_offset=1, position=4, minute=5),
    ]

    ranked = rank_top_arrivals(entries)

    assert [entry.car_number for entry in ranked] == [20, 30]


def test_full_ties_resolve_by_queue_time_then_car_number() -> None:
    """Equal appearances and positions fall back to earliest queue time, then car number."""

    entries = [
        _entry(40, date_offset=0, position=1, minute=10),
        _entry(41, date_offset=0, position=1, minute=5),
        _entry(39, date_offset=0, position=1, minute=10),
    ]

    ranked = rank_top_arrivals(entries)

    assert [entry.car_number for entry in ranked] == [41, 39, 40]


def test_leaderboard_is_truncated_and_positions_are_reassigned() -> None:
    """Output positions are contiguous 1..N in final order, N <= 5."""

    entries = [_entry(car, date_offset=0, position=min(car, 5)) for car in range(1, 8)]
    entries += [_entry(7, date_offset=1, position=5)]

    ranked = rank_top_arrivals(entries)

    assert len(ranked) == 5
    assert [entry.position for entry in ranked] == [1, 2, 3, 4, 5]
    assert ranked[0].car_number == 7
    assert ranked[0].appearances == 2


def test_repeat_appearance_on_same_day_counts_once() -> None:
    """Appearances count distinct days; the earliest queue time is kept."""

    entries = [
        _entry(8, date_offset=0, position=2, minute=30),
        _entry(8, date_offset=0, position=4, minute=20),
    ]

    (ranked,) = rank_top_arrivals(entries)

    assert ranked.appearances == 1
    assert ranked.queued_at == at(0, 13, 20)
    assert ranked.student_names == ("Student 8",)


def _activity(campus: str | None, events: int, month: str | None = "2025-03") -> DashboardMetricValues:
    return DashboardMetricValues(
        metric_type=MetricType.campus_activity,
        campus_location=campus,
        month=month,
        record_count=events,
        total_events=events,
    )


def test_rank_campus_activity_builds_podium() -> None:
    """The three busiest campuses form the podium; ties sort by name."""

    metrics = [
        _activity("Delta", 10),
        _activity("Alpha", 40),
        _activity("Bravo", 25),
        _activity("Charlie", 25),
        _activity("Echo", 5),
        _activity(None, 105),
        _activity("Alpha", 999, month="2025-04"),
        DashboardMetricValues(
            metric_type=MetricType.avg_wait_time,
            campus_location="Zulu",
            month="2025-03",
            record_count=1,
        ),
    ]

    ranking = rank_campus_activity(metrics, month="2025-03")

    assert [metric.campus_location for metric in ranking.podium] == ["Alpha", "Bravo", "Charlie"]
    assert [metric.campus_location for metric in ranking.rest] == ["Delta", "Echo"]
    assert ranking.month == "2025-03"


def test_rank_campus_activity_all_time_scope() -> None:
    """A None month ranks the all-time per-campus rows."""

    metrics = [_activity("Alpha", 3, month=None), _activity("Bravo", 4, month=None), _activity("Alpha", 9)]

    ranking = rank_campus_activity(metrics, month=None)

    assert [metric.campus_location for metric in ranking.podium] == ["Bravo", "Alpha"]
    assert ranking.rest == ()
