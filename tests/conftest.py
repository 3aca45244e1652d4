"""Pytest fixtures shared across unit and Django integration tests."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Sequence
from datetime import date, timedelta

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group

from analysis.dto import DismissalEventInput

# 2025-03-03T00:00:00Z
BASE_DAY = date(2025, 3, 3)
BASE_DAY_MS = 1_740_960_000_000
DAY_MS = 86_400_000


def day(offset: int = 0) -> str:
    """Return the `YYYY-MM-DD` string `offset` days after the base day."""

    return (BASE_DAY + timedelta(days=offset)).isoformat()


def at(offset: int = 0, hour: int = 14, minute: int = 0, second: int = 0) -> int:
    """Return epoch milliseconds for a UTC time `offset` days after the base day."""

    return BASE_DAY_MS + offset * DAY_MS + ((hour * 60 + minute) * 60 + second) * 1000


_ids = itertools.count(1)


def build_event(**overrides: object) -> DismissalEventInput:
    """Return a well-formed event with selected fields overridden.

    `completed_at` defaults to `queued_at + wait_time_seconds`, and `date`
    defaults to the base day.
    """

    wait = overrides.pop("wait_time_seconds", 300)
    queued_at = overrides.pop("queued_at", at(0, 14, 0))
    completed_at = overrides.pop("completed_at", queued_at + wait * 1000)
    values: dict[str, object] = {
        "id": f"evt-{next(_ids)}",
        "date": day(0),
        "campus_location": "North Campus",
        "car_number": 12,
        "queued_at": queued_at,
        "completed_at": completed_at,
        "wait_time_seconds": wait,
        "student_ids": ("s-1",),
        "student_names": ("Ana Garcia",),
    }
    values.update(overrides)
    return DismissalEventInput(**values)  # type: ignore[arg-type]


@pytest.fixture
def make_event() -> Callable[..., DismissalEventInput]:
    """Return the in-memory event factory."""

    return build_event


@pytest.fixture
def create_event(db) -> Callable[..., object]:
    """Return a factory that persists DismissalEvent rows."""

    from dismissals.models import DismissalEvent

    def _create(**overrides: object) -> DismissalEvent:
        event = build_event(**overrides)
        return DismissalEvent.objects.create(
            date=event.date,
            campus_location=event.campus_location,
            car_number=event.car_number,
            queued_at=event.queued_at,
            completed_at=event.completed_at,
            wait_time_seconds=event.wait_time_seconds,
            student_ids=list(event.student_ids or ()),
            student_names=list(event.student_names or ()),
        )

    return _create


@pytest.fixture
def user(db):
    """Return a plain User with no role group (resolves to viewer)."""

    user_model = get_user_model()
    return user_model.objects.create_user(username="alice", password="password")


@pytest.fixture
def admin_user(db):
    """Return a User in the `admin` role group."""

    user_model = get_user_model()
    admin = user_model.objects.create_user(username="principal", password="password")
    group, _ = Group.objects.get_or_create(name="admin")
    admin.groups.add(group)
    return admin


@pytest.fixture
def auth_client(client, user):
    """Return a Django test client authenticated as the viewer user."""

    client.force_login(user)
    return client


@pytest.fixture
def admin_client(client, admin_user):
    """Return a Django test client authenticated as an admin-role user."""

    client.force_login(admin_user)
    return client


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite must be runnable by intent:
    - `unit`: pure, fast tests with no database access.
    - `integration`: tests touching Django, database, views, commands, or IO.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
