"""Record coercion and calendar helpers for dismissal events.

The engine accepts any iterable of event-like objects (ORM rows, DTOs, test
doubles) and coerces them into `DismissalEventInput`. Coercion fails fast: an
unreadable record aborts the whole analysis because no report has a
partial-result contract.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from .dto import DismissalEventInput

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_REQUIRED_INT_FIELDS = ("car_number", "queued_at", "completed_at", "wait_time_seconds")


class DismissalRecordError(ValueError):
    """Raised when a record cannot be read as a dismissal event."""

    def __init__(self, *, record_id: object, field: str, reason: str) -> None:
        """Initialize the error.

        Args:
            record_id: Identifier of the offending record, when known.
            field: Attribute that could not be read.
            reason: Short explanation.
        """

        super().__init__(f"Unreadable dismissal record {record_id!r}: {field} {reason}.")
        self.record_id = record_id
        self.field = field
        self.reason = reason


def coerce_events(records: Iterable[object]) -> tuple[DismissalEventInput, ...]:
    """Coerce event-like objects into engine inputs.

    Args:
        records: Objects exposing `id`, `date`, `campus_location`, `car_number`,
            `queued_at`, `completed_at`, `wait_time_seconds`, and optionally
            `student_ids` / `student_names`.

    Returns:
        A tuple of DismissalEventInput in input order.

    Raises:
        DismissalRecordError: When any record is missing a required attribute
            or carries a value of the wrong type.
    """

    return tuple(coerce_event(record) for record in records)


def coerce_event(record: object) -> DismissalEventInput:
    """Coerce a single event-like object; see `coerce_events`."""

    if isinstance(record, DismissalEventInput):
        return record

    record_id = getattr(record, "id", None)
    if record_id is None:
        raise DismissalRecordError(record_id=None, field="id", reason="is missing")

    ints: dict[str, int] = {}
    for name in _REQUIRED_INT_FIELDS:
        value = getattr(record, name, None)
        if isinstance(value, bool) or not isinstance(value, int):
            raise DismissalRecordError(record_id=record_id, field=name, reason=f"must be an integer, got {value!r}")
        ints[name] = value

    for name in ("queued_at", "completed_at"):
        try:
            utc_day(ints[name])
        except OverflowError as exc:
            raise DismissalRecordError(
                record_id=record_id, field=name, reason="is outside the supported timestamp range"
            ) from exc

    return DismissalEventInput(
        id=str(record_id),
        date=_coerce_text(record, "date", record_id=record_id),
        campus_location=_coerce_text(record, "campus_location", record_id=record_id),
        student_ids=_coerce_names(record, "student_ids", record_id=record_id),
        student_names=_coerce_names(record, "student_names", record_id=record_id),
        **ints,
    )


def utc_day(timestamp_ms: int) -> str:
    """Return the UTC calendar day (`YYYY-MM-DD`) of an epoch-millisecond timestamp.

    Raises:
        OverflowError: When the timestamp is outside the datetime range.
    """

    return (_EPOCH + timedelta(milliseconds=timestamp_ms)).date().isoformat()


def is_same_utc_day(event: DismissalEventInput) -> bool:
    """Return True when an event was queued and completed on the same UTC day."""

    return utc_day(event.queued_at) == utc_day(event.completed_at)


def recalculated_wait_seconds(event: DismissalEventInput) -> int:
    """Return `floor((completed_at - queued_at) / 1000)` for an event."""

    return (event.completed_at - event.queued_at) // 1000


def _coerce_text(record: object, name: str, *, record_id: object) -> str:
    value = getattr(record, name, None)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DismissalRecordError(record_id=record_id, field=name, reason=f"must be a string, got {value!r}")
    return value


def _coerce_names(record: object, name: str, *, record_id: object) -> tuple[str, ...] | None:
    value = getattr(record, name, None)
    if value is None:
        return None
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise DismissalRecordError(record_id=record_id, field=name, reason=f"must be a list, got {value!r}")
    return tuple(str(item) for item in value)
