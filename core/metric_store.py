"""Store interface over the derived dashboard tables.

The aggregation job and the clearing command are the only writers; dashboard
reads go through the same interface. Scope values use `None` for "all
campuses" / "all time", stored as NULL; an empty campus name stays `""`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass

from django.db import transaction

from analysis.categories import MetricType
from analysis.dto import DailyTopArrival, DashboardMetricValues, TopArrivalBucket
from core.models import DashboardMetric, DashboardProcessedDate, DashboardTopArrivals

_VALUE_FIELDS = (
    "record_count",
    "total_events",
    "total_wait_seconds",
    "avg_wait_seconds",
    "total_session_seconds",
    "avg_session_seconds",
    "days_count",
)


@dataclass(frozen=True, slots=True)
class ClearResult:
    """Row counts removed by a bulk clear."""

    deleted_metrics: int
    deleted_top_arrivals: int
    deleted_processed_dates: int


class DashboardMetricStore:
    """Read-all / upsert-by-key / bulk-clear access to the derived tables."""

    def read_all_metrics(self) -> tuple[DashboardMetricValues, ...]:
        """Return every stored metric as engine DTOs."""

        return tuple(_metric_from_row(row) for row in DashboardMetric.objects.all())

    def find_metric(
        self,
        *,
        metric_type: MetricType,
        campus_location: str | None,
        month: str | None,
    ) -> DashboardMetricValues | None:
        """Return the metric stored for an exact scope, or None."""

        row = DashboardMetric.objects.filter(
            metric_type=metric_type.value,
            campus_location=campus_location,
            month=month,
        ).first()
        return None if row is None else _metric_from_row(row)

    def upsert_metric(self, values: DashboardMetricValues) -> DashboardMetric:
        """Insert or replace the metric row for `values`' scope."""

        row, _ = DashboardMetric.objects.update_or_create(
            metric_type=values.metric_type.value,
            campus_location=values.campus_location,
            month=values.month,
            defaults={name: getattr(values, name) for name in _VALUE_FIELDS},
        )
        return row

    def read_top_arrivals(
        self,
        *,
        campus_location: str | None = None,
        month: str | None = None,
    ) -> tuple[TopArrivalBucket, ...]:
        """Return stored daily top-arrival buckets, optionally filtered."""

        rows = DashboardTopArrivals.objects.all()
        if campus_location is not None:
            rows = rows.filter(campus_location=campus_location)
        if month is not None:
            rows = rows.filter(month=month)
        return tuple(_bucket_from_row(row) for row in rows)

    def upsert_top_arrivals(self, bucket: TopArrivalBucket) -> DashboardTopArrivals:
        """Insert or replace the daily entries for a (campus, month) bucket."""

        row, _ = DashboardTopArrivals.objects.update_or_create(
            campus_location=bucket.campus_location,
            month=bucket.month,
            defaults={"entries": [_entry_payload(entry) for entry in bucket.entries]},
        )
        return row

    def prune(
        self,
        *,
        keep_metrics: Iterable[DashboardMetricValues],
        keep_buckets: Iterable[TopArrivalBucket],
    ) -> int:
        """Delete metric and top-arrival rows whose scope is not being kept.

        Returns:
            Number of rows deleted across both tables.
        """

        metric_keys = {
            (values.metric_type.value, values.campus_location, values.month) for values in keep_metrics
        }
        bucket_keys = {(bucket.campus_location, bucket.month) for bucket in keep_buckets}

        stale_metric_ids = [
            pk
            for pk, metric_type, campus, month in DashboardMetric.objects.values_list(
                "id", "metric_type", "campus_location", "month"
            )
            if (metric_type, campus, month) not in metric_keys
        ]
        stale_bucket_ids = [
            pk
            for pk, campus, month in DashboardTopArrivals.objects.values_list("id", "campus_location", "month")
            if (campus, month) not in bucket_keys
        ]
        deleted_metrics, _ = DashboardMetric.objects.filter(id__in=stale_metric_ids).delete()
        deleted_buckets, _ = DashboardTopArrivals.objects.filter(id__in=stale_bucket_ids).delete()
        return deleted_metrics + deleted_buckets

    def mark_dates_processed(self, dates: Iterable[str]) -> int:
        """Record processed-date markers; returns the number of markers written."""

        count = 0
        for date in dates:
            DashboardProcessedDate.objects.update_or_create(date=date)
            count += 1
        return count

    def processed_dates(self) -> tuple[str, ...]:
        """Return every processed date, sorted."""

        return tuple(DashboardProcessedDate.objects.order_by("date").values_list("date", flat=True))

    def bulk_clear(self) -> ClearResult:
        """Delete every derived row and report per-table counts."""

        with transaction.atomic():
            deleted_metrics, _ = DashboardMetric.objects.all().delete()
            deleted_top_arrivals, _ = DashboardTopArrivals.objects.all().delete()
            deleted_processed_dates, _ = DashboardProcessedDate.objects.all().delete()
        return ClearResult(
            deleted_metrics=deleted_metrics,
            deleted_top_arrivals=deleted_top_arrivals,
            deleted_processed_dates=deleted_processed_dates,
        )

    def counts(self) -> ClearResult:
        """Return the row counts a bulk clear would delete."""

        return ClearResult(
            deleted_metrics=DashboardMetric.objects.count(),
            deleted_top_arrivals=DashboardTopArrivals.objects.count(),
            deleted_processed_dates=DashboardProcessedDate.objects.count(),
        )


def _metric_from_row(row: DashboardMetric) -> DashboardMetricValues:
    return DashboardMetricValues(
        metric_type=MetricType(row.metric_type),
        campus_location=row.campus_location,
        month=row.month,
        **{name: getattr(row, name) for name in _VALUE_FIELDS},
    )


def _entry_payload(entry: DailyTopArrival) -> dict[str, object]:
    payload = asdict(entry)
    payload["student_names"] = list(entry.student_names)
    return payload


def _bucket_from_row(row: DashboardTopArrivals) -> TopArrivalBucket:
    entries = tuple(
        DailyTopArrival(
            date=str(item["date"]),
            car_number=int(item["car_number"]),
            queued_at=int(item["queued_at"]),
            student_names=tuple(item.get("student_names") or ()),
            position=int(item["position"]),
        )
        for item in row.entries
    )
    return TopArrivalBucket(campus_location=row.campus_location, month=row.month, entries=entries)
