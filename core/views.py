"""JSON views for dashboard metrics and dismissal-data diagnostics.

API views answer 401 to anonymous requests and 403 when the resolved role lacks
the capability. Reports are engine DTOs serialized with `dataclasses.asdict`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict
from functools import wraps

from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from analysis.formatting import format_student_surnames
from analysis.months import parse_month
from core import services
from core.roles import Capability, capabilities_for, has_capability, resolve_role

View = Callable[..., JsonResponse]


def require_capability(capability: Capability) -> Callable[[View], View]:
    """Return a decorator that rejects anonymous (401) or unprivileged (403) requests."""

    def decorator(view: View) -> View:
        @wraps(view)
        def wrapped(request: HttpRequest, *args, **kwargs) -> JsonResponse:
            if not request.user.is_authenticated:
                return JsonResponse({"ok": False, "error": "Authentication required."}, status=401)
            role = resolve_role(request.user)
            if not has_capability(role, capability):
                return JsonResponse({"ok": False, "error": "Permission denied."}, status=403)
            return view(request, *args, **kwargs)

        return wrapped

    return decorator


@require_GET
@login_required
def index(request: HttpRequest) -> JsonResponse:
    """Return the signed-in user's role and capabilities (post-login landing page)."""

    role = resolve_role(request.user)
    return JsonResponse(
        {
            "ok": True,
            "username": request.user.get_username(),
            "role": role,
            "capabilities": sorted(capabilities_for(role)),
        }
    )


def _scope_filters(request: HttpRequest) -> tuple[str | None, str | None]:
    """Return `(campus, month)` query filters; raises ValueError on a bad month."""

    campus = request.GET.get("campus", "").strip() or None
    raw_month = request.GET.get("month", "").strip()
    month = parse_month(raw_month) if raw_month else None
    return campus, month


def _metric_response(getter: Callable[..., object], request: HttpRequest) -> JsonResponse:
    try:
        campus, month = _scope_filters(request)
    except ValueError as exc:
        return JsonResponse({"ok": False, "error": str(exc)}, status=400)

    metric = getter(campus=campus, month=month)
    return JsonResponse(
        {
            "ok": True,
            "campus": campus,
            "month": month,
            "metric": asdict(metric) if metric is not None else None,
        }
    )


@require_GET
@require_capability(Capability.view_dashboard)
def campus_activity(request: HttpRequest) -> JsonResponse:
    """Return the campus-activity metric for the requested scope."""

    return _metric_response(services.get_campus_activity, request)


@require_GET
@require_capability(Capability.view_dashboard)
def average_wait_time(request: HttpRequest) -> JsonResponse:
    """Return the average-wait-time metric for the requested scope."""

    return _metric_response(services.get_average_wait_time, request)


@require_GET
@require_capability(Capability.view_dashboard)
def session_duration(request: HttpRequest) -> JsonResponse:
    """Return the session-duration metric for the requested scope."""

    return _metric_response(services.get_session_duration, request)


@require_GET
@require_capability(Capability.view_dashboard)
def all_campus_activity(request: HttpRequest) -> JsonResponse:
    """Return per-campus activity ordered into podium and remainder."""

    try:
        _, month = _scope_filters(request)
    except ValueError as exc:
        return JsonResponse({"ok": False, "error": str(exc)}, status=400)

    ranking = services.get_all_campus_activity(month=month)
    return JsonResponse({"ok": True, **asdict(ranking)})


@require_GET
@require_capability(Capability.view_dashboard)
def top_arrivals(request: HttpRequest) -> JsonResponse:
    """Return ranked top-arrival leaderboards with display surnames."""

    try:
        campus, month = _scope_filters(request)
    except ValueError as exc:
        return JsonResponse({"ok": False, "error": str(exc)}, status=400)

    leaderboards = []
    for leaderboard in services.get_top_arrivals(campus=campus, month=month):
        payload = asdict(leaderboard)
        for entry, source in zip(payload["entries"], leaderboard.entries, strict=True):
            entry["surnames"] = format_student_surnames(source.student_names)
        leaderboards.append(payload)
    return JsonResponse({"ok": True, "campus": campus, "month": month, "leaderboards": leaderboards})


@require_GET
@require_capability(Capability.run_diagnostics)
def data_inventory(request: HttpRequest) -> JsonResponse:
    """Return the dismissal data inventory."""

    return JsonResponse({"ok": True, "inventory": asdict(services.get_data_inventory())})


@require_GET
@require_capability(Capability.run_diagnostics)
def field_integrity(request: HttpRequest) -> JsonResponse:
    """Return the field-integrity report (issue list capped, `total_issues` exact)."""

    return JsonResponse({"ok": True, "report": asdict(services.validate_field_integrity())})


@require_GET
@require_capability(Capability.run_diagnostics)
def outliers(request: HttpRequest) -> JsonResponse:
    """Return the outlier report."""

    return JsonResponse({"ok": True, "report": asdict(services.detect_outliers())})


@require_GET
@require_capability(Capability.run_diagnostics)
def health_report(request: HttpRequest) -> JsonResponse:
    """Return the Data Health report."""

    return JsonResponse({"ok": True, "report": asdict(services.get_data_health_report())})
