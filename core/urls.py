"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("", views.index, name="index"),
    path("api/dashboard/campus-activity/", views.campus_activity, name="campus_activity"),
    path("api/dashboard/campus-activity/all/", views.all_campus_activity, name="all_campus_activity"),
    path("api/dashboard/wait-time/", views.average_wait_time, name="average_wait_time"),
    path("api/dashboard/session-duration/", views.session_duration, name="session_duration"),
    path("api/dashboard/top-arrivals/", views.top_arrivals, name="top_arrivals"),
    path("api/diagnostics/inventory/", views.data_inventory, name="data_inventory"),
    path("api/diagnostics/integrity/", views.field_integrity, name="field_integrity"),
    path("api/diagnostics/outliers/", views.outliers, name="outliers"),
    path("api/diagnostics/health/", views.health_report, name="health_report"),
]
