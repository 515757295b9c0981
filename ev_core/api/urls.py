# ev_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from ev_core.checkin_rules.api.views import CheckinRuleSetView
from ev_core.common.api.views import HealthView
from ev_core.events.api.views import EventViewSet

router = DefaultRouter()
router.register(r"events", EventViewSet, basename="events")

urlpatterns = [
    path("health/", HealthView.as_view(), name="health"),

    path(
        "events/<uuid:event_id>/checkin-rules/",
        CheckinRuleSetView.as_view(),
        name="event-checkin-rules",
    ),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
