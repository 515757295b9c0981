# ev_core/conftest.py
from datetime import datetime, timezone

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from ev_core.events.services import EventService


@pytest.fixture
def user(db):
    User = get_user_model()
    return User.objects.create_user(
        username="organizer",
        email="organizer@example.com",
        password="testpass",
        is_active=True,
    )


@pytest.fixture
def api_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def event_starts_at():
    return datetime(2026, 3, 15, 18, 0, tzinfo=timezone.utc)


@pytest.fixture
def event(db, event_starts_at):
    return EventService.create_event(
        name="Expo Tech 2026",
        starts_at=event_starts_at,
        location="Convention Center",
    )


@pytest.fixture
def other_event(db):
    return EventService.create_event(
        name="AI Workshop",
        starts_at=datetime(2026, 4, 10, 14, 0, tzinfo=timezone.utc),
        location="Main Auditorium",
    )
