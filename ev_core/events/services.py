# ev_core/events/services.py
from __future__ import annotations

import logging
from datetime import datetime

from django.db import transaction

from ev_core.events.models import Event, EventStatus
from ev_core.events.selectors import EventSelector

logger = logging.getLogger(__name__)


class EventService:
    """
    Write-model operations for Events.
    Rule sets are never touched here except through the FK cascade on delete.
    """

    UPDATABLE_FIELDS = frozenset({"name", "starts_at", "location", "status"})

    @staticmethod
    @transaction.atomic
    def create_event(
        *,
        name: str,
        starts_at: datetime,
        location: str,
        status: str = EventStatus.ACTIVE,
    ) -> Event:
        event = Event.objects.create(
            name=name,
            starts_at=starts_at,
            location=location,
            status=status or EventStatus.ACTIVE,
        )
        logger.info("Event created: %s (%s)", event.id, event.name)
        return event

    @staticmethod
    @transaction.atomic
    def update_event(*, event_id, data: dict) -> Event:
        event = EventSelector.get_event(event_id=event_id)

        updates = {k: v for k, v in (data or {}).items() if k in EventService.UPDATABLE_FIELDS}
        for k, v in updates.items():
            setattr(event, k, v)
        event.save()

        logger.info("Event updated: %s fields=%s", event.id, sorted(updates))
        return event

    @staticmethod
    @transaction.atomic
    def delete_event(*, event_id) -> None:
        event = EventSelector.get_event(event_id=event_id)
        event_pk = event.pk
        event.delete()
        logger.info("Event deleted: %s", event_pk)
