# ev_core/events/selectors.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Count

from ev_core.events.models import Event


class EventSelector:
    class NotFound(Exception):
        pass

    @staticmethod
    def get_event(*, event_id) -> Event:
        try:
            return Event.objects.get(id=event_id)
        except (Event.DoesNotExist, DjangoValidationError):
            # malformed ids are simply "not found" for callers
            raise EventSelector.NotFound()

    @staticmethod
    def get_event_detail(*, event_id) -> Event:
        """
        Event with its rule set prefetched (rule default ordering applies)
        and checkin_rules_count annotated.
        """
        try:
            return (
                Event.objects.annotate(checkin_rules_count=Count("checkin_rules"))
                .prefetch_related("checkin_rules")
                .get(id=event_id)
            )
        except (Event.DoesNotExist, DjangoValidationError):
            raise EventSelector.NotFound()
