# ev_core/checkin_rules/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from ev_core.checkin_rules.models import CheckinRule


def list_rules_for_event(*, event_id: UUID) -> QuerySet[CheckinRule]:
    """
    Rules of one event in submission order.
    Does not check that the event exists (see CheckinRuleService.list_rules).
    """
    return CheckinRule.objects.filter(event_id=event_id).order_by("position", "created_at")
