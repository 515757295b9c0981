# ev_core/checkin_rules/services.py
from __future__ import annotations

import logging
from typing import Iterable
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction

from ev_core.checkin_rules.engine import CheckinRuleDraft, Invalid, WindowConflict, validate
from ev_core.checkin_rules.models import CheckinRule
from ev_core.checkin_rules.selectors import list_rules_for_event
from ev_core.events.models import Event
from ev_core.events.selectors import EventSelector

logger = logging.getLogger(__name__)


class EventNotFound(Exception):
    code = "EVENT_NOT_FOUND"

    def __init__(self, event_id):
        super().__init__(f'Event "{event_id}" not found')
        self.event_id = event_id


class CheckinRulesInvalid(Exception):
    code = "CHECKIN_RULES_VALIDATION_ERROR"

    def __init__(self, errors: Iterable[str], conflicts: Iterable[WindowConflict] = ()):
        self.errors = list(errors)
        self.conflicts = list(conflicts)
        super().__init__("; ".join(self.errors))


class RuleIdTaken(Exception):
    """
    Supplied rule ids already belong to rules of another event.
    Retrying the same payload cannot succeed.
    """
    code = "CHECKIN_RULE_ID_CONFLICT"

    def __init__(self, rule_ids: Iterable):
        self.rule_ids = sorted(str(i) for i in rule_ids)
        super().__init__(f"Rule ids already in use: {', '.join(self.rule_ids)}")


class RuleStorageFailure(Exception):
    """
    The replace transaction did not commit. The previous rule set is untouched.
    """
    code = "CHECKIN_RULES_STORAGE_ERROR"


class CheckinRuleService:
    """
    Check-in rules write-model service.

    An event's rules are only ever replaced as a whole set:
      validate -> (delete all + insert all) in one transaction -> read back.
    """

    @staticmethod
    def list_rules(*, event_id: UUID) -> list[CheckinRule]:
        try:
            EventSelector.get_event(event_id=event_id)
        except EventSelector.NotFound:
            raise EventNotFound(event_id)
        return list(list_rules_for_event(event_id=event_id))

    @staticmethod
    def replace_rules(*, event_id: UUID, rules: Iterable[CheckinRuleDraft]) -> list[CheckinRule]:
        drafts = list(rules)
        try:
            return CheckinRuleService._replace_atomically(event_id=event_id, drafts=drafts)
        except (EventNotFound, CheckinRulesInvalid, RuleIdTaken):
            raise
        except IntegrityError as e:
            # another event claimed one of the ids between the check and the insert
            logger.warning("Check-in rules replace for event %s hit an id collision: %s", event_id, e)
            raise RuleIdTaken(d.id for d in drafts if d.id is not None) from e
        except DatabaseError as e:
            logger.error("Check-in rules replace failed for event %s: %s", event_id, e)
            raise RuleStorageFailure(str(e)) from e

    @staticmethod
    @transaction.atomic
    def _replace_atomically(*, event_id: UUID, drafts: list[CheckinRuleDraft]) -> list[CheckinRule]:
        # Row lock serializes concurrent replaces of the same event.
        try:
            event = Event.objects.select_for_update().get(id=event_id)
        except (Event.DoesNotExist, DjangoValidationError):
            raise EventNotFound(event_id)

        result = validate(drafts, event.starts_at)
        if isinstance(result, Invalid):
            logger.warning(
                "Check-in rules rejected for event %s: %s",
                event_id,
                list(result.errors),
            )
            raise CheckinRulesInvalid(result.errors, result.conflicts)

        supplied_ids = [d.id for d in drafts if d.id is not None]
        if supplied_ids:
            taken = list(
                CheckinRule.objects.filter(id__in=supplied_ids)
                .exclude(event_id=event.id)
                .values_list("id", flat=True)
            )
            if taken:
                logger.warning("Check-in rules rejected for event %s: ids owned by other events %s", event_id, taken)
                raise RuleIdTaken(taken)

        CheckinRule.objects.filter(event_id=event.id).delete()

        rows = []
        for position, d in enumerate(drafts):
            row = CheckinRule(
                event=event,
                name=d.name.strip(),
                is_active=d.active,
                requirement=d.requirement,
                release_minutes_before=d.release_minutes_before,
                close_minutes_after=d.close_minutes_after,
                position=position,
            )
            if d.id is not None:
                row.id = d.id
            rows.append(row)

        if rows:
            CheckinRule.objects.bulk_create(rows)

        saved = list(list_rules_for_event(event_id=event.id))
        logger.info("Check-in rules replaced for event %s: %d rule(s)", event.id, len(saved))
        return saved
