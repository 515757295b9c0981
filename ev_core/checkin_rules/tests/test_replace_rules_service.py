# ev_core/checkin_rules/tests/test_replace_rules_service.py
import uuid
from datetime import timedelta

import pytest
from django.db import DatabaseError, IntegrityError
from django.db.models.query import QuerySet

from ev_core.checkin_rules.engine import DUPLICATE_NAMES_ERROR, NO_ACTIVE_RULE_ERROR
from ev_core.checkin_rules.models import CheckinRule, RuleRequirement
from ev_core.checkin_rules.services import (
    CheckinRuleService,
    CheckinRulesInvalid,
    EventNotFound,
    RuleIdTaken,
    RuleStorageFailure,
)
from ev_core.tests.helpers import draft

pytestmark = pytest.mark.django_db


def seed_rules(event):
    return CheckinRuleService.replace_rules(
        event_id=event.id,
        rules=[
            draft("QR Code"),
            draft("Photo ID", requirement=RuleRequirement.OPTIONAL),
        ],
    )


def test_replace_on_unknown_event_raises_and_writes_nothing():
    with pytest.raises(EventNotFound) as exc:
        CheckinRuleService.replace_rules(event_id=uuid.uuid4(), rules=[draft("QR Code")])

    assert exc.value.code == "EVENT_NOT_FOUND"
    assert CheckinRule.objects.count() == 0


def test_replace_with_invalid_set_keeps_existing_rules(event):
    before = seed_rules(event)

    with pytest.raises(CheckinRulesInvalid) as exc:
        CheckinRuleService.replace_rules(
            event_id=event.id,
            rules=[draft("Wristband", active=False), draft(" WRISTBAND", active=False)],
        )

    assert exc.value.errors == [DUPLICATE_NAMES_ERROR, NO_ACTIVE_RULE_ERROR]
    assert exc.value.conflicts == []

    after = CheckinRuleService.list_rules(event_id=event.id)
    assert [r.id for r in after] == [r.id for r in before]
    assert [r.name for r in after] == ["QR Code", "Photo ID"]


def test_repeated_valid_replace_is_idempotent(event):
    CheckinRuleService.replace_rules(event_id=event.id, rules=[draft("QR Code")])
    CheckinRuleService.replace_rules(event_id=event.id, rules=[draft("QR Code")])

    rules = CheckinRule.objects.filter(event=event)
    assert rules.count() == 1
    assert rules.get().name == "QR Code"


def test_replace_returns_rules_in_submission_order(event):
    names = ["Zeta pass", "Alpha pass", "Mid pass", "Badge scan"]

    saved = CheckinRuleService.replace_rules(
        event_id=event.id,
        rules=[draft(n, requirement=RuleRequirement.OPTIONAL) for n in names],
    )

    assert [r.name for r in saved] == names
    assert [r.name for r in CheckinRuleService.list_rules(event_id=event.id)] == names


def test_listing_follows_submission_position_not_timestamps(event):
    names = ["QR Code", "Photo ID", "Printed list"]
    saved = CheckinRuleService.replace_rules(
        event_id=event.id,
        rules=[draft(n, requirement=RuleRequirement.OPTIONAL) for n in names],
    )
    # clock stepped backwards mid-insert: later rows carry earlier timestamps
    for i, rule in enumerate(saved):
        CheckinRule.objects.filter(id=rule.id).update(created_at=event.starts_at - timedelta(minutes=i))

    assert [r.name for r in CheckinRuleService.list_rules(event_id=event.id)] == names
    assert [r.name for r in event.checkin_rules.all()] == names


def test_replace_preserves_supplied_ids_and_trims_names(event):
    kept_id = uuid.uuid4()

    saved = CheckinRuleService.replace_rules(
        event_id=event.id,
        rules=[draft("  QR Code  ", id=kept_id), draft("Photo ID")],
    )

    assert saved[0].id == kept_id
    assert saved[0].name == "QR Code"
    assert saved[1].id != kept_id
    assert all(r.event_id == event.id for r in saved)


def test_replace_with_empty_set_clears_rules(event):
    seed_rules(event)

    saved = CheckinRuleService.replace_rules(event_id=event.id, rules=[])

    assert saved == []
    assert CheckinRule.objects.filter(event=event).count() == 0


def test_replace_only_touches_the_target_event(event, other_event):
    seed_rules(other_event)

    CheckinRuleService.replace_rules(event_id=event.id, rules=[draft("Wristband")])

    assert [r.name for r in CheckinRuleService.list_rules(event_id=other_event.id)] == ["QR Code", "Photo ID"]
    assert [r.name for r in CheckinRuleService.list_rules(event_id=event.id)] == ["Wristband"]


def test_storage_failure_rolls_back_to_previous_set(event, monkeypatch):
    before = seed_rules(event)

    def boom(self, objs, *args, **kwargs):
        raise DatabaseError("disk full")

    monkeypatch.setattr(QuerySet, "bulk_create", boom)

    with pytest.raises(RuleStorageFailure):
        CheckinRuleService.replace_rules(event_id=event.id, rules=[draft("Wristband")])

    monkeypatch.undo()
    after = CheckinRuleService.list_rules(event_id=event.id)
    assert [r.id for r in after] == [r.id for r in before]


def test_list_rules_on_unknown_event_raises():
    with pytest.raises(EventNotFound):
        CheckinRuleService.list_rules(event_id=uuid.uuid4())


def test_deleting_event_deletes_its_rules(event):
    seed_rules(event)

    event.delete()

    assert CheckinRule.objects.count() == 0


def test_replace_with_id_of_another_events_rule_is_rejected(event, other_event):
    foreign = seed_rules(other_event)[0]

    for _ in range(2):
        with pytest.raises(RuleIdTaken) as exc:
            CheckinRuleService.replace_rules(event_id=event.id, rules=[draft("Badge scan", id=foreign.id)])
        assert exc.value.rule_ids == [str(foreign.id)]

    assert CheckinRule.objects.filter(event=event).count() == 0
    assert CheckinRule.objects.get(id=foreign.id).event_id == other_event.id


def test_replace_may_resubmit_the_events_own_rule_ids(event):
    before = seed_rules(event)

    saved = CheckinRuleService.replace_rules(
        event_id=event.id,
        rules=[draft("QR Code", id=before[0].id), draft("Photo ID", id=before[1].id)],
    )

    assert [r.id for r in saved] == [r.id for r in before]


def test_id_collision_at_insert_time_is_reported_as_taken_not_storage_failure(event, monkeypatch):
    kept_id = uuid.uuid4()

    def collide(self, objs, *args, **kwargs):
        raise IntegrityError("UNIQUE constraint failed: checkin_rules_rule.id")

    monkeypatch.setattr(QuerySet, "bulk_create", collide)

    with pytest.raises(RuleIdTaken) as exc:
        CheckinRuleService.replace_rules(event_id=event.id, rules=[draft("QR Code", id=kept_id)])

    assert exc.value.rule_ids == [str(kept_id)]
