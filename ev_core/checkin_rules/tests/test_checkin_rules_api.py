# ev_core/checkin_rules/tests/test_checkin_rules_api.py
import uuid

import pytest
from django.db import DatabaseError
from django.db.models.query import QuerySet

from ev_core.checkin_rules.models import CheckinRule
from ev_core.tests.helpers import rule_payload, rules_url

pytestmark = pytest.mark.django_db


def test_get_rules_of_event_without_rules(api_client, event):
    r = api_client.get(rules_url(event.id))

    assert r.status_code == 200, r.data
    assert r.json() == {"rules": []}


def test_get_rules_of_unknown_event_returns_404_envelope(api_client):
    r = api_client.get(rules_url(uuid.uuid4()))

    assert r.status_code == 404
    body = r.json()
    assert body["error"]["code"] == "EVENT_NOT_FOUND"
    assert "request_id" in body["error"]


def test_put_replaces_rules_and_returns_them_in_order(api_client, event):
    payload = {
        "rules": [
            rule_payload("  QR Code "),
            rule_payload("Photo ID", requirement="OPTIONAL", active=False),
        ]
    }

    r = api_client.put(rules_url(event.id), payload, format="json")

    assert r.status_code == 200, r.data
    rules = r.json()["rules"]
    assert [x["name"] for x in rules] == ["QR Code", "Photo ID"]
    assert rules[0]["active"] is True
    assert rules[1]["requirement"] == "OPTIONAL"
    assert rules[0]["event_id"] == str(event.id)

    listed = api_client.get(rules_url(event.id)).json()["rules"]
    assert [x["id"] for x in listed] == [x["id"] for x in rules]


def test_put_keeps_client_supplied_rule_id(api_client, event):
    rule_id = str(uuid.uuid4())

    r = api_client.put(rules_url(event.id), {"rules": [rule_payload(id=rule_id)]}, format="json")

    assert r.status_code == 200, r.data
    assert r.json()["rules"][0]["id"] == rule_id


def test_put_reports_every_business_rule_violation(api_client, event):
    api_client.put(rules_url(event.id), {"rules": [rule_payload("QR Code")]}, format="json")

    payload = {
        "rules": [
            rule_payload("Wristband", active=False),
            rule_payload("wristband", active=False),
        ]
    }
    r = api_client.put(rules_url(event.id), payload, format="json")

    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "CHECKIN_RULES_VALIDATION_ERROR"
    assert err["details"]["errors"] == [
        "duplicate rule names",
        "at least one active rule required",
    ]
    assert err["details"]["conflicts"] == []

    # nothing changed
    assert list(CheckinRule.objects.filter(event=event).values_list("name", flat=True)) == ["QR Code"]


def test_put_with_touching_mandatory_windows_is_accepted(api_client, event):
    payload = {
        "rules": [
            rule_payload("Early gate", release_minutes_before=60, close_minutes_after=0),
            rule_payload("Late gate", release_minutes_before=0, close_minutes_after=60),
        ]
    }

    r = api_client.put(rules_url(event.id), payload, format="json")

    assert r.status_code == 200, r.data
    assert len(r.json()["rules"]) == 2


def test_put_empty_set_clears_rules(api_client, event):
    api_client.put(rules_url(event.id), {"rules": [rule_payload()]}, format="json")

    r = api_client.put(rules_url(event.id), {"rules": []}, format="json")

    assert r.status_code == 200, r.data
    assert r.json() == {"rules": []}


def test_put_on_unknown_event_returns_404_and_writes_nothing(api_client):
    r = api_client.put(rules_url(uuid.uuid4()), {"rules": [rule_payload()]}, format="json")

    assert r.status_code == 404
    assert r.json()["error"]["code"] == "EVENT_NOT_FOUND"
    assert CheckinRule.objects.count() == 0


@pytest.mark.parametrize(
    "bad_rule",
    [
        rule_payload(release_minutes_before=1441),
        rule_payload(close_minutes_after=-1),
        rule_payload(name="  ab  "),
        rule_payload(requirement="SOMETIMES"),
        rule_payload(active="maybe"),
    ],
)
def test_put_rejects_malformed_rules_before_the_engine_runs(api_client, event, bad_rule):
    r = api_client.put(rules_url(event.id), {"rules": [bad_rule]}, format="json")

    assert r.status_code == 400
    assert r.json()["error"]["code"] == "validation_error"
    assert CheckinRule.objects.count() == 0


def test_put_requires_rules_key(api_client, event):
    r = api_client.put(rules_url(event.id), {}, format="json")

    assert r.status_code == 400
    assert "rules" in r.json()["error"]["details"]


def test_put_rejects_repeated_ids_in_one_payload(api_client, event):
    rule_id = str(uuid.uuid4())
    payload = {"rules": [rule_payload("QR Code", id=rule_id), rule_payload("Photo ID", id=rule_id)]}

    r = api_client.put(rules_url(event.id), payload, format="json")

    assert r.status_code == 400
    assert r.json()["error"]["code"] == "validation_error"


def test_put_with_rule_id_owned_by_another_event_returns_409(api_client, event, other_event):
    api_client.put(rules_url(other_event.id), {"rules": [rule_payload("QR Code")]}, format="json")
    foreign_id = str(CheckinRule.objects.get(event=other_event).id)
    payload = {"rules": [rule_payload("Badge scan", id=foreign_id)]}

    for _ in range(2):
        r = api_client.put(rules_url(event.id), payload, format="json")

        assert r.status_code == 409
        err = r.json()["error"]
        assert err["code"] == "CHECKIN_RULE_ID_CONFLICT"
        assert err["details"] == {"rule_ids": [foreign_id]}

    assert CheckinRule.objects.filter(event=event).count() == 0


def test_put_storage_failure_returns_503(api_client, event, monkeypatch):
    def boom(self, objs, *args, **kwargs):
        raise DatabaseError("connection reset")

    monkeypatch.setattr(QuerySet, "bulk_create", boom)

    r = api_client.put(rules_url(event.id), {"rules": [rule_payload()]}, format="json")

    assert r.status_code == 503
    assert r.json()["error"]["code"] == "CHECKIN_RULES_STORAGE_ERROR"


def test_rules_endpoint_requires_authentication(anon_client, event):
    r = anon_client.get(rules_url(event.id))

    assert r.status_code == 401
    assert r.json()["error"]["code"] == "not_authenticated"
