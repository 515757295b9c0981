# ev_core/tests/helpers.py
from ev_core.checkin_rules.engine import CheckinRuleDraft
from ev_core.checkin_rules.models import RuleRequirement


def draft(name="QR Code", **overrides) -> CheckinRuleDraft:
    values = {
        "name": name,
        "active": True,
        "requirement": RuleRequirement.MANDATORY,
        "release_minutes_before": 30,
        "close_minutes_after": 60,
    }
    values.update(overrides)
    return CheckinRuleDraft(**values)


def rule_payload(name="QR Code", **overrides) -> dict:
    values = {
        "name": name,
        "active": True,
        "requirement": "MANDATORY",
        "release_minutes_before": 30,
        "close_minutes_after": 60,
    }
    values.update(overrides)
    return values


def rules_url(event_id) -> str:
    return f"/api/v1/events/{event_id}/checkin-rules/"
