# ev_core/checkin_rules/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from ev_core.checkin_rules.engine import CheckinRuleDraft
from ev_core.checkin_rules.models import (
    MAX_WINDOW_OFFSET_MINUTES,
    MIN_RULE_NAME_LENGTH,
    CheckinRule,
    RuleRequirement,
)


class CheckinRuleInputSerializer(serializers.Serializer):
    """
    Shape validation for one candidate rule. Business rules across the
    whole set (duplicates, active rule, windows) are the engine's job.
    """
    id = serializers.UUIDField(required=False, allow_null=True)
    name = serializers.CharField(max_length=255, min_length=MIN_RULE_NAME_LENGTH)
    active = serializers.BooleanField()
    requirement = serializers.ChoiceField(choices=RuleRequirement.choices)
    release_minutes_before = serializers.IntegerField(min_value=0, max_value=MAX_WINDOW_OFFSET_MINUTES)
    close_minutes_after = serializers.IntegerField(min_value=0, max_value=MAX_WINDOW_OFFSET_MINUTES)

    @staticmethod
    def to_draft(attrs: dict) -> CheckinRuleDraft:
        return CheckinRuleDraft(
            id=attrs.get("id"),
            name=attrs["name"],
            active=attrs["active"],
            requirement=attrs["requirement"],
            release_minutes_before=attrs["release_minutes_before"],
            close_minutes_after=attrs["close_minutes_after"],
        )


class CheckinRuleSetInputSerializer(serializers.Serializer):
    """
    PUT contract: the complete rule set of the event (may be empty).
    """
    rules = CheckinRuleInputSerializer(many=True, allow_empty=True)

    def validate_rules(self, value):
        ids = [r["id"] for r in value if r.get("id")]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError("Rule ids must be unique within the set.")
        return value

    def drafts(self) -> list[CheckinRuleDraft]:
        return [CheckinRuleInputSerializer.to_draft(attrs) for attrs in self.validated_data["rules"]]


class CheckinRuleSerializer(serializers.ModelSerializer):
    active = serializers.BooleanField(source="is_active", read_only=True)
    event_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = CheckinRule
        fields = [
            "id",
            "event_id",
            "name",
            "active",
            "requirement",
            "release_minutes_before",
            "close_minutes_after",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CheckinRuleSetSerializer(serializers.Serializer):
    rules = CheckinRuleSerializer(many=True, read_only=True)
