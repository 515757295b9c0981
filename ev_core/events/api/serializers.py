# ev_core/events/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from ev_core.checkin_rules.api.serializers import CheckinRuleSerializer
from ev_core.events.models import Event, EventStatus


class EventCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    starts_at = serializers.DateTimeField()
    location = serializers.CharField(max_length=255)
    status = serializers.ChoiceField(choices=EventStatus.choices, required=False, default=EventStatus.ACTIVE)


class EventUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PATCH).
    """
    name = serializers.CharField(max_length=255, required=False)
    starts_at = serializers.DateTimeField(required=False)
    location = serializers.CharField(max_length=255, required=False)
    status = serializers.ChoiceField(choices=EventStatus.choices, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class EventSerializer(serializers.ModelSerializer):
    class Meta:
        model = Event
        fields = [
            "id",
            "name",
            "starts_at",
            "location",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class EventDetailSerializer(EventSerializer):
    checkin_rules_count = serializers.IntegerField(read_only=True)
    checkin_rules = CheckinRuleSerializer(many=True, read_only=True)

    class Meta(EventSerializer.Meta):
        fields = EventSerializer.Meta.fields + ["checkin_rules_count", "checkin_rules"]
        read_only_fields = fields
