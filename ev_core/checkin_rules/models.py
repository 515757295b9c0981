# ev_core/checkin_rules/models.py
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from ev_core.common.models import UUIDModel
from ev_core.events.models import Event

# one day, in minutes
MAX_WINDOW_OFFSET_MINUTES = 1440
MIN_RULE_NAME_LENGTH = 3

_offset_validators = [MinValueValidator(0), MaxValueValidator(MAX_WINDOW_OFFSET_MINUTES)]


class RuleRequirement(models.TextChoices):
    MANDATORY = "MANDATORY", "Mandatory"
    OPTIONAL = "OPTIONAL", "Optional"


class CheckinRule(UUIDModel):
    """
    One check-in rule of an event. The check-in window is derived, never stored:
        [event.starts_at - release_minutes_before, event.starts_at + close_minutes_after]

    Rows are only written by CheckinRuleService.replace_rules, which swaps
    the whole set of an event at once.
    """
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="checkin_rules")

    name = models.CharField(max_length=255)
    is_active = models.BooleanField(default=True)
    requirement = models.CharField(
        max_length=16,
        choices=RuleRequirement.choices,
        default=RuleRequirement.MANDATORY,
    )
    release_minutes_before = models.PositiveSmallIntegerField(validators=_offset_validators)
    close_minutes_after = models.PositiveSmallIntegerField(validators=_offset_validators)

    # index within the submitted set; every row of an event comes from one replace
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "checkin_rules_rule"
        ordering = ("position", "created_at")
        indexes = [
            models.Index(fields=["event", "position", "created_at"], name="checkin_rule_event_order_idx"),
        ]

    def __str__(self) -> str:
        return self.name
