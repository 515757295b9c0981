# ev_core/events/models.py
from django.db import models

from ev_core.common.models import UUIDModel


class EventStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    CLOSED = "CLOSED", "Closed"


class Event(UUIDModel):
    """
    A scheduled event. Owns its check-in rule set (see checkin_rules.CheckinRule).
    starts_at is the instant every rule window is measured from.
    """
    name = models.CharField(max_length=255)
    starts_at = models.DateTimeField(db_index=True)
    location = models.CharField(max_length=255)
    status = models.CharField(
        max_length=16,
        choices=EventStatus.choices,
        default=EventStatus.ACTIVE,
        db_index=True,
    )

    class Meta:
        db_table = "events_event"
        indexes = [
            models.Index(fields=["status", "starts_at"], name="events_status_starts_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} @ {self.starts_at:%Y-%m-%d %H:%M}"
