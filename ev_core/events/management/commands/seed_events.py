# ev_core/events/management/commands/seed_events.py
from datetime import datetime, timezone

from django.core.management.base import BaseCommand
from django.db import transaction

from ev_core.checkin_rules.engine import CheckinRuleDraft
from ev_core.checkin_rules.models import RuleRequirement
from ev_core.checkin_rules.services import CheckinRuleService
from ev_core.events.models import Event, EventStatus
from ev_core.events.services import EventService

MANDATORY = RuleRequirement.MANDATORY
OPTIONAL = RuleRequirement.OPTIONAL

# (name, starts_at, location, status, [(rule name, active, requirement, before, after), ...])
DEMO_EVENTS = [
    (
        "Expo Tech 2026",
        datetime(2026, 3, 15, 18, 0, tzinfo=timezone.utc),
        "Convention Center - Sao Paulo",
        EventStatus.ACTIVE,
        [
            ("QR Code", True, MANDATORY, 30, 60),
            ("Photo ID", True, MANDATORY, 30, 60),
            ("Printed list", False, OPTIONAL, 15, 30),
        ],
    ),
    (
        "AI Workshop",
        datetime(2026, 4, 10, 14, 0, tzinfo=timezone.utc),
        "Main Auditorium - Rio de Janeiro",
        EventStatus.ACTIVE,
        [
            ("E-mail confirmation", True, MANDATORY, 60, 120),
            ("QR Code", True, OPTIONAL, 15, 30),
        ],
    ),
    (
        "JavaScript Meetup",
        datetime(2026, 3, 20, 19, 0, tzinfo=timezone.utc),
        "Digital Hub - Belo Horizonte",
        EventStatus.ACTIVE,
        [
            ("QR Code", True, MANDATORY, 20, 45),
        ],
    ),
    (
        "Hackathon 2025",
        datetime(2025, 12, 1, 8, 0, tzinfo=timezone.utc),
        "Campus - Sao Paulo",
        EventStatus.CLOSED,
        [],
    ),
]


class Command(BaseCommand):
    help = "Create demo events with check-in rules (idempotent by event name)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete every event (and its rules) before seeding.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["reset"]:
            deleted, _ = Event.objects.all().delete()
            self.stdout.write(f"Deleted {deleted} row(s).")

        created = 0
        for name, starts_at, location, status, rules in DEMO_EVENTS:
            event = Event.objects.filter(name=name).first()
            if event is None:
                event = EventService.create_event(
                    name=name,
                    starts_at=starts_at,
                    location=location,
                    status=status,
                )
                created += 1

            CheckinRuleService.replace_rules(
                event_id=event.id,
                rules=[
                    CheckinRuleDraft(
                        name=rule_name,
                        active=active,
                        requirement=requirement,
                        release_minutes_before=before,
                        close_minutes_after=after,
                    )
                    for rule_name, active, requirement, before, after in rules
                ],
            )

        self.stdout.write(
            self.style.SUCCESS(f"Seeded {len(DEMO_EVENTS)} event(s). Newly created: {created}")
        )
