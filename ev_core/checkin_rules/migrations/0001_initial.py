import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("events", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="CheckinRule",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("is_active", models.BooleanField(default=True)),
                (
                    "requirement",
                    models.CharField(
                        choices=[("MANDATORY", "Mandatory"), ("OPTIONAL", "Optional")],
                        default="MANDATORY",
                        max_length=16,
                    ),
                ),
                (
                    "release_minutes_before",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(1440),
                        ]
                    ),
                ),
                (
                    "close_minutes_after",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(1440),
                        ]
                    ),
                ),
                ("position", models.PositiveIntegerField(default=0)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="checkin_rules",
                        to="events.event",
                    ),
                ),
            ],
            options={
                "db_table": "checkin_rules_rule",
                "ordering": ("position", "created_at"),
                "indexes": [
                    models.Index(
                        fields=["event", "position", "created_at"],
                        name="checkin_rule_event_order_idx",
                    )
                ],
            },
        ),
    ]
