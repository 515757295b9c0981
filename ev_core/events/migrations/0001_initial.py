import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("starts_at", models.DateTimeField(db_index=True)),
                ("location", models.CharField(max_length=255)),
                (
                    "status",
                    models.CharField(
                        choices=[("ACTIVE", "Active"), ("CLOSED", "Closed")],
                        db_index=True,
                        default="ACTIVE",
                        max_length=16,
                    ),
                ),
            ],
            options={
                "db_table": "events_event",
                "indexes": [models.Index(fields=["status", "starts_at"], name="events_status_starts_idx")],
            },
        ),
    ]
