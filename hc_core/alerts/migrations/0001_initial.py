import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Alert",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("doctor_id", models.BigIntegerField(db_index=True)),
                ("code", models.SlugField(max_length=64, db_index=True)),
                ("title", models.CharField(max_length=255)),
                ("message", models.TextField(blank=True, default="")),
                (
                    "severity",
                    models.CharField(
                        choices=[("INFO", "Info"), ("WARNING", "Warning"), ("CRITICAL", "Critical")],
                        db_index=True,
                        default="INFO",
                        max_length=16,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("OPEN", "Open"), ("ACKED", "Acknowledged")],
                        db_index=True,
                        default="OPEN",
                        max_length=16,
                    ),
                ),
                ("medicine_id", models.UUIDField(blank=True, db_index=True, null=True)),
                ("appointment_id", models.UUIDField(blank=True, db_index=True, null=True)),
                ("acked_at", models.DateTimeField(blank=True, null=True)),
                ("meta", models.JSONField(blank=True, default=dict)),
            ],
            options={
                "db_table": "alerts_alert",
                "indexes": [
                    models.Index(fields=["doctor_id", "status", "severity"], name="alert_doctor_status_idx"),
                ],
            },
        ),
    ]
