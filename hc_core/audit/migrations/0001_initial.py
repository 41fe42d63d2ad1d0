import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AuditEvent",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("doctor_id", models.BigIntegerField(db_index=True)),
                ("event_code", models.CharField(db_index=True, max_length=128)),
                ("entity_type", models.CharField(db_index=True, max_length=128)),
                ("entity_id", models.UUIDField(db_index=True)),
                ("actor_user_id", models.BigIntegerField(blank=True, null=True)),
                ("occurred_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("metadata", models.JSONField(default=dict)),
            ],
            options={
                "db_table": "audit_audit_event",
                "indexes": [
                    models.Index(fields=["doctor_id", "occurred_at"], name="audit_doctor_occurred_idx"),
                    models.Index(fields=["entity_type", "entity_id"], name="audit_entity_idx"),
                ],
            },
        ),
    ]
