import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Medicine",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("doctor_id", models.BigIntegerField(db_index=True)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("stock", models.PositiveIntegerField(default=0)),
            ],
            options={
                "db_table": "medicines_medicine",
                "indexes": [
                    models.Index(fields=["doctor_id", "name"], name="medicine_doctor_name_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(stock__gte=0),
                        name="ck_medicine_stock_non_negative",
                    ),
                ],
            },
        ),
    ]
