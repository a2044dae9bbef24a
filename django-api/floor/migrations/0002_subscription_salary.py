import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("floor", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Subscription",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("type", models.CharField(max_length=255)),
                ("provider", models.CharField(blank=True, max_length=255)),
                ("cost", models.DecimalField(decimal_places=2, max_digits=12)),
                ("start_date", models.DateField()),
                ("expiry_date", models.DateField()),
                ("created_at", models.DateTimeField()),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Salary",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("employee_name", models.CharField(max_length=255)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("payment_date", models.DateField()),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField()),
            ],
            options={
                "verbose_name_plural": "salaries",
                "ordering": ["-payment_date", "-created_at"],
                "indexes": [
                    models.Index(fields=["payment_date"], name="salary_payment_date_idx"),
                ],
            },
        ),
    ]
