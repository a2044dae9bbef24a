import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Session",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("customer_name", models.CharField(max_length=255)),
                ("contact_number", models.CharField(blank=True, max_length=32)),
                ("start_time", models.DateTimeField()),
                ("duration_minutes", models.PositiveIntegerField()),
                ("people_count", models.PositiveIntegerField()),
                ("devices", models.JSONField(default=dict)),
                ("units", models.JSONField(default=dict)),
                ("price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("paid_amount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("paid_people", models.PositiveIntegerField(default=0)),
                ("snacks", models.JSONField(default=list)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("completed", "Completed")],
                        default="active",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "ordering": ["start_time"],
                "indexes": [
                    models.Index(fields=["status", "start_time"], name="session_status_start_idx"),
                    models.Index(fields=["status", "completed_at"], name="session_status_done_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Battle",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("crown_holder", models.CharField(max_length=255)),
                ("challenger", models.CharField(max_length=255)),
                ("crown_holder_score", models.PositiveIntegerField(default=0)),
                ("challenger_score", models.PositiveIntegerField(default=0)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("completed", "Completed")],
                        default="active",
                        max_length=16,
                    ),
                ),
                ("started_at", models.DateTimeField()),
                ("ended_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "ordering": ["-started_at"],
                "indexes": [
                    models.Index(fields=["status", "-started_at"], name="battle_status_started_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Member",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position", models.PositiveIntegerField()),
                ("name", models.CharField(max_length=255)),
                ("people_count", models.PositiveIntegerField()),
                ("devices", models.JSONField(default=dict)),
                ("added_at", models.DateTimeField()),
                (
                    "session",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="members",
                        to="floor.session",
                    ),
                ),
            ],
            options={
                "ordering": ["position"],
                "constraints": [
                    models.UniqueConstraint(fields=["session", "position"], name="unique_member_position"),
                ],
            },
        ),
        migrations.CreateModel(
            name="DeviceClaim",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("ps", "PS"),
                            ("pc", "PC"),
                            ("vr", "VR"),
                            ("wheel", "WHEEL"),
                            ("metabat", "METABAT"),
                        ],
                        max_length=16,
                    ),
                ),
                ("unit", models.PositiveIntegerField()),
                (
                    "session",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="claims",
                        to="floor.session",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=["kind", "unit"], name="unique_device_unit_claim"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("customer_name", models.CharField(max_length=255)),
                ("contact_number", models.CharField(blank=True, max_length=32)),
                ("booking_time", models.DateTimeField()),
                ("devices", models.JSONField(default=dict)),
                ("units", models.JSONField(default=dict)),
                ("people_count", models.PositiveIntegerField(default=1)),
                ("duration_minutes", models.PositiveIntegerField(default=60)),
                (
                    "status",
                    models.CharField(
                        choices=[("upcoming", "Upcoming"), ("converted", "Converted")],
                        default="upcoming",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField()),
                (
                    "session",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="bookings",
                        to="floor.session",
                    ),
                ),
            ],
            options={
                "ordering": ["booking_time"],
                "indexes": [
                    models.Index(fields=["status", "booking_time"], name="booking_status_time_idx"),
                ],
            },
        ),
    ]
