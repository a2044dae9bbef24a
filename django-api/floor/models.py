"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.db import models

from floor.domain import BattleStatus, BookingStatus, DeviceKind, SessionStatus

DEVICE_KIND_CHOICES = [(kind.value, kind.value.upper()) for kind in DeviceKind]


class Session(models.Model):
    """Persistence model for device sessions."""

    STATUS_CHOICES = [(status.value, status.value.title()) for status in SessionStatus]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer_name = models.CharField(max_length=255)
    contact_number = models.CharField(max_length=32, blank=True)
    start_time = models.DateTimeField()
    duration_minutes = models.PositiveIntegerField()
    people_count = models.PositiveIntegerField()
    devices = models.JSONField(default=dict)
    units = models.JSONField(default=dict)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    paid_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    paid_people = models.PositiveIntegerField(default=0)
    snacks = models.JSONField(default=list)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=SessionStatus.ACTIVE.value)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["start_time"]
        indexes = [
            models.Index(fields=["status", "start_time"], name="session_status_start_idx"),
            models.Index(fields=["status", "completed_at"], name="session_status_done_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.customer_name} - {self.start_time}"


class Member(models.Model):
    """Append-only record of a party added to a session."""

    session = models.ForeignKey(Session, on_delete=models.CASCADE, related_name="members")
    position = models.PositiveIntegerField()
    name = models.CharField(max_length=255)
    people_count = models.PositiveIntegerField()
    devices = models.JSONField(default=dict)
    added_at = models.DateTimeField()

    class Meta:
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(fields=["session", "position"], name="unique_member_position"),
        ]

    def __str__(self) -> str:
        return f"{self.name} (+{self.people_count})"


class DeviceClaim(models.Model):
    """A numbered device unit held by an active session."""

    session = models.ForeignKey(Session, on_delete=models.CASCADE, related_name="claims")
    kind = models.CharField(max_length=16, choices=DEVICE_KIND_CHOICES)
    unit = models.PositiveIntegerField()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["kind", "unit"], name="unique_device_unit_claim"),
        ]

    def __str__(self) -> str:
        return f"{self.kind.upper()} #{self.unit}"


class Booking(models.Model):
    """Persistence model for bookings."""

    STATUS_CHOICES = [(status.value, status.value.title()) for status in BookingStatus]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer_name = models.CharField(max_length=255)
    contact_number = models.CharField(max_length=32, blank=True)
    booking_time = models.DateTimeField()
    devices = models.JSONField(default=dict)
    units = models.JSONField(default=dict)
    people_count = models.PositiveIntegerField(default=1)
    duration_minutes = models.PositiveIntegerField(default=60)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=BookingStatus.UPCOMING.value)
    session = models.ForeignKey(
        Session, on_delete=models.SET_NULL, null=True, blank=True, related_name="bookings"
    )
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["booking_time"]
        indexes = [
            models.Index(fields=["status", "booking_time"], name="booking_status_time_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.customer_name} @ {self.booking_time}"


class Battle(models.Model):
    """Persistence model for 1v1 battles."""

    STATUS_CHOICES = [(status.value, status.value.title()) for status in BattleStatus]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    crown_holder = models.CharField(max_length=255)
    challenger = models.CharField(max_length=255)
    crown_holder_score = models.PositiveIntegerField(default=0)
    challenger_score = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=BattleStatus.ACTIVE.value)
    started_at = models.DateTimeField()
    ended_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-started_at"]
        indexes = [
            models.Index(fields=["status", "-started_at"], name="battle_status_started_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.crown_holder} vs {self.challenger}"


class Subscription(models.Model):
    """Persistence model for recurring café costs."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    type = models.CharField(max_length=255)
    provider = models.CharField(max_length=255, blank=True)
    cost = models.DecimalField(max_digits=12, decimal_places=2)
    start_date = models.DateField()
    expiry_date = models.DateField()
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.type} ({self.provider})" if self.provider else self.type


class Salary(models.Model):
    """Persistence model for salary payments."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    employee_name = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    payment_date = models.DateField()
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["-payment_date", "-created_at"]
        verbose_name_plural = "salaries"
        indexes = [
            models.Index(fields=["payment_date"], name="salary_payment_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.employee_name} {self.payment_date}"
