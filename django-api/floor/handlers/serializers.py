"""Serializers for request payloads and domain model responses.

Input serializers check payload shape and hand back validated service
inputs; output serializers render domain models as plain JSON values.
"""

from django.conf import settings
from rest_framework import serializers

from floor.domain import DeviceAllocation, DeviceUnits
from floor.services.inputs import (
    AddMemberInput,
    AddSnacksInput,
    CreateBookingInput,
    CreateSalaryInput,
    CreateSessionInput,
    CreateSubscriptionInput,
    ExtendTimeInput,
    SettleInput,
    StartBattleInput,
)


def _device_counts_field() -> serializers.DictField:
    return serializers.DictField(child=serializers.IntegerField(min_value=0), default=dict)


def _device_units_field() -> serializers.DictField:
    return serializers.DictField(
        child=serializers.ListField(child=serializers.IntegerField(min_value=1)),
        default=dict,
    )


def _allocation(counts: dict, units: DeviceUnits) -> DeviceAllocation:
    # Picking numbered units implies one device of that kind per unit.
    if counts:
        return DeviceAllocation.from_mapping(counts)
    return units.as_allocation()


class CreateSessionSerializer(serializers.Serializer):
    customer_name = serializers.CharField(max_length=255)
    contact_number = serializers.CharField(max_length=32, allow_blank=True, default="")
    people_count = serializers.IntegerField(min_value=1)
    duration_minutes = serializers.IntegerField(min_value=1, required=False)
    devices = _device_counts_field()
    units = _device_units_field()
    start_time = serializers.DateTimeField(required=False, allow_null=True, default=None)

    def to_input(self) -> CreateSessionInput:
        data = self.validated_data
        units = DeviceUnits.from_mapping(data["units"])
        return CreateSessionInput(
            customer_name=data["customer_name"],
            contact_number=data["contact_number"],
            people_count=data["people_count"],
            duration_minutes=data.get("duration_minutes", settings.FLOOR_DEFAULT_SESSION_MINUTES),
            devices=_allocation(data["devices"], units),
            units=units,
            start_time=data["start_time"],
        )


class ExtendTimeSerializer(serializers.Serializer):
    extra_minutes = serializers.IntegerField(min_value=0)

    def to_input(self) -> ExtendTimeInput:
        return ExtendTimeInput(extra_minutes=self.validated_data["extra_minutes"])


class AddMemberSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    people_count = serializers.IntegerField(min_value=1)
    devices = _device_counts_field()

    def to_input(self) -> AddMemberInput:
        data = self.validated_data
        return AddMemberInput(
            name=data["name"],
            people_count=data["people_count"],
            devices=DeviceAllocation.from_mapping(data["devices"]),
        )


class AddSnacksSerializer(serializers.Serializer):
    items = serializers.DictField(child=serializers.IntegerField(min_value=0))

    def to_input(self) -> AddSnacksInput:
        return AddSnacksInput(items=self.validated_data["items"])


class SettleSerializer(serializers.Serializer):
    heads_paying_now = serializers.IntegerField(min_value=0)

    def to_input(self) -> SettleInput:
        return SettleInput(heads_paying_now=self.validated_data["heads_paying_now"])


class CreateBookingSerializer(serializers.Serializer):
    customer_name = serializers.CharField(max_length=255)
    contact_number = serializers.CharField(max_length=32, allow_blank=True, default="")
    booking_time = serializers.DateTimeField()
    people_count = serializers.IntegerField(min_value=1, default=1)
    duration_minutes = serializers.IntegerField(min_value=1, required=False)
    devices = _device_counts_field()
    units = _device_units_field()

    def to_input(self) -> CreateBookingInput:
        data = self.validated_data
        units = DeviceUnits.from_mapping(data["units"])
        return CreateBookingInput(
            customer_name=data["customer_name"],
            contact_number=data["contact_number"],
            booking_time=data["booking_time"],
            people_count=data["people_count"],
            duration_minutes=data.get("duration_minutes", settings.FLOOR_DEFAULT_SESSION_MINUTES),
            devices=_allocation(data["devices"], units),
            units=units,
        )


class StartBattleSerializer(serializers.Serializer):
    crown_holder = serializers.CharField(max_length=255)
    challenger = serializers.CharField(max_length=255)

    def to_input(self) -> StartBattleInput:
        return StartBattleInput(**self.validated_data)


class ScoreSerializer(serializers.Serializer):
    player = serializers.CharField()


class CreateSubscriptionSerializer(serializers.Serializer):
    type = serializers.CharField(max_length=255)
    provider = serializers.CharField(max_length=255, allow_blank=True, default="")
    cost = serializers.DecimalField(max_digits=12, decimal_places=2)
    start_date = serializers.DateField()
    expiry_date = serializers.DateField()

    def to_input(self) -> CreateSubscriptionInput:
        return CreateSubscriptionInput(**self.validated_data)


class CreateSalarySerializer(serializers.Serializer):
    employee_name = serializers.CharField(max_length=255)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    payment_date = serializers.DateField()
    notes = serializers.CharField(allow_blank=True, default="")

    def to_input(self) -> CreateSalaryInput:
        return CreateSalaryInput(**self.validated_data)


def _money_field(source: str) -> serializers.DecimalField:
    return serializers.DecimalField(max_digits=12, decimal_places=2, source=source)


class MemberSerializer(serializers.Serializer):
    """Serializer for Member domain model."""

    name = serializers.CharField()
    people_count = serializers.IntegerField()
    devices = serializers.SerializerMethodField()
    added_at = serializers.DateTimeField()

    def get_devices(self, member) -> dict:
        return member.devices.to_dict()


class SnackLineSerializer(serializers.Serializer):
    """Serializer for SnackLine domain model."""

    snack_id = serializers.CharField()
    name = serializers.CharField()
    quantity = serializers.IntegerField()
    amount = _money_field("amount.amount")


class SessionSerializer(serializers.Serializer):
    """Serializer for Session domain model."""

    id = serializers.CharField()
    customer_name = serializers.CharField()
    contact_number = serializers.CharField()
    start_time = serializers.DateTimeField()
    duration_minutes = serializers.IntegerField()
    people_count = serializers.IntegerField()
    devices = serializers.SerializerMethodField()
    units = serializers.SerializerMethodField()
    window = serializers.CharField(source="window.value")
    price = _money_field("price.amount")
    paid_amount = _money_field("paid_amount.amount")
    remaining_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    paid_people = serializers.IntegerField()
    remaining_people = serializers.IntegerField()
    status = serializers.CharField(source="status.value")
    members = MemberSerializer(many=True)
    snacks = SnackLineSerializer(many=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    completed_at = serializers.DateTimeField()

    def get_devices(self, session) -> dict:
        return session.devices.to_dict()

    def get_units(self, session) -> dict:
        return session.units.to_dict()


class DeviceAvailabilitySerializer(serializers.Serializer):
    limits = serializers.DictField(child=serializers.IntegerField())
    occupied = serializers.DictField(child=serializers.ListField(child=serializers.IntegerField()))


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.CharField()
    customer_name = serializers.CharField()
    contact_number = serializers.CharField()
    booking_time = serializers.DateTimeField()
    people_count = serializers.IntegerField()
    duration_minutes = serializers.IntegerField()
    devices = serializers.SerializerMethodField()
    units = serializers.SerializerMethodField()
    status = serializers.CharField(source="status.value")
    session_id = serializers.CharField()
    created_at = serializers.DateTimeField()

    def get_devices(self, booking) -> dict:
        return booking.devices.to_dict()

    def get_units(self, booking) -> dict:
        return booking.units.to_dict()


class BattleSerializer(serializers.Serializer):
    """Serializer for Battle domain model."""

    id = serializers.CharField()
    crown_holder = serializers.CharField()
    challenger = serializers.CharField()
    crown_holder_score = serializers.IntegerField()
    challenger_score = serializers.IntegerField()
    status = serializers.CharField(source="status.value")
    winner = serializers.CharField()
    started_at = serializers.DateTimeField()
    ended_at = serializers.DateTimeField()


class SubscriptionSerializer(serializers.Serializer):
    """Serializer for Subscription domain model.

    Expects ``today`` in the serializer context for the expiry fields.
    """

    id = serializers.CharField()
    type = serializers.CharField()
    provider = serializers.CharField()
    cost = _money_field("cost.amount")
    start_date = serializers.DateField()
    expiry_date = serializers.DateField()
    days_remaining = serializers.SerializerMethodField()
    status = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField()

    def get_days_remaining(self, subscription) -> int:
        return subscription.days_remaining(self.context["today"])

    def get_status(self, subscription) -> str:
        return subscription.status_on(self.context["today"]).value


class SalarySerializer(serializers.Serializer):
    """Serializer for Salary domain model."""

    id = serializers.CharField()
    employee_name = serializers.CharField()
    amount = _money_field("amount.amount")
    payment_date = serializers.DateField()
    notes = serializers.CharField()
    created_at = serializers.DateTimeField()


class ManagementSummarySerializer(serializers.Serializer):
    today = serializers.DateField()
    monthly_burn = _money_field("monthly_burn.amount")
    expiring_count = serializers.IntegerField()
    salaries_this_month = _money_field("salaries_this_month.amount")
    last_salary_date = serializers.DateField()
