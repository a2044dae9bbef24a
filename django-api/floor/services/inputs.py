"""Validated inputs for service operations.

Handlers build these from request data; services never see raw payloads.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from floor.domain import DeviceAllocation, DeviceKind, DeviceUnits
from floor.domain.errors import ValidationError


def _required_name(value: str, label: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{label} is required")


@dataclass(frozen=True)
class CreateSessionInput:
    customer_name: str
    people_count: int
    duration_minutes: int
    devices: DeviceAllocation
    units: DeviceUnits = field(default_factory=DeviceUnits)
    contact_number: str = ""
    start_time: datetime | None = None

    def __post_init__(self) -> None:
        _required_name(self.customer_name, "Customer name")
        if self.people_count < 1:
            raise ValidationError("A session needs at least one person")
        if self.duration_minutes < 1:
            raise ValidationError("Duration must be at least one minute")
        if self.devices.is_empty:
            raise ValidationError("Select at least one device")
        for kind in DeviceKind:
            if len(self.units.for_kind(kind)) > self.devices.count(kind):
                raise ValidationError(f"More {kind.value.upper()} units than {kind.value.upper()} devices")


@dataclass(frozen=True)
class ExtendTimeInput:
    extra_minutes: int

    def __post_init__(self) -> None:
        if self.extra_minutes < 0:
            raise ValidationError("Extra minutes cannot be negative")


@dataclass(frozen=True)
class AddMemberInput:
    name: str
    people_count: int
    devices: DeviceAllocation

    def __post_init__(self) -> None:
        _required_name(self.name, "Member name")
        if self.people_count < 1:
            raise ValidationError("A new member needs at least one person")


@dataclass(frozen=True)
class AddSnacksInput:
    items: Mapping[str, int]

    def __post_init__(self) -> None:
        if not any(self.items.values()):
            raise ValidationError("Pick at least one snack")


@dataclass(frozen=True)
class SettleInput:
    heads_paying_now: int

    def __post_init__(self) -> None:
        if self.heads_paying_now < 0:
            raise ValidationError("Paying heads cannot be negative")


@dataclass(frozen=True)
class CreateBookingInput:
    customer_name: str
    booking_time: datetime
    devices: DeviceAllocation
    units: DeviceUnits = field(default_factory=DeviceUnits)
    people_count: int = 1
    duration_minutes: int = 60
    contact_number: str = ""

    def __post_init__(self) -> None:
        _required_name(self.customer_name, "Customer name")
        if self.people_count < 1:
            raise ValidationError("A booking needs at least one person")
        if self.duration_minutes < 1:
            raise ValidationError("Duration must be at least one minute")
        if self.devices.is_empty:
            raise ValidationError("Select at least one device")


@dataclass(frozen=True)
class StartBattleInput:
    crown_holder: str
    challenger: str

    def __post_init__(self) -> None:
        if not self.crown_holder.strip() or not self.challenger.strip():
            raise ValidationError("Both players are required")


@dataclass(frozen=True)
class CreateSubscriptionInput:
    type: str
    cost: Decimal
    start_date: date
    expiry_date: date
    provider: str = ""

    def __post_init__(self) -> None:
        _required_name(self.type, "Subscription type")
        if self.cost <= 0:
            raise ValidationError("Cost must be a positive number")
        if self.expiry_date <= self.start_date:
            raise ValidationError("Expiry date must be after start date")


@dataclass(frozen=True)
class CreateSalaryInput:
    employee_name: str
    amount: Decimal
    payment_date: date
    notes: str = ""

    def __post_init__(self) -> None:
        _required_name(self.employee_name, "Employee name")
        if self.amount <= 0:
            raise ValidationError("Amount must be a positive number")
