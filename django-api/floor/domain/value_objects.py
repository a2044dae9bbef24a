"""Domain primitives that enforce validity at creation time."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Self
from uuid import UUID

from floor.domain.errors import ValidationError

CENT = Decimal("0.01")


def quantize(amount: Decimal) -> Decimal:
    """Round an amount to the smallest display unit."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class SessionId:
    """Unique identifier for a Session."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BattleId:
    """Unique identifier for a Battle."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SubscriptionId:
    """Unique identifier for a Subscription."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SalaryId:
    """Unique identifier for a Salary payment."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=Decimal("0"))

    def __add__(self, other: "Money") -> "Money":
        return Money(amount=self.amount + other.amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


class DeviceKind(str, Enum):
    """Kinds of rentable devices on the floor."""

    PS = "ps"
    PC = "pc"
    VR = "vr"
    WHEEL = "wheel"
    METABAT = "metabat"


@dataclass(frozen=True)
class DeviceAllocation:
    """Device kind to unit count. Absent kinds count as zero."""

    counts: tuple[tuple[DeviceKind, int], ...] = ()

    def __post_init__(self) -> None:
        for kind, count in self.counts:
            if count < 0:
                raise ValidationError(f"Device count for {kind.value} cannot be negative")

    @classmethod
    def from_mapping(cls, counts: Mapping[str, int] | None) -> Self:
        merged: dict[DeviceKind, int] = {}
        for key, count in (counts or {}).items():
            try:
                kind = DeviceKind(key)
            except ValueError:
                raise ValidationError(f"Unknown device kind {key!r}") from None
            merged[kind] = merged.get(kind, 0) + int(count)
        return cls(counts=tuple((kind, merged[kind]) for kind in DeviceKind if merged.get(kind)))

    def count(self, kind: DeviceKind) -> int:
        for k, n in self.counts:
            if k is kind:
                return n
        return 0

    def has(self, kind: DeviceKind) -> bool:
        return self.count(kind) > 0

    @property
    def has_vr(self) -> bool:
        # VR and MetaBat share one rate table.
        return self.count(DeviceKind.VR) + self.count(DeviceKind.METABAT) > 0

    @property
    def is_empty(self) -> bool:
        return not any(n for _, n in self.counts)

    def merged(self, other: "DeviceAllocation") -> "DeviceAllocation":
        return DeviceAllocation.from_mapping(
            {kind.value: self.count(kind) + other.count(kind) for kind in DeviceKind}
        )

    def to_dict(self) -> dict[str, int]:
        return {kind.value: n for kind, n in self.counts if n}


@dataclass(frozen=True)
class DeviceUnits:
    """Numbered device units claimed by a session, per kind."""

    units: tuple[tuple[DeviceKind, tuple[int, ...]], ...] = field(default=())

    def __post_init__(self) -> None:
        for kind, numbers in self.units:
            if any(n < 1 for n in numbers):
                raise ValidationError(f"{kind.value.upper()} unit numbers start at 1")
            if len(set(numbers)) != len(numbers):
                raise ValidationError(f"{kind.value.upper()} unit requested twice")

    @classmethod
    def from_mapping(cls, units: Mapping[str, Iterable[int]] | None) -> Self:
        parsed: dict[DeviceKind, tuple[int, ...]] = {}
        for key, numbers in (units or {}).items():
            try:
                kind = DeviceKind(key)
            except ValueError:
                raise ValidationError(f"Unknown device kind {key!r}") from None
            parsed[kind] = tuple(sorted(int(n) for n in numbers))
        return cls(units=tuple((kind, parsed[kind]) for kind in DeviceKind if parsed.get(kind)))

    def for_kind(self, kind: DeviceKind) -> tuple[int, ...]:
        for k, numbers in self.units:
            if k is kind:
                return numbers
        return ()

    def pairs(self) -> list[tuple[DeviceKind, int]]:
        return [(kind, n) for kind, numbers in self.units for n in numbers]

    def as_allocation(self) -> DeviceAllocation:
        return DeviceAllocation(counts=tuple((kind, len(numbers)) for kind, numbers in self.units))

    def to_dict(self) -> dict[str, list[int]]:
        return {kind.value: list(numbers) for kind, numbers in self.units}
