"""Session price calculation.

The café's tariff is fixed policy, kept in ``RATE_TABLE`` so every figure
can be audited and tested apart from the arithmetic. Shape of the
block-priced tables: an optional flat short tier up to 30 minutes, a
first-hour base, then every started 30 minutes past the first hour billed as
one overage block.

Device precedence:

- any VR or MetaBat unit prices the whole session on the VR table, in every
  window;
- in Happy Hour, PS, PC and Wheel are priced separately and summed;
- in Normal Hour and Fun Night, only the first present of Wheel, PC, PS is
  priced;
- Fallback charges a flat hourly rate per head whatever the devices.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from floor.domain.errors import ValidationError
from floor.domain.tariff import TariffWindow
from floor.domain.value_objects import DeviceAllocation, DeviceKind, quantize

RATE_TABLE_VERSION = "2"

SHORT_TIER_MINUTES = 30
FIRST_BLOCK_MINUTES = 60
OVERAGE_BLOCK_MINUTES = 30
MINUTES_PER_HOUR = 60


class Combination(str, Enum):
    """How several device kinds in one allocation are priced."""

    ADDITIVE = "additive"
    PRIORITY = "priority"


@dataclass(frozen=True)
class VrTariff:
    """Stepped tiers up to an hour, then a continuous hourly pro-rate."""

    tiers: tuple[tuple[int, int], ...]
    hourly_per_head: int


@dataclass(frozen=True)
class BlockTariff:
    """First hour plus rounded-up 30 minute overage blocks."""

    base_per_head: int
    block_rate: int
    short_per_head: int | None = None
    # Flat first-hour totals for specific party sizes.
    base_by_people: tuple[tuple[int, int], ...] = ()
    block_per_head: bool = True
    # Above ``long_after_minutes`` the whole session is billed hourly instead.
    long_hourly_per_head: int | None = None
    long_after_minutes: int = 180


@dataclass(frozen=True)
class WindowTariff:
    combination: Combination
    devices: tuple[tuple[DeviceKind, BlockTariff], ...]


@dataclass(frozen=True)
class RateTable:
    version: str
    vr: VrTariff
    windows: Mapping[TariffWindow, WindowTariff]
    fallback_hourly_per_head: int


RATE_TABLE = RateTable(
    version=RATE_TABLE_VERSION,
    vr=VrTariff(tiers=((15, 50), (30, 100), (60, 180)), hourly_per_head=180),
    windows=MappingProxyType(
        {
            TariffWindow.HAPPY_HOUR: WindowTariff(
                combination=Combination.ADDITIVE,
                devices=(
                    (
                        DeviceKind.PS,
                        BlockTariff(
                            short_per_head=40,
                            base_by_people=((1, 90),),
                            base_per_head=45,
                            block_rate=30,
                        ),
                    ),
                    (DeviceKind.PC, BlockTariff(short_per_head=40, base_per_head=50, block_rate=30)),
                    (
                        DeviceKind.WHEEL,
                        BlockTariff(
                            short_per_head=80,
                            base_per_head=120,
                            block_rate=60,
                            block_per_head=False,
                        ),
                    ),
                ),
            ),
            TariffWindow.NORMAL_HOUR: WindowTariff(
                combination=Combination.PRIORITY,
                devices=(
                    (DeviceKind.WHEEL, BlockTariff(short_per_head=90, base_per_head=150, block_rate=75)),
                    (
                        DeviceKind.PC,
                        BlockTariff(base_per_head=60, block_rate=40, long_hourly_per_head=50),
                    ),
                    (
                        DeviceKind.PS,
                        BlockTariff(base_by_people=((1, 140), (2, 120)), base_per_head=50, block_rate=40),
                    ),
                ),
            ),
            TariffWindow.FUN_NIGHT: WindowTariff(
                combination=Combination.PRIORITY,
                devices=(
                    (DeviceKind.WHEEL, BlockTariff(short_per_head=90, base_per_head=150, block_rate=75)),
                    (
                        DeviceKind.PC,
                        BlockTariff(base_per_head=50, block_rate=30, long_hourly_per_head=50),
                    ),
                    (
                        DeviceKind.PS,
                        BlockTariff(base_by_people=((1, 100),), base_per_head=50, block_rate=30),
                    ),
                ),
            ),
        }
    ),
    fallback_hourly_per_head=50,
)


def overage_blocks(duration_minutes: int) -> int:
    """Started 30 minute blocks beyond the first hour."""
    overage = max(0, duration_minutes - FIRST_BLOCK_MINUTES)
    return math.ceil(overage / OVERAGE_BLOCK_MINUTES)


def _hourly(rate_per_head: int, duration_minutes: int, people_count: int) -> Decimal:
    return Decimal(rate_per_head * people_count * duration_minutes) / MINUTES_PER_HOUR


def vr_price(tariff: VrTariff, duration_minutes: int, people_count: int) -> Decimal:
    for max_minutes, per_head in tariff.tiers:
        if duration_minutes <= max_minutes:
            return Decimal(per_head * people_count)
    return _hourly(tariff.hourly_per_head, duration_minutes, people_count)


def block_price(tariff: BlockTariff, duration_minutes: int, people_count: int) -> Decimal:
    if tariff.long_hourly_per_head is not None and duration_minutes > tariff.long_after_minutes:
        return _hourly(tariff.long_hourly_per_head, duration_minutes, people_count)
    if tariff.short_per_head is not None and duration_minutes <= SHORT_TIER_MINUTES:
        return Decimal(tariff.short_per_head * people_count)

    base = dict(tariff.base_by_people).get(people_count, tariff.base_per_head * people_count)
    block_rate = tariff.block_rate * (people_count if tariff.block_per_head else 1)
    return Decimal(base + overage_blocks(duration_minutes) * block_rate)


def price_for(
    duration_minutes: int,
    people_count: int,
    devices: DeviceAllocation,
    window: TariffWindow,
    table: RateTable = RATE_TABLE,
) -> Decimal:
    """Price ``duration_minutes`` of play for a party on ``devices`` in ``window``.

    Raises:
        ValidationError: If the duration is negative or the party is empty.
    """
    if duration_minutes < 0:
        raise ValidationError("Duration cannot be negative")
    if people_count < 1:
        raise ValidationError("A session needs at least one person")

    if devices.has_vr:
        return quantize(vr_price(table.vr, duration_minutes, people_count))

    window_tariff = table.windows.get(window)
    if window_tariff is None:
        return quantize(_hourly(table.fallback_hourly_per_head, duration_minutes, people_count))

    present = [(kind, tariff) for kind, tariff in window_tariff.devices if devices.has(kind)]
    if window_tariff.combination is Combination.PRIORITY:
        present = present[:1]

    total = sum(
        (block_price(tariff, duration_minutes, people_count) for _, tariff in present),
        Decimal("0"),
    )
    return quantize(total)
