"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in floor/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from floor.domain.tariff import TariffWindow, classify
from floor.domain.value_objects import (
    BattleId,
    BookingId,
    DeviceAllocation,
    DeviceUnits,
    Money,
    SalaryId,
    SessionId,
    SubscriptionId,
)


class SessionStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class BookingStatus(str, Enum):
    UPCOMING = "upcoming"
    CONVERTED = "converted"


class BattleStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class BattleSide(str, Enum):
    CROWN_HOLDER = "crown_holder"
    CHALLENGER = "challenger"


@dataclass(frozen=True)
class Member:
    """A party that joined a running session."""

    name: str
    people_count: int
    devices: DeviceAllocation
    added_at: datetime


@dataclass(frozen=True)
class SnackLine:
    """Snacks bought during a session."""

    snack_id: str
    name: str
    quantity: int
    amount: Money


@dataclass(frozen=True)
class Session:
    """Domain representation of a device session and its ledger."""

    id: SessionId
    customer_name: str
    contact_number: str
    start_time: datetime
    duration_minutes: int
    people_count: int
    devices: DeviceAllocation
    units: DeviceUnits
    price: Money
    paid_amount: Money
    paid_people: int
    status: SessionStatus
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None
    members: tuple[Member, ...] = ()
    snacks: tuple[SnackLine, ...] = ()

    @property
    def window(self) -> TariffWindow:
        # Fixed at the start time; extensions never re-classify.
        return classify(self.start_time)

    @property
    def remaining_amount(self) -> Decimal:
        return self.price.amount - self.paid_amount.amount

    @property
    def remaining_people(self) -> int:
        return self.people_count - self.paid_people

    @property
    def is_active(self) -> bool:
        return self.status is SessionStatus.ACTIVE


@dataclass(frozen=True)
class Booking:
    """Domain representation of a future reservation."""

    id: BookingId
    customer_name: str
    contact_number: str
    booking_time: datetime
    devices: DeviceAllocation
    units: DeviceUnits
    people_count: int
    duration_minutes: int
    status: BookingStatus
    created_at: datetime
    session_id: SessionId | None = None


@dataclass(frozen=True)
class Battle:
    """Domain representation of a 1v1 battle."""

    id: BattleId
    crown_holder: str
    challenger: str
    crown_holder_score: int
    challenger_score: int
    status: BattleStatus
    started_at: datetime
    ended_at: datetime | None = None

    @property
    def winner(self) -> str:
        if self.crown_holder_score > self.challenger_score:
            return BattleSide.CROWN_HOLDER.value
        if self.challenger_score > self.crown_holder_score:
            return BattleSide.CHALLENGER.value
        return "tie"


# A subscription this close to expiry is flagged on the owner overview.
EXPIRY_WARNING_DAYS = 5


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    EXPIRING = "expiring"
    EXPIRED = "expired"


@dataclass(frozen=True)
class Subscription:
    """A recurring cost the café pays, such as a game pass or internet plan."""

    id: SubscriptionId
    type: str
    provider: str
    cost: Money
    start_date: date
    expiry_date: date
    created_at: datetime

    def days_remaining(self, today: date) -> int:
        return (self.expiry_date - today).days

    def status_on(self, today: date) -> SubscriptionStatus:
        days = self.days_remaining(today)
        if days < 0:
            return SubscriptionStatus.EXPIRED
        if days <= EXPIRY_WARNING_DAYS:
            return SubscriptionStatus.EXPIRING
        return SubscriptionStatus.ACTIVE


@dataclass(frozen=True)
class Salary:
    """One salary payment to an employee."""

    id: SalaryId
    employee_name: str
    amount: Money
    payment_date: date
    notes: str
    created_at: datetime


@dataclass(frozen=True)
class ManagementSummary:
    """Owner overview totals as of ``today``."""

    today: date
    monthly_burn: Money
    expiring_count: int
    salaries_this_month: Money
    last_salary_date: date | None
