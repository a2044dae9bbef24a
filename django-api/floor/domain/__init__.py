from floor.domain.models import (
    Battle,
    BattleSide,
    BattleStatus,
    Booking,
    BookingStatus,
    ManagementSummary,
    Member,
    Salary,
    Session,
    SessionStatus,
    SnackLine,
    Subscription,
    SubscriptionStatus,
)
from floor.domain.tariff import TariffWindow
from floor.domain.value_objects import (
    BattleId,
    BookingId,
    DeviceAllocation,
    DeviceKind,
    DeviceUnits,
    Money,
    SalaryId,
    SessionId,
    SubscriptionId,
)

__all__ = [
    "Battle",
    "BattleSide",
    "BattleStatus",
    "Booking",
    "BookingStatus",
    "ManagementSummary",
    "Member",
    "Salary",
    "Session",
    "SessionStatus",
    "SnackLine",
    "Subscription",
    "SubscriptionStatus",
    "TariffWindow",
    "BattleId",
    "BookingId",
    "SalaryId",
    "SessionId",
    "SubscriptionId",
    "DeviceAllocation",
    "DeviceKind",
    "DeviceUnits",
    "Money",
]
