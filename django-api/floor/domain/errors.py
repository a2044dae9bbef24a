"""Domain error codes for the floor module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_SESSION_ID = "INVALID_SESSION_ID"
    DEVICE_UNAVAILABLE = "DEVICE_UNAVAILABLE"
    UNKNOWN_SNACK = "UNKNOWN_SNACK"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    BATTLE_NOT_FOUND = "BATTLE_NOT_FOUND"
    SESSION_NOT_ACTIVE = "SESSION_NOT_ACTIVE"
    BATTLE_NOT_ACTIVE = "BATTLE_NOT_ACTIVE"
    SUBSCRIPTION_NOT_FOUND = "SUBSCRIPTION_NOT_FOUND"
    SALARY_NOT_FOUND = "SALARY_NOT_FOUND"
    SETTLEMENT_REJECTED = "SETTLEMENT_REJECTED"


@dataclass(eq=False)
class FloorError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(FloorError):
    """Malformed or out-of-range input."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_INPUT) -> None:
        super().__init__(code=code, message=message)


class NotFoundError(FloorError):
    """Unknown aggregate id."""


class InvalidStateError(FloorError):
    """Operation not legal in the aggregate's current status."""


class DomainError(FloorError):
    """Request computed against valid state but rejected by a business rule."""


class InvalidSessionIdError(ValidationError):
    """Raised when a session ID is invalid."""

    def __init__(self) -> None:
        super().__init__("Invalid session ID format", code=ErrorCode.INVALID_SESSION_ID)


class DeviceUnavailableError(ValidationError):
    """Raised when requested device units are taken or do not exist."""

    def __init__(self, message: str = "Requested device is unavailable") -> None:
        super().__init__(message, code=ErrorCode.DEVICE_UNAVAILABLE)


class UnknownSnackError(ValidationError):
    """Raised when a snack id is not on the menu."""

    def __init__(self, snack_id: str) -> None:
        super().__init__(f"Unknown snack {snack_id!r}", code=ErrorCode.UNKNOWN_SNACK)
        self.snack_id = snack_id


class SessionNotFoundError(NotFoundError):
    """Raised when a session is not found."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_FOUND,
            message="Session not found",
        )
        self.session_id = session_id


class BookingNotFoundError(NotFoundError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_id = booking_id


class BattleNotFoundError(NotFoundError):
    """Raised when a battle is not found."""

    def __init__(self, battle_id: str) -> None:
        super().__init__(
            code=ErrorCode.BATTLE_NOT_FOUND,
            message="Battle not found",
        )
        self.battle_id = battle_id


class SubscriptionNotFoundError(NotFoundError):
    def __init__(self, subscription_id: str) -> None:
        super().__init__(
            code=ErrorCode.SUBSCRIPTION_NOT_FOUND,
            message="Subscription not found",
        )
        self.subscription_id = subscription_id


class SalaryNotFoundError(NotFoundError):
    def __init__(self, salary_id: str) -> None:
        super().__init__(
            code=ErrorCode.SALARY_NOT_FOUND,
            message="Salary record not found",
        )
        self.salary_id = salary_id


class SessionNotActiveError(InvalidStateError):
    """Raised when mutating a session that is no longer active."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_ACTIVE,
            message="Session is not active",
        )
        self.session_id = session_id


class BattleNotActiveError(InvalidStateError):
    """Raised when scoring or finishing a battle that already finished."""

    def __init__(self, battle_id: str) -> None:
        super().__init__(
            code=ErrorCode.BATTLE_NOT_ACTIVE,
            message="Battle is not active",
        )
        self.battle_id = battle_id


class SettlementError(DomainError):
    """Raised when a headcount settlement cannot be computed."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.SETTLEMENT_REJECTED, message=message)
