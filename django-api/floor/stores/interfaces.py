"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime

from floor.domain import (
    Battle,
    BattleId,
    BattleSide,
    BattleStatus,
    Booking,
    BookingId,
    DeviceKind,
    Salary,
    SalaryId,
    Session,
    SessionId,
    Subscription,
    SubscriptionId,
)


class SessionStore(ABC):
    """Interface for the session registry."""

    @abstractmethod
    def get(self, session_id: SessionId) -> Session | None:
        """Return a session by ID, or None if not found."""
        ...

    @abstractmethod
    def locked(self, session_id: SessionId) -> AbstractContextManager[Session]:
        """Hold the session exclusively for a read-modify-write.

        Yields the current session. Writes made with ``put`` inside the block
        commit when it exits cleanly.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        ...

    @abstractmethod
    def add(self, session: Session) -> None:
        """Persist a new session and claim its device units.

        Raises:
            DeviceUnavailableError: If any unit is already claimed.
        """
        ...

    @abstractmethod
    def put(self, session: Session) -> None:
        """Persist changes to an existing session.

        Completing a session releases its device units.
        """
        ...

    @abstractmethod
    def delete(self, session_id: SessionId) -> bool:
        """Delete a session and release its units. Returns False if absent."""
        ...

    @abstractmethod
    def list_active(self) -> list[Session]:
        """Return active sessions ordered by start_time ascending."""
        ...

    @abstractmethod
    def list_completed(self, since: datetime | None, until: datetime | None) -> list[Session]:
        """Return completed sessions within [since, until) by completed_at."""
        ...

    @abstractmethod
    def occupied_units(self, kind: DeviceKind) -> list[int]:
        """Return unit numbers of ``kind`` claimed by active sessions."""
        ...


class BookingStore(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    def add(self, booking: Booking) -> None:
        ...

    @abstractmethod
    def get(self, booking_id: BookingId) -> Booking | None:
        ...

    @abstractmethod
    def list_upcoming(self) -> list[Booking]:
        """Return upcoming bookings ordered by booking_time ascending."""
        ...

    @abstractmethod
    def list_due(self, now: datetime) -> list[Booking]:
        """Return upcoming bookings whose booking_time is at or before ``now``."""
        ...

    @abstractmethod
    def claim(self, booking_id: BookingId) -> bool:
        """Move an upcoming booking to converted. False if someone else did."""
        ...

    @abstractmethod
    def mark_converted(self, booking_id: BookingId, session_id: SessionId) -> None:
        ...

    @abstractmethod
    def release(self, booking_id: BookingId) -> None:
        """Return a claimed booking to upcoming so a later tick retries it."""
        ...


class BattleStore(ABC):
    """Interface for battle persistence operations."""

    @abstractmethod
    def add(self, battle: Battle) -> None:
        ...

    @abstractmethod
    def get(self, battle_id: BattleId) -> Battle | None:
        ...

    @abstractmethod
    def list_by_status(self, status: BattleStatus) -> list[Battle]:
        """Return battles newest first."""
        ...

    @abstractmethod
    def increment_score(self, battle_id: BattleId, side: BattleSide) -> bool:
        """Atomically add one point to ``side`` of an active battle.

        Returns False when no active battle matched.
        """
        ...

    @abstractmethod
    def finish(self, battle_id: BattleId, ended_at: datetime) -> bool:
        """Complete an active battle. Returns False when no active battle matched."""
        ...


class SubscriptionStore(ABC):
    """Interface for subscription persistence operations."""

    @abstractmethod
    def add(self, subscription: Subscription) -> None:
        ...

    @abstractmethod
    def list_all(self) -> list[Subscription]:
        """Return subscriptions newest first by created_at."""
        ...

    @abstractmethod
    def delete(self, subscription_id: SubscriptionId) -> bool:
        """Delete a subscription. Returns False if absent."""
        ...


class SalaryStore(ABC):
    """Interface for salary payment persistence operations."""

    @abstractmethod
    def add(self, salary: Salary) -> None:
        ...

    @abstractmethod
    def list_all(self) -> list[Salary]:
        """Return payments by payment_date descending, newest entry first on ties."""
        ...

    @abstractmethod
    def delete(self, salary_id: SalaryId) -> bool:
        """Delete a salary payment. Returns False if absent."""
        ...
