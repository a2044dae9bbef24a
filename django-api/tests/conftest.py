"""Pytest configuration and shared fixtures."""

import threading
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from floor.domain import (
    Battle,
    BattleId,
    BattleSide,
    BattleStatus,
    Booking,
    BookingId,
    BookingStatus,
    DeviceKind,
    Salary,
    SalaryId,
    Session,
    SessionId,
    SessionStatus,
    Subscription,
    SubscriptionId,
)
from floor.domain.errors import DeviceUnavailableError, SessionNotFoundError
from floor.stores.interfaces import (
    BattleStore,
    BookingStore,
    SalaryStore,
    SessionStore,
    SubscriptionStore,
)

DEVICE_LIMITS = {"ps": 8, "pc": 10, "vr": 2, "wheel": 2, "metabat": 1}


def local(*args) -> datetime:
    """Aware datetime in the café time zone."""
    return timezone.make_aware(datetime(*args))


class InMemorySessionStore(SessionStore):
    """Session store backed by dicts, with one lock per session id."""

    def __init__(self) -> None:
        self.sessions: dict[SessionId, Session] = {}
        self.claims: dict[tuple[DeviceKind, int], SessionId] = {}
        self._guard = threading.Lock()
        self._locks: dict[SessionId, threading.Lock] = defaultdict(threading.Lock)

    def get(self, session_id):
        return self.sessions.get(session_id)

    @contextmanager
    def locked(self, session_id):
        with self._guard:
            lock = self._locks[session_id]
        with lock:
            session = self.sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(str(session_id))
            yield session

    def add(self, session):
        with self._guard:
            pairs = session.units.pairs()
            if any(pair in self.claims for pair in pairs):
                raise DeviceUnavailableError("Requested device was claimed by another session")
            for pair in pairs:
                self.claims[pair] = session.id
            self.sessions[session.id] = session

    def _release(self, session_id):
        for pair in [p for p, owner in self.claims.items() if owner == session_id]:
            del self.claims[pair]

    def put(self, session):
        with self._guard:
            self.sessions[session.id] = session
            if session.status is SessionStatus.COMPLETED:
                self._release(session.id)

    def delete(self, session_id):
        with self._guard:
            self._release(session_id)
            return self.sessions.pop(session_id, None) is not None

    def list_active(self):
        return sorted(
            (s for s in self.sessions.values() if s.is_active),
            key=lambda s: s.start_time,
        )

    def list_completed(self, since, until):
        return sorted(
            (
                s
                for s in self.sessions.values()
                if s.status is SessionStatus.COMPLETED
                and (since is None or s.completed_at >= since)
                and (until is None or s.completed_at < until)
            ),
            key=lambda s: s.completed_at,
        )

    def occupied_units(self, kind):
        return sorted(unit for k, unit in self.claims if k is kind)


class InMemoryBookingStore(BookingStore):
    def __init__(self) -> None:
        self.bookings: dict[BookingId, Booking] = {}

    def add(self, booking):
        self.bookings[booking.id] = booking

    def get(self, booking_id):
        return self.bookings.get(booking_id)

    def list_upcoming(self):
        return sorted(
            (b for b in self.bookings.values() if b.status is BookingStatus.UPCOMING),
            key=lambda b: b.booking_time,
        )

    def list_due(self, now):
        return [b for b in self.list_upcoming() if b.booking_time <= now]

    def claim(self, booking_id):
        booking = self.bookings[booking_id]
        if booking.status is not BookingStatus.UPCOMING:
            return False
        self._replace(booking, status=BookingStatus.CONVERTED)
        return True

    def mark_converted(self, booking_id, session_id):
        self._replace(self.bookings[booking_id], status=BookingStatus.CONVERTED, session_id=session_id)

    def release(self, booking_id):
        booking = self.bookings[booking_id]
        if booking.session_id is None:
            self._replace(booking, status=BookingStatus.UPCOMING)

    def _replace(self, booking, **changes):
        self.bookings[booking.id] = replace(booking, **changes)


class InMemoryBattleStore(BattleStore):
    def __init__(self) -> None:
        self.battles: dict[BattleId, Battle] = {}

    def add(self, battle):
        self.battles[battle.id] = battle

    def get(self, battle_id):
        return self.battles.get(battle_id)

    def list_by_status(self, status):
        return [b for b in self.battles.values() if b.status is status]

    def increment_score(self, battle_id, side):
        battle = self.battles.get(battle_id)
        if battle is None or battle.status is not BattleStatus.ACTIVE:
            return False
        if side is BattleSide.CROWN_HOLDER:
            battle = replace(battle, crown_holder_score=battle.crown_holder_score + 1)
        else:
            battle = replace(battle, challenger_score=battle.challenger_score + 1)
        self.battles[battle_id] = battle
        return True

    def finish(self, battle_id, ended_at):
        battle = self.battles.get(battle_id)
        if battle is None or battle.status is not BattleStatus.ACTIVE:
            return False
        self.battles[battle_id] = replace(battle, status=BattleStatus.COMPLETED, ended_at=ended_at)
        return True


class InMemorySubscriptionStore(SubscriptionStore):
    def __init__(self) -> None:
        self.subscriptions: dict[SubscriptionId, Subscription] = {}

    def add(self, subscription):
        self.subscriptions[subscription.id] = subscription

    def list_all(self):
        return sorted(self.subscriptions.values(), key=lambda s: s.created_at, reverse=True)

    def delete(self, subscription_id):
        return self.subscriptions.pop(subscription_id, None) is not None


class InMemorySalaryStore(SalaryStore):
    def __init__(self) -> None:
        self.salaries: dict[SalaryId, Salary] = {}

    def add(self, salary):
        self.salaries[salary.id] = salary

    def list_all(self):
        return sorted(
            self.salaries.values(),
            key=lambda s: (s.payment_date, s.created_at),
            reverse=True,
        )

    def delete(self, salary_id):
        return self.salaries.pop(salary_id, None) is not None


class FakeClock:
    """Clock that returns a fixed instant until moved."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def booking_store() -> InMemoryBookingStore:
    return InMemoryBookingStore()


@pytest.fixture
def battle_store() -> InMemoryBattleStore:
    return InMemoryBattleStore()


@pytest.fixture
def subscription_store() -> InMemorySubscriptionStore:
    return InMemorySubscriptionStore()


@pytest.fixture
def salary_store() -> InMemorySalaryStore:
    return InMemorySalaryStore()


@pytest.fixture
def clock() -> FakeClock:
    # A Monday in Normal Hour.
    return FakeClock(local(2024, 6, 3, 15, 0))
