"""Session service - all session business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Every mutation of an existing session runs under ``store.locked`` so
read-modify-write never interleaves for the same session id.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from django.utils import timezone

from floor.domain import DeviceKind, DeviceUnits, Session, SessionId
from floor.domain import ledger
from floor.domain.errors import DeviceUnavailableError, InvalidSessionIdError, SessionNotFoundError
from floor.domain.snacks import snack_lines
from floor.services.events import session_completed, session_created, session_deleted, session_settled
from floor.services.inputs import (
    AddMemberInput,
    AddSnacksInput,
    CreateSessionInput,
    ExtendTimeInput,
    SettleInput,
)
from floor.stores.interfaces import SessionStore
from floor.utils import to_local

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settlement:
    session: Session
    amount_paid: Decimal


@dataclass(frozen=True)
class DeviceAvailability:
    limits: dict[str, int]
    occupied: dict[str, list[int]]


class SessionService:
    """Service for device session operations."""

    def __init__(
        self,
        store: SessionStore,
        device_limits: Mapping[str, int],
        clock: Callable[[], datetime] = timezone.now,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self._store = store
        self._device_limits = dict(device_limits)
        self._clock = clock
        self._id_factory = id_factory

    def _now(self) -> datetime:
        return to_local(self._clock())

    @staticmethod
    def _parse_id(session_id: str) -> SessionId:
        try:
            return SessionId.from_string(session_id)
        except ValueError:
            raise InvalidSessionIdError() from None

    def get_session(self, session_id: str) -> Session:
        """Return a session by ID.

        Raises:
            InvalidSessionIdError: If the session_id is not a valid UUID.
            SessionNotFoundError: If the session does not exist.
        """
        session = self._store.get(self._parse_id(session_id))
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def list_active_sessions(self) -> list[Session]:
        return self._store.list_active()

    def list_completed_sessions(
        self, since: datetime | None = None, until: datetime | None = None
    ) -> list[Session]:
        return self._store.list_completed(since, until)

    def device_availability(self) -> DeviceAvailability:
        return DeviceAvailability(
            limits=dict(self._device_limits),
            occupied={kind.value: self._store.occupied_units(kind) for kind in DeviceKind},
        )

    def _units_available(self, units: DeviceUnits) -> bool:
        for kind, numbers in units.units:
            limit = self._device_limits.get(kind.value, 0)
            for number in numbers:
                if number > limit:
                    raise DeviceUnavailableError(
                        f"{kind.value.upper()} #{number} does not exist (Max {limit})"
                    )
            taken = set(self._store.occupied_units(kind)).intersection(numbers)
            if taken:
                logger.info("%s units %s already occupied", kind.value.upper(), sorted(taken))
                return False
        return True

    def create_session(self, data: CreateSessionInput) -> Session:
        """Price and open a session on the requested devices.

        Raises:
            DeviceUnavailableError: If a requested unit does not exist or is taken.
            ValidationError: If the input is out of range.
        """
        now = self._now()
        session = ledger.open_session(
            session_id=SessionId(self._id_factory()),
            start_time=to_local(data.start_time) or now,
            customer_name=data.customer_name.strip(),
            contact_number=data.contact_number,
            duration_minutes=data.duration_minutes,
            people_count=data.people_count,
            devices=data.devices,
            units=data.units,
            units_available=self._units_available(data.units),
            now=now,
        )
        self._store.add(session)
        logger.info(
            "Session %s opened for %s: %s min, %s people, %s, price %s",
            session.id,
            session.customer_name,
            session.duration_minutes,
            session.people_count,
            session.window.value,
            session.price,
        )
        session_created.send(sender=self.__class__, session=session)
        return session

    def extend_time(self, session_id: str, data: ExtendTimeInput) -> Session:
        sid = self._parse_id(session_id)
        with self._store.locked(sid) as current:
            updated = ledger.extend_time(current, data.extra_minutes, self._now())
            if updated is not current:
                self._store.put(updated)
        logger.info("Session %s extended by %s min, price now %s", sid, data.extra_minutes, updated.price)
        return updated

    def add_member(self, session_id: str, data: AddMemberInput) -> Session:
        sid = self._parse_id(session_id)
        with self._store.locked(sid) as current:
            updated = ledger.add_member(
                current,
                name=data.name.strip(),
                people_count=data.people_count,
                devices=data.devices,
                now=self._now(),
            )
            self._store.put(updated)
        logger.info(
            "Session %s added member %s (+%s), price now %s",
            sid,
            data.name,
            data.people_count,
            updated.price,
        )
        return updated

    def add_snacks(self, session_id: str, data: AddSnacksInput) -> Session:
        sid = self._parse_id(session_id)
        lines = snack_lines(data.items)
        with self._store.locked(sid) as current:
            updated = ledger.add_snacks(current, lines, self._now())
            self._store.put(updated)
        logger.info("Session %s added %d snack line(s), price now %s", sid, len(lines), updated.price)
        return updated

    def settle_partial(self, session_id: str, data: SettleInput) -> Settlement:
        """Collect the even share of ``heads_paying_now`` people.

        Raises:
            SettlementError: If nobody is left to pay or too many heads pay.
        """
        sid = self._parse_id(session_id)
        with self._store.locked(sid) as current:
            updated, amount = ledger.settle_partial(current, data.heads_paying_now, self._now())
            self._store.put(updated)
        logger.info(
            "Session %s settled %s for %s head(s), remaining %s",
            sid,
            amount,
            data.heads_paying_now,
            updated.remaining_amount,
        )
        session_settled.send(sender=self.__class__, session=updated, amount=amount)
        return Settlement(session=updated, amount_paid=amount)

    def complete_session(self, session_id: str) -> Session:
        """Complete an active session and release its devices.

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionNotActiveError: If the session is already completed.
        """
        sid = self._parse_id(session_id)
        with self._store.locked(sid) as current:
            updated = ledger.complete(current, self._now())
            self._store.put(updated)
        logger.info("Session %s completed, remaining %s", sid, updated.remaining_amount)
        session_completed.send(sender=self.__class__, session=updated)
        return updated

    def delete_session(self, session_id: str) -> None:
        """Remove a session in any status and release its devices."""
        sid = self._parse_id(session_id)
        with self._store.locked(sid) as current:
            self._store.delete(sid)
        logger.info("Session %s deleted (was %s)", sid, current.status.value)
        session_deleted.send(sender=self.__class__, session=current)
