"""Booking service: reservations and their conversion into sessions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from django.utils import timezone

from floor.domain import Booking, BookingId, BookingStatus, SessionId
from floor.domain.errors import BookingNotFoundError, FloorError, ValidationError
from floor.services.inputs import CreateBookingInput, CreateSessionInput
from floor.services.session_service import SessionService
from floor.stores.interfaces import BookingStore
from floor.utils import to_local

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    converted: list[tuple[BookingId, SessionId]] = field(default_factory=list)
    failed: list[BookingId] = field(default_factory=list)


class BookingService:
    """Service for booking operations."""

    def __init__(
        self,
        store: BookingStore,
        sessions: SessionService,
        clock: Callable[[], datetime] = timezone.now,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self._store = store
        self._sessions = sessions
        self._clock = clock
        self._id_factory = id_factory

    def create_booking(self, data: CreateBookingInput) -> Booking:
        booking = Booking(
            id=BookingId(self._id_factory()),
            customer_name=data.customer_name.strip(),
            contact_number=data.contact_number,
            booking_time=to_local(data.booking_time),
            devices=data.devices,
            units=data.units,
            people_count=data.people_count,
            duration_minutes=data.duration_minutes,
            status=BookingStatus.UPCOMING,
            created_at=to_local(self._clock()),
        )
        self._store.add(booking)
        logger.info("Booking %s created for %s at %s", booking.id, booking.customer_name, booking.booking_time)
        return booking

    def get_booking(self, booking_id: str) -> Booking:
        try:
            bid = BookingId.from_string(booking_id)
        except ValueError:
            raise ValidationError("Invalid booking ID format") from None
        booking = self._store.get(bid)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def list_upcoming(self) -> list[Booking]:
        return self._store.list_upcoming()

    def convert_due(self, now: datetime | None = None) -> ConversionResult:
        """Open a session for every booking whose time has arrived.

        Each booking is claimed before its session is created, so concurrent
        converters never open two sessions for one booking. A booking whose
        session cannot be opened goes back to upcoming and is retried on the
        next call.
        """
        now = to_local(now or self._clock())
        result = ConversionResult()
        for booking in self._store.list_due(now):
            if not self._store.claim(booking.id):
                continue
            try:
                session = self._sessions.create_session(
                    CreateSessionInput(
                        customer_name=booking.customer_name,
                        contact_number=booking.contact_number,
                        people_count=booking.people_count,
                        duration_minutes=booking.duration_minutes,
                        devices=booking.devices,
                        units=booking.units,
                        start_time=now,
                    )
                )
            except FloorError as exc:
                self._store.release(booking.id)
                logger.warning("Booking %s not converted: %s", booking.id, exc)
                result.failed.append(booking.id)
                continue
            self._store.mark_converted(booking.id, session.id)
            logger.info("Booking %s converted to session %s", booking.id, session.id)
            result.converted.append((booking.id, session.id))
        return result
