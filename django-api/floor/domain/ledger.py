"""Session ledger transitions.

Each function takes a ``Session`` and returns the updated ``Session``; nothing
here touches storage. Prices for deltas are computed in the window the
session was opened in.
"""

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from floor.domain.errors import (
    DeviceUnavailableError,
    SessionNotActiveError,
    SettlementError,
    ValidationError,
)
from floor.domain.models import Member, Session, SessionStatus, SnackLine
from floor.domain.pricing import price_for
from floor.domain.tariff import classify
from floor.domain.value_objects import (
    DeviceAllocation,
    DeviceUnits,
    Money,
    SessionId,
    quantize,
)


def _require_active(session: Session) -> None:
    if not session.is_active:
        raise SessionNotActiveError(str(session.id))


def open_session(
    session_id: SessionId,
    start_time: datetime,
    customer_name: str,
    contact_number: str,
    duration_minutes: int,
    people_count: int,
    devices: DeviceAllocation,
    units: DeviceUnits,
    units_available: bool,
    now: datetime,
) -> Session:
    """Price and open a new session.

    ``units_available`` is the registry's verdict on the requested units; the
    ledger refuses to open a session the registry could not place.

    Raises:
        DeviceUnavailableError: If ``units_available`` is false.
        ValidationError: If duration or headcount is out of range.
    """
    if not units_available:
        raise DeviceUnavailableError()
    price = price_for(duration_minutes, people_count, devices, classify(start_time))
    return Session(
        id=session_id,
        customer_name=customer_name,
        contact_number=contact_number,
        start_time=start_time,
        duration_minutes=duration_minutes,
        people_count=people_count,
        devices=devices,
        units=units,
        price=Money(price),
        paid_amount=Money.zero(),
        paid_people=0,
        status=SessionStatus.ACTIVE,
        created_at=now,
        updated_at=now,
    )


def extend_time(session: Session, extra_minutes: int, now: datetime) -> Session:
    """Add ``extra_minutes``, costed as a standalone block for the current party."""
    if extra_minutes < 0:
        raise ValidationError("Extra minutes cannot be negative")
    _require_active(session)
    if extra_minutes == 0:
        return session

    extra = price_for(extra_minutes, session.people_count, session.devices, session.window)
    return replace(
        session,
        duration_minutes=session.duration_minutes + extra_minutes,
        price=session.price + Money(extra),
        updated_at=now,
    )


def add_member(
    session: Session,
    name: str,
    people_count: int,
    devices: DeviceAllocation,
    now: datetime,
) -> Session:
    """Add a party to the session, costed over the session's allocated run."""
    if people_count < 1:
        raise ValidationError("A new member needs at least one person")
    _require_active(session)

    extra = price_for(session.duration_minutes, people_count, devices, session.window)
    member = Member(name=name, people_count=people_count, devices=devices, added_at=now)
    return replace(
        session,
        people_count=session.people_count + people_count,
        devices=session.devices.merged(devices),
        price=session.price + Money(extra),
        members=session.members + (member,),
        updated_at=now,
    )


def add_snacks(session: Session, lines: Iterable[SnackLine], now: datetime) -> Session:
    _require_active(session)
    lines = tuple(lines)
    total = sum((line.amount for line in lines), Money.zero())
    return replace(
        session,
        price=session.price + total,
        snacks=session.snacks + lines,
        updated_at=now,
    )


def settle_partial(session: Session, heads_paying_now: int, now: datetime) -> tuple[Session, Decimal]:
    """Mark ``heads_paying_now`` people as paid for their even share.

    The remaining balance is split evenly over the people who have not paid
    yet. When the last unpaid people pay, they pay the exact remainder so no
    rounding residue is left behind.

    Returns:
        The updated session and the amount collected now.

    Raises:
        ValidationError: If ``heads_paying_now`` is negative.
        SettlementError: If nobody is left to pay, or more heads pay than remain.
    """
    if heads_paying_now < 0:
        raise ValidationError("Paying heads cannot be negative")
    remaining_people = session.remaining_people
    if remaining_people <= 0:
        raise SettlementError("Everyone in this session has already paid")
    if heads_paying_now > remaining_people:
        raise SettlementError(f"Only {remaining_people} people are left to pay")

    remaining = session.remaining_amount
    if heads_paying_now == remaining_people:
        amount_now = remaining
    else:
        amount_now = quantize(remaining * heads_paying_now / remaining_people)

    updated = replace(
        session,
        paid_amount=Money(session.paid_amount.amount + amount_now),
        paid_people=session.paid_people + heads_paying_now,
        updated_at=now,
    )
    return updated, amount_now


def complete(session: Session, now: datetime) -> Session:
    _require_active(session)
    return replace(
        session,
        status=SessionStatus.COMPLETED,
        completed_at=now,
        updated_at=now,
    )
