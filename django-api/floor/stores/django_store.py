"""Django ORM implementations of the floor stores."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models import F

from floor import models as orm
from floor.domain import (
    Battle,
    BattleId,
    BattleSide,
    BattleStatus,
    Booking,
    BookingId,
    BookingStatus,
    DeviceAllocation,
    DeviceKind,
    DeviceUnits,
    Member,
    Money,
    Salary,
    SalaryId,
    Session,
    SessionId,
    SessionStatus,
    SnackLine,
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
from floor.utils import to_local

logger = logging.getLogger(__name__)


def _session_to_domain(row: orm.Session) -> Session:
    return Session(
        id=SessionId(row.id),
        customer_name=row.customer_name,
        contact_number=row.contact_number,
        start_time=to_local(row.start_time),
        duration_minutes=row.duration_minutes,
        people_count=row.people_count,
        devices=DeviceAllocation.from_mapping(row.devices),
        units=DeviceUnits.from_mapping(row.units),
        price=Money(row.price),
        paid_amount=Money(row.paid_amount),
        paid_people=row.paid_people,
        status=SessionStatus(row.status),
        created_at=to_local(row.created_at),
        updated_at=to_local(row.updated_at),
        completed_at=to_local(row.completed_at),
        members=tuple(
            Member(
                name=m.name,
                people_count=m.people_count,
                devices=DeviceAllocation.from_mapping(m.devices),
                added_at=to_local(m.added_at),
            )
            for m in row.members.all()
        ),
        snacks=tuple(
            SnackLine(
                snack_id=line["snack_id"],
                name=line["name"],
                quantity=line["quantity"],
                amount=Money(Decimal(line["amount"])),
            )
            for line in row.snacks
        ),
    )


def _session_fields(session: Session) -> dict:
    return {
        "customer_name": session.customer_name,
        "contact_number": session.contact_number,
        "start_time": session.start_time,
        "duration_minutes": session.duration_minutes,
        "people_count": session.people_count,
        "devices": session.devices.to_dict(),
        "units": session.units.to_dict(),
        "price": session.price.amount,
        "paid_amount": session.paid_amount.amount,
        "paid_people": session.paid_people,
        "snacks": [
            {
                "snack_id": line.snack_id,
                "name": line.name,
                "quantity": line.quantity,
                "amount": str(line.amount),
            }
            for line in session.snacks
        ],
        "status": session.status.value,
        "created_at": session.created_at,
        "updated_at": session.updated_at,
        "completed_at": session.completed_at,
    }


class DjangoSessionStore(SessionStore):
    """Relational session registry using Django ORM."""

    def get(self, session_id: SessionId) -> Session | None:
        row = orm.Session.objects.prefetch_related("members").filter(pk=session_id.value).first()
        return _session_to_domain(row) if row else None

    @contextmanager
    def locked(self, session_id: SessionId) -> Iterator[Session]:
        with transaction.atomic():
            row = orm.Session.objects.select_for_update().filter(pk=session_id.value).first()
            if row is None:
                raise SessionNotFoundError(str(session_id))
            yield _session_to_domain(row)

    def add(self, session: Session) -> None:
        try:
            with transaction.atomic():
                orm.Session.objects.create(id=session.id.value, **_session_fields(session))
                orm.DeviceClaim.objects.bulk_create(
                    orm.DeviceClaim(session_id=session.id.value, kind=kind.value, unit=unit)
                    for kind, unit in session.units.pairs()
                )
        except IntegrityError as exc:
            logger.warning("Device claim conflict creating session %s: %s", session.id, exc)
            raise DeviceUnavailableError("Requested device was claimed by another session") from exc

    def put(self, session: Session) -> None:
        with transaction.atomic():
            orm.Session(id=session.id.value, **_session_fields(session)).save(force_update=True)
            stored = orm.Member.objects.filter(session_id=session.id.value).count()
            orm.Member.objects.bulk_create(
                orm.Member(
                    session_id=session.id.value,
                    position=position,
                    name=member.name,
                    people_count=member.people_count,
                    devices=member.devices.to_dict(),
                    added_at=member.added_at,
                )
                for position, member in enumerate(session.members)
                if position >= stored
            )
            if session.status is SessionStatus.COMPLETED:
                orm.DeviceClaim.objects.filter(session_id=session.id.value).delete()

    def delete(self, session_id: SessionId) -> bool:
        deleted, _ = orm.Session.objects.filter(pk=session_id.value).delete()
        return deleted > 0

    def list_active(self) -> list[Session]:
        rows = (
            orm.Session.objects.prefetch_related("members")
            .filter(status=SessionStatus.ACTIVE.value)
            .order_by("start_time")
        )
        return [_session_to_domain(row) for row in rows]

    def list_completed(self, since: datetime | None, until: datetime | None) -> list[Session]:
        rows = orm.Session.objects.prefetch_related("members").filter(
            status=SessionStatus.COMPLETED.value
        )
        if since is not None:
            rows = rows.filter(completed_at__gte=since)
        if until is not None:
            rows = rows.filter(completed_at__lt=until)
        return [_session_to_domain(row) for row in rows.order_by("completed_at")]

    def occupied_units(self, kind: DeviceKind) -> list[int]:
        return list(
            orm.DeviceClaim.objects.filter(kind=kind.value).order_by("unit").values_list("unit", flat=True)
        )


def _booking_to_domain(row: orm.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        customer_name=row.customer_name,
        contact_number=row.contact_number,
        booking_time=to_local(row.booking_time),
        devices=DeviceAllocation.from_mapping(row.devices),
        units=DeviceUnits.from_mapping(row.units),
        people_count=row.people_count,
        duration_minutes=row.duration_minutes,
        status=BookingStatus(row.status),
        created_at=to_local(row.created_at),
        session_id=SessionId(row.session_id) if row.session_id else None,
    )


class DjangoBookingStore(BookingStore):
    """Relational booking store using Django ORM."""

    def add(self, booking: Booking) -> None:
        orm.Booking.objects.create(
            id=booking.id.value,
            customer_name=booking.customer_name,
            contact_number=booking.contact_number,
            booking_time=booking.booking_time,
            devices=booking.devices.to_dict(),
            units=booking.units.to_dict(),
            people_count=booking.people_count,
            duration_minutes=booking.duration_minutes,
            status=booking.status.value,
            created_at=booking.created_at,
        )

    def get(self, booking_id: BookingId) -> Booking | None:
        row = orm.Booking.objects.filter(pk=booking_id.value).first()
        return _booking_to_domain(row) if row else None

    def list_upcoming(self) -> list[Booking]:
        rows = orm.Booking.objects.filter(status=BookingStatus.UPCOMING.value).order_by("booking_time")
        return [_booking_to_domain(row) for row in rows]

    def list_due(self, now: datetime) -> list[Booking]:
        rows = orm.Booking.objects.filter(
            status=BookingStatus.UPCOMING.value,
            booking_time__lte=now,
        ).order_by("booking_time")
        return [_booking_to_domain(row) for row in rows]

    def claim(self, booking_id: BookingId) -> bool:
        claimed = orm.Booking.objects.filter(
            pk=booking_id.value,
            status=BookingStatus.UPCOMING.value,
        ).update(status=BookingStatus.CONVERTED.value)
        return claimed == 1

    def mark_converted(self, booking_id: BookingId, session_id: SessionId) -> None:
        orm.Booking.objects.filter(pk=booking_id.value).update(
            status=BookingStatus.CONVERTED.value,
            session_id=session_id.value,
        )

    def release(self, booking_id: BookingId) -> None:
        orm.Booking.objects.filter(
            pk=booking_id.value,
            status=BookingStatus.CONVERTED.value,
            session__isnull=True,
        ).update(status=BookingStatus.UPCOMING.value)


def _battle_to_domain(row: orm.Battle) -> Battle:
    return Battle(
        id=BattleId(row.id),
        crown_holder=row.crown_holder,
        challenger=row.challenger,
        crown_holder_score=row.crown_holder_score,
        challenger_score=row.challenger_score,
        status=BattleStatus(row.status),
        started_at=to_local(row.started_at),
        ended_at=to_local(row.ended_at),
    )


class DjangoBattleStore(BattleStore):
    """Relational battle store using Django ORM."""

    def add(self, battle: Battle) -> None:
        orm.Battle.objects.create(
            id=battle.id.value,
            crown_holder=battle.crown_holder,
            challenger=battle.challenger,
            crown_holder_score=battle.crown_holder_score,
            challenger_score=battle.challenger_score,
            status=battle.status.value,
            started_at=battle.started_at,
            ended_at=battle.ended_at,
        )

    def get(self, battle_id: BattleId) -> Battle | None:
        row = orm.Battle.objects.filter(pk=battle_id.value).first()
        return _battle_to_domain(row) if row else None

    def list_by_status(self, status: BattleStatus) -> list[Battle]:
        order = "-ended_at" if status is BattleStatus.COMPLETED else "-started_at"
        rows = orm.Battle.objects.filter(status=status.value).order_by(order)
        return [_battle_to_domain(row) for row in rows]

    def increment_score(self, battle_id: BattleId, side: BattleSide) -> bool:
        field = f"{side.value}_score"
        updated = orm.Battle.objects.filter(
            pk=battle_id.value,
            status=BattleStatus.ACTIVE.value,
        ).update(**{field: F(field) + 1})
        return updated == 1

    def finish(self, battle_id: BattleId, ended_at: datetime) -> bool:
        updated = orm.Battle.objects.filter(
            pk=battle_id.value,
            status=BattleStatus.ACTIVE.value,
        ).update(status=BattleStatus.COMPLETED.value, ended_at=ended_at)
        return updated == 1


def _subscription_to_domain(row: orm.Subscription) -> Subscription:
    return Subscription(
        id=SubscriptionId(row.id),
        type=row.type,
        provider=row.provider,
        cost=Money(row.cost),
        start_date=row.start_date,
        expiry_date=row.expiry_date,
        created_at=to_local(row.created_at),
    )


class DjangoSubscriptionStore(SubscriptionStore):
    def add(self, subscription: Subscription) -> None:
        orm.Subscription.objects.create(
            id=subscription.id.value,
            type=subscription.type,
            provider=subscription.provider,
            cost=subscription.cost.amount,
            start_date=subscription.start_date,
            expiry_date=subscription.expiry_date,
            created_at=subscription.created_at,
        )

    def list_all(self) -> list[Subscription]:
        return [_subscription_to_domain(row) for row in orm.Subscription.objects.order_by("-created_at")]

    def delete(self, subscription_id: SubscriptionId) -> bool:
        deleted, _ = orm.Subscription.objects.filter(pk=subscription_id.value).delete()
        return deleted > 0


def _salary_to_domain(row: orm.Salary) -> Salary:
    return Salary(
        id=SalaryId(row.id),
        employee_name=row.employee_name,
        amount=Money(row.amount),
        payment_date=row.payment_date,
        notes=row.notes,
        created_at=to_local(row.created_at),
    )


class DjangoSalaryStore(SalaryStore):
    def add(self, salary: Salary) -> None:
        orm.Salary.objects.create(
            id=salary.id.value,
            employee_name=salary.employee_name,
            amount=salary.amount.amount,
            payment_date=salary.payment_date,
            notes=salary.notes,
            created_at=salary.created_at,
        )

    def list_all(self) -> list[Salary]:
        rows = orm.Salary.objects.order_by("-payment_date", "-created_at")
        return [_salary_to_domain(row) for row in rows]

    def delete(self, salary_id: SalaryId) -> bool:
        deleted, _ = orm.Salary.objects.filter(pk=salary_id.value).delete()
        return deleted > 0
