"""Unit tests for SessionService.

These test orchestration, locking and domain error mapping against in-memory
stores.
Run with: pytest tests/test_services.py -v
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from conftest import DEVICE_LIMITS, local
from floor.domain import DeviceAllocation, DeviceKind, DeviceUnits, SessionStatus, TariffWindow
from floor.domain.errors import (
    DeviceUnavailableError,
    ErrorCode,
    InvalidSessionIdError,
    SessionNotActiveError,
    SessionNotFoundError,
    SettlementError,
    UnknownSnackError,
    ValidationError,
)
from floor.services.events import session_completed, session_created, session_deleted, session_settled
from floor.services.inputs import (
    AddMemberInput,
    AddSnacksInput,
    CreateSessionInput,
    ExtendTimeInput,
    SettleInput,
)
from floor.services.session_service import SessionService


@pytest.fixture
def service(session_store, clock) -> SessionService:
    return SessionService(session_store, DEVICE_LIMITS, clock=clock)


def create_input(devices=None, units=None, **kwargs) -> CreateSessionInput:
    kwargs.setdefault("customer_name", "Ravi")
    kwargs.setdefault("people_count", 1)
    kwargs.setdefault("duration_minutes", 60)
    return CreateSessionInput(
        devices=DeviceAllocation.from_mapping(devices or {"ps": 1}),
        units=DeviceUnits.from_mapping(units),
        **kwargs,
    )


@pytest.fixture
def capture():
    """Collect signals sent during a test."""
    received = []

    def receiver(signal, sender, **kwargs):
        received.append((signal, kwargs))

    signals = [session_created, session_settled, session_completed, session_deleted]
    for signal in signals:
        signal.connect(receiver)
    yield received
    for signal in signals:
        signal.disconnect(receiver)


class TestInputs:
    def test_blank_customer_name_rejected(self):
        with pytest.raises(ValidationError):
            create_input(customer_name="  ")

    def test_no_devices_rejected(self):
        with pytest.raises(ValidationError):
            CreateSessionInput(
                customer_name="Ravi",
                people_count=1,
                duration_minutes=60,
                devices=DeviceAllocation(),
            )

    def test_more_units_than_devices_rejected(self):
        with pytest.raises(ValidationError):
            create_input({"ps": 1}, {"ps": [1, 2]})

    def test_zero_duration_rejected(self):
        with pytest.raises(ValidationError):
            create_input(duration_minutes=0)

    def test_snacks_need_a_positive_quantity(self):
        with pytest.raises(ValidationError):
            AddSnacksInput(items={"1": 0})


class TestCreateSession:
    def test_prices_at_clock_time(self, service):
        session = service.create_session(create_input({"ps": 1}, duration_minutes=90))
        assert session.window is TariffWindow.NORMAL_HOUR
        assert session.price.amount == Decimal("180")
        assert session.start_time == local(2024, 6, 3, 15, 0)

    def test_explicit_start_time(self, service):
        session = service.create_session(create_input({"ps": 1}, start_time=local(2024, 6, 3, 10, 0)))
        assert session.window is TariffWindow.HAPPY_HOUR
        assert session.price.amount == Decimal("90")

    def test_claims_units(self, service, session_store):
        service.create_session(create_input({"ps": 2}, {"ps": [3, 5]}))
        assert session_store.occupied_units(DeviceKind.PS) == [3, 5]

    def test_occupied_unit_rejected(self, service):
        service.create_session(create_input({"vr": 1}, {"vr": [1]}))
        with pytest.raises(DeviceUnavailableError) as exc_info:
            service.create_session(create_input({"vr": 1}, {"vr": [1]}))
        assert exc_info.value.code is ErrorCode.DEVICE_UNAVAILABLE

    def test_unit_beyond_limit_rejected(self, service):
        with pytest.raises(DeviceUnavailableError):
            service.create_session(create_input({"vr": 1}, {"vr": [3]}))

    def test_sends_created_event(self, service, capture):
        session = service.create_session(create_input())
        assert capture == [(session_created, {"session": session})]


class TestGetSession:
    def test_invalid_id_raises_error(self, service):
        """get_session raises InvalidSessionIdError for malformed UUID."""
        with pytest.raises(InvalidSessionIdError):
            service.get_session("not-a-uuid")

    def test_not_found_raises_error(self, service):
        """get_session raises SessionNotFoundError when store returns None."""
        with pytest.raises(SessionNotFoundError):
            service.get_session(str(uuid4()))

    def test_returns_stored_session(self, service):
        session = service.create_session(create_input())
        assert service.get_session(str(session.id)) == session


class TestMutations:
    def test_extend_time(self, service):
        session = service.create_session(create_input({"vr": 1}, people_count=2, duration_minutes=45))
        updated = service.extend_time(str(session.id), ExtendTimeInput(15))
        assert updated.price.amount == Decimal("460")
        assert service.get_session(str(session.id)).duration_minutes == 60

    def test_extend_unknown_session(self, service):
        with pytest.raises(SessionNotFoundError):
            service.extend_time(str(uuid4()), ExtendTimeInput(15))

    def test_add_member(self, service):
        session = service.create_session(create_input({"ps": 1}, duration_minutes=90))
        updated = service.add_member(
            str(session.id),
            AddMemberInput(name="Asha", people_count=2, devices=DeviceAllocation.from_mapping({"ps": 1})),
        )
        assert updated.price.amount == Decimal("380")
        assert updated.members[0].name == "Asha"

    def test_add_snacks(self, service):
        session = service.create_session(create_input({"ps": 1}))
        updated = service.add_snacks(str(session.id), AddSnacksInput(items={"2": 1}))
        assert updated.price.amount == Decimal("290")

    def test_add_unknown_snack(self, service):
        session = service.create_session(create_input())
        with pytest.raises(UnknownSnackError):
            service.add_snacks(str(session.id), AddSnacksInput(items={"42": 1}))

    def test_settle_partial(self, service, capture):
        session = service.create_session(create_input({"vr": 1}, people_count=2, duration_minutes=45))
        settlement = service.settle_partial(str(session.id), SettleInput(1))
        assert settlement.amount_paid == Decimal("180")
        assert settlement.session.remaining_amount == Decimal("180")
        assert capture[-1] == (session_settled, {"session": settlement.session, "amount": Decimal("180")})

    def test_settle_too_many_heads(self, service):
        session = service.create_session(create_input(people_count=2))
        with pytest.raises(SettlementError):
            service.settle_partial(str(session.id), SettleInput(3))

    def test_complete_releases_units(self, service, session_store, capture):
        session = service.create_session(create_input({"vr": 1}, {"vr": [2]}))
        done = service.complete_session(str(session.id))
        assert done.status is SessionStatus.COMPLETED
        assert session_store.occupied_units(DeviceKind.VR) == []
        assert capture[-1] == (session_completed, {"session": done})
        service.create_session(create_input({"vr": 1}, {"vr": [2]}))

    def test_complete_twice(self, service):
        session = service.create_session(create_input())
        service.complete_session(str(session.id))
        with pytest.raises(SessionNotActiveError):
            service.complete_session(str(session.id))

    def test_failed_mutation_leaves_session_unchanged(self, service):
        session = service.create_session(create_input(people_count=2))
        with pytest.raises(SettlementError):
            service.settle_partial(str(session.id), SettleInput(3))
        assert service.get_session(str(session.id)) == session

    def test_delete_releases_units(self, service, session_store, capture):
        session = service.create_session(create_input({"ps": 1}, {"ps": [4]}))
        service.delete_session(str(session.id))
        assert session_store.occupied_units(DeviceKind.PS) == []
        assert capture[-1] == (session_deleted, {"session": session})
        with pytest.raises(SessionNotFoundError):
            service.get_session(str(session.id))

    def test_delete_completed_session(self, service):
        session = service.create_session(create_input())
        service.complete_session(str(session.id))
        service.delete_session(str(session.id))
        assert service.list_completed_sessions() == []


class TestQueries:
    def test_list_active_excludes_completed(self, service):
        kept = service.create_session(create_input())
        done = service.create_session(create_input())
        service.complete_session(str(done.id))
        assert [s.id for s in service.list_active_sessions()] == [kept.id]

    def test_list_completed_by_range(self, service, clock):
        first = service.create_session(create_input())
        second = service.create_session(create_input())
        service.complete_session(str(first.id))
        clock.now += timedelta(hours=2)
        service.complete_session(str(second.id))

        since = local(2024, 6, 3, 16, 0)
        assert [s.id for s in service.list_completed_sessions(since=since)] == [second.id]
        assert [s.id for s in service.list_completed_sessions(until=since)] == [first.id]

    def test_device_availability(self, service):
        service.create_session(create_input({"pc": 2}, {"pc": [1, 7]}))
        availability = service.device_availability()
        assert availability.limits == DEVICE_LIMITS
        assert availability.occupied["pc"] == [1, 7]
        assert availability.occupied["ps"] == []


class TestConcurrency:
    def test_concurrent_extensions_are_serialized(self, service):
        session = service.create_session(create_input({"vr": 1}, duration_minutes=60))
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: service.extend_time(str(session.id), ExtendTimeInput(15)), range(20)))

        final = service.get_session(str(session.id))
        assert final.duration_minutes == 60 + 20 * 15
        assert final.price.amount == Decimal("180") + 20 * Decimal("50")

    def test_concurrent_settlements_never_overpay(self, service):
        session = service.create_session(create_input({"vr": 1}, people_count=4, duration_minutes=45))
        results = []

        def settle(_):
            try:
                results.append(service.settle_partial(str(session.id), SettleInput(1)).amount_paid)
            except SettlementError:
                results.append(None)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(settle, range(6)))

        final = service.get_session(str(session.id))
        assert final.paid_people == 4
        assert final.paid_amount.amount == Decimal("720")
        assert results.count(None) == 2
