"""Wiring of services to their Django stores and settings."""

from django.conf import settings

from floor.services.battle_service import BattleService
from floor.services.booking_converter import BookingConverter
from floor.services.booking_service import BookingService
from floor.services.management_service import ManagementService
from floor.services.session_service import SessionService
from floor.stores.django_store import (
    DjangoBattleStore,
    DjangoBookingStore,
    DjangoSalaryStore,
    DjangoSessionStore,
    DjangoSubscriptionStore,
)


def build_session_service() -> SessionService:
    return SessionService(DjangoSessionStore(), device_limits=settings.FLOOR_DEVICE_LIMITS)


def build_booking_service() -> BookingService:
    return BookingService(DjangoBookingStore(), sessions=build_session_service())


def build_battle_service() -> BattleService:
    return BattleService(DjangoBattleStore())


def build_booking_converter() -> BookingConverter:
    return BookingConverter(
        build_booking_service(),
        interval_seconds=settings.FLOOR_BOOKING_POLL_SECONDS,
    )


def build_management_service() -> ManagementService:
    return ManagementService(DjangoSubscriptionStore(), DjangoSalaryStore())
