import logging
import os
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)

# Commands that run their own converter or must not start one.
_NO_AUTOSTART_COMMANDS = {"convert_bookings", "migrate", "makemigrations", "test", "shell"}


def should_autostart_converter(argv=None, environ=None) -> bool:
    """Whether this process should run the background booking converter.

    Under ``runserver`` only the reloaded child serving requests starts it,
    never the autoreloader parent.
    """
    argv = sys.argv if argv is None else argv
    environ = os.environ if environ is None else environ
    if not settings.FLOOR_BOOKING_CONVERTER_AUTOSTART:
        return False
    command = argv[1] if len(argv) > 1 else None
    if command in _NO_AUTOSTART_COMMANDS:
        return False
    if command == "runserver":
        return environ.get("RUN_MAIN") == "true" or "--noreload" in argv
    return True


class FloorConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "floor"
    verbose_name = "Floor"

    booking_converter = None

    def ready(self) -> None:
        from floor import signals  # noqa: F401

        if should_autostart_converter():
            from floor.services.factory import build_booking_converter

            self.booking_converter = build_booking_converter()
            self.booking_converter.start()
            logger.info("Booking converter started with the app")
        elif settings.FLOOR_BOOKING_CONVERTER_AUTOSTART:
            logger.debug("Booking converter autostart skipped in this process")
