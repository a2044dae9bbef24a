"""Background conversion of due bookings into sessions.

The converter owns its scheduler: ``start`` creates and starts it, ``stop``
shuts it down, and ``running`` reports its state. A tick runs on start and
then every ``interval_seconds``.
"""

import logging
import threading

from apscheduler.schedulers.background import BackgroundScheduler
from django.utils import timezone

from floor.services.booking_service import BookingService, ConversionResult

logger = logging.getLogger(__name__)

BOOKING_CONVERTER_JOB_ID = "floor_booking_converter"


class BookingConverter:
    """Polls for due bookings and converts them to sessions."""

    def __init__(self, bookings: BookingService, interval_seconds: int = 30) -> None:
        self._bookings = bookings
        self._interval_seconds = interval_seconds
        self._scheduler: BackgroundScheduler | None = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self) -> bool:
        """Start polling. Returns False if already running."""
        with self._lock:
            if self.running:
                logger.warning("Booking converter already running")
                return False
            scheduler = BackgroundScheduler()
            scheduler.add_job(
                self.tick,
                "interval",
                seconds=self._interval_seconds,
                id=BOOKING_CONVERTER_JOB_ID,
                max_instances=1,
                coalesce=True,
                next_run_time=timezone.now(),
            )
            scheduler.start()
            self._scheduler = scheduler
        logger.info("Booking converter started (every %ss)", self._interval_seconds)
        return True

    def stop(self, wait: bool = True) -> bool:
        """Stop polling. Returns False if it was not running."""
        with self._lock:
            if not self.running:
                return False
            self._scheduler.shutdown(wait=wait)
            self._scheduler = None
        logger.info("Booking converter stopped")
        return True

    def tick(self) -> ConversionResult | None:
        try:
            result = self._bookings.convert_due()
        except Exception as e:
            logger.warning("Booking conversion tick failed: %s", e, exc_info=True)
            return None
        if result.converted:
            logger.info("Auto-converted %d booking(s) to sessions", len(result.converted))
        return result
