"""Tariff window classification.

Windows are checked in a fixed order and the first match wins:

- Happy Hour: from 09:00 until 14:00 inclusive on weekdays, until 12:00
  inclusive on weekends.
- Normal Hour: from 14:01 (weekdays) or 12:01 (weekends) until 20:59.
- Fun Night: 21:00 to 05:59.
- Fallback: whatever is left (06:00 to 08:59).

Classification reads the wall-clock fields of the given datetime, so callers
pass café local time.
"""

from datetime import datetime
from enum import Enum

HAPPY_HOUR_OPENS = 9
WEEKDAY_HAPPY_HOUR_ENDS = 14
WEEKEND_HAPPY_HOUR_ENDS = 12
FUN_NIGHT_STARTS = 21
FUN_NIGHT_ENDS = 6


class TariffWindow(str, Enum):
    """Pricing regime in effect at a session's start time."""

    HAPPY_HOUR = "happy_hour"
    NORMAL_HOUR = "normal_hour"
    FUN_NIGHT = "fun_night"
    FALLBACK = "fallback"


def _is_weekend(moment: datetime) -> bool:
    return moment.weekday() >= 5


def _transition_hour(moment: datetime) -> int:
    return WEEKEND_HAPPY_HOUR_ENDS if _is_weekend(moment) else WEEKDAY_HAPPY_HOUR_ENDS


def is_happy_hour(moment: datetime) -> bool:
    if moment.hour < HAPPY_HOUR_OPENS:
        return False
    ends = _transition_hour(moment)
    if moment.hour < ends:
        return True
    return moment.hour == ends and moment.minute == 0


def is_normal_hour(moment: datetime) -> bool:
    if moment.hour >= FUN_NIGHT_STARTS:
        return False
    starts = _transition_hour(moment)
    if moment.hour == starts:
        return moment.minute >= 1
    return moment.hour > starts


def is_fun_night(moment: datetime) -> bool:
    return moment.hour >= FUN_NIGHT_STARTS or moment.hour < FUN_NIGHT_ENDS


def classify(moment: datetime) -> TariffWindow:
    """Return the tariff window in effect at ``moment``."""
    if is_happy_hour(moment):
        return TariffWindow.HAPPY_HOUR
    if is_normal_hour(moment):
        return TariffWindow.NORMAL_HOUR
    if is_fun_night(moment):
        return TariffWindow.FUN_NIGHT
    return TariffWindow.FALLBACK
