from datetime import datetime

from django.utils import timezone


def to_local(value: datetime | None) -> datetime | None:
    """Convert an aware datetime to the café time zone. Naive values pass through."""
    if value is None or timezone.is_naive(value):
        return value
    return timezone.localtime(value)
