"""Django signals for cache invalidation."""

from django.core.cache import cache
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from floor.models import Session

ACTIVE_SESSIONS_CACHE_KEY = "floor:sessions:active"
AVAILABILITY_CACHE_KEY = "floor:sessions:availability"


def _clear_floor_cache() -> None:
    cache.delete_many([ACTIVE_SESSIONS_CACHE_KEY, AVAILABILITY_CACHE_KEY])


@receiver([post_save, post_delete], sender=Session)
def invalidate_session_cache(sender, instance, **kwargs):
    """Invalidate floor read caches once the session change commits."""
    transaction.on_commit(_clear_floor_cache)
