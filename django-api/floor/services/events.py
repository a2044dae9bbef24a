"""Domain events.

Services send these after a change is persisted, passing the updated domain
object as ``session`` or ``battle``. Listeners such as a realtime notifier
connect to them; the ledger never depends on a listener being present.
"""

from django.dispatch import Signal

session_created = Signal()
session_settled = Signal()
session_completed = Signal()
session_deleted = Signal()
battle_scored = Signal()
