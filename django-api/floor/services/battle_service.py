"""Battle service: 1v1 crown battles.

Scores only ever move through ``BattleStore.increment_score``, a single atomic
update, so concurrent point requests are never lost.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from uuid import UUID, uuid4

from django.utils import timezone

from floor.domain import Battle, BattleId, BattleSide, BattleStatus
from floor.domain.errors import BattleNotActiveError, BattleNotFoundError, ValidationError
from floor.services.events import battle_scored
from floor.services.inputs import StartBattleInput
from floor.stores.interfaces import BattleStore
from floor.utils import to_local

logger = logging.getLogger(__name__)


class BattleService:
    """Service for battle operations."""

    def __init__(
        self,
        store: BattleStore,
        clock: Callable[[], datetime] = timezone.now,
        id_factory: Callable[[], UUID] = uuid4,
    ) -> None:
        self._store = store
        self._clock = clock
        self._id_factory = id_factory

    @staticmethod
    def _parse_id(battle_id: str) -> BattleId:
        try:
            return BattleId.from_string(battle_id)
        except ValueError:
            raise ValidationError("Invalid battle ID format") from None

    def _get(self, bid: BattleId) -> Battle:
        battle = self._store.get(bid)
        if battle is None:
            raise BattleNotFoundError(str(bid))
        return battle

    def start_battle(self, data: StartBattleInput) -> Battle:
        battle = Battle(
            id=BattleId(self._id_factory()),
            crown_holder=data.crown_holder.strip(),
            challenger=data.challenger.strip(),
            crown_holder_score=0,
            challenger_score=0,
            status=BattleStatus.ACTIVE,
            started_at=to_local(self._clock()),
        )
        self._store.add(battle)
        logger.info("Battle %s started: %s vs %s", battle.id, battle.crown_holder, battle.challenger)
        return battle

    def record_point(self, battle_id: str, side: str) -> Battle:
        """Add one point to ``side`` of an active battle.

        Raises:
            ValidationError: If the side is not crown_holder or challenger.
            BattleNotFoundError: If the battle does not exist.
            BattleNotActiveError: If the battle already finished.
        """
        bid = self._parse_id(battle_id)
        try:
            player = BattleSide(side)
        except ValueError:
            raise ValidationError("Invalid player type") from None
        if not self._store.increment_score(bid, player):
            self._get(bid)
            raise BattleNotActiveError(battle_id)
        battle = self._get(bid)
        battle_scored.send(sender=self.__class__, battle=battle)
        return battle

    def finish_battle(self, battle_id: str) -> Battle:
        bid = self._parse_id(battle_id)
        if not self._store.finish(bid, to_local(self._clock())):
            self._get(bid)
            raise BattleNotActiveError(battle_id)
        battle = self._get(bid)
        logger.info("Battle %s finished, winner %s", bid, battle.winner)
        return battle

    def list_active(self) -> list[Battle]:
        return self._store.list_by_status(BattleStatus.ACTIVE)

    def list_completed(self) -> list[Battle]:
        return self._store.list_by_status(BattleStatus.COMPLETED)
