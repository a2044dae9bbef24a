"""Tests for 1v1 battles.

Run with: pytest tests/test_battles.py -v
"""

from uuid import uuid4

import pytest

from floor.domain import BattleSide, BattleStatus
from floor.domain.errors import BattleNotActiveError, BattleNotFoundError, ValidationError
from floor.services.battle_service import BattleService
from floor.services.events import battle_scored
from floor.services.inputs import StartBattleInput
from floor.stores.django_store import DjangoBattleStore


@pytest.fixture
def service(battle_store, clock) -> BattleService:
    return BattleService(battle_store, clock=clock)


class TestBattleService:
    def test_start_battle(self, service):
        battle = service.start_battle(StartBattleInput("Kiran", "Dev"))
        assert battle.status is BattleStatus.ACTIVE
        assert (battle.crown_holder_score, battle.challenger_score) == (0, 0)
        assert [b.id for b in service.list_active()] == [battle.id]

    def test_players_required(self):
        with pytest.raises(ValidationError):
            StartBattleInput("Kiran", " ")

    def test_record_point(self, service):
        battle = service.start_battle(StartBattleInput("Kiran", "Dev"))
        service.record_point(str(battle.id), "challenger")
        updated = service.record_point(str(battle.id), "challenger")
        assert updated.challenger_score == 2
        assert updated.winner == "challenger"

    def test_record_point_sends_event(self, service):
        received = []

        def receiver(sender, battle, **kwargs):
            received.append(battle)

        battle_scored.connect(receiver)
        try:
            battle = service.start_battle(StartBattleInput("Kiran", "Dev"))
            updated = service.record_point(str(battle.id), "crown_holder")
        finally:
            battle_scored.disconnect(receiver)
        assert received == [updated]

    def test_invalid_side(self, service):
        battle = service.start_battle(StartBattleInput("Kiran", "Dev"))
        with pytest.raises(ValidationError, match="Invalid player type"):
            service.record_point(str(battle.id), "referee")

    def test_unknown_battle(self, service):
        with pytest.raises(BattleNotFoundError):
            service.record_point(str(uuid4()), "crown_holder")

    def test_finish_battle(self, service):
        battle = service.start_battle(StartBattleInput("Kiran", "Dev"))
        finished = service.finish_battle(str(battle.id))
        assert finished.status is BattleStatus.COMPLETED
        assert finished.winner == "tie"
        assert service.list_active() == []
        assert [b.id for b in service.list_completed()] == [battle.id]

    def test_scoring_finished_battle(self, service):
        battle = service.start_battle(StartBattleInput("Kiran", "Dev"))
        service.finish_battle(str(battle.id))
        with pytest.raises(BattleNotActiveError):
            service.record_point(str(battle.id), "crown_holder")
        with pytest.raises(BattleNotActiveError):
            service.finish_battle(str(battle.id))


@pytest.mark.django_db
class TestDjangoBattleStore:
    """Score increments run as a single UPDATE against the row."""

    def test_increments_do_not_read_stale_scores(self, clock):
        store = DjangoBattleStore()
        service = BattleService(store, clock=clock)
        battle = service.start_battle(StartBattleInput("Kiran", "Dev"))

        # Both increments start from the same stale snapshot of the battle.
        assert store.increment_score(battle.id, BattleSide.CROWN_HOLDER)
        assert store.increment_score(battle.id, BattleSide.CROWN_HOLDER)
        assert store.increment_score(battle.id, BattleSide.CHALLENGER)

        stored = store.get(battle.id)
        assert (stored.crown_holder_score, stored.challenger_score) == (2, 1)
        assert stored.winner == "crown_holder"

    def test_increment_on_finished_battle_matches_nothing(self, clock):
        store = DjangoBattleStore()
        service = BattleService(store, clock=clock)
        battle = service.start_battle(StartBattleInput("Kiran", "Dev"))
        assert store.finish(battle.id, clock.now)
        assert not store.increment_score(battle.id, BattleSide.CHALLENGER)
        assert not store.finish(battle.id, clock.now)
        assert store.get(battle.id).challenger_score == 0

    def test_completed_listed_newest_first(self, clock):
        store = DjangoBattleStore()
        service = BattleService(store, clock=clock)
        first = service.start_battle(StartBattleInput("A", "B"))
        second = service.start_battle(StartBattleInput("C", "D"))
        service.finish_battle(str(first.id))
        clock.now = clock.now.replace(hour=16)
        service.finish_battle(str(second.id))
        assert [b.id for b in store.list_by_status(BattleStatus.COMPLETED)] == [second.id, first.id]
