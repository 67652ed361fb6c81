import random

import pytest

from econbot.core.exceptions import GiveawayNotFoundError, InvalidInputError
from econbot.services.giveaway_service import GiveawayService


@pytest.fixture
def giveaway_service(db):
    return GiveawayService(db, rng=random.Random(1234))


@pytest.fixture
def giveaway(giveaway_service):
    return giveaway_service.save_giveaway(
        message_id="m1", channel_id="c1", end_time=2_000, prize="Nitro", winners=2
    )


class TestGiveawayStore:
    """추첨 저장/조회 테스트"""

    def test_save_and_lookup(self, giveaway_service, giveaway):
        # Act
        found = giveaway_service.get_giveaway_by_message_id("m1")

        # Assert
        assert found == giveaway
        assert giveaway_service.get_giveaway_by_message_id("missing") is None

    def test_active_giveaways(self, giveaway_service, giveaway):
        giveaway_service.save_giveaway("m2", "c1", 500, "Sticker", 1)

        assert [g.message_id for g in giveaway_service.get_active_giveaways(now=1_000)] == ["m1"]
        assert giveaway_service.get_active_giveaways(now=2_000) == []

    @pytest.mark.parametrize("prize, winners", [("", 1), ("Nitro", 0)])
    def test_invalid_giveaway_rejected(self, giveaway_service, prize, winners):
        with pytest.raises(InvalidInputError):
            giveaway_service.save_giveaway("m9", "c1", 1_000, prize, winners)

    def test_duplicate_message_rejected(self, giveaway_service, giveaway):
        """같은 메시지로 두 번 저장하면 저장소 오류가 아닌 입력 오류"""
        # Act
        with pytest.raises(InvalidInputError) as exc_info:
            giveaway_service.save_giveaway("m1", "c2", 9_000, "Sticker", 1)

        # Assert
        assert exc_info.value.error_code == "VALIDATION_001"
        assert giveaway_service.get_giveaway_by_message_id("m1") == giveaway

    def test_delete_removes_entries(self, giveaway_service, giveaway):
        giveaway_service.add_entry(giveaway.id, "u1")

        assert giveaway_service.delete_giveaway("m1") is True
        assert giveaway_service.get_giveaway_by_message_id("m1") is None
        assert giveaway_service.get_entries(giveaway.id) == []
        assert giveaway_service.delete_giveaway("m1") is False


class TestEntries:
    """응모 테스트"""

    def test_add_entry_is_idempotent(self, giveaway_service, giveaway):
        # Act
        first = giveaway_service.add_entry(giveaway.id, "u1")
        second = giveaway_service.add_entry(giveaway.id, "u1")

        # Assert
        assert first is True
        assert second is False
        assert giveaway_service.get_entries(giveaway.id) == ["u1"]

    def test_remove_and_clear(self, giveaway_service, giveaway):
        for user_id in ("u1", "u2", "u3"):
            giveaway_service.add_entry(giveaway.id, user_id)

        assert giveaway_service.remove_entry(giveaway.id, "u2") is True
        assert giveaway_service.remove_entry(giveaway.id, "u2") is False
        assert giveaway_service.get_entries(giveaway.id) == ["u1", "u3"]
        assert giveaway_service.clear_entries(giveaway.id) == 2
        assert giveaway_service.get_entries(giveaway.id) == []

    def test_add_entry_unknown_giveaway(self, giveaway_service):
        with pytest.raises(GiveawayNotFoundError):
            giveaway_service.add_entry(404, "u1")


class TestDrawWinners:
    """당첨자 추첨 테스트"""

    def test_winners_are_distinct_entrants(self, giveaway_service, giveaway):
        # Arrange
        entrants = ["u1", "u2", "u3", "u4"]
        for user_id in entrants:
            giveaway_service.add_entry(giveaway.id, user_id)

        # Act
        result = giveaway_service.draw_winners(giveaway.id)

        # Assert
        assert result.entrant_count == 4
        assert len(result.winners) == 2
        assert len(set(result.winners)) == 2
        assert set(result.winners) <= set(entrants)

    def test_fewer_entrants_than_winners(self, giveaway_service, giveaway):
        giveaway_service.add_entry(giveaway.id, "u1")

        result = giveaway_service.draw_winners(giveaway.id)

        assert result.winners == ["u1"]

    def test_no_entrants(self, giveaway_service, giveaway):
        result = giveaway_service.draw_winners(giveaway.id)

        assert result.winners == []
        assert result.prize == "Nitro"

    def test_unknown_giveaway(self, giveaway_service):
        with pytest.raises(GiveawayNotFoundError):
            giveaway_service.draw_winners(404)
