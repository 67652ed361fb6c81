import random

import pytest

from econbot.schemas.blackjack import Card
from econbot.utils.cards import (
    CARD_SUITS,
    CARD_VALUES,
    calculate_hand_total,
    draw_card,
    is_bust,
)


def hand(*values):
    return [Card(value=value, suit="♠") for value in values]


class TestCalculateHandTotal:
    """블랙잭 점수 계산 테스트"""

    @pytest.mark.parametrize(
        "values, expected",
        [
            (("10", "10"), 20),
            (("A", "K"), 21),
            (("10", "9", "5"), 24),
            (("A", "A", "9"), 21),
            (("A", "A"), 12),
            (("K", "Q", "5"), 25),
            (("10", "A"), 21),
            (("9", "A", "A"), 21),
            (("5", "A", "A", "A"), 18),
            ((), 0),
        ],
    )
    def test_totals(self, values, expected):
        assert calculate_hand_total(hand(*values)) == expected

    def test_accepts_serialized_cards(self):
        """JSON으로 저장된 dict 형태의 카드도 계산 가능"""
        raw = [{"value": "J", "suit": "♥"}, {"value": "7", "suit": "♣"}]

        assert calculate_hand_total(raw) == 17

    def test_is_bust(self):
        assert is_bust(hand("K", "Q", "2")) is True
        assert is_bust(hand("K", "A")) is False


class TestDrawCard:
    def test_draw_card_uses_rng(self):
        rng = random.Random(7)

        cards = [draw_card(rng) for _ in range(50)]

        assert all(card.value in CARD_VALUES for card in cards)
        assert all(card.suit in CARD_SUITS for card in cards)
        replay = random.Random(7)
        assert cards == [draw_card(replay) for _ in range(50)]

    def test_card_str(self):
        assert str(Card(value="10", suit="♦")) == "10♦"
