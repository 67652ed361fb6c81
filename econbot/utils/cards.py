"""
블랙잭 카드 유틸리티

무한 덱 모델: 매 드로우마다 값과 무늬를 독립적으로 균등 추출합니다.
같은 카드가 한 패 안에서, 혹은 여러 패에 걸쳐 중복될 수 있습니다.
"""

import random
from typing import Iterable, Optional, Union

from econbot.schemas.blackjack import Card

CARD_VALUES = ["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]
CARD_SUITS = ["♠", "♥", "♦", "♣"]
FACE_CARDS = {"J", "Q", "K"}
BLACKJACK = 21


def draw_card(rng: Optional[random.Random] = None) -> Card:
    """카드 한 장을 복원 추출합니다."""
    rng = rng or random
    return Card(value=rng.choice(CARD_VALUES), suit=rng.choice(CARD_SUITS))


def calculate_hand_total(hand: Iterable[Union[Card, dict]]) -> int:
    """
    블랙잭 점수 계산

    - J/Q/K = 10, 숫자 카드는 액면가
    - 에이스를 제외한 합계를 먼저 구한 뒤, 에이스마다 순서대로
      11을 더해도 21을 넘지 않으면 11, 넘으면 1을 더함
    """
    total = 0
    aces = 0
    for card in hand:
        value = card["value"] if isinstance(card, dict) else card.value
        if value == "A":
            aces += 1
        elif value in FACE_CARDS:
            total += 10
        else:
            total += int(value)

    for _ in range(aces):
        total += 11 if total + 11 <= BLACKJACK else 1
    return total


def is_bust(hand: Iterable[Union[Card, dict]]) -> bool:
    return calculate_hand_total(hand) > BLACKJACK
