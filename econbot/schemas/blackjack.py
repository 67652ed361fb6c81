from pydantic import BaseModel, Field
from typing import List, Literal

from econbot.models.blackjack import BlackjackStatusEnum

CardValue = Literal["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]
CardSuit = Literal["♠", "♥", "♦", "♣"]


class Card(BaseModel):
    """카드 한 장 (불변)"""

    value: CardValue = Field(..., description="카드 값")
    suit: CardSuit = Field(..., description="카드 무늬")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.value}{self.suit}"


class BlackjackGameState(BaseModel):
    """블랙잭 게임 상태"""

    game_id: int = Field(..., description="게임 ID")
    user_id: str = Field(..., description="사용자 ID")
    bet: int = Field(..., description="베팅 금액 (선차감)")
    player_hand: List[Card] = Field(..., description="플레이어 패")
    dealer_hand: List[Card] = Field(..., description="딜러 패")
    player_total: int = Field(..., description="플레이어 점수")
    dealer_total: int = Field(..., description="딜러 점수")
    status: BlackjackStatusEnum = Field(..., description="게임 상태")
    version: int = Field(0, description="갱신 버전 (조건부 갱신용)")


class HitResult(BlackjackGameState):
    """히트 결과"""

    new_card: Card = Field(..., description="새로 뽑은 카드")


class StandResult(BlackjackGameState):
    """스탠드 결과"""

    winnings: int = Field(..., description="지갑에 지급된 금액 (베팅 포함)")
