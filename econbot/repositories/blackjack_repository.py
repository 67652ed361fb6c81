"""
블랙잭 리포지토리

패(hand)는 DB에 JSON 배열로 저장되며, 직렬화/역직렬화는 이 리포지토리
내부에서만 일어납니다. 서비스 계층은 항상 Card 리스트만 다룹니다.
"""

from typing import List, Optional, Sequence

from sqlalchemy import and_, insert, select, update
from sqlalchemy.orm import Session

from econbot.models.blackjack import BlackjackGame, BlackjackStatusEnum
from econbot.schemas.blackjack import BlackjackGameState, Card
from econbot.repositories.base import BaseRepository
from econbot.utils.cards import calculate_hand_total


def _dump_hand(hand: Sequence[Card]) -> List[dict]:
    return [card.model_dump() for card in hand]


def _load_hand(raw: Optional[list]) -> List[Card]:
    return [Card.model_validate(card) for card in (raw or [])]


class BlackjackRepository(BaseRepository[BlackjackGame, BlackjackGameState]):
    """블랙잭 게임 리포지토리"""

    def __init__(self, db: Session):
        super().__init__(BlackjackGame, BlackjackGameState, db)

    def _row_to_state(self, row) -> BlackjackGameState:
        player_hand = _load_hand(row.player_hand)
        dealer_hand = _load_hand(row.dealer_hand)
        return BlackjackGameState(
            game_id=row.id,
            user_id=row.user_id,
            bet=row.bet,
            player_hand=player_hand,
            dealer_hand=dealer_hand,
            player_total=calculate_hand_total(player_hand),
            dealer_total=calculate_hand_total(dealer_hand),
            status=BlackjackStatusEnum(row.status),
            version=row.version,
        )

    def _select_games(self):
        return select(
            BlackjackGame.id,
            BlackjackGame.user_id,
            BlackjackGame.bet,
            BlackjackGame.player_hand,
            BlackjackGame.dealer_hand,
            BlackjackGame.status,
            BlackjackGame.version,
        )

    def create_game(
        self,
        user_id: str,
        bet: int,
        player_hand: Sequence[Card],
        dealer_hand: Sequence[Card],
    ) -> int:
        """새 게임 생성 후 게임 ID 반환"""
        result = self.db.execute(
            insert(BlackjackGame).values(
                user_id=user_id,
                bet=bet,
                player_hand=_dump_hand(player_hand),
                dealer_hand=_dump_hand(dealer_hand),
                status=BlackjackStatusEnum.ACTIVE.value,
                version=0,
            )
        )
        return result.inserted_primary_key[0]

    def get_game(self, game_id: int, for_update: bool = False) -> Optional[BlackjackGameState]:
        stmt = self._select_games().where(BlackjackGame.id == game_id)
        if for_update:
            stmt = stmt.with_for_update()
        row = self.db.execute(stmt).first()
        return self._row_to_state(row) if row else None

    def get_active_games(self, user_id: str) -> List[BlackjackGameState]:
        rows = self.db.execute(
            self._select_games()
            .where(
                and_(
                    BlackjackGame.user_id == user_id,
                    BlackjackGame.status == BlackjackStatusEnum.ACTIVE.value,
                )
            )
            .order_by(BlackjackGame.id)
        ).all()
        return [self._row_to_state(row) for row in rows]

    def update_active_game(
        self,
        game_id: int,
        status: BlackjackStatusEnum,
        expected_version: int,
        player_hand: Optional[Sequence[Card]] = None,
        dealer_hand: Optional[Sequence[Card]] = None,
    ) -> bool:
        """
        진행 중인 게임만 갱신 (status = 'active' AND version = :expected_version)

        이미 종료된 게임은 갱신되지 않으므로 상태 전이가 되돌려지지 않습니다.
        읽은 이후 다른 요청이 먼저 갱신했다면 version이 달라 0행이 갱신되며,
        먼저 커밋된 카드가 덮어써지지 않습니다.

        Returns:
            bool: 갱신되었으면 True
        """
        values = {"status": status.value, "version": BlackjackGame.version + 1}
        if player_hand is not None:
            values["player_hand"] = _dump_hand(player_hand)
        if dealer_hand is not None:
            values["dealer_hand"] = _dump_hand(dealer_hand)

        result = self.db.execute(
            update(BlackjackGame)
            .where(
                and_(
                    BlackjackGame.id == game_id,
                    BlackjackGame.status == BlackjackStatusEnum.ACTIVE.value,
                    BlackjackGame.version == expected_version,
                )
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
