from __future__ import annotations

import logging
import random
from typing import List, Optional

from sqlalchemy.orm import Session

from econbot.config import Settings, settings as default_settings
from econbot.core.exceptions import (
    GameNotActiveError,
    GameNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
)
from econbot.database.session import atomic
from econbot.models.blackjack import BlackjackStatusEnum
from econbot.repositories.account_repository import AccountRepository
from econbot.repositories.blackjack_repository import BlackjackRepository
from econbot.schemas.blackjack import (
    BlackjackGameState,
    Card,
    HitResult,
    StandResult,
)
from econbot.utils.cards import BLACKJACK, calculate_hand_total, draw_card, is_bust

logger = logging.getLogger(__name__)


class BlackjackService:
    """블랙잭 게임 진행 로직

    상태 전이: active → (player_win | dealer_win | draw), 단방향.
    베팅은 시작 시 지갑에서 선차감되며 정산은 종료 상태 기록과 같은
    트랜잭션에서 이루어집니다.
    """

    def __init__(
        self,
        db: Session,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.db = db
        self.settings = settings or default_settings
        self.rng = rng or random.Random()
        self.game_repo = BlackjackRepository(db)
        self.account_repo = AccountRepository(db)

    def _draw(self) -> Card:
        return draw_card(self.rng)

    def _get_active_game(self, game_id: int) -> BlackjackGameState:
        game = self.game_repo.get_game(game_id, for_update=True)
        if game is None:
            raise GameNotFoundError(
                f"Game not found: {game_id}", details={"game_id": game_id}
            )
        if game.status.is_terminal:
            raise GameNotActiveError(
                f"Game {game_id} is already finished ({game.status.value})",
                details={"game_id": game_id, "status": game.status.value},
            )
        return game

    @staticmethod
    def _raise_conflict(game: BlackjackGameState) -> None:
        """읽은 뒤 다른 요청이 먼저 게임을 갱신한 경우"""
        logger.warning(
            f"Game {game.game_id} changed since version {game.version}; update rejected"
        )
        raise GameNotActiveError(
            f"Game {game.game_id} was updated by another action. Please try again.",
            details={"game_id": game.game_id, "version": game.version},
        )

    def start(self, user_id: str, bet: int) -> BlackjackGameState:
        """새 게임 시작

        Args:
            user_id: 사용자 ID
            bet: 베팅 금액

        Returns:
            BlackjackGameState: 플레이어 2장, 딜러 1장이 배분된 상태
        """
        if bet is None or bet <= 0:
            raise InvalidAmountError(f"Bet must be greater than zero: {bet}", details={"bet": bet})

        with atomic(self.db):
            self.account_repo.ensure_account(user_id)

            # 베팅 선차감 (escrow)
            if not self.account_repo.debit_wallet(user_id, bet):
                available = self.account_repo.get_wallet(user_id)
                logger.warning(
                    f"Blackjack start rejected for user {user_id}: bet {bet}, wallet {available}"
                )
                raise InsufficientFundsError(
                    "Insufficient wallet balance to start the game.",
                    details={"required": bet, "available": available},
                )

            player_hand = [self._draw(), self._draw()]
            dealer_hand = [self._draw()]
            game_id = self.game_repo.create_game(user_id, bet, player_hand, dealer_hand)

        logger.info(f"Started blackjack game {game_id} for user {user_id} with bet {bet}")
        return BlackjackGameState(
            game_id=game_id,
            user_id=user_id,
            bet=bet,
            player_hand=player_hand,
            dealer_hand=dealer_hand,
            player_total=calculate_hand_total(player_hand),
            dealer_total=calculate_hand_total(dealer_hand),
            status=BlackjackStatusEnum.ACTIVE,
        )

    def hit(self, game_id: int) -> HitResult:
        """카드 한 장 추가, 21 초과 시 dealer_win(버스트)"""
        with atomic(self.db):
            game = self._get_active_game(game_id)

            new_card = self._draw()
            player_hand = [*game.player_hand, new_card]
            player_total = calculate_hand_total(player_hand)
            status = (
                BlackjackStatusEnum.DEALER_WIN
                if is_bust(player_hand)
                else BlackjackStatusEnum.ACTIVE
            )

            if not self.game_repo.update_active_game(
                game_id, status, game.version, player_hand=player_hand
            ):
                self._raise_conflict(game)

        logger.info(
            f"Hit on game {game_id}: drew {new_card}, total {player_total}, status {status.value}"
        )
        return HitResult(
            **game.model_dump(exclude={"player_hand", "player_total", "status", "version"}),
            version=game.version + 1,
            player_hand=player_hand,
            player_total=player_total,
            status=status,
            new_card=new_card,
        )

    def stand(self, game_id: int) -> StandResult:
        """딜러 진행 후 정산

        딜러는 DEALER_STAND_TOTAL 이상이 될 때까지 카드를 뽑습니다.
        판정 순서: 딜러 버스트 → 점수 비교 → 동점.
        지급: 승리 2×bet, 무승부 bet, 패배 0 (베팅은 이미 차감됨).
        """
        with atomic(self.db):
            game = self._get_active_game(game_id)

            player_total = game.player_total
            dealer_hand: List[Card] = list(game.dealer_hand)
            dealer_total = calculate_hand_total(dealer_hand)
            while dealer_total < self.settings.DEALER_STAND_TOTAL:
                dealer_hand.append(self._draw())
                dealer_total = calculate_hand_total(dealer_hand)

            if player_total > BLACKJACK:
                status = BlackjackStatusEnum.DEALER_WIN
            elif dealer_total > BLACKJACK or player_total > dealer_total:
                status = BlackjackStatusEnum.PLAYER_WIN
            elif player_total < dealer_total:
                status = BlackjackStatusEnum.DEALER_WIN
            else:
                status = BlackjackStatusEnum.DRAW

            winnings = {
                BlackjackStatusEnum.PLAYER_WIN: game.bet * self.settings.BLACKJACK_WIN_MULTIPLIER,
                BlackjackStatusEnum.DRAW: game.bet,
            }.get(status, 0)

            if not self.game_repo.update_active_game(
                game_id, status, game.version, dealer_hand=dealer_hand
            ):
                self._raise_conflict(game)
            if winnings > 0:
                self.account_repo.ensure_account(game.user_id)
                self.account_repo.adjust_wallet(game.user_id, winnings)

        logger.info(
            f"Stand on game {game_id}: player {player_total} vs dealer {dealer_total}, "
            f"{status.value}, winnings {winnings}"
        )
        return StandResult(
            **game.model_dump(exclude={"dealer_hand", "dealer_total", "status", "version"}),
            version=game.version + 1,
            dealer_hand=dealer_hand,
            dealer_total=dealer_total,
            status=status,
            winnings=winnings,
        )

    def get_game(self, game_id: int) -> BlackjackGameState:
        with atomic(self.db):
            game = self.game_repo.get_game(game_id)
        if game is None:
            raise GameNotFoundError(
                f"Game not found: {game_id}", details={"game_id": game_id}
            )
        return game

    def get_active_games(self, user_id: str) -> List[BlackjackGameState]:
        with atomic(self.db):
            return self.game_repo.get_active_games(user_id)
