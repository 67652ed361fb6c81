import logging
import random
import time
from typing import List, Optional

from sqlalchemy.orm import Session

from econbot.core.exceptions import GiveawayNotFoundError, InvalidInputError
from econbot.database.session import atomic
from econbot.repositories.giveaway_repository import GiveawayRepository
from econbot.schemas.giveaway import GiveawayDrawResult, GiveawayItem

logger = logging.getLogger(__name__)


class GiveawayService:
    """경품 추첨 저장 및 당첨자 선정"""

    def __init__(self, db: Session, rng: Optional[random.Random] = None):
        self.db = db
        self.rng = rng or random.Random()
        self.giveaway_repo = GiveawayRepository(db)

    def save_giveaway(
        self,
        message_id: str,
        channel_id: str,
        end_time: int,
        prize: str,
        winners: int,
    ) -> GiveawayItem:
        """추첨 저장

        Args:
            message_id: 공지 메시지 ID
            channel_id: 채널 ID
            end_time: 종료 시각 (epoch ms)
            prize: 경품
            winners: 당첨자 수 (>= 1)

        Raises:
            InvalidInputError: 경품/당첨자 수가 잘못되었거나 같은 메시지의 추첨이 이미 존재
        """
        if not prize or not prize.strip():
            raise InvalidInputError("Prize is required")
        if winners is None or winners < 1:
            raise InvalidInputError(
                f"Invalid number of winners: {winners}", details={"winners": winners}
            )
        if not message_id or not channel_id:
            raise InvalidInputError("message_id and channel_id are required")

        with atomic(self.db):
            if self.giveaway_repo.get_by_message_id(message_id):
                raise InvalidInputError(
                    f"Giveaway already exists for message {message_id}",
                    details={"message_id": message_id},
                )
            giveaway = self.giveaway_repo.create_giveaway(
                message_id=message_id,
                channel_id=channel_id,
                end_time=end_time,
                prize=prize.strip(),
                winners=winners,
            )

        logger.info(f"Saved giveaway {giveaway.id} for message {message_id}")
        return giveaway

    def get_active_giveaways(self, now: Optional[int] = None) -> List[GiveawayItem]:
        if now is None:
            now = int(time.time() * 1000)
        with atomic(self.db):
            return self.giveaway_repo.get_active_giveaways(now)

    def get_giveaway_by_message_id(self, message_id: str) -> Optional[GiveawayItem]:
        with atomic(self.db):
            return self.giveaway_repo.get_by_message_id(message_id)

    def delete_giveaway(self, message_id: str) -> bool:
        with atomic(self.db):
            deleted = self.giveaway_repo.delete_by_message_id(message_id)

        if deleted:
            logger.info(f"Deleted giveaway for message {message_id}")
        return deleted

    def add_entry(self, giveaway_id: int, user_id: str) -> bool:
        """응모 추가 - 중복 응모는 무시하고 False 반환"""
        with atomic(self.db):
            if not self.giveaway_repo.get_by_id(giveaway_id):
                raise GiveawayNotFoundError(details={"giveaway_id": giveaway_id})
            return self.giveaway_repo.add_entry(giveaway_id, user_id)

    def remove_entry(self, giveaway_id: int, user_id: str) -> bool:
        with atomic(self.db):
            return self.giveaway_repo.remove_entry(giveaway_id, user_id)

    def clear_entries(self, giveaway_id: int) -> int:
        with atomic(self.db):
            return self.giveaway_repo.clear_entries(giveaway_id)

    def get_entries(self, giveaway_id: int) -> List[str]:
        with atomic(self.db):
            return self.giveaway_repo.get_entries(giveaway_id)

    def draw_winners(self, giveaway_id: int) -> GiveawayDrawResult:
        """응모자 중 최대 winners명을 중복 없이 무작위 선정"""
        with atomic(self.db):
            giveaway = self.giveaway_repo.get_by_id(giveaway_id)
            if not giveaway:
                raise GiveawayNotFoundError(details={"giveaway_id": giveaway_id})
            entrants = self.giveaway_repo.get_entries(giveaway_id)

        winners = self.rng.sample(entrants, min(giveaway.winners, len(entrants)))
        logger.info(
            f"Drew {len(winners)} winners for giveaway {giveaway_id} from {len(entrants)} entrants"
        )
        return GiveawayDrawResult(
            giveaway_id=giveaway_id,
            prize=giveaway.prize,
            entrant_count=len(entrants),
            winners=winners,
        )
