from typing import List, Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.orm import Session

from econbot.models.giveaway import Giveaway, GiveawayEntry
from econbot.schemas.giveaway import GiveawayItem
from econbot.repositories.base import BaseRepository


class GiveawayRepository(BaseRepository[Giveaway, GiveawayItem]):
    """경품 추첨 리포지토리 - 추첨 및 응모 상태 영속화"""

    def __init__(self, db: Session):
        super().__init__(Giveaway, GiveawayItem, db)

    def create_giveaway(
        self, message_id: str, channel_id: str, end_time: int, prize: str, winners: int
    ) -> GiveawayItem:
        return self.create(
            message_id=message_id,
            channel_id=channel_id,
            end_time=end_time,
            prize=prize,
            winners=winners,
        )

    def get_active_giveaways(self, now_ms: int) -> List[GiveawayItem]:
        """종료 시각이 지나지 않은 추첨 목록"""
        instances = (
            self.db.query(Giveaway)
            .populate_existing()
            .filter(Giveaway.end_time > now_ms)
            .order_by(Giveaway.end_time)
            .all()
        )
        return [self._to_schema(instance) for instance in instances]

    def get_by_message_id(self, message_id: str) -> Optional[GiveawayItem]:
        return self.get_by_field("message_id", message_id)

    def get_by_id(self, giveaway_id: int) -> Optional[GiveawayItem]:
        return self.get_by_field("id", giveaway_id)

    def delete_by_message_id(self, message_id: str) -> bool:
        """추첨 삭제 (응모 내역 포함)"""
        giveaway_id = self.db.execute(
            select(Giveaway.id).where(Giveaway.message_id == message_id)
        ).scalar()
        if giveaway_id is None:
            return False

        # SQLite는 PRAGMA foreign_keys 없이는 CASCADE가 동작하지 않으므로 직접 삭제
        self.clear_entries(giveaway_id)
        self.db.execute(
            delete(Giveaway)
            .where(Giveaway.id == giveaway_id)
            .execution_options(synchronize_session=False)
        )
        return True

    def add_entry(self, giveaway_id: int, user_id: str) -> bool:
        """응모 추가 (이미 응모했으면 무시)"""
        return self._insert_if_absent(
            {"giveaway_id": giveaway_id, "user_id": user_id},
            index_elements=["giveaway_id", "user_id"],
            table=GiveawayEntry.__table__,
        )

    def remove_entry(self, giveaway_id: int, user_id: str) -> bool:
        result = self.db.execute(
            delete(GiveawayEntry)
            .where(
                and_(
                    GiveawayEntry.giveaway_id == giveaway_id,
                    GiveawayEntry.user_id == user_id,
                )
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    def clear_entries(self, giveaway_id: int) -> int:
        result = self.db.execute(
            delete(GiveawayEntry)
            .where(GiveawayEntry.giveaway_id == giveaway_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def get_entries(self, giveaway_id: int) -> List[str]:
        return list(
            self.db.execute(
                select(GiveawayEntry.user_id)
                .where(GiveawayEntry.giveaway_id == giveaway_id)
                .order_by(GiveawayEntry.user_id)
            )
            .scalars()
            .all()
        )
