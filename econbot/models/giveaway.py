from sqlalchemy import BigInteger, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from econbot.models.base import BaseModel


class Giveaway(BaseModel):
    """
    경품 추첨 테이블

    end_time은 epoch milliseconds (채팅 클라이언트 타이머와 동일 단위)
    """

    __tablename__ = "giveaways"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    message_id: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    channel_id: Mapped[str] = mapped_column(Text, nullable=False)
    end_time: Mapped[int] = mapped_column(BigInteger, nullable=False)
    prize: Mapped[str] = mapped_column(Text, nullable=False)
    winners: Mapped[int] = mapped_column(Integer, nullable=False)


class GiveawayEntry(BaseModel):
    __tablename__ = "giveaway_entries"

    giveaway_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("giveaways.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[str] = mapped_column(Text, primary_key=True)
