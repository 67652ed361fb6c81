import enum

from sqlalchemy import JSON, BigInteger, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from econbot.models.base import BaseModel


class BlackjackStatusEnum(str, enum.Enum):
    ACTIVE = "active"
    PLAYER_WIN = "player_win"
    DEALER_WIN = "dealer_win"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self is not BlackjackStatusEnum.ACTIVE


class BlackjackGame(BaseModel):
    """
    블랙잭 게임 테이블

    - bet은 게임 시작 시 지갑에서 선차감(escrow)된 금액
    - player_hand / dealer_hand는 [{"value": "A", "suit": "♠"}, ...] 형태의 JSON
    - status는 active → (player_win | dealer_win | draw) 단방향으로만 전이
    - version은 갱신마다 1씩 증가 (읽은 시점의 상태에 대해서만 쓰기 허용)
    """

    __tablename__ = "blackjack_games"
    __table_args__ = (Index("ix_blackjack_games_user_status", "user_id", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(Text, nullable=False)
    bet: Mapped[int] = mapped_column(BigInteger, nullable=False)
    player_hand: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    dealer_hand: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=BlackjackStatusEnum.ACTIVE.value,
        server_default=BlackjackStatusEnum.ACTIVE.value,
    )
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
