"""
경제 계좌 데이터 모델

사용자별 지갑(wallet)과 은행(bank) 잔액을 한 행에 저장합니다.
행은 첫 조회/변경 시점에 INSERT-IF-ABSENT로 생성되며 삭제되지 않습니다.
"""

from sqlalchemy import BigInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from econbot.models.base import BaseModel


class EconomyAccount(BaseModel):
    """
    계좌 테이블

    - user_id: 채팅 플랫폼 사용자 ID (snowflake 문자열)
    - wallet: 사용 가능한 잔액
    - bank: 입출금으로만 접근 가능한 보호 잔액
    """

    __tablename__ = "economy_accounts"

    user_id: Mapped[str] = mapped_column(Text, primary_key=True)
    wallet: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0, server_default="0"
    )
    bank: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0, server_default="0"
    )
