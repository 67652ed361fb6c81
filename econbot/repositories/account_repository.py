"""
계좌 리포지토리 - 지갑/은행 잔액 데이터 접근

핵심 특징:
- 계좌 행은 INSERT-IF-ABSENT로 지연 생성됩니다 (동시 최초 접근에도 안전)
- 잔액 검증이 필요한 차감은 조건부 UPDATE(... WHERE wallet >= :amount)로
  처리하여 읽기-수정-쓰기 사이의 경쟁 상태를 없앱니다
- 영향받은 행 수(rowcount)로 성공 여부를 판단합니다
"""

from typing import List, Optional

from sqlalchemy import desc, select, update
from sqlalchemy.orm import Session

from econbot.models.account import EconomyAccount
from econbot.schemas.ledger import Balances, LeaderboardEntry
from econbot.repositories.base import BaseRepository


class AccountRepository(BaseRepository[EconomyAccount, Balances]):
    """계좌 리포지토리 - 잔액 관련 모든 데이터베이스 작업 처리"""

    def __init__(self, db: Session):
        super().__init__(EconomyAccount, Balances, db)

    def ensure_account(self, user_id: str) -> bool:
        """계좌가 없으면 잔액 0으로 생성 (멱등)

        Returns:
            bool: 새로 생성되었으면 True
        """
        return self._insert_if_absent(
            {"user_id": user_id, "wallet": 0, "bank": 0}, index_elements=["user_id"]
        )

    def get_balances(self, user_id: str, for_update: bool = False) -> Optional[Balances]:
        """현재 잔액 조회 (ORM 캐시를 거치지 않는 컬럼 조회)"""
        stmt = select(
            self.model_class.user_id, self.model_class.wallet, self.model_class.bank
        ).where(self.model_class.user_id == user_id)
        if for_update:
            stmt = stmt.with_for_update()

        row = self.db.execute(stmt).first()
        if row is None:
            return None
        return Balances(user_id=row.user_id, wallet=row.wallet, bank=row.bank)

    def get_wallet(self, user_id: str, for_update: bool = False) -> int:
        balances = self.get_balances(user_id, for_update=for_update)
        return balances.wallet if balances else 0

    def _update(self, *criteria, **values) -> int:
        result = self.db.execute(
            update(self.model_class)
            .where(*criteria)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def adjust_wallet(self, user_id: str, delta: int) -> bool:
        """지갑 무조건 증감 (음수 잔액 허용)"""
        return (
            self._update(
                self.model_class.user_id == user_id,
                wallet=self.model_class.wallet + delta,
            )
            > 0
        )

    def debit_wallet(self, user_id: str, amount: int) -> bool:
        """지갑 조건부 차감 - 잔액이 부족하면 아무 것도 바꾸지 않고 False"""
        return (
            self._update(
                self.model_class.user_id == user_id,
                self.model_class.wallet >= amount,
                wallet=self.model_class.wallet - amount,
            )
            > 0
        )

    def move_wallet_to_bank(self, user_id: str, amount: int) -> bool:
        """입금: 한 문장으로 wallet → bank 이동 (지갑 잔액 조건부)"""
        return (
            self._update(
                self.model_class.user_id == user_id,
                self.model_class.wallet >= amount,
                wallet=self.model_class.wallet - amount,
                bank=self.model_class.bank + amount,
            )
            > 0
        )

    def move_bank_to_wallet(self, user_id: str, amount: int) -> bool:
        """출금: 한 문장으로 bank → wallet 이동 (은행 잔액 조건부)"""
        return (
            self._update(
                self.model_class.user_id == user_id,
                self.model_class.bank >= amount,
                wallet=self.model_class.wallet + amount,
                bank=self.model_class.bank - amount,
            )
            > 0
        )

    def get_leaderboard(self, limit: int = 10) -> List[LeaderboardEntry]:
        """총 잔액(wallet + bank) 기준 상위 사용자"""
        total = (self.model_class.wallet + self.model_class.bank).label("total_balance")
        rows = self.db.execute(
            select(
                self.model_class.user_id,
                self.model_class.wallet,
                self.model_class.bank,
                total,
            )
            .order_by(desc(total), self.model_class.user_id)
            .limit(limit)
        ).all()

        return [
            LeaderboardEntry(
                user_id=row.user_id,
                wallet=row.wallet,
                bank=row.bank,
                total_balance=row.total_balance,
            )
            for row in rows
        ]
