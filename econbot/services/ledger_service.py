import logging
import random
from typing import List, Optional

from sqlalchemy.orm import Session

from econbot.config import Settings, settings as default_settings
from econbot.core.exceptions import (
    InsufficientFundsError,
    InvalidAmountError,
    InvalidInputError,
)
from econbot.database.session import atomic
from econbot.repositories.account_repository import AccountRepository
from econbot.schemas.ledger import (
    Balances,
    LeaderboardEntry,
    RobResult,
    TransferResult,
)

logger = logging.getLogger(__name__)


class LedgerService:
    """지갑/은행 잔액 관련 비즈니스 로직을 담당하는 서비스

    모든 연산은 atomic() 트랜잭션 하나로 실행되며, 계좌가 없으면
    잔액 0으로 먼저 생성한 뒤 진행합니다.
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
        self.account_repo = AccountRepository(db)

    @staticmethod
    def _validate_amount(amount: int) -> None:
        if amount is None or amount <= 0:
            raise InvalidAmountError(
                f"Amount must be greater than zero: {amount}",
                details={"amount": amount},
            )

    def get_balances(self, user_id: str) -> Balances:
        """사용자 잔액 조회

        Args:
            user_id: 사용자 ID

        Returns:
            Balances: 지갑/은행 잔액
        """
        with atomic(self.db):
            self.account_repo.ensure_account(user_id)
            balances = self.account_repo.get_balances(user_id)

        logger.info(
            f"Retrieved balance for user {user_id}: wallet={balances.wallet}, bank={balances.bank}"
        )
        return balances

    def adjust_wallet(self, user_id: str, delta: int) -> Balances:
        """지갑 증감 (관리자 지급/회수, 보상 등)

        Args:
            user_id: 사용자 ID
            delta: 변동량 (양수: 증가, 음수: 감소)

        Returns:
            Balances: 변경 후 잔액
        """
        with atomic(self.db):
            self.account_repo.ensure_account(user_id)
            self.account_repo.adjust_wallet(user_id, delta)
            balances = self.account_repo.get_balances(user_id)

        action = "Added" if delta >= 0 else "Deducted"
        logger.info(f"{action} {abs(delta)} to wallet of user {user_id}")
        return balances

    def transfer(self, from_user_id: str, to_user_id: str, amount: int) -> TransferResult:
        """지갑 간 송금 - 차감과 입금이 하나의 트랜잭션으로 커밋됨

        Raises:
            InvalidAmountError: amount <= 0
            InvalidInputError: 자기 자신에게 송금
            InsufficientFundsError: 보내는 사용자 지갑 부족
        """
        self._validate_amount(amount)
        if from_user_id == to_user_id:
            raise InvalidInputError(
                "Cannot transfer to yourself", details={"user_id": from_user_id}
            )

        with atomic(self.db):
            self.account_repo.ensure_account(from_user_id)
            self.account_repo.ensure_account(to_user_id)

            if not self.account_repo.debit_wallet(from_user_id, amount):
                available = self.account_repo.get_wallet(from_user_id)
                logger.warning(
                    f"Transfer rejected for user {from_user_id}: required {amount}, available {available}"
                )
                raise InsufficientFundsError(
                    f"Insufficient funds. Required: {amount}, Available: {available}",
                    details={"required": amount, "available": available},
                )
            self.account_repo.adjust_wallet(to_user_id, amount)

            from_wallet = self.account_repo.get_wallet(from_user_id)
            to_wallet = self.account_repo.get_wallet(to_user_id)

        logger.info(f"Transferred {amount} from user {from_user_id} to user {to_user_id}")
        return TransferResult(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            amount=amount,
            from_wallet_after=from_wallet,
            to_wallet_after=to_wallet,
        )

    def deposit(self, user_id: str, amount: int) -> Balances:
        """지갑 → 은행 입금"""
        self._validate_amount(amount)

        with atomic(self.db):
            self.account_repo.ensure_account(user_id)
            if not self.account_repo.move_wallet_to_bank(user_id, amount):
                available = self.account_repo.get_wallet(user_id)
                raise InsufficientFundsError(
                    f"Insufficient funds in wallet. Required: {amount}, Available: {available}",
                    details={"required": amount, "available": available},
                )
            balances = self.account_repo.get_balances(user_id)

        logger.info(f"Deposited {amount} for user {user_id}")
        return balances

    def withdraw(self, user_id: str, amount: int) -> Balances:
        """은행 → 지갑 출금"""
        self._validate_amount(amount)

        with atomic(self.db):
            self.account_repo.ensure_account(user_id)
            if not self.account_repo.move_bank_to_wallet(user_id, amount):
                available = self.account_repo.get_balances(user_id).bank
                raise InsufficientFundsError(
                    f"Insufficient funds in the bank. Required: {amount}, Available: {available}",
                    details={"required": amount, "available": available},
                )
            balances = self.account_repo.get_balances(user_id)

        logger.info(f"Withdrew {amount} for user {user_id}")
        return balances

    def rob(self, robber_id: str, target_id: str) -> RobResult:
        """강탈 시도

        - 대상 지갑이 0 이하: success=False, 변경 없음
        - 동전 던지기 성공: min(대상 지갑, ROB_MAX_STEAL)을 대상 → 강도로 이동
        - 실패: ROB_PENALTY를 강도 → 대상으로 이동 (강도 잔액 하한 없음)
        """
        if robber_id == target_id:
            raise InvalidInputError("Cannot rob yourself", details={"user_id": robber_id})

        with atomic(self.db):
            self.account_repo.ensure_account(robber_id)
            self.account_repo.ensure_account(target_id)

            target_wallet = self.account_repo.get_wallet(target_id, for_update=True)
            if target_wallet <= 0:
                logger.info(f"Rob by user {robber_id} skipped: target {target_id} has no money")
                return RobResult(success=False)

            if self.rng.random() < self.settings.ROB_SUCCESS_RATE:
                amount_stolen = min(target_wallet, self.settings.ROB_MAX_STEAL)
                if not self.account_repo.debit_wallet(target_id, amount_stolen):
                    raise InsufficientFundsError(
                        "Target wallet changed during robbery",
                        details={"target_id": target_id},
                    )
                self.account_repo.adjust_wallet(robber_id, amount_stolen)
                result = RobResult(
                    success=True, outcome="success", amount_stolen=amount_stolen
                )
            else:
                penalty = self.settings.ROB_PENALTY
                self.account_repo.adjust_wallet(target_id, penalty)
                self.account_repo.adjust_wallet(robber_id, -penalty)
                result = RobResult(success=True, outcome="fail", penalty=penalty)

            result.robber_wallet_after = self.account_repo.get_wallet(robber_id)
            result.target_wallet_after = self.account_repo.get_wallet(target_id)

        logger.info(
            f"Rob by user {robber_id} on user {target_id}: {result.outcome} "
            f"(stolen={result.amount_stolen}, penalty={result.penalty})"
        )
        return result

    def get_leaderboard(self, limit: Optional[int] = None) -> List[LeaderboardEntry]:
        """총 잔액 기준 리더보드 (limit 미지정 시 LEADERBOARD_LIMIT, 최대 100)"""
        if limit is None:
            limit = self.settings.LEADERBOARD_LIMIT
        if limit < 1:
            raise InvalidInputError(
                f"Leaderboard limit must be at least 1: {limit}", details={"limit": limit}
            )
        if limit > 100:
            limit = 100

        with atomic(self.db):
            return self.account_repo.get_leaderboard(limit=limit)
