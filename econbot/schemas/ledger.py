from pydantic import BaseModel, Field
from typing import Literal, Optional


class Balances(BaseModel):
    """지갑/은행 잔액"""

    user_id: str = Field(..., description="사용자 ID")
    wallet: int = Field(..., description="지갑 잔액")
    bank: int = Field(..., description="은행 잔액")

    class Config:
        from_attributes = True


class TransferResult(BaseModel):
    """송금 결과"""

    from_user_id: str = Field(..., description="보내는 사용자 ID")
    to_user_id: str = Field(..., description="받는 사용자 ID")
    amount: int = Field(..., gt=0, description="송금액")
    from_wallet_after: int = Field(..., description="송금 후 보내는 사용자 지갑")
    to_wallet_after: int = Field(..., description="송금 후 받는 사용자 지갑")


class RobResult(BaseModel):
    """강탈 결과

    success=False 이면 대상 지갑이 비어 있어 아무 것도 변경되지 않은 경우.
    success=True 이면 outcome으로 성공/실패(벌금) 여부를 구분.
    """

    success: bool = Field(..., description="강탈 시도 성립 여부")
    outcome: Optional[Literal["success", "fail"]] = Field(
        None, description="강탈 결과 (success: 탈취, fail: 벌금)"
    )
    amount_stolen: int = Field(0, description="탈취 금액")
    penalty: int = Field(0, description="벌금")
    robber_wallet_after: Optional[int] = Field(None, description="강도 지갑 잔액")
    target_wallet_after: Optional[int] = Field(None, description="대상 지갑 잔액")


class LeaderboardEntry(BaseModel):
    """리더보드 항목"""

    user_id: str = Field(..., description="사용자 ID")
    wallet: int = Field(..., description="지갑 잔액")
    bank: int = Field(..., description="은행 잔액")
    total_balance: int = Field(..., description="총 잔액 (wallet + bank)")

    class Config:
        from_attributes = True
