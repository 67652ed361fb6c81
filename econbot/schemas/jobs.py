from pydantic import BaseModel, Field
from typing import List, Optional


class JobItem(BaseModel):
    """작업 항목"""

    id: int = Field(..., description="작업 번호 (1..N)")
    description: str = Field(..., description="작업 설명")

    class Config:
        from_attributes = True


class JobListItem(JobItem):
    """배정자 목록이 포함된 작업 항목"""

    assignees: List[str] = Field(default_factory=list, description="배정된 사용자 ID 목록")


class JobAssignment(BaseModel):
    """작업 배정 결과"""

    job_id: int = Field(..., description="작업 번호")
    user_id: str = Field(..., description="사용자 ID")
    description: str = Field(..., description="작업 설명")


class CompleteJobResult(BaseModel):
    """작업 완료 결과"""

    user_id: str = Field(..., description="사용자 ID")
    job_ids: List[int] = Field(..., description="완료 처리된 작업 번호 목록")
    reward: int = Field(..., description="지급된 보상")
    wallet_after: Optional[int] = Field(None, description="보상 지급 후 지갑 잔액")
