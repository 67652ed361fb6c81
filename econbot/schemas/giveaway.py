from pydantic import BaseModel, Field
from typing import List


class GiveawayItem(BaseModel):
    """경품 추첨"""

    id: int = Field(..., description="추첨 ID")
    message_id: str = Field(..., description="공지 메시지 ID")
    channel_id: str = Field(..., description="채널 ID")
    end_time: int = Field(..., description="종료 시각 (epoch ms)")
    prize: str = Field(..., description="경품")
    winners: int = Field(..., ge=1, description="당첨자 수")

    class Config:
        from_attributes = True


class GiveawayDrawResult(BaseModel):
    """당첨자 추첨 결과"""

    giveaway_id: int = Field(..., description="추첨 ID")
    prize: str = Field(..., description="경품")
    entrant_count: int = Field(..., description="응모자 수")
    winners: List[str] = Field(..., description="당첨자 ID 목록")
