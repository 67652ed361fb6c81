from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from econbot.models.base import BaseModel


class Job(BaseModel):
    """
    작업 목록 테이블

    id는 추가될 때마다 1..N으로 재번호가 매겨집니다 (관리자가 번호로 참조).
    """

    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)


class JobAssignee(BaseModel):
    """작업 배정 테이블 - (job_id, user_id) 쌍이 중복되지 않음"""

    __tablename__ = "job_assignees"

    # job_id는 재번호 시 함께 갱신되므로 FK를 두지 않음
    job_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(Text, primary_key=True)
