from typing import Dict, List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.orm import Session

from econbot.models.job import Job, JobAssignee
from econbot.schemas.jobs import JobItem, JobListItem
from econbot.repositories.base import BaseRepository


class JobRepository(BaseRepository[Job, JobItem]):
    """작업 리포지토리 - 작업 목록 및 배정 관리"""

    def __init__(self, db: Session):
        super().__init__(Job, JobItem, db)

    def insert_job(self, description: str) -> int:
        """작업 추가 후 (재번호 전) ID 반환"""
        result = self.db.execute(insert(Job).values(description=description))
        return result.inserted_primary_key[0]

    def renumber_jobs(self) -> Dict[int, int]:
        """
        작업 ID를 기존 순서대로 1..N으로 재번호

        오름차순으로 처리하므로 새 ID는 항상 기존 ID 이하이며,
        이미 처리된 행만 1..i-1을 차지하므로 PK 충돌이 생기지 않습니다.
        배정 행(job_assignees)도 같은 트랜잭션에서 함께 옮깁니다.

        Returns:
            Dict[int, int]: {기존 ID: 새 ID} (변경된 항목만)
        """
        old_ids = self.db.execute(select(Job.id).order_by(Job.id)).scalars().all()

        remapped: Dict[int, int] = {}
        for new_id, old_id in enumerate(old_ids, start=1):
            if old_id == new_id:
                continue
            self.db.execute(
                update(Job)
                .where(Job.id == old_id)
                .values(id=new_id)
                .execution_options(synchronize_session=False)
            )
            self.db.execute(
                update(JobAssignee)
                .where(JobAssignee.job_id == old_id)
                .values(job_id=new_id)
                .execution_options(synchronize_session=False)
            )
            remapped[old_id] = new_id

        return remapped

    def get_job(self, job_id: int) -> Optional[JobItem]:
        row = self.db.execute(
            select(Job.id, Job.description).where(Job.id == job_id)
        ).first()
        return JobItem(id=row.id, description=row.description) if row else None

    def get_all_jobs(self) -> List[JobItem]:
        """ID 오름차순 작업 목록"""
        rows = self.db.execute(select(Job.id, Job.description).order_by(Job.id)).all()
        return [JobItem(id=row.id, description=row.description) for row in rows]

    def get_job_list(self) -> List[JobListItem]:
        """배정자 목록이 포함된 작업 목록"""
        rows = self.db.execute(
            select(Job.id, Job.description, JobAssignee.user_id)
            .outerjoin(JobAssignee, JobAssignee.job_id == Job.id)
            .order_by(Job.id, JobAssignee.created_at)
        ).all()

        jobs: Dict[int, JobListItem] = {}
        for row in rows:
            job = jobs.get(row.id)
            if job is None:
                job = JobListItem(id=row.id, description=row.description, assignees=[])
                jobs[row.id] = job
            if row.user_id is not None:
                job.assignees.append(row.user_id)
        return list(jobs.values())

    def pick_random_unassigned_job(self, user_id: str) -> Optional[JobItem]:
        """사용자에게 아직 배정되지 않은 작업 중 하나를 균등 무작위로 선택"""
        assigned = select(JobAssignee.job_id).where(JobAssignee.user_id == user_id)
        row = self.db.execute(
            select(Job.id, Job.description)
            .where(Job.id.not_in(assigned))
            .order_by(func.random())
            .limit(1)
        ).first()
        return JobItem(id=row.id, description=row.description) if row else None

    def assign(self, job_id: int, user_id: str) -> None:
        self.db.execute(insert(JobAssignee).values(job_id=job_id, user_id=user_id))

    def get_assigned_job_ids(self, user_id: str) -> List[int]:
        return list(
            self.db.execute(
                select(JobAssignee.job_id)
                .where(JobAssignee.user_id == user_id)
                .order_by(JobAssignee.job_id)
            )
            .scalars()
            .all()
        )

    def get_active_job(self, user_id: str) -> Optional[JobItem]:
        """사용자의 (첫 번째) 배정 작업"""
        row = self.db.execute(
            select(Job.id, Job.description)
            .join(JobAssignee, JobAssignee.job_id == Job.id)
            .where(JobAssignee.user_id == user_id)
            .order_by(JobAssignee.created_at, Job.id)
            .limit(1)
        ).first()
        return JobItem(id=row.id, description=row.description) if row else None

    def remove_assignments(self, user_id: str, job_id: Optional[int] = None) -> int:
        """배정 삭제 (job_id 미지정 시 해당 사용자의 모든 배정)"""
        stmt = delete(JobAssignee).where(JobAssignee.user_id == user_id)
        if job_id is not None:
            stmt = stmt.where(JobAssignee.job_id == job_id)
        result = self.db.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount
