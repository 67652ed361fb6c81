"""
Job Service

Business logic for the job board: admins add jobs, users pick up a random
job with "work", and admins complete the job to pay the reward.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from econbot.core.exceptions import (
    InvalidAmountError,
    InvalidInputError,
    NoJobsAvailableError,
    NotAssignedError,
)
from econbot.database.session import atomic
from econbot.repositories.account_repository import AccountRepository
from econbot.repositories.job_repository import JobRepository
from econbot.schemas.jobs import (
    CompleteJobResult,
    JobAssignment,
    JobItem,
    JobListItem,
)

logger = logging.getLogger(__name__)


class JobService:
    """
    Service layer for the job registry.

    Handles:
    - Job creation with contiguous 1..N renumbering
    - Random assignment among jobs the user does not already hold
    - Completion (assignment removal + wallet reward) as one transaction
    """

    def __init__(self, db: Session):
        self.db = db
        self.job_repo = JobRepository(db)
        self.account_repo = AccountRepository(db)

    def add_job(self, description: str) -> JobItem:
        """
        Add a job and renumber every job id to 1..count.

        Args:
            description: Job description

        Returns:
            JobItem with the id the job holds after renumbering

        Raises:
            InvalidInputError: If the description is blank
        """
        if not description or not description.strip():
            raise InvalidInputError("Invalid job description")
        description = description.strip()

        with atomic(self.db):
            inserted_id = self.job_repo.insert_job(description)
            remapped = self.job_repo.renumber_jobs()
            job = self.job_repo.get_job(remapped.get(inserted_id, inserted_id))

        if remapped:
            logger.info(f"Renumbered {len(remapped)} jobs after insert")
        logger.info(f"Added job {job.id}: {description}")
        return job

    def get_all_jobs(self) -> List[JobItem]:
        with atomic(self.db):
            return self.job_repo.get_all_jobs()

    def get_job_list(self) -> List[JobListItem]:
        """Jobs with the ids of the users currently assigned to them."""
        with atomic(self.db):
            return self.job_repo.get_job_list()

    def get_active_job(self, user_id: str) -> Optional[JobItem]:
        with atomic(self.db):
            return self.job_repo.get_active_job(user_id)

    def assign_random_job(self, user_id: str) -> JobAssignment:
        """
        Assign a uniformly random job the user does not hold yet.

        Jobs held by other users stay eligible. Selection and insert run
        in the same transaction.

        Raises:
            InvalidInputError: If user_id is empty
            NoJobsAvailableError: If every job is already assigned to the user
        """
        if not user_id:
            raise InvalidInputError("Invalid user ID")

        with atomic(self.db):
            job = self.job_repo.pick_random_unassigned_job(user_id)
            if job is None:
                logger.warning(f"No available jobs for user {user_id}")
                raise NoJobsAvailableError(details={"user_id": user_id})
            self.job_repo.assign(job.id, user_id)

        logger.info(f"Assigned job {job.id} to user {user_id}")
        return JobAssignment(job_id=job.id, user_id=user_id, description=job.description)

    def complete_job(
        self, user_id: str, reward: int, job_id: Optional[int] = None
    ) -> CompleteJobResult:
        """
        Complete the user's job and credit the reward to the wallet.

        Without job_id every assignment the user holds is cleared; with
        job_id only that assignment is.

        Raises:
            InvalidAmountError: If reward is negative
            NotAssignedError: If the user holds no (matching) job
        """
        if reward is None or reward < 0:
            raise InvalidAmountError(
                f"Reward must not be negative: {reward}", details={"reward": reward}
            )

        with atomic(self.db):
            assigned = self.job_repo.get_assigned_job_ids(user_id)
            if job_id is not None:
                assigned = [assigned_id for assigned_id in assigned if assigned_id == job_id]
            if not assigned:
                logger.warning(f"User {user_id} has no active job (job_id={job_id})")
                raise NotAssignedError(details={"user_id": user_id, "job_id": job_id})

            self.job_repo.remove_assignments(user_id, job_id=job_id)
            self.account_repo.ensure_account(user_id)
            self.account_repo.adjust_wallet(user_id, reward)
            wallet_after = self.account_repo.get_wallet(user_id)

        logger.info(f"Completed jobs {assigned} for user {user_id} with reward {reward}")
        return CompleteJobResult(
            user_id=user_id, job_ids=assigned, reward=reward, wallet_after=wallet_after
        )
