import pytest

from econbot.models.job import Job, JobAssignee
from econbot.core.exceptions import (
    InvalidAmountError,
    InvalidInputError,
    NoJobsAvailableError,
    NotAssignedError,
)
from econbot.services.job_service import JobService
from econbot.services.ledger_service import LedgerService


@pytest.fixture
def job_service(db):
    return JobService(db)


class TestAddJob:
    """작업 추가 테스트"""

    def test_ids_are_contiguous(self, job_service):
        # Act
        jobs = [job_service.add_job(f"job {index}") for index in range(3)]

        # Assert
        assert [job.id for job in jobs] == [1, 2, 3]
        assert [job.id for job in job_service.get_all_jobs()] == [1, 2, 3]

    def test_description_is_trimmed(self, job_service):
        job = job_service.add_job("  sweep the floor  ")

        assert job.description == "sweep the floor"

    @pytest.mark.parametrize("description", ["", "   ", None])
    def test_blank_description_rejected(self, job_service, description):
        with pytest.raises(InvalidInputError):
            job_service.add_job(description)

        assert job_service.get_all_jobs() == []


class TestAssignRandomJob:
    """작업 배정 테스트"""

    def test_assigns_the_only_job(self, job_service):
        # Arrange
        job_service.add_job("mow the lawn")

        # Act
        assignment = job_service.assign_random_job("u1")

        # Assert
        assert assignment.job_id == 1
        assert assignment.description == "mow the lawn"
        assert job_service.get_active_job("u1").id == 1

    def test_no_jobs(self, job_service):
        with pytest.raises(NoJobsAvailableError) as exc_info:
            job_service.assign_random_job("u1")

        assert exc_info.value.error_code == "JOB_002"

    def test_second_assignment_picks_other_job(self, job_service):
        """이미 배정된 작업은 같은 사용자에게 다시 배정되지 않음"""
        # Arrange
        job_service.add_job("first")
        job_service.add_job("second")

        # Act
        first = job_service.assign_random_job("u1")
        second = job_service.assign_random_job("u1")

        # Assert
        assert {first.job_id, second.job_id} == {1, 2}
        with pytest.raises(NoJobsAvailableError):
            job_service.assign_random_job("u1")

    def test_job_held_by_other_user_stays_eligible(self, job_service):
        job_service.add_job("shared")
        job_service.assign_random_job("u1")

        assignment = job_service.assign_random_job("u2")

        assert assignment.job_id == 1
        job_list = job_service.get_job_list()
        assert sorted(job_list[0].assignees) == ["u1", "u2"]

    def test_empty_user_rejected(self, job_service):
        job_service.add_job("anything")

        with pytest.raises(InvalidInputError):
            job_service.assign_random_job("")

    def test_assignments_follow_renumbering(self, job_service, db):
        """재번호 시 배정도 새 번호로 함께 이동"""
        # Arrange
        db.add(Job(id=5, description="legacy job"))
        db.add(JobAssignee(job_id=5, user_id="u1"))
        db.commit()

        # Act
        added = job_service.add_job("another job")

        # Assert
        assert [job.id for job in job_service.get_all_jobs()] == [1, 2]
        assert added.id == 2
        assert added.description == "another job"
        active = job_service.get_active_job("u1")
        assert active.id == 1
        assert active.description == "legacy job"


class TestCompleteJob:
    """작업 완료 테스트"""

    def test_complete_pays_reward_and_clears_assignment(self, job_service, db):
        # Arrange
        job_service.add_job("deliver mail")
        job_service.assign_random_job("u1")

        # Act
        result = job_service.complete_job("u1", 150)

        # Assert
        assert result.job_ids == [1]
        assert result.wallet_after == 150
        assert job_service.get_active_job("u1") is None
        assert LedgerService(db).get_balances("u1").wallet == 150

    def test_complete_without_assignment(self, job_service, db):
        with pytest.raises(NotAssignedError) as exc_info:
            job_service.complete_job("u1", 100)

        assert exc_info.value.error_code == "JOB_001"
        assert LedgerService(db).get_balances("u1").wallet == 0

    def test_complete_specific_job_keeps_others(self, job_service):
        job_service.add_job("a")
        job_service.add_job("b")
        job_service.assign_random_job("u1")
        job_service.assign_random_job("u1")

        result = job_service.complete_job("u1", 10, job_id=2)

        assert result.job_ids == [2]
        assert job_service.get_active_job("u1").id == 1

    def test_complete_unheld_job_id(self, job_service):
        job_service.add_job("a")
        job_service.add_job("b")
        job_service.assign_random_job("u1")
        held = job_service.get_active_job("u1").id
        other = 1 if held == 2 else 2

        with pytest.raises(NotAssignedError):
            job_service.complete_job("u1", 10, job_id=other)

        assert job_service.get_active_job("u1").id == held

    def test_negative_reward_rejected(self, job_service):
        job_service.add_job("a")
        job_service.assign_random_job("u1")

        with pytest.raises(InvalidAmountError):
            job_service.complete_job("u1", -1)

        assert job_service.get_active_job("u1") is not None

    def test_zero_reward_allowed(self, job_service):
        job_service.add_job("volunteer")
        job_service.assign_random_job("u1")

        result = job_service.complete_job("u1", 0)

        assert result.reward == 0
        assert result.wallet_after == 0
