import pytest

from config.settings import NormalizationSettings, Settings
from core import job_manager
from core.job_manager import JobManager, JobStatus


@pytest.fixture(name="manager")
def fixture_manager() -> JobManager:
    return JobManager(state={})


def test_successful_run_stores_result(manager, hr_finance_rows):
    job = manager.run_analysis(hr_finance_rows, source_name="hr.csv")

    assert job.status == JobStatus.COMPLETED
    assert job.succeeded
    assert job.input_rows == 3
    assert manager.get_latest_result() is job.result
    assert manager.get_current_job() is job


def test_failed_run_keeps_previous_result(manager, hr_finance_rows):
    first = manager.run_analysis(hr_finance_rows)
    failed = manager.run_analysis([{"category": "", "department": None, "keywords": ""}])

    assert failed.status == JobStatus.FAILED
    assert failed.error_type == "EmptyDatasetError"
    assert failed.error_message
    assert manager.get_latest_result() is first.result
    assert [j.status for j in manager.get_history()] == [
        JobStatus.COMPLETED,
        JobStatus.FAILED,
    ]


def test_unexpected_fault_is_recorded_as_failure(manager):
    job = manager.run_analysis([{"category": 42, "department": None, "keywords": "a"}])

    assert job.error_type == "UnexpectedComputationError"
    assert manager.get_latest_result() is None


def test_reset_clears_state(manager, hr_finance_rows):
    manager.run_analysis(hr_finance_rows)
    manager.reset()

    assert manager.get_latest_result() is None
    assert manager.get_current_job() is None
    assert manager.get_history() == []


def test_job_to_dict(manager, hr_finance_rows):
    data = manager.run_analysis(hr_finance_rows, source_name="hr.csv").to_dict()

    assert data["status"] == "completed"
    assert data["source_name"] == "hr.csv"
    assert data["completed_at"] is not None
    assert data["error_type"] is None


def test_default_pipeline_follows_settings(monkeypatch):
    strict = Settings(normalization=NormalizationSettings(min_substring_length=6))
    monkeypatch.setattr(job_manager, "get_settings", lambda: strict)
    manager = JobManager(state={})

    job = manager.run_analysis(
        [{"category": "HR", "department": None, "keywords": "tax, taxes"}]
    )

    assert job.result.unique_keywords == ["tax", "taxes"]
