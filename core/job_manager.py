"""
Job management for dataset analyses.
Handles job creation, state management, and result retention.
"""
import logging
import streamlit as st
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, List, MutableMapping, Optional
from enum import Enum
import uuid

from analysis.pipeline import AnalysisPipeline, AnalysisResult
from config.settings import get_settings
from core.exceptions import AnalysisError

LOGGER = logging.getLogger(__name__)


class JobStatus(Enum):
    """Job status enumeration."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class AnalysisJob:
    """Represents one analysis of an uploaded dataset."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: JobStatus = JobStatus.PENDING
    source_name: Optional[str] = None
    input_rows: int = 0

    result: Optional[AnalysisResult] = None

    # Timestamps
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None

    # Error handling
    error_message: Optional[str] = None
    error_type: Optional[str] = None

    def start(self):
        """Start the job."""
        self.status = JobStatus.PROCESSING
        self.updated_at = datetime.now()

    def complete(self, result: AnalysisResult):
        """Mark job as completed."""
        self.status = JobStatus.COMPLETED
        self.result = result
        self.completed_at = datetime.now()
        self.updated_at = datetime.now()

    def fail(self, error: AnalysisError):
        """Mark job as failed."""
        self.status = JobStatus.FAILED
        self.error_message = error.message
        self.error_type = type(error).__name__
        self.updated_at = datetime.now()

    @property
    def succeeded(self) -> bool:
        return self.status == JobStatus.COMPLETED

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "status": self.status.value,
            "source_name": self.source_name,
            "input_rows": self.input_rows,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "completed_at": (
                self.completed_at.isoformat() if self.completed_at else None
            ),
            "error_message": self.error_message,
            "error_type": self.error_type
        }


class JobManager:
    """
    Manages analysis jobs.
    Uses Streamlit session state (or any mapping) for in-memory state.

    The latest successful result is only replaced when a new analysis
    completes; failed analyses leave it untouched.
    """

    def __init__(
        self,
        state: MutableMapping[str, Any] = None,
        pipeline: AnalysisPipeline = None
    ):
        self.state = state if state is not None else st.session_state
        self.pipeline = pipeline or AnalysisPipeline.from_settings(get_settings())
        self._init_state()

    def _init_state(self):
        """Initialize state keys for job management."""
        if "current_job" not in self.state:
            self.state["current_job"] = None
        if "latest_result" not in self.state:
            self.state["latest_result"] = None
        if "job_history" not in self.state:
            self.state["job_history"] = []

    def run_analysis(
        self,
        rows: List[dict],
        source_name: str = None,
        progress_callback: Callable = None
    ) -> AnalysisJob:
        """
        Run one analysis and record its outcome.

        Args:
            rows: Parsed rows
            source_name: Uploaded file name
            progress_callback: Progress callback (stage, progress, message)

        Returns:
            AnalysisJob, completed or failed
        """
        job = AnalysisJob(source_name=source_name, input_rows=len(rows))
        job.start()
        self.state["current_job"] = job

        try:
            result = self.pipeline.run(rows, progress_callback=progress_callback)
        except AnalysisError as e:
            LOGGER.warning(
                "Analysis %s of %s failed: %s",
                job.id, source_name or "dataset", e.message
            )
            job.fail(e)
        else:
            job.complete(result)
            self.state["latest_result"] = result

        self.state["job_history"].append(job)
        return job

    def get_current_job(self) -> Optional[AnalysisJob]:
        """Get the most recent job."""
        return self.state.get("current_job")

    def get_latest_result(self) -> Optional[AnalysisResult]:
        """Get the result of the last successful analysis."""
        return self.state.get("latest_result")

    def get_history(self) -> List[AnalysisJob]:
        """Get all jobs run in this session."""
        return list(self.state.get("job_history", []))

    def reset(self):
        """Forget all jobs and results."""
        self.state["current_job"] = None
        self.state["latest_result"] = None
        self.state["job_history"] = []
