"""
Bulk categorization job records and the registry that holds them.

A job moves pending -> running -> completed | failed and is mutated only by
the worker executing it; any number of threads may read it meanwhile.
"""

import enum
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional


class JobStatus(str, enum.Enum):
    """Bulk job status enumeration."""
    pending = "pending"
    running = "running"
    completed = "completed"
    failed = "failed"


TERMINAL_STATUSES = frozenset({JobStatus.completed, JobStatus.failed})

_ALLOWED_TRANSITIONS = {
    JobStatus.pending: {JobStatus.running, JobStatus.failed},
    JobStatus.running: {JobStatus.completed, JobStatus.failed},
    JobStatus.completed: set(),
    JobStatus.failed: set(),
}


class InvalidJobTransition(RuntimeError):
    """Raised when a job is moved to a status its current status cannot reach."""


class BulkCategorizationJob:
    """Mutable status of one bulk categorization run."""

    def __init__(self, user_id: str, job_id: Optional[str] = None):
        self.job_id = job_id or str(uuid.uuid4())
        self.user_id = user_id
        self.status = JobStatus.pending
        self.total_processed = 0
        self.total_updated = 0
        self.total_skipped_low_confidence = 0
        self.error: Optional[str] = None
        self.created_at = datetime.utcnow()
        self.completed_at: Optional[datetime] = None
        self._lock = threading.Lock()

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def _transition(self, status: JobStatus) -> None:
        # Caller holds the lock
        if status not in _ALLOWED_TRANSITIONS[self.status]:
            raise InvalidJobTransition(
                f"Job {self.job_id} cannot move from {self.status.value} to {status.value}"
            )
        self.status = status
        if status in TERMINAL_STATUSES:
            self.completed_at = datetime.utcnow()

    def mark_running(self) -> None:
        with self._lock:
            self._transition(JobStatus.running)

    def record_progress(self, updated: int, skipped: int) -> None:
        with self._lock:
            self.total_updated = updated
            self.total_skipped_low_confidence = skipped
            self.total_processed = updated + skipped

    def complete(self, total_processed: int) -> None:
        with self._lock:
            self.total_processed = total_processed
            self._transition(JobStatus.completed)

    def fail(self, error: str) -> None:
        with self._lock:
            self.error = error
            self._transition(JobStatus.failed)

    def snapshot(self) -> Dict[str, Any]:
        """Consistent copy of the public fields."""
        with self._lock:
            return {
                "job_id": self.job_id,
                "status": self.status,
                "total_processed": self.total_processed,
                "total_updated": self.total_updated,
                "total_skipped_low_confidence": self.total_skipped_low_confidence,
                "error": self.error,
            }


class JobStore(ABC):
    """Registry of bulk jobs keyed by job id."""

    @abstractmethod
    def add(self, job: BulkCategorizationJob) -> None:
        ...

    @abstractmethod
    def get(self, job_id: str) -> Optional[BulkCategorizationJob]:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...


class InMemoryJobStore(JobStore):
    """
    Process-local job registry. History is lost on restart.

    When ``max_jobs`` is set, adding past the limit evicts the oldest finished
    jobs; pending and running jobs are always kept.
    """

    def __init__(self, max_jobs: Optional[int] = None):
        self.max_jobs = max_jobs
        self._jobs: Dict[str, BulkCategorizationJob] = {}
        self._lock = threading.Lock()

    def add(self, job: BulkCategorizationJob) -> None:
        with self._lock:
            self._jobs[job.job_id] = job
            if self.max_jobs is not None:
                self._evict()

    def _evict(self) -> None:
        excess = len(self._jobs) - self.max_jobs
        if excess <= 0:
            return
        # dicts keep insertion order, so this walks oldest first
        finished = [job_id for job_id, job in self._jobs.items() if job.is_terminal]
        for job_id in finished[:excess]:
            del self._jobs[job_id]

    def get(self, job_id: str) -> Optional[BulkCategorizationJob]:
        with self._lock:
            return self._jobs.get(str(job_id))

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)
