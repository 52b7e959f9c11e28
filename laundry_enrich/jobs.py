"""
Batch job tracking for background enrichment

Job state lives in process memory only; it does not survive a restart.
"""

import copy
import threading
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .logging_utils import setup_logger
from .models import EnrichmentStats

logger = setup_logger(__name__)

PENDING = "pending"
PROCESSING = "processing"
COMPLETED = "completed"
FAILED = "failed"

TERMINAL_STATUSES = (COMPLETED, FAILED)

# Progress stays below 100 until the job is completed
MAX_RUNNING_PROGRESS = 99


class JobNotFoundError(KeyError):
    """Raised when a job id is not in the store."""

    def __init__(self, job_id: str):
        super().__init__(job_id)
        self.job_id = job_id

    def __str__(self) -> str:
        return f"Job not found: {self.job_id}"


class JobStateError(RuntimeError):
    """Raised on a transition the job lifecycle does not allow."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class BatchJob:
    id: str
    file_path: str
    output_path: str
    status: str = PENDING  # pending | processing | completed | failed
    progress: int = 0
    stats: Optional[EnrichmentStats] = None
    error: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobId": self.id,
            "status": self.status,
            "progress": self.progress,
            "enrichedPath": self.output_path if self.status == COMPLETED else None,
            "stats": self.stats.to_dict() if self.stats else None,
            "error": self.error,
            "startTime": _iso(self.start_time),
            "endTime": _iso(self.end_time),
        }


class _JobEntry:
    def __init__(self, job: BatchJob):
        self.job = job
        self.lock = threading.Lock()


class JobStore:
    """
    In-memory job registry

    The registry lock only guards inserting and looking up entries. Each job
    has its own lock for transitions and snapshots, so polling one job never
    waits on another.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, _JobEntry] = {}

    def _entry(self, job_id: str) -> _JobEntry:
        with self._lock:
            entry = self._entries.get(job_id)
        if entry is None:
            raise JobNotFoundError(job_id)
        return entry

    def create(self, file_path: str, output_path: str) -> BatchJob:
        job = BatchJob(id=uuid.uuid4().hex, file_path=file_path, output_path=output_path,
                       start_time=_now())
        with self._lock:
            self._entries[job.id] = _JobEntry(job)
        logger.info(f"Created job {job.id} for {file_path}")
        return self._snapshot(job)

    @staticmethod
    def _snapshot(job: BatchJob) -> BatchJob:
        return replace(job, stats=copy.deepcopy(job.stats))

    def get(self, job_id: str) -> BatchJob:
        """Snapshot of a job; later updates do not affect the returned copy."""
        entry = self._entry(job_id)
        with entry.lock:
            return self._snapshot(entry.job)

    def __contains__(self, job_id: str) -> bool:
        with self._lock:
            return job_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _transition(self, job_id: str, **changes: Any) -> BatchJob:
        entry = self._entry(job_id)
        with entry.lock:
            job = entry.job
            if job.is_terminal:
                raise JobStateError(f"Job {job_id} is already {job.status}")
            for key, value in changes.items():
                setattr(job, key, value)
            return self._snapshot(job)

    def mark_processing(self, job_id: str) -> BatchJob:
        return self._transition(job_id, status=PROCESSING)

    def update_progress(self, job_id: str, progress: int) -> BatchJob:
        """Raise progress (never lowers it, never reaches 100 before completion)."""
        entry = self._entry(job_id)
        with entry.lock:
            job = entry.job
            if job.is_terminal:
                return self._snapshot(job)
            value = max(0, min(MAX_RUNNING_PROGRESS, int(progress)))
            if value > job.progress:
                job.progress = value
            return self._snapshot(job)

    def mark_completed(self, job_id: str, stats: EnrichmentStats) -> BatchJob:
        return self._transition(job_id, status=COMPLETED, progress=100,
                                stats=copy.deepcopy(stats), end_time=_now())

    def mark_failed(self, job_id: str, error: str) -> BatchJob:
        return self._transition(job_id, status=FAILED, error=str(error)[:2000], end_time=_now())
