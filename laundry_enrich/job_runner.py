"""
Background batch enrichment

submit() validates the input, registers a pending job and returns at once;
the pipeline runs on a daemon thread that owns the job until it completes or
fails.
"""

import threading
import traceback
from typing import Any, Dict, Optional

from .config import Settings, get_settings
from .io_utils import count_data_rows
from .jobs import BatchJob, JobStore, MAX_RUNNING_PROGRESS
from .locks import OutputPathLocks, output_locks
from .logging_utils import setup_logger
from .pipeline import InputFileNotFoundError, OutputOverwritesInputError, check_paths, run_pipeline

logger = setup_logger(__name__)


class BatchController:
    def __init__(self, store: Optional[JobStore] = None,
                 settings: Optional[Settings] = None,
                 locks: Optional[OutputPathLocks] = None):
        self.store = store if store is not None else JobStore()
        self.settings = settings or get_settings()
        self.locks = locks if locks is not None else output_locks
        self._threads: Dict[str, threading.Thread] = {}
        self._threads_lock = threading.Lock()

    def submit(self, file_path: str, output_path: Optional[str] = None) -> str:
        """
        Start a batch enrichment job

        Args:
            file_path: Input CSV
            output_path: Output CSV (default: default_output_path)

        Returns:
            Job id

        Raises:
            InputFileNotFoundError: file_path does not exist (no job is created)
            OutputOverwritesInputError: output_path is the input file (no job is created)
        """
        output_path = check_paths(file_path, output_path)
        job = self.store.create(file_path, output_path)

        t = threading.Thread(target=self._run, args=(job.id,), name=f"enrich-{job.id[:8]}", daemon=True)
        with self._threads_lock:
            self._threads[job.id] = t
        t.start()

        logger.info(f"Batch job {job.id} started for {file_path} -> {output_path}")
        return job.id

    def submit_result(self, file_path: str, output_path: Optional[str] = None) -> Dict[str, Any]:
        """Submission payload: {"success", "message", "jobId"}"""
        try:
            job_id = self.submit(file_path, output_path)
        except (InputFileNotFoundError, OutputOverwritesInputError) as e:
            return {"success": False, "message": str(e), "jobId": None}
        return {"success": True, "message": "Batch enrichment started", "jobId": job_id}

    def get_status(self, job_id: str) -> BatchJob:
        """Current snapshot of a job. Raises JobNotFoundError for unknown ids."""
        return self.store.get(job_id)

    def wait(self, job_id: str, timeout: Optional[float] = None) -> BatchJob:
        """Block until the job's worker finishes (or timeout) and return its snapshot."""
        with self._threads_lock:
            t = self._threads.get(job_id)
        if t is not None:
            t.join(timeout)
        return self.store.get(job_id)

    def _run(self, job_id: str) -> None:
        job = self.store.get(job_id)
        try:
            self.store.mark_processing(job_id)

            total = count_data_rows(job.file_path)
            logger.info(f"Job {job_id}: processing {total} rows")

            def on_progress(processed: int) -> None:
                if total > 0:
                    pct = min(MAX_RUNNING_PROGRESS, processed * 100 // total)
                    self.store.update_progress(job_id, pct)

            with self.locks.hold(job.output_path):
                stats = run_pipeline(
                    job.file_path,
                    job.output_path,
                    chunk_size=self.settings.chunk_size,
                    min_description_length=self.settings.min_description_length,
                    progress=on_progress,
                )

            self.store.mark_completed(job_id, stats)
            logger.info(
                f"Job {job_id} completed: {stats.enriched_records} enriched, "
                f"{stats.duplicates_removed} duplicates, {len(stats.errors)} errors"
            )

        except Exception as e:
            logger.error(f"Job {job_id} failed: {e}\n{traceback.format_exc()}")
            self.store.mark_failed(job_id, str(e) or e.__class__.__name__)
        finally:
            with self._threads_lock:
                self._threads.pop(job_id, None)
