"""
Per-output-path locks

Two runs writing the same output CSV would interleave rows, so every run
holds the lock for its output path while it writes.
"""

import os
import threading
from contextlib import contextmanager
from typing import Dict, Iterator

from .logging_utils import setup_logger

logger = setup_logger(__name__)


class OutputPathLocks:
    """Registry of one threading.Lock per absolute output path."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    @staticmethod
    def _key(path: str) -> str:
        return os.path.normcase(os.path.abspath(path))

    def lock_for(self, path: str) -> threading.Lock:
        key = self._key(path)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, path: str) -> Iterator[None]:
        lock = self.lock_for(path)
        if lock.locked():
            logger.info(f"Waiting for another run writing {path}")
        with lock:
            yield


output_locks = OutputPathLocks()
