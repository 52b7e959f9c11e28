"""
Listing deduplication by normalized address

Single forward pass over a run: the first record with a given key is kept,
every later record with the same key is a duplicate.
"""

from typing import Mapping, Set

from .logging_utils import setup_logger
from .models import field_value
from .normalization import normalize_address

logger = setup_logger(__name__)


class Deduplicator:
    """Tracks the address keys already seen in the current run."""

    def __init__(self):
        self._seen: Set[str] = set()

    @staticmethod
    def key_for(record: Mapping[str, str]) -> str:
        return normalize_address(
            field_value(record, "address"),
            field_value(record, "city"),
            field_value(record, "state"),
            field_value(record, "zip"),
        )

    def is_duplicate(self, record: Mapping[str, str]) -> bool:
        """
        Check a record against the keys seen so far

        Registers the key when it is new, so the first occurrence in input
        order always wins.

        Args:
            record: Raw CSV row

        Returns:
            True if an earlier record had the same key
        """
        key = self.key_for(record)
        if key in self._seen:
            logger.debug(f"Duplicate listing skipped: {record.get('name', '')!r} ({key})")
            return True
        self._seen.add(key)
        return False

    @property
    def seen_count(self) -> int:
        return len(self._seen)
