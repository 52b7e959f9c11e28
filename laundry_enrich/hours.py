"""
Free-text opening hours heuristics

Hours arrive in whatever shape the export produced ("Mon-Fri: 7am-10pm;
Sat: 8 AM – 9 PM", "Open 24 hours", "24/7"). Everything here is best effort:
segments that do not parse are skipped, nothing raises.
"""

import re
from typing import List, Optional

TAG_24_HOUR = "24-hour"
TAG_OPEN_LATE = "open late"

OPEN_LATE_HOUR = 21  # 9 PM

_ALWAYS_OPEN_MARKERS = ("24 hours", "24/7", "open 24", "24hr", "24 hr")

_TIME_RE = re.compile(r"(\d{1,2})(?::(\d{2}))?\s*(am|pm)\b", re.IGNORECASE)
_SEGMENT_SPLIT_RE = re.compile(r"[;,\n|]")
_RANGE_SPLIT_RE = re.compile(r"\s*[-–—]\s*|\s+to\s+", re.IGNORECASE)


def parse_closing_hour(text: Optional[str]) -> Optional[int]:
    """
    Extract a closing hour from a time fragment

    Uses the last "H(:MM) am|pm" in the text. PM adds 12 unless the hour is
    already 12 or more.

    Args:
        text: Fragment such as "10 PM" or "9:30pm"

    Returns:
        Hour on a 24-hour clock, or None when nothing parses
    """
    if not text:
        return None

    matches = _TIME_RE.findall(text)
    if not matches:
        return None

    hour_raw, _minutes, meridiem = matches[-1]
    hour = int(hour_raw)
    if meridiem.lower() == "pm" and hour < 12:
        hour += 12
    return hour


def is_open_24_hours(text: Optional[str]) -> bool:
    lowered = (text or "").lower()
    return any(marker in lowered for marker in _ALWAYS_OPEN_MARKERS)


def is_open_late(text: Optional[str], threshold: int = OPEN_LATE_HOUR) -> bool:
    """True if any day segment closes at or after ``threshold`` o'clock."""
    if not text:
        return False

    for segment in _SEGMENT_SPLIT_RE.split(text):
        pieces = _RANGE_SPLIT_RE.split(segment.strip())
        closing = parse_closing_hour(pieces[-1]) if pieces else None
        if closing is None:
            continue
        if closing >= threshold:
            return True

    return False


def classify_hours(text: Optional[str]) -> List[str]:
    """Hours tags for a listing: 24-hour wins over open late."""
    if is_open_24_hours(text):
        return [TAG_24_HOUR]
    if is_open_late(text):
        return [TAG_OPEN_LATE]
    return []
