"""
Premium score: a 0-100 completeness / quality proxy for a listing

Base 50, then capped bonuses per signal. Same inputs always give the same
score, and raising any single signal never lowers it.
"""

import re
from typing import Any, Mapping

from .models import field_value, parse_float, parse_int

BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

WEBSITE_POINTS = 10
PHONE_POINTS = 5
MAX_DESCRIPTION_POINTS = 10
DESCRIPTION_CHARS_PER_POINT = 50
MAX_PHOTO_POINTS = 10
POINTS_PER_PHOTO = 2
MAX_RATING_POINTS = 10
MAX_REVIEW_POINTS = 10
REVIEWS_PER_POINT = 10
MAX_SERVICE_POINTS = 5

POTENTIAL_HIGH = 80
POTENTIAL_MEDIUM = 65

_LIST_SPLIT_RE = re.compile(r"[,;|\n]")
_SERVICE_SPLIT_RE = re.compile(r"[,;|/\n]")


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def count_photos(value: Any) -> int:
    """Photo count from either a number or a delimited list of URLs."""
    text = "" if value is None else str(value).strip()
    if not text:
        return 0
    if text.isdigit():
        return int(text)
    return len([part for part in _LIST_SPLIT_RE.split(text) if part.strip()])


def count_services(value: Any) -> int:
    text = "" if value is None else str(value)
    return len({part.strip().lower() for part in _SERVICE_SPLIT_RE.split(text) if part.strip()})


def rating_points(rating: Any) -> int:
    value = parse_float(rating)
    if value is None:
        return 0
    return int(round(_clamp(value, 0.0, 5.0) / 5.0 * MAX_RATING_POINTS))


def review_points(review_count: Any) -> int:
    value = parse_int(review_count)
    if value is None or value <= 0:
        return 0
    return min(MAX_REVIEW_POINTS, value // REVIEWS_PER_POINT)


def calculate_premium_score(record: Mapping[str, str]) -> int:
    """
    Calculate the premium score for a listing

    Args:
        record: Raw CSV row

    Returns:
        Integer score clamped to [0, 100]
    """
    score = BASE_SCORE

    if field_value(record, "website"):
        score += WEBSITE_POINTS

    if field_value(record, "phone"):
        score += PHONE_POINTS

    description = field_value(record, "description")
    score += min(MAX_DESCRIPTION_POINTS, len(description) // DESCRIPTION_CHARS_PER_POINT)

    score += min(MAX_PHOTO_POINTS, count_photos(field_value(record, "photos")) * POINTS_PER_PHOTO)
    score += rating_points(field_value(record, "rating"))
    score += review_points(field_value(record, "reviewCount"))
    score += min(MAX_SERVICE_POINTS, count_services(field_value(record, "services")))

    return int(_clamp(score, MIN_SCORE, MAX_SCORE))


def assess_premium_potential(score: int) -> str:
    """Bucket a premium score into High / Medium / Low."""
    if score >= POTENTIAL_HIGH:
        return "High"
    if score >= POTENTIAL_MEDIUM:
        return "Medium"
    return "Low"
