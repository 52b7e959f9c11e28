"""
SEO tag classification

Keyword rules are checked in table order, so the tag sequence follows the
table and not the input text.
"""

from typing import List, Mapping, Tuple

from .hours import classify_hours
from .logging_utils import setup_logger
from .models import field_value

logger = setup_logger(__name__)

BASE_TAG = "laundromat"
NEAR_ME_TAG = "near me"

TAG_COIN = "coin operated"
TAG_SELF_SERVICE = "self-service"
TAG_DROP_OFF = "drop-off service"
TAG_PICKUP = "pickup service"
TAG_DELIVERY = "delivery service"
TAG_ECO = "eco-friendly"

TAG_RULES: Tuple[Tuple[str, str], ...] = (
    ("coin", TAG_COIN),
    ("self", TAG_SELF_SERVICE),
    ("24", "24-hour"),
    ("hour", "24-hour"),
    ("drop", TAG_DROP_OFF),
    ("pick", TAG_PICKUP),
    ("delivery", TAG_DELIVERY),
    ("fold", "wash and fold"),
    ("dry clean", "dry cleaning"),
    ("attendant", "attendant on duty"),
    ("wifi", "free wifi"),
    ("wi-fi", "free wifi"),
    ("card", "card payment"),
    ("large", "large capacity"),
    ("commercial", "commercial service"),
    ("eco", TAG_ECO),
    ("organic", TAG_ECO),
    ("green", TAG_ECO),
    ("stain", "stain removal"),
    ("repair", "repairs"),
    ("alteration", "alterations"),
    ("snack", "snack machines"),
    ("vending", "vending machines"),
    ("soap", "soap dispenser"),
    ("change", "change machine"),
    ("parking", "parking available"),
    ("new", "new machines"),
    ("clean", "clean facility"),
    ("air", "air-conditioned"),
)

# Columns scanned for keywords
TEXT_FIELDS = ("name", "description", "services", "features")


def _haystack(record: Mapping[str, str]) -> str:
    return " ".join(field_value(record, name) for name in TEXT_FIELDS).lower()


def _add(tags: List[str], tag: str) -> None:
    if tag and tag not in tags:
        tags.append(tag)


def generate_seo_tags(record: Mapping[str, str]) -> List[str]:
    """
    Generate SEO tags for a laundromat listing

    Order:
    1. "laundromat"
    2. keyword rule tags (table order)
    3. hours tags ("24-hour" / "open late")
    4. "near me" and city tags

    Args:
        record: Raw CSV row

    Returns:
        Ordered list of unique tags
    """
    tags = [BASE_TAG]

    text = _haystack(record)
    for keyword, tag in TAG_RULES:
        if keyword in text:
            _add(tags, tag)

    for tag in classify_hours(field_value(record, "hours")):
        _add(tags, tag)

    _add(tags, NEAR_ME_TAG)

    city = field_value(record, "city").lower()
    if city:
        _add(tags, f"{city} laundromat")
        _add(tags, f"laundromat in {city}")

    return tags
