"""
Address, slug and business name normalization
"""

import re
from typing import Any, Optional

from .logging_utils import setup_logger

logger = setup_logger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_TRAILING_STATE_RE = re.compile(r"\s+-\s+[A-Z]{2}$")


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def normalize_address(address: Optional[str], city: Optional[str],
                      state: Optional[str], zip_code: Optional[str]) -> str:
    """
    Build the comparison key used for deduplication

    Rules:
    - missing fields count as empty strings
    - lowercase
    - collapse whitespace runs, trim

    Args:
        address: Street address
        city: City name
        state: State name or code
        zip_code: ZIP / postal code

    Returns:
        Normalized key (never displayed or stored)
    """
    joined = " ".join(_clean(part) for part in (address, city, state, zip_code))
    return _WHITESPACE_RE.sub(" ", joined.lower()).strip()


def slugify(text: Optional[str]) -> str:
    """
    Slugify a string for URL use

    Args:
        text: Any text

    Returns:
        Lowercase a-z0-9 words joined by single hyphens
    """
    if not text:
        return ""
    slug = str(text).lower().replace("&", " and ")
    slug = re.sub(r"[^a-z0-9\s_-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def generate_slug(name: Optional[str], city: Optional[str], state: Optional[str]) -> str:
    """Slug for a listing: <name>-<city>-<state>, skipping empty parts."""
    parts = [slugify(part) for part in (name, city, state)]
    return "-".join(part for part in parts if part)


def normalize_business_name(name: Optional[str]) -> str:
    """
    Clean a business name for display

    - ALL-CAPS names are converted to title case
    - Trailing state markers ("Suds Laundry - TX") are removed
    - Whitespace is collapsed

    Args:
        name: Raw business name

    Returns:
        Cleaned name
    """
    if not name:
        return ""

    cleaned = _WHITESPACE_RE.sub(" ", str(name)).strip()
    cleaned = _TRAILING_STATE_RE.sub("", cleaned)

    if cleaned.isupper():
        cleaned = cleaned.title()

    return cleaned
