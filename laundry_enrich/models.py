"""
Shared record types and field helpers
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

RawRecord = Dict[str, str]

# Columns added by the record enricher, in output order
ENRICHED_FIELDS = [
    "slug",
    "seoTags",
    "seoSummary",
    "seoDescription",
    "premiumScore",
    "premiumPotential",
]

# Accepted spellings for columns that vary between exports
FIELD_ALIASES = {
    "zip": ("zip", "zip_code", "zipcode", "postal_code"),
    "website": ("website", "site"),
    "reviewCount": ("reviewCount", "review_count", "reviews"),
    "photos": ("photos", "photo"),
}

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _safe_str(value: Any) -> str:
    """Safely convert a cell value to a trimmed string."""
    if value is None:
        return ""
    if isinstance(value, float) and value != value:  # NaN
        return ""
    return str(value).strip()


def field_value(record: Mapping[str, Any], name: str) -> str:
    """Return the first non-empty value among a field's accepted spellings."""
    for key in FIELD_ALIASES.get(name, (name,)):
        value = _safe_str(record.get(key))
        if value:
            return value
    return ""


def parse_float(value: Any) -> Optional[float]:
    """Parse the first number out of a cell ("4.8", "4.8 stars"); None if absent."""
    match = _NUMBER_RE.search(_safe_str(value).replace(",", ""))
    if not match:
        return None
    try:
        return float(match.group(0))
    except ValueError:
        return None


def parse_int(value: Any) -> Optional[int]:
    number = parse_float(value)
    if number is None:
        return None
    return int(number)


@dataclass
class EnrichmentStats:
    """Aggregate counters for one enrichment run."""

    total_records: int = 0
    enriched_records: int = 0
    duplicates_removed: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRecords": self.total_records,
            "enrichedRecords": self.enriched_records,
            "duplicatesRemoved": self.duplicates_removed,
            "errors": list(self.errors),
        }
