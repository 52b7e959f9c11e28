"""
Single-record enrichment: tags, slug, score and generated copy
"""

from typing import Any, Dict, Mapping, Optional

from .config import DEFAULT_MIN_DESCRIPTION_LENGTH
from .copywriting import generate_description, generate_summary, needs_description
from .models import field_value
from .normalization import generate_slug, normalize_business_name
from .scoring import assess_premium_potential, calculate_premium_score
from .tags import generate_seo_tags


def enrich_record(record: Mapping[str, str],
                  min_description_length: Optional[int] = None) -> Dict[str, Any]:
    """
    Enrich one laundromat listing

    The input is not modified; all original columns are carried over and the
    enriched columns are appended.

    Args:
        record: Raw CSV row
        min_description_length: Descriptions shorter than this get a
            generated seoDescription

    Returns:
        New dict with slug, seoTags, seoSummary, seoDescription,
        premiumScore and premiumPotential
    """
    if min_description_length is None:
        min_description_length = DEFAULT_MIN_DESCRIPTION_LENGTH

    enriched: Dict[str, Any] = dict(record)

    tags = generate_seo_tags(record)
    score = calculate_premium_score(record)

    enriched["slug"] = generate_slug(
        normalize_business_name(field_value(record, "name")),
        field_value(record, "city"),
        field_value(record, "state"),
    )
    enriched["seoTags"] = tags
    enriched["seoSummary"] = generate_summary(record, tags)
    enriched["seoDescription"] = (
        generate_description(record, tags)
        if needs_description(record, min_description_length)
        else ""
    )
    enriched["premiumScore"] = score
    enriched["premiumPotential"] = assess_premium_potential(score)

    return enriched
