"""
Template-based marketing copy for listings

Both generators are deterministic: the same record and tags always produce
the same text.
"""

from typing import List, Mapping, Optional, Sequence

from .hours import TAG_24_HOUR, TAG_OPEN_LATE
from .models import field_value, parse_float, parse_int
from .normalization import normalize_business_name
from .tags import TAG_COIN, TAG_DELIVERY, TAG_DROP_OFF, TAG_ECO, TAG_PICKUP, TAG_SELF_SERVICE

SUMMARY_MAX_LENGTH = 150
SUMMARY_CUT_LENGTH = 145
DESCRIPTION_MAX_LENGTH = 400
DESCRIPTION_CUT_LENGTH = 395
ELLIPSIS = "..."

GOOD_RATING = 4.0
GREAT_RATING = 4.5
MANY_REVIEWS = 20


def truncate(text: str, max_length: int, cut_length: int) -> str:
    """
    Cut text that exceeds ``max_length`` down to ``cut_length`` chars + "..."

    The cut is a plain character cut and may land mid-word.
    """
    if len(text) <= max_length:
        return text
    return text[:cut_length].rstrip() + ELLIPSIS


def _format_rating(rating: float) -> str:
    return f"{rating:g}"


def _join_words(items: Sequence[str]) -> str:
    if len(items) <= 1:
        return "".join(items)
    return f"{', '.join(items[:-1])} and {items[-1]}"


def generate_summary(record: Mapping[str, str], tags: Sequence[str]) -> str:
    """
    One-sentence summary for search results (at most 150 characters)

    Args:
        record: Raw CSV row
        tags: Tags from generate_seo_tags

    Returns:
        Summary text
    """
    if TAG_COIN in tags:
        summary = "Convenient coin-operated laundromat"
    elif TAG_DROP_OFF in tags:
        summary = "Professional laundry service with drop-off options"
    else:
        summary = "Local laundromat offering washing and drying services"

    rating = parse_float(field_value(record, "rating"))
    if rating is not None and rating >= GOOD_RATING:
        summary += f" with a {_format_rating(rating)}-star rating"

    has_pickup = TAG_PICKUP in tags
    has_delivery = TAG_DELIVERY in tags
    if has_pickup and has_delivery:
        summary += ". Pickup and delivery available"
    elif has_pickup:
        summary += ". Pickup service available"
    elif has_delivery:
        summary += ". Delivery service available"

    if TAG_24_HOUR in tags:
        summary += ". Open 24 Hours"
    elif TAG_OPEN_LATE in tags:
        summary += ". Open late for convenience"

    if TAG_ECO in tags:
        summary += ". Eco-friendly practices"

    summary += "."
    return truncate(summary, SUMMARY_MAX_LENGTH, SUMMARY_CUT_LENGTH)


def needs_description(record: Mapping[str, str], min_length: int) -> bool:
    """True when the listing has no description of at least ``min_length`` chars."""
    return len(field_value(record, "description")) < min_length


def _business_type(tags: Sequence[str]) -> str:
    if TAG_COIN in tags and TAG_SELF_SERVICE in tags:
        return "self-service coin laundromat"
    if TAG_COIN in tags:
        return "coin-operated laundromat"
    if TAG_DROP_OFF in tags:
        return "full-service laundry establishment"
    return "laundromat"


def _location_clause(record: Mapping[str, str]) -> Optional[str]:
    city = field_value(record, "city")
    if not city:
        return None
    state = field_value(record, "state")
    place = f"{city}, {state}" if state else city
    address = field_value(record, "address")
    if address:
        return f"located at {address} in {place}"
    return f"located in {place}"


def _services_sentence(tags: Sequence[str]) -> str:
    services: List[str] = []
    if TAG_DROP_OFF in tags:
        services.append("drop-off service")
    if TAG_PICKUP in tags:
        services.append("pickup service")
    if TAG_DELIVERY in tags:
        services.append("delivery options")

    if not services:
        return ("Machines handle loads of all sizes, from everyday laundry to "
                "bulky items like comforters and blankets.")
    if len(services) == 1:
        return f"They offer {services[0]} to save you time."
    return f"They offer {_join_words(services)} to make your laundry experience convenient."


def _hours_sentence(tags: Sequence[str]) -> Optional[str]:
    if TAG_24_HOUR in tags:
        return "Open 24 hours a day."
    if TAG_OPEN_LATE in tags:
        return "Extended hours to accommodate your busy schedule."
    return None


def _rating_sentence(record: Mapping[str, str]) -> Optional[str]:
    rating = parse_float(field_value(record, "rating"))
    reviews = parse_int(field_value(record, "reviewCount"))
    if rating is None or reviews is None or rating < GOOD_RATING:
        return None
    if rating >= GREAT_RATING and reviews > MANY_REVIEWS:
        return f"Highly rated with {_format_rating(rating)} stars from {reviews} satisfied customers."
    return f"Well-reviewed with a {_format_rating(rating)}-star rating from {reviews} reviews."


def generate_description(record: Mapping[str, str], tags: Sequence[str]) -> str:
    """
    Paragraph-length description for listings without one

    Sentences: business type and location, services, hours, rating, then a
    local call to action. Anything over 400 characters is cut to 395 + "...".

    Args:
        record: Raw CSV row
        tags: Tags from generate_seo_tags

    Returns:
        Description text
    """
    name = normalize_business_name(field_value(record, "name")) or "This laundromat"
    city = field_value(record, "city")

    opening = f"{name} is a {_business_type(tags)}"
    location = _location_clause(record)
    if location:
        opening += f" {location}"

    sentences = [opening + ".", _services_sentence(tags)]

    for sentence in (_hours_sentence(tags), _rating_sentence(record)):
        if sentence:
            sentences.append(sentence)

    if city:
        sentences.append(
            f"Looking for a laundromat near me in {city}? "
            f"Visit {name} for a clean, efficient laundry experience."
        )
    else:
        sentences.append(f"Visit {name} today for a clean, efficient laundry experience.")

    return truncate(" ".join(sentences), DESCRIPTION_MAX_LENGTH, DESCRIPTION_CUT_LENGTH)
