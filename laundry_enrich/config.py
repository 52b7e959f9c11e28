"""
Runtime configuration for the enrichment pipeline

Values come from the environment (optionally a .env file) and are read once.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from .logging_utils import setup_logger

logger = setup_logger(__name__)

DEFAULT_OUTPUT_DIR = os.path.join("data", "enriched")
DEFAULT_CHUNK_SIZE = 500
DEFAULT_MIN_DESCRIPTION_LENGTH = 50


@dataclass(frozen=True)
class Settings:
    output_dir: str = DEFAULT_OUTPUT_DIR
    chunk_size: int = DEFAULT_CHUNK_SIZE
    min_description_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH
    log_level: str = "INFO"


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer; using default {default}")
        return default
    return max(minimum, value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    output_dir = (os.getenv("ENRICHED_OUTPUT_DIR") or "").strip() or DEFAULT_OUTPUT_DIR
    chunk_size = _int_env("ENRICH_CHUNK_SIZE", DEFAULT_CHUNK_SIZE, minimum=1)
    min_description_length = _int_env("MIN_DESCRIPTION_LENGTH", DEFAULT_MIN_DESCRIPTION_LENGTH)
    log_level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()

    return Settings(
        output_dir=output_dir,
        chunk_size=chunk_size,
        min_description_length=min_description_length,
        log_level=log_level,
    )
