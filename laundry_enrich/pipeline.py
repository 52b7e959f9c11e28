"""
Core enrichment pipeline - reusable function for CLI, API and batch jobs

Reads the input CSV lazily, drops duplicate listings, enriches the rest and
streams them to the output CSV in input order.
"""

import os
from typing import Any, Callable, Dict, List, Optional

from .config import get_settings
from .dedupe import Deduplicator
from .enricher import enrich_record
from .io_utils import EnrichedCsvWriter, iter_records
from .locks import output_locks
from .logging_utils import setup_logger
from .models import EnrichmentStats

logger = setup_logger(__name__)

ProgressCallback = Callable[[int], None]


class InputFileNotFoundError(FileNotFoundError):
    """Raised when the input CSV does not exist."""

    def __init__(self, path: str):
        super().__init__(f"File not found: {path}")
        self.path = path


class OutputOverwritesInputError(ValueError):
    """Raised when the output path points at the input file."""

    def __init__(self, path: str):
        super().__init__(f"Output path must differ from the input file: {path}")
        self.path = path


def default_output_path(input_path: str) -> str:
    """data/enriched/enriched_<input file name> (directory configurable)"""
    return os.path.join(get_settings().output_dir, f"enriched_{os.path.basename(input_path)}")


def check_paths(input_path: str, output_path: Optional[str] = None) -> str:
    """
    Validate a run's paths before anything is written

    Returns:
        The output path to use (default_output_path when none is given)

    Raises:
        InputFileNotFoundError: input_path does not exist
        OutputOverwritesInputError: output_path is the input file
    """
    if not os.path.isfile(input_path):
        raise InputFileNotFoundError(input_path)

    output_path = output_path or default_output_path(input_path)
    if os.path.exists(output_path) and os.path.samefile(input_path, output_path):
        raise OutputOverwritesInputError(output_path)
    return output_path


def run_pipeline(input_path: str,
                 output_path: Optional[str] = None,
                 *,
                 chunk_size: Optional[int] = None,
                 min_description_length: Optional[int] = None,
                 progress: Optional[ProgressCallback] = None) -> EnrichmentStats:
    """
    Run the enrichment pipeline over one CSV file

    Per-record enrichment failures are recorded in ``stats.errors`` and the
    original row is written unchanged; malformed CSV rows are recorded and
    skipped. Either way the run continues.

    Args:
        input_path: Path to input CSV
        output_path: Path to output CSV (default: default_output_path)
        chunk_size: Rows read per chunk
        min_description_length: Threshold for generating seoDescription
        progress: Called with the number of rows processed after each chunk

    Returns:
        EnrichmentStats for the run

    Raises:
        InputFileNotFoundError: input_path does not exist
        OutputOverwritesInputError: output_path is the input file
    """
    output_path = check_paths(input_path, output_path)

    settings = get_settings()
    chunk_size = chunk_size or settings.chunk_size
    if min_description_length is None:
        min_description_length = settings.min_description_length

    stats = EnrichmentStats()
    dedupe = Deduplicator()

    def on_bad_line(fields: List[str]) -> None:
        stats.total_records += 1
        preview = ",".join(fields)[:80]
        stats.errors.append(f"Malformed CSV row skipped: {preview}")
        logger.warning(f"Malformed CSV row skipped: {preview}")

    logger.info(f"Starting enrichment: {input_path} -> {output_path}")

    with EnrichedCsvWriter(output_path) as writer:
        for chunk in iter_records(input_path, chunk_size=chunk_size, on_bad_line=on_bad_line):
            for record in chunk:
                stats.total_records += 1

                if dedupe.is_duplicate(record):
                    stats.duplicates_removed += 1
                    continue

                try:
                    enriched = enrich_record(record, min_description_length=min_description_length)
                except Exception as e:
                    message = f"Error enriching record {record.get('name') or 'unknown'}: {e}"
                    stats.errors.append(message)
                    logger.warning(message)
                    writer.write(record)
                    continue

                writer.write(enriched)
                stats.enriched_records += 1

            logger.info(
                f"Progress: {stats.total_records} rows read, {stats.enriched_records} enriched, "
                f"{stats.duplicates_removed} duplicates"
            )
            if progress is not None:
                progress(stats.total_records)

    logger.info(
        f"Enrichment complete: total={stats.total_records} enriched={stats.enriched_records} "
        f"duplicates={stats.duplicates_removed} errors={len(stats.errors)} rows_written={writer.rows_written}"
    )
    return stats


def enrich_laundry_file(input_path: str, output_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Synchronous entry point: enrich a file and report the outcome

    Returns:
        {"success", "message", "enrichedPath"?, "stats"?}
    """
    output_path = output_path or default_output_path(input_path)

    try:
        with output_locks.hold(output_path):
            stats = run_pipeline(input_path, output_path)
    except (InputFileNotFoundError, OutputOverwritesInputError) as e:
        logger.error(str(e))
        return {"success": False, "message": str(e)}
    except Exception as e:
        logger.error(f"Error enriching data: {e}", exc_info=True)
        return {"success": False, "message": f"Error enriching data: {e}"}

    return {
        "success": True,
        "message": (
            f"Successfully enriched {stats.enriched_records} records, "
            f"removed {stats.duplicates_removed} duplicates."
        ),
        "enrichedPath": output_path,
        "stats": stats.to_dict(),
    }
