#!/usr/bin/env python3
"""
Laundromat Data Enrichment Tool
CLI Entry Point

Uses laundry_enrich.pipeline for the core enrichment logic, shared with the
API server.
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from laundry_enrich.logging_utils import set_package_level, setup_logger
from laundry_enrich.pipeline import default_output_path, run_pipeline

logger = setup_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Enrich a laundromat listings CSV with slugs, SEO tags, copy and premium scores'
    )
    parser.add_argument(
        'input_file',
        help='Path to input listings CSV file'
    )
    parser.add_argument(
        '-o', '--output',
        default=None,
        help='Path to output enriched CSV file (default: <ENRICHED_OUTPUT_DIR>/enriched_<input name>)'
    )
    parser.add_argument(
        '--chunk-size',
        type=int,
        default=None,
        help='Rows read per chunk (default: ENRICH_CHUNK_SIZE or 500)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    return parser


def main(argv=None) -> int:
    """Main CLI entry point"""
    load_dotenv()

    args = build_parser().parse_args(argv)

    if args.verbose:
        logger.setLevel(logging.DEBUG)
        set_package_level(logging.DEBUG)

    if not Path(args.input_file).exists():
        logger.error(f"Input file not found: {args.input_file}")
        return 1

    output = args.output or default_output_path(args.input_file)

    try:
        stats = run_pipeline(args.input_file, output, chunk_size=args.chunk_size)
    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        return 1

    logger.info(f"Wrote {output}")
    logger.info(
        f"Total: {stats.total_records} | Enriched: {stats.enriched_records} | "
        f"Duplicates removed: {stats.duplicates_removed} | Errors: {len(stats.errors)}"
    )
    for error in stats.errors[:20]:
        logger.warning(f"  {error}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
