"""
I/O utilities for reading and writing listing CSV files
"""

import csv
import io
import os
from itertools import islice
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

import pandas as pd

from .logging_utils import setup_logger
from .models import ENRICHED_FIELDS, RawRecord

logger = setup_logger(__name__)

BadLineHandler = Callable[[List[str]], None]

# Undecodable bytes become U+FFFD instead of aborting the read
ENCODING_ERRORS = "replace"


def _open_text(filepath: str):
    return open(filepath, "r", encoding="utf-8-sig", errors=ENCODING_ERRORS, newline="")


def _clean_chunk(chunk: pd.DataFrame) -> List[RawRecord]:
    chunk = chunk.fillna("")
    records = chunk.to_dict(orient="records")
    return [{str(k).strip(): str(v).strip() for k, v in row.items()} for row in records]


def find_unterminated_row(filepath: str) -> Tuple[Optional[int], List[str]]:
    """
    Find a row whose opening quote is never closed

    Such a row swallows every line after it, and the pandas reader gives no
    per-row signal for it. A field that outgrows the csv field size limit is
    treated the same way.

    Returns:
        (physical line where the row starts, raw lines from there to EOF),
        or (None, []) when every quote is closed
    """
    consumed: List[str] = []
    state = {"eof": False, "replaced": 0}

    with _open_text(filepath) as f:
        def lines() -> Iterator[str]:
            for line in f:
                if "\ufffd" in line:
                    state["replaced"] += 1
                consumed.append(line)
                yield line
            state["eof"] = True

        source = lines()
        reader = csv.reader(source, strict=True)
        line_no = 1
        found: Optional[int] = None

        while found is None:
            del consumed[:]
            try:
                next(reader)
            except StopIteration:
                break
            except csv.Error:
                if state["eof"] or sum(len(line) for line in consumed) > csv.field_size_limit():
                    found = line_no
                    for _ in source:
                        pass
                    break
            line_no += len(consumed)

    if state["replaced"]:
        logger.warning(f"{filepath}: {state['replaced']} line(s) contain invalid UTF-8; bytes replaced")

    if found is None:
        return None, []

    logger.warning(f"{filepath}: unterminated quote starting at line {found}")
    return found, [line.rstrip("\r\n") for line in consumed if line.strip()]


def iter_records(filepath: str, chunk_size: int = 500,
                 on_bad_line: Optional[BadLineHandler] = None) -> Iterator[List[RawRecord]]:
    """
    Lazily read a listing CSV in chunks

    Every value is read as a string (ZIP codes keep their leading zeros) and
    trimmed; empty cells become "". Rows with more fields than the header
    are passed to ``on_bad_line`` and skipped. So is every non-blank line
    from an unterminated quote to the end of the file, after the rows before
    it have been yielded. Invalid UTF-8 bytes are replaced. An empty file or
    a header-only file yields nothing.

    Args:
        filepath: Path to input CSV
        chunk_size: Rows per chunk
        on_bad_line: Called with the raw fields of each malformed row

    Yields:
        Lists of raw records, in file order
    """
    def _bad_line(fields: List[str]) -> None:
        if on_bad_line is not None:
            on_bad_line(fields)
        return None

    logger.info(f"Reading input CSV from: {filepath} (chunk_size={chunk_size})")

    broken_at, swallowed = find_unterminated_row(filepath)
    source: Any = filepath
    if broken_at is not None:
        with _open_text(filepath) as f:
            source = io.StringIO("".join(islice(f, broken_at - 1)))

    try:
        reader = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
            encoding_errors=ENCODING_ERRORS,
            engine="python",
            on_bad_lines=_bad_line,
            chunksize=max(1, int(chunk_size)),
        )
    except pd.errors.EmptyDataError:
        logger.warning(f"Input CSV is empty: {filepath}")
    else:
        with reader:
            for chunk in reader:
                if chunk.empty:
                    continue
                yield _clean_chunk(chunk)

    for line in swallowed:
        _bad_line([line])


def count_data_rows(filepath: str) -> int:
    """Count CSV data rows (minus header, ignoring blank lines)"""
    with _open_text(filepath) as f:
        rows = sum(1 for row in csv.reader(f) if any(cell.strip() for cell in row))
    return max(0, rows - 1)


def _serialize(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return value


class EnrichedCsvWriter:
    """
    Streaming CSV writer for enriched rows

    The header is taken from the first row written. When that row is an
    unenriched fallback, the enriched columns are appended so later rows
    still keep their enrichment. Extra keys on later rows are ignored and
    missing ones are written as "".

    The output file is opened on the first write; closing a writer that
    never wrote leaves an empty file.
    """

    def __init__(self, output_path: str):
        self.output_path = output_path
        self.rows_written = 0
        self._file = None
        self._writer: Optional[csv.DictWriter] = None
        self._entered = False

    def __enter__(self) -> "EnrichedCsvWriter":
        self._entered = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _open(self) -> None:
        directory = os.path.dirname(self.output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._file = open(self.output_path, "w", encoding="utf-8", newline="")

    def close(self) -> None:
        if not self._entered:
            return
        if self._file is None:
            self._open()
        self._file.close()
        self._file = None
        self._entered = False

    def write(self, record: Mapping[str, Any]) -> None:
        if not self._entered:
            raise RuntimeError("EnrichedCsvWriter used outside of its context")

        if self._file is None:
            self._open()

        if self._writer is None:
            fieldnames = list(record.keys())
            fieldnames += [name for name in ENRICHED_FIELDS if name not in fieldnames]
            self._writer = csv.DictWriter(
                self._file, fieldnames=fieldnames, extrasaction="ignore", restval=""
            )
            self._writer.writeheader()

        row: Dict[str, Any] = {k: _serialize(v) for k, v in record.items()}
        self._writer.writerow(row)
        self.rows_written += 1


def read_output_csv(filepath: str) -> pd.DataFrame:
    """Load an enriched CSV back as strings (used for imports and checks)."""
    return pd.read_csv(filepath, dtype=str, keep_default_na=False)
