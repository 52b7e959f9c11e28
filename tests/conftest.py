import csv
import sys
from pathlib import Path

import pytest

# Ensure the project root is importable when running pytest from a checkout.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from laundry_enrich import config  # noqa: E402

HEADER = ["name", "address", "city", "state", "zip", "phone", "website", "hours",
          "rating", "reviewCount", "photos", "services", "description"]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("ENRICHED_OUTPUT_DIR", str(tmp_path / "enriched"))
    monkeypatch.delenv("ENRICH_CHUNK_SIZE", raising=False)
    monkeypatch.delenv("MIN_DESCRIPTION_LENGTH", raising=False)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


@pytest.fixture
def write_csv(tmp_path):
    def _write(rows, name="listings.csv", header=None):
        path = tmp_path / name
        fieldnames = header or HEADER
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, restval="")
            writer.writeheader()
            for row in rows:
                writer.writerow(row)
        return path

    return _write
