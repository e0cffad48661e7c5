"""
Load pipeline: reads teacherData.json (local file or URL), validates each
entry into a Record and canonicalises its section label.

Failure handling:
  - an entry that is not an object, or fails validation, is skipped (logged)
  - a failed fetch / unreadable payload leaves the collection empty (logged);
    run() never raises
"""

import json
import logging
from pathlib import Path
from typing import Any

import requests
from pydantic import ValidationError

from etl.normalize import normalize_section
from search.records import Record

log = logging.getLogger(__name__)

FETCH_TIMEOUT = 30


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch(source: str | Path) -> Any:
    """Return the decoded JSON payload from a path or an http(s) URL."""
    source = str(source)
    if _is_url(source):
        resp = requests.get(source, timeout=FETCH_TIMEOUT)
        resp.raise_for_status()
        return resp.json()
    return json.loads(Path(source).read_text(encoding="utf-8"))


def canonicalise(record: Record) -> Record:
    """Copy of `record` with a normalised section; the original label is kept in raw_section."""
    return record.model_copy(
        update={"section": normalize_section(record.section), "raw_section": record.section}
    )


def parse_records(payload: Any) -> list[Record]:
    if not isinstance(payload, list):
        raise ValueError(f"expected a JSON array of records, got {type(payload).__name__}")

    records: list[Record] = []
    for i, entry in enumerate(payload):
        if not isinstance(entry, dict):
            log.warning("Skipping entry %d: not an object", i)
            continue
        try:
            record = Record.model_validate(entry)
        except ValidationError as exc:
            log.warning("Skipping entry %d: %s", i, exc.errors()[0].get("msg", exc))
            continue
        records.append(canonicalise(record))
    return records


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def load_records(source: str | Path) -> list[Record]:
    """Fetch and parse; raises on fetch or payload errors."""
    return parse_records(fetch(source))


def run(source: str | Path | None = None) -> list[Record]:
    """Load the configured data source. Returns [] (and logs) on any failure."""
    if source is None:
        from app.settings import data_source
        source = data_source()

    try:
        records = load_records(source)
    except (OSError, ValueError, requests.RequestException):
        log.exception("Error fetching teacher data from %s", source)
        return []

    log.info("Data loaded: %d records from %s", len(records), source)
    return records
