"""
Filter engine over the loaded teacher-performance records.

Every non-empty criterion is a clause; a record is kept only if it satisfies
all of them. The engine never raises and never reorders: the result is the
input sequence with non-matching records dropped.

Academic year accepts two sentinels, "3" and "5", meaning "any academic year
in the data starting within the last N calendar years".

Public API:
    apply_filters(records, criteria, current_year) → list[Record]
    last_n_years(records, n, current_year)         → set[str]
    parse_percentage(value)                        → float | None
"""

import math
import re
from collections.abc import Iterable, Sequence
from datetime import date

from etl.normalize import normalize_section
from search.records import FilterCriteria, Record

RECENT_YEAR_SENTINELS: dict[str, int] = {"3": 3, "5": 5}

_LEADING_NUMBER_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def parse_percentage(value: object) -> float | None:
    """Read the leading number of a pass percentage ("85.5", "85.5%", "80 percent", 85.5)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER_RE.match(str(value))
        if not match:
            return None
        number = float(match.group(0))
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _start_year(academic_year: str | None) -> int | None:
    """'2022-2023' → 2022; None for anything without a numeric start year."""
    if not academic_year or "-" not in academic_year:
        return None
    head = academic_year.split("-", 1)[0].strip()
    if not head.isdecimal():
        return None
    return int(head)


def _as_text(value: object) -> str:
    return "" if value is None else str(value)


def last_n_years(
    records: Iterable[Record],
    n: int,
    current_year: int | None = None,
) -> set[str]:
    """Academic years present in `records` whose start year is >= current_year - n."""
    if current_year is None:
        current_year = date.today().year
    cutoff = current_year - n

    recent: set[str] = set()
    for record in records:
        start = _start_year(record.academic_year)
        if start is not None and start >= cutoff:
            recent.add(record.academic_year)
    return recent


# ---------------------------------------------------------------------------
# Clauses
# ---------------------------------------------------------------------------

def _department_matches(wanted: str, section: str | None) -> bool:
    # Selecting a parent department ("ECE") also matches its sections ("ECE-1").
    record_section = normalize_section(section) or ""
    return record_section == wanted or record_section.startswith(wanted)


def _percentage_matches(record: Record, criteria: FilterCriteria, threshold: float | None) -> bool:
    value = parse_percentage(record.pass_percentage)
    if value is None or threshold is None:
        return False
    return criteria.pass_comparison.compare(value, threshold)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def apply_filters(
    records: Sequence[Record],
    criteria: FilterCriteria,
    current_year: int | None = None,
) -> list[Record]:
    """Return the records satisfying every non-empty criterion, in input order."""
    if criteria.is_empty():
        return list(records)

    year_window: set[str] | None = None
    if criteria.academic_year in RECENT_YEAR_SENTINELS:
        year_window = last_n_years(
            records, RECENT_YEAR_SENTINELS[criteria.academic_year], current_year
        )

    department = normalize_section(criteria.department) if criteria.department else ""
    threshold = parse_percentage(criteria.pass_percentage) if criteria.pass_percentage else None

    def keep(record: Record) -> bool:
        if year_window is not None:
            if record.academic_year not in year_window:
                return False
        elif criteria.academic_year and criteria.academic_year != record.academic_year:
            return False

        if criteria.btech_year and criteria.btech_year != _as_text(record.btech_year):
            return False
        if criteria.semester and criteria.semester != _as_text(record.semester):
            return False
        if department and not _department_matches(department, record.section):
            return False
        if criteria.pass_percentage and not _percentage_matches(record, criteria, threshold):
            return False
        return True

    return [record for record in records if keep(record)]
