"""
Dropdown choices derived from the loaded records.

Values keep the order in which they first appear in the data; empty values
are skipped.
"""

from collections.abc import Iterable

from pydantic import BaseModel

from search.records import Record


class FilterOptions(BaseModel):
    academic_years: list[str]
    btech_years: list[str]
    semesters: list[str]
    sections: list[str]


def _distinct(values: Iterable[object]) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            seen.setdefault(text, None)
    return list(seen)


def filter_options(records: Iterable[Record]) -> FilterOptions:
    records = list(records)
    return FilterOptions(
        academic_years=_distinct(r.academic_year for r in records),
        btech_years=_distinct(r.btech_year for r in records),
        semesters=_distinct(r.semester for r in records),
        sections=_distinct(r.section for r in records),
    )
