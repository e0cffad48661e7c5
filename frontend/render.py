"""
Tabular projection of filtered records.

One row per record with a 1-based "Sl. No". Missing values display as "N/A";
the pass percentage is shown with two decimals and a trailing "%". An empty
result produces a single message instead of an empty table.
"""

from collections.abc import Sequence

from pydantic import BaseModel, Field

from search.filters import parse_percentage
from search.records import Record

NO_RESULTS = "No results found."
MISSING    = "N/A"

COLUMNS = (
    "Sl. No",
    "Name of the Teacher",
    "Department",
    "Name of the subject",
    "Academic Year",
    "B. Tech. Year",
    "Sem",
    "% of Pass",
)


class ResultView(BaseModel):
    rows: list[dict[str, int | str]] = Field(default_factory=list)
    message: str | None = None

    @property
    def empty(self) -> bool:
        return not self.rows


def _display(value: object) -> str:
    if value is None:
        return MISSING
    text = str(value)
    return text if text.strip() else MISSING


def format_percentage(value: object) -> str:
    number = parse_percentage(value)
    if number is None:
        return MISSING
    return f"{number:.2f}%"


def _row(index: int, record: Record) -> dict[str, int | str]:
    return {
        "Sl. No":              index,
        "Name of the Teacher": _display(record.teacher_name),
        "Department":          _display(record.section),
        "Name of the subject": _display(record.subject_name),
        "Academic Year":       _display(record.academic_year),
        "B. Tech. Year":       _display(record.btech_year),
        "Sem":                 _display(record.semester),
        "% of Pass":           format_percentage(record.pass_percentage),
    }


def render_results(records: Sequence[Record]) -> ResultView:
    if not records:
        return ResultView(message=NO_RESULTS)
    return ResultView(rows=[_row(i, r) for i, r in enumerate(records, start=1)])
