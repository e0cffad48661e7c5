"""
Record and query schemas.

Record mirrors one entry of teacherData.json. The source keys
("Name of the teacher", "% of Pass", ...) are fixed and accepted verbatim;
snake_case and camelCase names are accepted as well.

FilterCriteria is the immutable value built for each "apply filters" action.
"""

import operator
from collections.abc import Callable
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _aliases(source_key: str, camel: str) -> AliasChoices:
    return AliasChoices(source_key, camel)


class Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    teacher_name: str | None = Field(
        default=None, validation_alias=_aliases("Name of the teacher", "teacherName"))
    section: str | None = Field(
        default=None, validation_alias=_aliases("Section", "section"))
    subject_name: str | None = Field(
        default=None, validation_alias=_aliases("Name of the subject", "subjectName"))
    academic_year: str | None = Field(
        default=None, validation_alias=_aliases("Academic Year", "academicYear"))
    btech_year: int | str | None = Field(
        default=None, validation_alias=_aliases("B. Tech. Year", "btechYear"))
    semester: int | str | None = Field(
        default=None, validation_alias=_aliases("Sem", "semester"))
    pass_percentage: float | str | None = Field(
        default=None, validation_alias=_aliases("% of Pass", "passPercentage"))

    # Section label as it appeared in the source, before normalisation.
    raw_section: str | None = None

    @field_validator("teacher_name", "section", "subject_name", "academic_year", mode="before")
    @classmethod
    def _stringify(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("btech_year", "semester", mode="before")
    @classmethod
    def _keep_int_or_text(cls, value):
        # Compared as text; keep ints, stringify anything else.
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if value is None or isinstance(value, (int, str)):
            return value
        return str(value)

    @field_validator("pass_percentage", mode="before")
    @classmethod
    def _keep_number_or_text(cls, value):
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None or isinstance(value, (int, float, str)):
            return value
        return str(value)


class PassComparison(str, Enum):
    EQUAL         = "equal"
    GREATER       = "greater"
    GREATER_EQUAL = "greaterEqual"
    LESS          = "less"
    LESS_EQUAL    = "lessEqual"

    @classmethod
    def parse(cls, value: object) -> "PassComparison":
        """Map a raw selection to a comparison; anything unknown is EQUAL."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            return cls.EQUAL

    @property
    def compare(self) -> Callable[[float, float], bool]:
        return _COMPARATORS[self]


_COMPARATORS: dict[PassComparison, Callable[[float, float], bool]] = {
    PassComparison.EQUAL:         operator.eq,
    PassComparison.GREATER:       operator.gt,
    PassComparison.GREATER_EQUAL: operator.ge,
    PassComparison.LESS:          operator.lt,
    PassComparison.LESS_EQUAL:    operator.le,
}


class FilterCriteria(BaseModel):
    """One query's constraints. Empty string means "no constraint"."""

    model_config = ConfigDict(frozen=True)

    academic_year: str = ""
    btech_year: str = ""
    semester: str = ""
    department: str = ""
    pass_comparison: PassComparison = PassComparison.EQUAL
    pass_percentage: str = ""

    @field_validator("academic_year", "btech_year", "semester", "pass_percentage", mode="before")
    @classmethod
    def _blank_if_missing(cls, value):
        return "" if value is None else str(value)

    @field_validator("department", mode="before")
    @classmethod
    def _strip_department(cls, value):
        return "" if value is None else str(value).strip()

    @field_validator("pass_comparison", mode="before")
    @classmethod
    def _default_comparison(cls, value):
        return PassComparison.parse(value)

    @classmethod
    def from_form(
        cls,
        academic_year: str | None = "",
        btech_year: str | None = "",
        semester: str | None = "",
        department: str | None = "",
        pass_comparison: str | None = "equal",
        pass_percentage: str | None = "",
    ) -> "FilterCriteria":
        """Build criteria from the six raw strings captured by the UI."""
        return cls(
            academic_year=academic_year,
            btech_year=btech_year,
            semester=semester,
            department=department,
            pass_comparison=pass_comparison,
            pass_percentage=pass_percentage,
        )

    def is_empty(self) -> bool:
        return not (self.academic_year or self.btech_year or self.semester
                    or self.department or self.pass_percentage)
