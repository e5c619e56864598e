from dataclasses import dataclass
from typing import Optional, Tuple

from cgpa_tracker.config import METHOD_SIMPLE, MODE_SUBJECTS

GRADES = ("A", "B", "C", "D", "F")


@dataclass(frozen=True)
class Course:
    id: str
    name: str
    credit_units: int
    grade: str


@dataclass(frozen=True)
class Semester:
    """
    One semester's GPA entry.

    gpa is None while the user has not entered a value. An unset GPA is
    skipped by the averages; a GPA of 0.0 is not.
    """

    id: str
    name: str
    gpa: Optional[float] = None
    credit_hours: int = 0

    @property
    def has_gpa(self) -> bool:
        return self.gpa is not None


@dataclass(frozen=True)
class TrackerState:
    """Everything the user has entered, as one immutable snapshot."""

    courses: Tuple[Course, ...] = ()
    semesters: Tuple[Semester, ...] = ()
    calculation_mode: str = MODE_SUBJECTS
    gpa_calculation_method: str = METHOD_SIMPLE
    dark_mode: bool = False
