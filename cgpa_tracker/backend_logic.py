from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import NamedTuple, Sequence

import numpy as np

from cgpa_tracker.config import METHOD_WEIGHTED, MODE_SUBJECTS
from cgpa_tracker.models import Course, Semester

# ------------------------
# Grade scale
# ------------------------

GRADE_POINTS = MappingProxyType({
    "A": 5,
    "B": 4,
    "C": 3,
    "D": 2,
    "F": 0,
})


class CourseSummary(NamedTuple):
    total_credits: int
    total_points: int
    cgpa: float


class SemesterSummary(NamedTuple):
    total_semesters: int
    total_credit_hours: int
    cgpa: float


EMPTY_SEMESTER_SUMMARY = SemesterSummary(0, 0, 0)


# ------------------------
# Core logic
# ------------------------
def round_2dp_half_up(x: float) -> float:
    return float(Decimal(str(x)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def grade_point(grade: str) -> int:
    return GRADE_POINTS[grade]


def calculate_cgpa(courses: Sequence[Course]) -> CourseSummary:
    """
    Credit-weighted average of grade points over all courses.

    returns: (total credit units, total grade points, cgpa)
    """
    credits = np.array([c.credit_units for c in courses], dtype=np.int64)
    points = np.array([grade_point(c.grade) for c in courses], dtype=np.int64)

    total_credits = int(credits.sum())
    total_points = int(np.dot(points, credits))
    if total_credits == 0:
        return CourseSummary(total_credits, total_points, 0)

    return CourseSummary(
        total_credits,
        total_points,
        round_2dp_half_up(float(total_points / total_credits)),
    )


def calculate_cgpa_by_gpa(semesters: Sequence[Semester], method: str) -> SemesterSummary:
    """
    Cumulative average of semester GPAs.

    Only semesters with a GPA take part. The weighted method also drops
    semesters without credit hours, and gives an empty result if none are left
    rather than falling back to the simple average.
    """
    valid = [s for s in semesters if s.has_gpa]
    if not valid:
        return EMPTY_SEMESTER_SUMMARY

    if method == METHOD_WEIGHTED:
        with_credits = [s for s in valid if s.credit_hours > 0]
        if not with_credits:
            return EMPTY_SEMESTER_SUMMARY

        gpas = np.array([s.gpa for s in with_credits], dtype=float)
        hours = np.array([s.credit_hours for s in with_credits], dtype=float)
        total_credit_hours = int(hours.sum())
        cgpa = float(np.dot(gpas, hours) / total_credit_hours)
        return SemesterSummary(len(valid), total_credit_hours, round_2dp_half_up(cgpa))

    # simple: every semester counts once, credit hours are informational
    gpas = np.array([s.gpa for s in valid], dtype=float)
    total_credit_hours = sum(s.credit_hours for s in valid)
    cgpa = float(gpas.sum() / len(valid))
    return SemesterSummary(len(valid), total_credit_hours, round_2dp_half_up(cgpa))


# ------------------------
# Classification
# ------------------------

def classify_cgpa(cgpa: float) -> str:
    if cgpa >= 4.5:
        return "First Class"
    elif cgpa >= 3.5:
        return "Second Class Upper"
    elif cgpa >= 2.5:
        return "Second Class Lower"
    elif cgpa >= 1.5:
        return "Third Class"
    elif cgpa > 0:
        return "Pass"
    return "N/A"


def method_description(mode: str, method: str) -> str:
    if mode == MODE_SUBJECTS:
        return "CGPA = Total Grade Points / Total Credit Units"
    if method == METHOD_WEIGHTED:
        return "CGPA = Weighted Average (by Credit Units)"
    return "CGPA = Simple Average of Semester GPAs"
