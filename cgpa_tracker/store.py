"""
The state store: the single owner of everything the user has entered.

Every mutation replaces the current TrackerState with a new snapshot and then
hands that snapshot to each subscribed listener. Nothing is recomputed here;
the CGPA helpers read the current snapshot when asked.
"""

import logging
from dataclasses import replace
from typing import Callable, List, Optional

from cgpa_tracker.backend_logic import (
    CourseSummary,
    SemesterSummary,
    calculate_cgpa,
    calculate_cgpa_by_gpa,
)
from cgpa_tracker.config import CALCULATION_MODES, GPA_CALCULATION_METHODS
from cgpa_tracker.models import Course, Semester, TrackerState

logger = logging.getLogger(__name__)

Listener = Callable[[TrackerState], None]


class GradeStore:
    def __init__(self, state: Optional[TrackerState] = None):
        self._state = state if state is not None else TrackerState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> TrackerState:
        return self._state

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _commit(self, action: str, state: TrackerState) -> None:
        self._state = state
        logger.debug("store action=%s courses=%d semesters=%d",
                     action, len(state.courses), len(state.semesters))
        for listener in self._listeners:
            listener(state)

    # ---- Courses ----

    def add_course(self, course: Course) -> None:
        self._commit("add_course", replace(self._state, courses=self._state.courses + (course,)))

    def remove_course(self, course_id: str) -> None:
        courses = tuple(c for c in self._state.courses if c.id != course_id)
        self._commit("remove_course", replace(self._state, courses=courses))

    def update_course(self, course: Course) -> None:
        courses = tuple(course if c.id == course.id else c for c in self._state.courses)
        self._commit("update_course", replace(self._state, courses=courses))

    def reset_all(self) -> None:
        """Clear the course list. Semesters are left alone."""
        self._commit("reset_all", replace(self._state, courses=()))

    # ---- Semesters ----

    def add_semester(self, semester: Semester) -> None:
        self._commit("add_semester", replace(self._state, semesters=self._state.semesters + (semester,)))

    def remove_semester(self, semester_id: str) -> None:
        semesters = tuple(s for s in self._state.semesters if s.id != semester_id)
        self._commit("remove_semester", replace(self._state, semesters=semesters))

    def update_semester(self, semester: Semester) -> None:
        semesters = tuple(semester if s.id == semester.id else s for s in self._state.semesters)
        self._commit("update_semester", replace(self._state, semesters=semesters))

    def reset_semesters(self) -> None:
        self._commit("reset_semesters", replace(self._state, semesters=()))

    # ---- Settings ----

    def set_calculation_mode(self, mode: str) -> None:
        if mode not in CALCULATION_MODES:
            raise ValueError(f"Unknown calculation mode {mode!r}. Expected one of {CALCULATION_MODES}.")
        self._commit("set_calculation_mode", replace(self._state, calculation_mode=mode))

    def set_gpa_calculation_method(self, method: str) -> None:
        if method not in GPA_CALCULATION_METHODS:
            raise ValueError(
                f"Unknown GPA calculation method {method!r}. Expected one of {GPA_CALCULATION_METHODS}."
            )
        self._commit("set_gpa_calculation_method", replace(self._state, gpa_calculation_method=method))

    def toggle_dark_mode(self) -> None:
        self._commit("toggle_dark_mode", replace(self._state, dark_mode=not self._state.dark_mode))

    # ---- Aggregates (computed on demand) ----

    def calculate_cgpa(self) -> CourseSummary:
        return calculate_cgpa(self._state.courses)

    def calculate_cgpa_by_gpa(self) -> SemesterSummary:
        return calculate_cgpa_by_gpa(self._state.semesters, self._state.gpa_calculation_method)
