"""
Handlers behind the buttons and fields of the app.

These wrap the store operations with the messages the user sees. notify is
any callable taking (title, description); the app passes one that shows a
toast, tests pass a list's append.
"""

import logging
import uuid
from dataclasses import replace
from typing import Callable, Optional, Sequence

from cgpa_tracker.config import METHOD_SIMPLE, METHOD_WEIGHTED, MODE_SUBJECTS
from cgpa_tracker.io_csv import course_report_tables, report_to_csv, semester_report_tables
from cgpa_tracker.inputs import parse_credit_hours_input, parse_gpa_input
from cgpa_tracker.models import Course, Semester
from cgpa_tracker.store import GradeStore

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]


def new_id() -> str:
    return uuid.uuid4().hex


def _blank_semester(number: int) -> Semester:
    return Semester(id=new_id(), name=f"Semester {number}")


# ------------------------
# Courses
# ------------------------

def add_course(store: GradeStore, name: str, credit_units: int, grade: str, notify: Notifier) -> Course:
    course = Course(id=new_id(), name=name.strip(), credit_units=credit_units, grade=grade)
    store.add_course(course)
    notify("Course Added", f"{course.name} has been added.")
    return course


def import_courses(store: GradeStore, courses: Sequence[Course], notify: Notifier) -> None:
    for course in courses:
        store.add_course(course)
    notify("Courses Imported", f"{len(courses)} course(s) added from the CSV file.")


def remove_course(store: GradeStore, course: Course, notify: Notifier) -> None:
    store.remove_course(course.id)
    notify("Course Removed", f"{course.name} has been removed.")


def reset_courses(store: GradeStore, notify: Notifier) -> None:
    if not store.state.courses:
        notify("Nothing to Reset", "There's no data to reset.")
        return
    store.reset_all()
    notify("All Courses Reset", "All course data has been cleared.")


# ------------------------
# Semesters
# ------------------------

def ensure_initial_semester(store: GradeStore) -> None:
    if not store.state.semesters:
        store.add_semester(_blank_semester(1))


def add_semester(store: GradeStore, notify: Notifier) -> Semester:
    number = len(store.state.semesters) + 1
    semester = _blank_semester(number)
    store.add_semester(semester)
    notify("Semester Added", f"Semester {number} has been added.")
    return semester


def remove_semester(store: GradeStore, semester: Semester, notify: Notifier) -> None:
    store.remove_semester(semester.id)
    notify("Semester Removed", f"{semester.name} has been removed.")


def reset_semesters(store: GradeStore, notify: Notifier) -> None:
    semesters = store.state.semesters
    if len(semesters) <= 1 and all(not s.has_gpa and not s.credit_hours for s in semesters):
        notify("Nothing to Reset", "There's no data to reset.")
        return
    store.reset_semesters()
    store.add_semester(_blank_semester(1))
    notify("All Semesters Reset", "All semester data has been cleared.")


def find_semester(store: GradeStore, semester_id: str) -> Optional[Semester]:
    for s in store.state.semesters:
        if s.id == semester_id:
            return s
    return None


def gpa_text(semester: Semester) -> str:
    return "" if semester.gpa is None else f"{semester.gpa:g}"


def credit_hours_text(semester: Semester) -> str:
    return str(semester.credit_hours) if semester.credit_hours else ""


def edit_semester_gpa(store: GradeStore, semester: Semester, text: str) -> Optional[Semester]:
    """Apply a GPA edit to the stored record and return the record as stored."""
    semester = find_semester(store, semester.id)
    if semester is None:
        return None
    gpa = parse_gpa_input(text, semester.gpa)
    if gpa != semester.gpa:
        semester = replace(semester, gpa=gpa)
        store.update_semester(semester)
    return semester


def edit_semester_credit_hours(store: GradeStore, semester: Semester, text: str) -> Optional[Semester]:
    semester = find_semester(store, semester.id)
    if semester is None:
        return None
    credit_hours = parse_credit_hours_input(text, semester.credit_hours)
    if credit_hours != semester.credit_hours:
        semester = replace(semester, credit_hours=credit_hours)
        store.update_semester(semester)
    return semester


# ------------------------
# Settings
# ------------------------

def set_weighted_method(store: GradeStore, weighted: bool, notify: Notifier) -> None:
    store.set_gpa_calculation_method(METHOD_WEIGHTED if weighted else METHOD_SIMPLE)
    notify(
        "Calculation Method Changed",
        "Using weighted average (considers credit units)"
        if weighted
        else "Using simple average (equal weight per semester)",
    )


def change_mode(store: GradeStore, mode: str) -> None:
    store.set_calculation_mode(mode)


def toggle_dark_mode(store: GradeStore) -> None:
    store.toggle_dark_mode()


# ------------------------
# Summary and export
# ------------------------

def current_cgpa(store: GradeStore) -> float:
    if store.state.calculation_mode == MODE_SUBJECTS:
        return store.calculate_cgpa().cgpa
    return store.calculate_cgpa_by_gpa().cgpa


def export_report(store: GradeStore, notify: Notifier) -> Optional[bytes]:
    """
    CSV report for the active mode, or None if there is nothing to report.
    """
    state = store.state
    if state.calculation_mode == MODE_SUBJECTS:
        if not state.courses:
            notify("No Data to Export", "Please add some courses before exporting.")
            return None
        table, totals = course_report_tables(state.courses, store.calculate_cgpa())
    else:
        if not any(s.has_gpa for s in state.semesters):
            notify("No Data to Export", "Please add some semester GPAs before exporting.")
            return None
        table, totals = semester_report_tables(
            state.semesters, store.calculate_cgpa_by_gpa(), state.gpa_calculation_method
        )

    data = report_to_csv(table, totals)
    logger.info("report exported mode=%s rows=%d", state.calculation_mode, len(table))
    notify("Report Generated", "Your CGPA report is ready to download.")
    return data
