import io
import uuid
from typing import List, Sequence, Tuple

import pandas as pd

from cgpa_tracker.backend_logic import (
    CourseSummary,
    SemesterSummary,
    classify_cgpa,
    grade_point,
)
from cgpa_tracker.config import CREDIT_UNITS_MAX, METHOD_WEIGHTED
from cgpa_tracker.models import GRADES, Course, Semester

# ------------------------
# CSV import (courses)
# ------------------------

def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    # allow "course" / "credit" / "credit units" as aliases
    aliases = {"course": "name", "credit": "credits", "credit units": "credits"}
    for alias, column in aliases.items():
        if alias in df.columns and column not in df.columns:
            df = df.rename(columns={alias: column})
    return df


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    df = pd.read_csv(uploaded_file)
    return _normalise_cols(df)


def validate_courses_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {"name", "credits", "grade"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected: Name, Credits, Grade.")
    out = df[["name", "credits", "grade"]].copy()
    out = out.rename(columns={"name": "Name", "credits": "Credits", "grade": "Grade"})
    return out


def parse_courses(df: pd.DataFrame) -> List[Course]:
    rows = []
    for _, row in df.iterrows():
        name = row.get("Name")
        credit = row.get("Credits")
        grade = row.get("Grade")
        if pd.isna(name) or pd.isna(credit) or pd.isna(grade):
            continue
        grade = str(grade).strip().upper()
        if grade not in GRADES:
            continue
        try:
            credit = float(credit)
        except (TypeError, ValueError):
            continue
        if not 0 <= credit <= CREDIT_UNITS_MAX or not credit.is_integer():
            continue
        rows.append(Course(id=uuid.uuid4().hex, name=str(name).strip(), credit_units=int(credit), grade=grade))
    return rows


# ------------------------
# Report export
# ------------------------

def course_report_tables(courses: Sequence[Course], summary: CourseSummary) -> Tuple[pd.DataFrame, pd.DataFrame]:
    table = pd.DataFrame(
        [
            {
                "Course": c.name,
                "Credit Units": c.credit_units,
                "Grade": c.grade,
                "Grade Point": grade_point(c.grade),
                "Quality Points": grade_point(c.grade) * c.credit_units,
            }
            for c in courses
        ],
        columns=["Course", "Credit Units", "Grade", "Grade Point", "Quality Points"],
    )
    totals = pd.DataFrame(
        [
            {"Metric": "Total Credit Units", "Value": summary.total_credits},
            {"Metric": "Total Grade Points", "Value": summary.total_points},
            {"Metric": "CGPA", "Value": f"{summary.cgpa:.2f}"},
            {"Metric": "Class", "Value": classify_cgpa(summary.cgpa)},
        ]
    )
    return table, totals


def semester_report_tables(
    semesters: Sequence[Semester],
    summary: SemesterSummary,
    method: str,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Only semesters with a GPA are listed. Credit units are listed for the
    weighted method only, since the simple average does not use them.
    """
    weighted = method == METHOD_WEIGHTED
    columns = ["Semester", "GPA", "Credit Units"] if weighted else ["Semester", "GPA"]
    rows = []
    for s in semesters:
        if not s.has_gpa:
            continue
        row = {"Semester": s.name, "GPA": f"{s.gpa:.2f}"}
        if weighted:
            row["Credit Units"] = s.credit_hours
        rows.append(row)
    table = pd.DataFrame(rows, columns=columns)

    totals = [{"Metric": "Semesters", "Value": summary.total_semesters}]
    if weighted:
        totals.append({"Metric": "Total Credit Units", "Value": summary.total_credit_hours})
    totals.append({"Metric": "CGPA", "Value": f"{summary.cgpa:.2f}"})
    totals.append({"Metric": "Class", "Value": classify_cgpa(summary.cgpa)})
    return table, pd.DataFrame(totals)


def report_to_csv(table: pd.DataFrame, totals: pd.DataFrame) -> bytes:
    buf = io.StringIO()
    table.to_csv(buf, index=False)
    buf.write("\n")
    totals.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")
