import streamlit as st

from cgpa_tracker import actions
from cgpa_tracker.backend_logic import GRADE_POINTS, classify_cgpa, method_description
from cgpa_tracker.config import (
    CREDIT_UNITS_MAX,
    METHOD_WEIGHTED,
    MODE_GPA,
    MODE_SUBJECTS,
    PAGE_ICON,
    PAGE_TITLE,
    REPORT_FILENAME,
    configure_logging,
)
from cgpa_tracker.inputs import parse_credit_units_input
from cgpa_tracker.io_csv import parse_courses, read_csv_upload, validate_courses_csv
from cgpa_tracker.session import get_store, init_store

# ------------------------
# Streamlit UI
# ------------------------

configure_logging()

st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon=PAGE_ICON,
    layout="wide",
)

init_store()
store = get_store()


def notify(title: str, description: str) -> None:
    st.toast(f"**{title}**  \n{description}")


if store.state.dark_mode:
    st.markdown(
        """
        <style>
        .stApp, [data-testid="stHeader"] {
            background-color: #0f172a;
            color: #e2e8f0;
        }
        .stApp h1, .stApp h2, .stApp h3, .stApp p, .stApp label {
            color: #e2e8f0;
        }
        [data-testid="stMetricValue"] {
            color: #4ade80;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )

col1, col2 = st.columns([6, 1])
with col2:
    st.toggle(
        "Dark mode",
        value=store.state.dark_mode,
        key="dark_mode_toggle",
        on_change=actions.toggle_dark_mode,
        args=(store,),
    )

st.title("🎓 CGPA Calculator")
st.write(
    "Work out your cumulative grade point average on a 5-point scale, either from "
    "individual course grades or from the GPA of each semester. Your entries are "
    "saved automatically."
)

MODE_LABELS = {
    MODE_SUBJECTS: "By courses",
    MODE_GPA: "By semester GPA",
}


def _on_mode_change():
    actions.change_mode(store, st.session_state["mode_radio"])


st.radio(
    "Calculate from",
    list(MODE_LABELS.keys()),
    index=list(MODE_LABELS.keys()).index(store.state.calculation_mode),
    format_func=MODE_LABELS.get,
    horizontal=True,
    key="mode_radio",
    on_change=_on_mode_change,
)

# ------------------------
# Courses
# ------------------------

if store.state.calculation_mode == MODE_SUBJECTS:
    st.subheader("1. Enter your courses")

    with st.form("add_course_form", clear_on_submit=True):
        c_name, c_credits, c_grade = st.columns([3, 1, 1])
        with c_name:
            name = st.text_input("Course name", placeholder="e.g., MTH 101")
        with c_credits:
            credit_text = st.text_input("Credit units", value="3")
        with c_grade:
            grade = st.selectbox("Grade", list(GRADE_POINTS.keys()))
        submitted = st.form_submit_button("Add course", type="primary")

    if submitted:
        credit_units = parse_credit_units_input(credit_text, None) if credit_text.strip() else None
        if not name.strip():
            st.warning("Please enter a course name.")
        elif credit_units is None:
            st.warning(f"Please enter whole-number credit units between 0 and {CREDIT_UNITS_MAX}.")
        else:
            actions.add_course(store, name, credit_units, grade, notify)

    courses_csv = st.file_uploader(
        "Optionally upload courses CSV (Name, Credits, Grade)",
        type=["csv"],
        key="courses_csv",
    )
    if courses_csv is not None and st.button("Import courses"):
        try:
            imported = parse_courses(validate_courses_csv(read_csv_upload(courses_csv)))
        except ValueError as e:
            st.error(f"Courses CSV error: {e}")
        else:
            actions.import_courses(store, imported, notify)

    for course in store.state.courses:
        row_name, row_credits, row_grade, row_remove = st.columns([3, 1, 1, 1])
        row_name.write(course.name)
        row_credits.write(f"{course.credit_units} units")
        row_grade.write(f"Grade {course.grade} ({GRADE_POINTS[course.grade]} pts)")
        row_remove.button(
            "Remove",
            key=f"remove_course_{course.id}",
            on_click=actions.remove_course,
            args=(store, course, notify),
        )

    st.button("Reset all courses", on_click=actions.reset_courses, args=(store, notify))

# ------------------------
# Semesters
# ------------------------

else:
    actions.ensure_initial_semester(store)
    is_weighted = store.state.gpa_calculation_method == METHOD_WEIGHTED

    st.subheader("1. Enter your semester GPAs")
    st.caption(
        "Input your GPA and credit units for each semester"
        if is_weighted
        else "Input your GPA for each semester"
    )

    def _on_method_change():
        actions.set_weighted_method(store, st.session_state["weighted_toggle"], notify)

    st.toggle(
        "Weighted average",
        value=is_weighted,
        key="weighted_toggle",
        on_change=_on_method_change,
        help="CGPA considers credit units per semester" if is_weighted else "CGPA is simple average of all GPAs",
    )

    # rejected input is replaced by the stored value so the field and the CGPA agree
    def _on_gpa_change(semester, key):
        stored = actions.edit_semester_gpa(store, semester, st.session_state[key])
        if stored is not None:
            st.session_state[key] = actions.gpa_text(stored)

    def _on_credit_hours_change(semester, key):
        stored = actions.edit_semester_credit_hours(store, semester, st.session_state[key])
        if stored is not None:
            st.session_state[key] = actions.credit_hours_text(stored)

    semesters = store.state.semesters
    for semester in semesters:
        st.markdown(f"**{semester.name}**")
        cols = st.columns([2, 2, 1] if is_weighted else [4, 1])
        gpa_key = f"gpa_{semester.id}"
        if gpa_key not in st.session_state:
            st.session_state[gpa_key] = actions.gpa_text(semester)
        cols[0].text_input(
            "GPA (0 - 5.0)",
            placeholder="e.g., 4.25",
            key=gpa_key,
            on_change=_on_gpa_change,
            args=(semester, gpa_key),
        )
        if is_weighted:
            hours_key = f"credits_{semester.id}"
            if hours_key not in st.session_state:
                st.session_state[hours_key] = actions.credit_hours_text(semester)
            cols[1].text_input(
                "Total credit units",
                placeholder="e.g., 18",
                key=hours_key,
                on_change=_on_credit_hours_change,
                args=(semester, hours_key),
            )
        if len(semesters) > 1:
            cols[-1].button(
                "Remove",
                key=f"remove_semester_{semester.id}",
                on_click=actions.remove_semester,
                args=(store, semester, notify),
            )

    b1, b2 = st.columns(2)
    b1.button("Add semester", on_click=actions.add_semester, args=(store, notify))
    b2.button("Reset all semesters", on_click=actions.reset_semesters, args=(store, notify))

# ------------------------
# Summary
# ------------------------

st.markdown("---")
st.subheader("CGPA summary")
st.caption(method_description(store.state.calculation_mode, store.state.gpa_calculation_method))

cgpa = actions.current_cgpa(store)
m1, m2, m3 = st.columns(3)
if store.state.calculation_mode == MODE_SUBJECTS:
    course_summary = store.calculate_cgpa()
    m1.metric("Total credit units", course_summary.total_credits)
    m2.metric("Total grade points", course_summary.total_points)
else:
    semester_summary = store.calculate_cgpa_by_gpa()
    m1.metric("Semesters counted", semester_summary.total_semesters)
    m2.metric("Total credit units", semester_summary.total_credit_hours)
m3.metric("CGPA", f"{cgpa:.2f}", help=classify_cgpa(cgpa))
st.info(f"Class: **{classify_cgpa(cgpa)}**")

if st.button("Export report"):
    report = actions.export_report(store, notify)
    if report is not None:
        st.download_button(
            "Download CSV report",
            data=report,
            file_name=REPORT_FILENAME,
            mime="text/csv",
            type="primary",
        )


st.header("FAQ")

st.subheader("What data do you collect or store?")
st.write(
    "Your courses, semester GPAs and settings are saved to a single file on the "
    "machine running this app so they are still there next time. Nothing is sent "
    "to a database or shared with third parties."
)

st.subheader("What is the difference between simple and weighted semester averages?")
st.write(
    "A simple average counts every semester once, whatever its load. A weighted "
    "average weights each semester's GPA by its credit units; semesters without "
    "credit units are left out of it."
)

# To run:
# streamlit run app.py
