import pytest

from cgpa_tracker.models import Course, Semester, TrackerState
from cgpa_tracker.store import GradeStore


@pytest.fixture
def store():
    return GradeStore()


def _course(course_id, grade="A", credits=3):
    return Course(id=course_id, name=f"Course {course_id}", credit_units=credits, grade=grade)


def _semester(semester_id, gpa=None, hours=0):
    return Semester(id=semester_id, name=f"Semester {semester_id}", gpa=gpa, credit_hours=hours)


def test_default_state(store):
    assert store.state == TrackerState()
    assert store.state.courses == ()
    assert store.state.semesters == ()
    assert store.state.calculation_mode == "subjects"
    assert store.state.gpa_calculation_method == "simple"
    assert store.state.dark_mode is False


def test_add_update_remove_course(store):
    store.add_course(_course("1"))
    store.add_course(_course("2", grade="C"))
    assert [c.id for c in store.state.courses] == ["1", "2"]

    store.update_course(_course("2", grade="B", credits=4))
    assert store.state.courses[1] == _course("2", grade="B", credits=4)

    store.remove_course("1")
    assert [c.id for c in store.state.courses] == ["2"]


def test_update_unknown_course_is_noop(store):
    store.add_course(_course("1"))
    before = store.state.courses
    store.update_course(_course("missing", grade="F"))
    assert store.state.courses == before


def test_remove_unknown_ids_is_noop(store):
    store.add_course(_course("1"))
    store.add_semester(_semester("s1"))
    store.remove_course("missing")
    store.remove_semester("missing")
    assert len(store.state.courses) == 1
    assert len(store.state.semesters) == 1


def test_reset_all_clears_courses_only(store):
    store.add_course(_course("1"))
    store.add_semester(_semester("s1", gpa=4.0))
    store.reset_all()
    assert store.state.courses == ()
    assert len(store.state.semesters) == 1


def test_reset_semesters_clears_semesters_only(store):
    store.add_course(_course("1"))
    store.add_semester(_semester("s1", gpa=4.0))
    store.reset_semesters()
    assert store.state.semesters == ()
    assert len(store.state.courses) == 1


def test_update_semester_replaces_whole_record(store):
    store.add_semester(_semester("s1", gpa=3.0, hours=18))
    store.update_semester(_semester("s1", gpa=4.2))
    assert store.state.semesters == (_semester("s1", gpa=4.2, hours=0),)


def test_removing_last_semester_gives_empty_results(store):
    store.add_semester(_semester("s1", gpa=4.0, hours=15))
    store.remove_semester("s1")
    assert store.state.semesters == ()

    assert store.calculate_cgpa_by_gpa() == (0, 0, 0)
    store.set_gpa_calculation_method("weighted")
    assert store.calculate_cgpa_by_gpa() == (0, 0, 0)


def test_settings(store):
    store.set_calculation_mode("gpa")
    store.set_gpa_calculation_method("weighted")
    store.toggle_dark_mode()
    assert store.state.calculation_mode == "gpa"
    assert store.state.gpa_calculation_method == "weighted"
    assert store.state.dark_mode is True

    store.toggle_dark_mode()
    assert store.state.dark_mode is False


def test_unknown_mode_and_method_are_rejected(store):
    with pytest.raises(ValueError):
        store.set_calculation_mode("by-letters")
    with pytest.raises(ValueError):
        store.set_gpa_calculation_method("median")
    assert store.state == TrackerState()


def test_every_mutation_produces_new_snapshot(store):
    first = store.state
    store.add_course(_course("1"))
    second = store.state
    store.remove_course("missing")
    third = store.state

    assert first is not second
    assert second is not third
    assert first.courses == ()
    assert second == third


def test_listeners_see_each_snapshot(store):
    seen = []
    store.subscribe(seen.append)
    store.add_course(_course("1"))
    store.toggle_dark_mode()
    store.update_course(_course("missing"))

    assert len(seen) == 3
    assert seen[-1] is store.state
    assert seen[0].dark_mode is False
    assert seen[1].dark_mode is True


def test_aggregates_follow_current_state(store):
    store.add_course(_course("1", grade="A", credits=2))
    assert store.calculate_cgpa().cgpa == 5.0
    store.add_course(_course("2", grade="F", credits=2))
    assert store.calculate_cgpa().cgpa == 2.5

    store.add_semester(_semester("s1", gpa=5.0, hours=0))
    store.add_semester(_semester("s2", gpa=3.0, hours=30))
    assert store.calculate_cgpa_by_gpa().cgpa == 4.0
    store.set_gpa_calculation_method("weighted")
    assert store.calculate_cgpa_by_gpa().cgpa == 3.0
