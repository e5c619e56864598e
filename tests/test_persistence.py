import json

import pytest

from cgpa_tracker.models import Course, Semester, TrackerState
from cgpa_tracker.persistence import (
    JsonFileSlot,
    MemorySlot,
    decode_state,
    encode_state,
    load_state,
    open_store,
    save_state,
)


class BrokenSlot:
    def read(self, key):
        raise OSError("disk unavailable")

    def write(self, key, text):
        raise OSError("disk full")


def _sample_state():
    return TrackerState(
        courses=(
            Course(id="c1", name="MTH 101", credit_units=3, grade="A"),
            Course(id="c2", name="PHY 101", credit_units=2, grade="F"),
        ),
        semesters=(
            Semester(id="s1", name="Semester 1", gpa=4.25, credit_hours=18),
            Semester(id="s2", name="Semester 2", gpa=None, credit_hours=0),
            Semester(id="s3", name="Semester 3", gpa=0.0, credit_hours=12),
        ),
        calculation_mode="gpa",
        gpa_calculation_method="weighted",
        dark_mode=True,
    )


def test_encode_uses_storage_layout():
    payload = encode_state(_sample_state())
    assert set(payload) == {"courses", "semesters", "calculationMode", "gpaCalculationMethod", "darkMode"}
    assert payload["courses"][0] == {"id": "c1", "name": "MTH 101", "creditUnits": 3, "grade": "A"}
    assert payload["semesters"][1] == {"id": "s2", "name": "Semester 2", "gpa": None, "creditHours": 0}
    assert payload["calculationMode"] == "gpa"


def test_round_trip_through_slot():
    slot = MemorySlot()
    state = _sample_state()
    save_state(slot, state)
    assert load_state(slot) == state


def test_round_trip_after_store_mutations():
    slot = MemorySlot()
    store = open_store(slot)
    store.add_course(Course(id="c1", name="ENG 101", credit_units=2, grade="B"))
    store.add_semester(Semester(id="s1", name="Semester 1"))
    store.update_semester(Semester(id="s1", name="Semester 1", gpa=3.75, credit_hours=15))
    store.set_calculation_mode("gpa")
    store.toggle_dark_mode()

    assert load_state(slot) == store.state


def test_every_mutation_is_written():
    slot = MemorySlot()
    store = open_store(slot)
    store.add_course(Course(id="c1", name="ENG 101", credit_units=2, grade="B"))
    assert json.loads(slot.read("cgpaState"))["courses"][0]["id"] == "c1"

    store.reset_all()
    assert json.loads(slot.read("cgpaState"))["courses"] == []


def test_missing_slot_gives_defaults():
    assert load_state(MemorySlot()) == TrackerState()


@pytest.mark.parametrize("text", ['{"courses": [', "not json", ""])
def test_malformed_payload_gives_defaults(text):
    slot = MemorySlot()
    slot.write("cgpaState", text)
    assert load_state(slot) == TrackerState()


@pytest.mark.parametrize("payload", [[], "text", 3, None])
def test_non_object_payload_gives_defaults(payload):
    assert decode_state(payload) == TrackerState()


def test_absent_fields_are_defaulted_one_by_one():
    state = decode_state({"darkMode": True, "courses": [{"id": "c1", "name": "X", "creditUnits": 1, "grade": "C"}]})
    assert state.dark_mode is True
    assert len(state.courses) == 1
    assert state.semesters == ()
    assert state.calculation_mode == "subjects"
    assert state.gpa_calculation_method == "simple"


def test_ill_typed_fields_are_defaulted():
    state = decode_state(
        {
            "courses": None,
            "semesters": {"id": "s1"},
            "calculationMode": "letters",
            "gpaCalculationMethod": 7,
            "darkMode": "yes",
        }
    )
    assert state == TrackerState()


def test_bad_records_are_dropped_or_defaulted():
    state = decode_state(
        {
            "courses": [
                {"id": "c1", "name": "Good", "creditUnits": 3, "grade": "B"},
                {"id": "c2", "name": "Unknown grade", "creditUnits": 3, "grade": "E"},
                {"name": "No id", "creditUnits": 3, "grade": "A"},
                {"id": "c3", "creditUnits": -2, "grade": "A"},
                "junk",
            ],
            "semesters": [
                {"id": "s1", "name": "Semester 1", "gpa": "", "creditHours": 18},
                {"id": "s2", "name": "Semester 2", "gpa": 7.5, "creditHours": True},
                {"id": "s3", "name": "Semester 3", "gpa": 4, "creditHours": 12.0},
            ],
        }
    )
    assert state.courses == (
        Course(id="c1", name="Good", credit_units=3, grade="B"),
        Course(id="c3", name="", credit_units=0, grade="A"),
    )
    assert state.semesters == (
        Semester(id="s1", name="Semester 1", gpa=None, credit_hours=18),
        Semester(id="s2", name="Semester 2", gpa=None, credit_hours=0),
        Semester(id="s3", name="Semester 3", gpa=4.0, credit_hours=12),
    )


def test_json_file_slot(tmp_path):
    slot = JsonFileSlot(tmp_path / "data")
    assert slot.read("cgpaState") is None

    state = _sample_state()
    save_state(slot, state)
    assert (tmp_path / "data" / "cgpaState.json").exists()
    assert load_state(JsonFileSlot(tmp_path / "data")) == state


def test_slot_errors_are_not_raised():
    slot = BrokenSlot()
    assert load_state(slot) == TrackerState()
    save_state(slot, _sample_state())

    store = open_store(slot)
    store.add_course(Course(id="c1", name="X", credit_units=1, grade="A"))
    assert len(store.state.courses) == 1


def test_truncated_utf8_file_gives_defaults(tmp_path):
    text = '{"courses": [{"id": "c1", "name": "É'
    data = text.encode("utf-8")[:-1]
    (tmp_path / "cgpaState.json").write_bytes(data)

    assert load_state(JsonFileSlot(tmp_path)) == TrackerState()


def test_deeply_nested_payload_gives_defaults():
    slot = MemorySlot()
    slot.write("cgpaState", "[" * 100000)
    assert load_state(slot) == TrackerState()
