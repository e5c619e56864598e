"""
Saving and restoring the tracker state.

The whole TrackerState is stored as one JSON document under a fixed key. On
load, every field is decoded on its own and replaced by its default when it is
missing or has the wrong type, so an old or hand-edited file still gives a
complete state. A document that is not JSON at all gives the default state.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Optional

from cgpa_tracker.config import (
    CALCULATION_MODES,
    GPA_CALCULATION_METHODS,
    GPA_MAX,
    GPA_MIN,
    STORAGE_KEY,
)
from cgpa_tracker.models import GRADES, Course, Semester, TrackerState
from cgpa_tracker.store import GradeStore

logger = logging.getLogger(__name__)

DEFAULT_STATE = TrackerState()


# ------------------------
# Key-value slots
# ------------------------

class MemorySlot:
    """Slot kept in a dict. Survives reruns, not restarts."""

    def __init__(self):
        self.values: Dict[str, str] = {}

    def read(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def write(self, key: str, text: str) -> None:
        self.values[key] = text


class JsonFileSlot:
    """Slot backed by one <key>.json file per key inside a directory."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, text: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path_for(key).write_text(text, encoding="utf-8")


# ------------------------
# Encoding
# ------------------------

def encode_state(state: TrackerState) -> Dict[str, Any]:
    return {
        "courses": [
            {
                "id": c.id,
                "name": c.name,
                "creditUnits": c.credit_units,
                "grade": c.grade,
            }
            for c in state.courses
        ],
        "semesters": [
            {
                "id": s.id,
                "name": s.name,
                "gpa": s.gpa,
                "creditHours": s.credit_hours,
            }
            for s in state.semesters
        ],
        "calculationMode": state.calculation_mode,
        "gpaCalculationMethod": state.gpa_calculation_method,
        "darkMode": state.dark_mode,
    }


def _as_count(value) -> Optional[int]:
    # bool is an int subclass; true/false are not credit counts
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return int(value)
    return None


def _as_gpa(value) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value) or not GPA_MIN <= value <= GPA_MAX:
        return None
    return float(value)


def _decode_course(raw) -> Optional[Course]:
    if not isinstance(raw, dict):
        return None
    course_id = raw.get("id")
    grade = raw.get("grade")
    if not isinstance(course_id, str) or grade not in GRADES:
        return None
    name = raw.get("name")
    credit_units = _as_count(raw.get("creditUnits"))
    return Course(
        id=course_id,
        name=name if isinstance(name, str) else "",
        credit_units=credit_units if credit_units is not None else 0,
        grade=grade,
    )


def _decode_semester(raw) -> Optional[Semester]:
    if not isinstance(raw, dict):
        return None
    semester_id = raw.get("id")
    if not isinstance(semester_id, str):
        return None
    name = raw.get("name")
    credit_hours = _as_count(raw.get("creditHours"))
    return Semester(
        id=semester_id,
        name=name if isinstance(name, str) else "",
        gpa=_as_gpa(raw.get("gpa")),
        credit_hours=credit_hours if credit_hours is not None else 0,
    )


def _decode_records(raw, decode_one) -> tuple:
    if not isinstance(raw, list):
        return ()
    records = []
    for item in raw:
        record = decode_one(item)
        if record is None:
            logger.debug("dropping undecodable record %r", item)
            continue
        records.append(record)
    return tuple(records)


def decode_state(payload) -> TrackerState:
    """
    Build a full TrackerState from a decoded JSON document.

    Never raises. Anything that is not usable is replaced by its default.
    """
    if not isinstance(payload, dict):
        return DEFAULT_STATE

    mode = payload.get("calculationMode")
    method = payload.get("gpaCalculationMethod")
    dark_mode = payload.get("darkMode")

    return TrackerState(
        courses=_decode_records(payload.get("courses"), _decode_course),
        semesters=_decode_records(payload.get("semesters"), _decode_semester),
        calculation_mode=mode if mode in CALCULATION_MODES else DEFAULT_STATE.calculation_mode,
        gpa_calculation_method=(
            method if method in GPA_CALCULATION_METHODS else DEFAULT_STATE.gpa_calculation_method
        ),
        dark_mode=dark_mode if isinstance(dark_mode, bool) else DEFAULT_STATE.dark_mode,
    )


# ------------------------
# Load / save
# ------------------------

def load_state(slot, key: str = STORAGE_KEY) -> TrackerState:
    try:
        text = slot.read(key)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("could not read saved state key=%s err=%s", key, e)
        return DEFAULT_STATE

    if text is None:
        return DEFAULT_STATE

    try:
        payload = json.loads(text)
    except (ValueError, RecursionError) as e:
        logger.warning("saved state is not valid JSON, using defaults key=%s err=%s", key, e)
        return DEFAULT_STATE

    return decode_state(payload)


def save_state(slot, state: TrackerState, key: str = STORAGE_KEY) -> None:
    text = json.dumps(encode_state(state))
    try:
        slot.write(key, text)
    except OSError as e:
        logger.warning("could not save state key=%s err=%s", key, e)


def open_store(slot, key: str = STORAGE_KEY) -> GradeStore:
    """Restore the saved state and save it again after every change."""
    store = GradeStore(load_state(slot, key))
    store.subscribe(lambda state: save_state(slot, state, key))
    logger.info(
        "opened store key=%s courses=%d semesters=%d",
        key, len(store.state.courses), len(store.state.semesters),
    )
    return store
