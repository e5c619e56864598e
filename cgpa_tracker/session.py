"""Per-browser-session ownership of the GradeStore."""

import streamlit as st

from cgpa_tracker.config import DATA_DIR, STORAGE_KEY
from cgpa_tracker.persistence import JsonFileSlot, open_store
from cgpa_tracker.store import GradeStore

SESSION_KEY = "grade_store"


class StoreNotInitializedError(RuntimeError):
    """The store was read before init_store() ran for this session."""


def init_store(session_state=None, slot=None, key: str = STORAGE_KEY) -> GradeStore:
    session_state = st.session_state if session_state is None else session_state
    if SESSION_KEY not in session_state:
        session_state[SESSION_KEY] = open_store(slot if slot is not None else JsonFileSlot(DATA_DIR), key)
    return session_state[SESSION_KEY]


def get_store(session_state=None) -> GradeStore:
    session_state = st.session_state if session_state is None else session_state
    if SESSION_KEY not in session_state:
        raise StoreNotInitializedError("get_store() must be called after init_store()")
    return session_state[SESSION_KEY]
