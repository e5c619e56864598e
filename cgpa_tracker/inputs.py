"""
Parsing of the numeric text fields on the forms.

Each parser takes the raw text and the field's current value. Text that is
not a number, or is out of range, returns the current value unchanged so the
field simply keeps what it had.
"""

import math
from typing import Optional

from cgpa_tracker.config import CREDIT_HOURS_MAX, CREDIT_UNITS_MAX, GPA_MAX, GPA_MIN


def parse_gpa_input(text: str, current: Optional[float]) -> Optional[float]:
    text = text.strip()
    if text == "":
        return None
    try:
        value = float(text)
    except ValueError:
        return current
    if math.isnan(value) or not GPA_MIN <= value <= GPA_MAX:
        return current
    return value


def _parse_count(text: str, current: Optional[int], maximum: int) -> Optional[int]:
    text = text.strip()
    if text == "":
        return 0
    try:
        value = int(text)
    except ValueError:
        return current
    if not 0 <= value <= maximum:
        return current
    return value


def parse_credit_hours_input(text: str, current: Optional[int]) -> Optional[int]:
    return _parse_count(text, current, CREDIT_HOURS_MAX)


def parse_credit_units_input(text: str, current: Optional[int]) -> Optional[int]:
    return _parse_count(text, current, CREDIT_UNITS_MAX)
