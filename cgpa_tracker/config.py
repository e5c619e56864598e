"""
Configuration constants for the CGPA tracker.

Values that depend on the machine the app runs on (where the state file lives,
how chatty the logs are) can be overridden with environment variables.
"""

import logging
import os
from pathlib import Path

# ------------------------
# Storage
# ------------------------

STORAGE_KEY = "cgpaState"

DATA_DIR = Path(
    os.environ.get("CGPA_TRACKER_DATA_DIR", Path.home() / ".cgpa_tracker")
)

# ------------------------
# Modes and methods
# ------------------------

MODE_SUBJECTS = "subjects"
MODE_GPA = "gpa"
CALCULATION_MODES = (MODE_SUBJECTS, MODE_GPA)

METHOD_SIMPLE = "simple"
METHOD_WEIGHTED = "weighted"
GPA_CALCULATION_METHODS = (METHOD_SIMPLE, METHOD_WEIGHTED)

# ------------------------
# Input limits
# ------------------------

GPA_MIN = 0.0
GPA_MAX = 5.0
CREDIT_HOURS_MAX = 50
CREDIT_UNITS_MAX = 50

# ------------------------
# Page
# ------------------------

PAGE_TITLE = "CGPA Calculator | Course Grades & Semester GPAs"
PAGE_ICON = "🎓"
REPORT_FILENAME = "cgpa_report.csv"

# ------------------------
# Logging
# ------------------------

LOG_LEVEL = os.environ.get("CGPA_TRACKER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Set up root logging once for the app process."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
