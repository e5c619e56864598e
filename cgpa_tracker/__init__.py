"""CGPA tracker: course and semester based cumulative grade point averages."""
