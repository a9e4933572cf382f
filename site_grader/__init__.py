"""Heuristic quality grading for student HTML/CSS projects."""

__version__ = "0.3.0"
