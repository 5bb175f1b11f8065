"""Timetable CSP - weekly academic timetable generator.

This module assigns a catalogue of theory lectures, lab blocks and
tutorials to a five-day grid of hourly slots, rooms and faculty members.
Generation uses backtracking search with a feasibility cache and
randomized restarts; every produced timetable satisfies the hard
constraints (no double booking, no lunch-slot sessions, consecutive
two-hour blocks, at most one lab per batch per day).

Example usage:
    from timetable_csp import TimetableCSP

    engine = TimetableCSP(num_rooms=7, num_faculty=5, seed=1)
    if engine.generate_timetable_with_restarts(max_attempts=5):
        report = engine.get_report()
        print(report.faculty_load)

    # Export to JSON
    from timetable_csp.exporters import JSONExporter
    JSONExporter().export(report, "timetable.json")
"""

from .config import CourseCatalogLoader, load_courses
from .exceptions import (
    ConfigurationError,
    CourseFileError,
    InvariantViolationError,
    ScheduleNotGeneratedError,
    TimetableError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .models import (
    DEFAULT_COURSES,
    Assignment,
    CourseRequirement,
    Requirement,
    ScheduleReport,
    SearchStatus,
    Session,
    SessionKind,
    TimeSlot,
)
from .scheduler import TimetableCSP
from .service import handle_timetable_request

__version__ = "0.1.0"

__all__ = [
    # Engine
    "TimetableCSP",
    "handle_timetable_request",
    # Models
    "CourseRequirement",
    "DEFAULT_COURSES",
    "Requirement",
    "TimeSlot",
    "Session",
    "SessionKind",
    "Assignment",
    "ScheduleReport",
    "SearchStatus",
    # Configuration
    "CourseCatalogLoader",
    "load_courses",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "TimetableError",
    "ConfigurationError",
    "CourseFileError",
    "ScheduleNotGeneratedError",
    "InvariantViolationError",
]
