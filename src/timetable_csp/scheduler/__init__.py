"""Weekly timetable scheduling engine.

This package assigns theory lectures, lab blocks and tutorials to a
five-day grid of hourly slots, rooms and faculty members using
backtracking search with randomized restarts.

Main classes:
- TimetableCSP: Backtracking scheduler with restarts
- GridState: Busy matrices, load counters and the assignment history
- FeasibilityCache: Memo table for availability queries

Usage:
    from timetable_csp.scheduler import TimetableCSP

    engine = TimetableCSP(num_rooms=7, num_faculty=5, seed=42)
    if engine.generate_timetable_with_restarts():
        report = engine.get_report()
"""

from .cache import FeasibilityCache
from .engine import TimetableCSP, find_capacity_shortfall, validate_parameters
from .grid import GridSnapshot, GridState
from .report import batch_label, build_report
from .requirements import expand_course, generate_requirements, total_slot_hours
from .search import get_valid_time_slots
from .validation import assert_invariants, check_grid, check_report

__all__ = [
    # Engine
    "TimetableCSP",
    "find_capacity_shortfall",
    "validate_parameters",
    # State
    "GridState",
    "GridSnapshot",
    "FeasibilityCache",
    # Requirements and search
    "expand_course",
    "generate_requirements",
    "total_slot_hours",
    "get_valid_time_slots",
    # Report
    "build_report",
    "batch_label",
    # Validation
    "assert_invariants",
    "check_grid",
    "check_report",
]
