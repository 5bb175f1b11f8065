"""Test fixtures for timetable tests."""

import pytest

from timetable_csp.models import CourseRequirement
from timetable_csp.scheduler import GridState, TimetableCSP


@pytest.fixture
def grid():
    """Empty grid with 3 rooms and 2 faculty."""
    return GridState(num_rooms=3, num_faculty=2)


@pytest.fixture
def two_courses():
    """Small catalogue with default hours."""
    return [
        CourseRequirement("CS101", "Algorithms"),
        CourseRequirement("CS102", "Networks"),
    ]


@pytest.fixture
def generated_engine():
    """Default catalogue, 7 rooms, 5 faculty, generated with a fixed seed."""
    engine = TimetableCSP(num_rooms=7, num_faculty=5, seed=42)
    assert engine.generate_timetable_with_restarts(5)
    return engine


@pytest.fixture
def theory_only_overflow():
    """21 two-hour all-batch lectures: one more than the grid has pair slots for."""
    return [
        CourseRequirement(f"TH{i:02d}", f"Theory {i}", 2, 0, 0) for i in range(21)
    ]
