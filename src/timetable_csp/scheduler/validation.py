"""Invariant checks for generated timetables.

A grid produced by a successful search must satisfy every check here.
A violation indicates a defect in the availability model or in the undo
path, not a schedulable condition, so callers treat it as fatal.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from ..constants import ALL_BATCHES, ALL_BATCHES_LABEL, BATCHES, DAYS, LUNCH_SLOT, TIME_SLOTS
from ..exceptions import InvariantViolationError
from ..models import CourseRequirement
from .grid import GridState


@dataclass(frozen=True)
class Placement:
    """One occupied (day, slot, room) cell, with 0-based indices."""

    day: int
    slot: int
    room: int
    course_code: str
    faculty: int
    batch: int
    is_lab: bool

    @property
    def session_key(self) -> tuple[str, int, bool]:
        return (self.course_code, self.batch, self.is_lab)


def placements_from_grid(grid: GridState) -> list[Placement]:
    """Collect every occupied cell of a grid."""
    placements = []
    for d in range(DAYS):
        for t in range(TIME_SLOTS):
            for r in range(grid.num_rooms):
                session = grid.session_at(d, t, r)
                if session.is_empty:
                    continue
                placements.append(
                    Placement(d, t, r, session.course_code, session.faculty, session.batch, session.is_lab)
                )
    return placements


def placements_from_report(report: dict[str, Any]) -> list[Placement]:
    """Collect every occupied cell of a report dictionary (as exported to JSON)."""
    placements = []
    for d, day in enumerate(report.get("days", [])):
        for t, row in enumerate(day.get("slots", [])):
            for entry in row.get("rooms", []):
                if entry.get("isLunch") or entry.get("isEmpty", True):
                    continue
                batch = entry.get("batch")
                placements.append(
                    Placement(
                        day=d,
                        slot=t,
                        room=int(entry["roomNumber"]) - 1,
                        course_code=entry["courseCode"],
                        faculty=int(entry["faculty"]) - 1,
                        batch=ALL_BATCHES if batch == ALL_BATCHES_LABEL else int(batch) - 1,
                        is_lab=bool(entry.get("isLab", False)),
                    )
                )
    return placements


def _expected_hours(courses: Sequence[CourseRequirement]) -> dict[tuple[str, int, bool], int]:
    expected = {}
    for course in courses:
        if course.theory_hours > 0:
            expected[(course.course_code, ALL_BATCHES, False)] = course.theory_hours
        for b in range(BATCHES):
            if course.lab_hours_per_batch > 0:
                expected[(course.course_code, b, True)] = course.lab_hours_per_batch
            if course.tutorial_hours_per_batch > 0:
                expected[(course.course_code, b, False)] = course.tutorial_hours_per_batch
    return expected


def check_placements(
    placements: Iterable[Placement],
    courses: Sequence[CourseRequirement] | None = None,
) -> list[str]:
    """Check the hard constraints over a set of placements.

    Args:
        placements: Occupied cells
        courses: Catalogue; if given, every session must have exactly its
            required number of slot-hours

    Returns:
        List of violation messages (empty if the timetable is valid)
    """
    violations: list[str] = []
    placements = list(placements)

    faculty_at: dict[tuple[int, int], set[int]] = defaultdict(set)
    batch_at: dict[tuple[int, int], set[int]] = defaultdict(set)
    room_at: dict[tuple[int, int], set[int]] = defaultdict(set)
    by_session: dict[tuple[str, int, bool], list[Placement]] = defaultdict(list)

    for p in placements:
        cell = (p.day, p.slot)

        if p.slot == LUNCH_SLOT:
            violations.append(f"{p.course_code} placed in lunch slot on day {p.day}")

        if p.faculty in faculty_at[cell]:
            violations.append(f"faculty {p.faculty} double-booked at day {p.day} slot {p.slot}")
        faculty_at[cell].add(p.faculty)

        batches = range(BATCHES) if p.batch == ALL_BATCHES else (p.batch,)
        for b in batches:
            if b in batch_at[cell]:
                violations.append(f"batch {b} double-booked at day {p.day} slot {p.slot}")
            batch_at[cell].add(b)

        if p.room in room_at[cell]:
            violations.append(f"room {p.room} double-booked at day {p.day} slot {p.slot}")
        room_at[cell].add(p.room)

        by_session[p.session_key].append(p)

    expected = _expected_hours(courses) if courses is not None else None
    if expected is not None:
        for key, hours in expected.items():
            placed = len(by_session.get(key, []))
            if placed != hours:
                violations.append(f"session {key} has {placed} slot-hours, expected {hours}")
        for key in by_session:
            if key not in expected:
                violations.append(f"session {key} is not in the course catalogue")

    labs_per_day: dict[tuple[int, int], int] = defaultdict(int)
    for key, group in by_session.items():
        group.sort(key=lambda p: (p.day, p.slot))
        if len(group) == 2:
            first, second = group
            if not (
                first.day == second.day
                and first.room == second.room
                and second.slot == first.slot + 1
            ):
                violations.append(f"two-hour session {key} is not one consecutive same-room block")
        _code, batch, is_lab = key
        if is_lab and batch != ALL_BATCHES:
            for day in {p.day for p in group}:
                labs_per_day[(batch, day)] += 1

    for (batch, day), count in labs_per_day.items():
        if count > 1:
            violations.append(f"batch {batch} has {count} labs on day {day}")

    return violations


def check_grid(grid: GridState, courses: Sequence[CourseRequirement] | None = None) -> list[str]:
    """Check a grid's placements and its load counters."""
    placements = placements_from_grid(grid)
    violations = check_placements(placements, courses)

    faculty_hours: dict[int, int] = defaultdict(int)
    day_hours: dict[int, int] = defaultdict(int)
    for p in placements:
        faculty_hours[p.faculty] += 1
        day_hours[p.day] += 1

    for f, load in enumerate(grid.faculty_load):
        if load != faculty_hours[f]:
            violations.append(f"faculty_load[{f}]={load} but grid holds {faculty_hours[f]} hours")
    for d, used in enumerate(grid.slots_used_per_day):
        if used != day_hours[d]:
            violations.append(f"slots_used_per_day[{d}]={used} but grid holds {day_hours[d]} hours")

    if len(grid.history) != len(placements):
        violations.append(
            f"history holds {len(grid.history)} assignments but grid holds {len(placements)}"
        )

    return violations


def check_report(report: dict[str, Any], courses: Sequence[CourseRequirement] | None = None) -> list[str]:
    """Check an exported report dictionary, including its load summaries."""
    placements = placements_from_report(report)
    violations = check_placements(placements, courses)

    faculty_hours: dict[int, int] = defaultdict(int)
    for p in placements:
        faculty_hours[p.faculty + 1] += 1
    for item in report.get("facultyLoad", []):
        number, hours = item["facultyNumber"], item["hours"]
        if hours != faculty_hours[number]:
            violations.append(f"faculty {number} reports {hours} hours but grid holds {faculty_hours[number]}")

    day_rows = report.get("days", [])
    for d, day in enumerate(day_rows):
        placed = sum(1 for p in placements if p.day == d)
        if day.get("totalHours", placed) != placed:
            violations.append(f"{day.get('name', d)} reports {day['totalHours']} hours but grid holds {placed}")

    return violations


def assert_invariants(grid: GridState, courses: Sequence[CourseRequirement] | None = None) -> None:
    """Raise if the grid breaks any invariant.

    Raises:
        InvariantViolationError: With every violation found
    """
    violations = check_grid(grid, courses)
    if violations:
        raise InvariantViolationError(violations)
