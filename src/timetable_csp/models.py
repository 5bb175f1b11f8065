"""Data models for the timetable generator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .constants import (
    ALL_BATCHES,
    BATCHES,
    DAY_NAMES,
    MAX_SESSION_HOURS,
    TIME_SLOTS,
    UNASSIGNED,
    get_slot_time_range,
    is_lunch_slot,
)
from .exceptions import ConfigurationError


class SessionKind(str, Enum):
    """Type of academic session."""

    THEORY = "theory"
    LAB = "lab"
    TUTORIAL = "tutorial"


class SearchStatus(str, Enum):
    """State of the backtracking search."""

    SEARCHING = "searching"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


# camelCase keys accepted from request payloads and JSON catalogues
_COURSE_KEY_ALIASES = {
    "courseCode": "course_code",
    "courseName": "course_name",
    "theoryHours": "theory_hours",
    "labHoursPerBatch": "lab_hours_per_batch",
    "tutorialHoursPerBatch": "tutorial_hours_per_batch",
}


def _whole_hours(value: Any) -> int:
    """Convert an hour count, rejecting fractional values."""
    if isinstance(value, bool):
        raise TypeError(f"expected a whole number, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected a whole number, got {value!r}")
    return int(value)


@dataclass(frozen=True)
class CourseRequirement:
    """Weekly hour requirements for one course."""

    course_code: str
    course_name: str
    theory_hours: int = 2
    lab_hours_per_batch: int = 2
    tutorial_hours_per_batch: int = 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CourseRequirement":
        """Create a CourseRequirement from a dictionary.

        Accepts snake_case keys as well as the camelCase keys used by
        request payloads (``courseCode``, ``theoryHours``, ...).
        """
        normalized = {_COURSE_KEY_ALIASES.get(k, k): v for k, v in data.items()}
        if not normalized.get("course_code"):
            raise ConfigurationError("course entry is missing a course code", field="courses")
        try:
            return cls(
                course_code=str(normalized["course_code"]),
                course_name=str(normalized.get("course_name") or normalized["course_code"]),
                theory_hours=_whole_hours(normalized.get("theory_hours", 2)),
                lab_hours_per_batch=_whole_hours(normalized.get("lab_hours_per_batch", 2)),
                tutorial_hours_per_batch=_whole_hours(
                    normalized.get("tutorial_hours_per_batch", 1)
                ),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"course '{normalized['course_code']}' has non-integer hours: {e}",
                field="courses",
            ) from e

    def validate(self) -> None:
        """Check that every hour count fits in the grid.

        Raises:
            ConfigurationError: If an hour count is negative or longer
                than a consecutive two-slot block
        """
        for name in ("theory_hours", "lab_hours_per_batch", "tutorial_hours_per_batch"):
            hours = getattr(self, name)
            if hours < 0 or hours > MAX_SESSION_HOURS:
                raise ConfigurationError(
                    f"course '{self.course_code}' {name}={hours}, "
                    f"expected 0..{MAX_SESSION_HOURS}",
                    field="courses",
                )

    @property
    def total_slot_hours(self) -> int:
        """Slot-hours this course occupies per week across all batches."""
        return self.theory_hours + BATCHES * (
            self.lab_hours_per_batch + self.tutorial_hours_per_batch
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "course_code": self.course_code,
            "course_name": self.course_name,
            "theory_hours": self.theory_hours,
            "lab_hours_per_batch": self.lab_hours_per_batch,
            "tutorial_hours_per_batch": self.tutorial_hours_per_batch,
        }


DEFAULT_COURSES = [
    CourseRequirement("ML2001", "OS"),
    CourseRequirement("ML2002", "DBMS"),
    CourseRequirement("ML2003", "DS"),
    CourseRequirement("ML2004", "CN"),
    CourseRequirement("ML2005", "ML"),
]


@dataclass(frozen=True)
class Requirement:
    """One atomic scheduling need awaiting a slot, room and faculty."""

    course_code: str
    course_name: str
    faculty: int
    batch: int
    is_lab: bool
    duration: int
    kind: SessionKind

    @property
    def is_all_batches(self) -> bool:
        return self.batch == ALL_BATCHES

    @property
    def has_fixed_faculty(self) -> bool:
        return self.faculty != UNASSIGNED


@dataclass(frozen=True, order=True)
class TimeSlot:
    """A (day, slot, room) cell of the weekly grid."""

    day: int
    slot: int
    room: int

    def next(self) -> "TimeSlot":
        """The following slot in the same room on the same day."""
        return TimeSlot(self.day, self.slot + 1, self.room)

    def __str__(self) -> str:
        return f"D{self.day}T{self.slot}R{self.room}"


@dataclass(frozen=True)
class Session:
    """A session placed in a room-slot. No course code means the room is free."""

    course_code: str = ""
    course_name: str = ""
    faculty: int = UNASSIGNED
    batch: int = ALL_BATCHES
    is_lab: bool = False

    @classmethod
    def empty(cls) -> "Session":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.course_code == ""


EMPTY_SESSION = Session.empty()


@dataclass(frozen=True)
class Assignment:
    """One committed slot-hour on the history stack."""

    time_slot: TimeSlot
    session: Session


@dataclass
class GenerationStats:
    """Counters collected while generating a timetable."""

    attempts: int = 0
    assignments: int = 0
    backtracks: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    elapsed_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "attempts": self.attempts,
            "assignments": self.assignments,
            "backtracks": self.backtracks,
            "cacheHits": self.cache_hits,
            "cacheMisses": self.cache_misses,
            "elapsedSeconds": round(self.elapsed_seconds, 4),
        }


@dataclass
class RoomEntry:
    """Contents of one room during one slot of the report."""

    room_number: int
    is_empty: bool = True
    is_lunch: bool = False
    course_code: str = ""
    course_name: str = ""
    faculty: int | None = None
    batch: int | str | None = None
    is_lab: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        if self.is_lunch:
            return {"roomNumber": self.room_number, "isLunch": True}
        if self.is_empty:
            return {"roomNumber": self.room_number, "isEmpty": True}
        return {
            "roomNumber": self.room_number,
            "isEmpty": False,
            "courseCode": self.course_code,
            "courseName": self.course_name,
            "batch": self.batch,
            "faculty": self.faculty,
            "isLab": self.is_lab,
        }


@dataclass
class SlotRow:
    """One hourly row of a day in the report."""

    time: str
    is_lunch: bool
    rooms: list[RoomEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": self.time,
            "isLunch": self.is_lunch,
            "rooms": [r.to_dict() for r in self.rooms],
        }


@dataclass
class DaySchedule:
    """All slot rows for one day."""

    name: str
    total_hours: int
    slots: list[SlotRow] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "totalHours": self.total_hours,
            "slots": [s.to_dict() for s in self.slots],
        }


@dataclass
class ScheduleReport:
    """Day/slot/room grid plus load summaries for the presentation layer."""

    days: list[DaySchedule] = field(default_factory=list)
    faculty_load: dict[int, int] = field(default_factory=dict)
    day_distribution: dict[str, int] = field(default_factory=dict)
    stats: GenerationStats = field(default_factory=GenerationStats)

    @classmethod
    def empty(cls, num_rooms: int, num_faculty: int) -> "ScheduleReport":
        """Report with every room free and zero load everywhere."""
        days = []
        for name in DAY_NAMES:
            slots = []
            for t in range(TIME_SLOTS):
                lunch = is_lunch_slot(t)
                rooms = [
                    RoomEntry(room_number=r + 1, is_empty=not lunch, is_lunch=lunch)
                    for r in range(max(num_rooms, 0))
                ]
                slots.append(SlotRow(time=get_slot_time_range(t), is_lunch=lunch, rooms=rooms))
            days.append(DaySchedule(name=name, total_hours=0, slots=slots))
        return cls(
            days=days,
            faculty_load={f + 1: 0 for f in range(max(num_faculty, 0))},
            day_distribution={name: 0 for name in DAY_NAMES},
        )

    @property
    def total_hours(self) -> int:
        """Total committed slot-hours in the week."""
        return sum(self.day_distribution.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "days": [d.to_dict() for d in self.days],
            "facultyLoad": [
                {"facultyNumber": number, "hours": hours}
                for number, hours in self.faculty_load.items()
            ],
            "dayDistribution": [
                {"day": day, "hours": hours} for day, hours in self.day_distribution.items()
            ],
            "stats": self.stats.to_dict(),
        }
