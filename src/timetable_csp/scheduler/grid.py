"""Grid state and availability model for timetable generation."""

from dataclasses import dataclass

from ..constants import (
    ALL_BATCHES,
    BATCHES,
    DAYS,
    LUNCH_SLOT,
    TIME_SLOTS,
    UNASSIGNED,
)
from ..models import EMPTY_SESSION, Assignment, Session
from .cache import FeasibilityCache


@dataclass(frozen=True)
class GridSnapshot:
    """Immutable copy of every matrix and counter of a GridState."""

    timetable: tuple
    faculty_busy: tuple
    batch_busy: tuple
    room_busy: tuple
    batch_labs_per_day: tuple
    faculty_load: tuple
    slots_used_per_day: tuple
    history_length: int


def _freeze(value):
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


class GridState:
    """Busy matrices, load counters and assignment history for one run.

    The grid is the single source of truth for "is this resource free".
    It is mutated only through assign() and unassign_last(), which are
    exact inverses of each other, and every mutation invalidates the
    feasibility cache.

    Matrices:
    - timetable[day][slot][room] -> Session
    - faculty_busy[faculty][day][slot] -> bool
    - batch_busy[batch][day][slot] -> bool
    - room_busy[day][slot][room] -> bool
    - batch_labs_per_day[batch][day] -> bool
    - faculty_load[faculty] -> assigned slot-hours
    - slots_used_per_day[day] -> assigned slot-hours
    """

    def __init__(
        self,
        num_rooms: int,
        num_faculty: int,
        cache: FeasibilityCache | None = None,
    ) -> None:
        self.num_rooms = num_rooms
        self.num_faculty = num_faculty
        self.cache = cache if cache is not None else FeasibilityCache()
        self.reset()

    def reset(self) -> None:
        """Return to all-free state with lunch pre-marked busy.

        Reuses this object across restart attempts.
        """
        self.timetable: list[list[list[Session]]] = [
            [[EMPTY_SESSION for _ in range(self.num_rooms)] for _ in range(TIME_SLOTS)]
            for _ in range(DAYS)
        ]
        self.faculty_busy: list[list[list[bool]]] = [
            [self._day_slots() for _ in range(DAYS)] for _ in range(self.num_faculty)
        ]
        self.batch_busy: list[list[list[bool]]] = [
            [self._day_slots() for _ in range(DAYS)] for _ in range(BATCHES)
        ]
        self.room_busy: list[list[list[bool]]] = [
            [[t == LUNCH_SLOT] * self.num_rooms for t in range(TIME_SLOTS)]
            for _ in range(DAYS)
        ]
        self.batch_labs_per_day: list[list[bool]] = [
            [False] * DAYS for _ in range(BATCHES)
        ]
        self.faculty_load: list[int] = [0] * self.num_faculty
        self.slots_used_per_day: list[int] = [0] * DAYS
        self.history: list[Assignment] = []
        self.cache.clear()

    @staticmethod
    def _day_slots() -> list[bool]:
        slots = [False] * TIME_SLOTS
        slots[LUNCH_SLOT] = True
        return slots

    def is_available(
        self,
        day: int,
        slot: int,
        faculty: int,
        batch: int,
        room: int,
        consecutive: bool = False,
        lab: bool = False,
    ) -> bool:
        """Check whether a session can occupy (day, slot, room).

        Args:
            day: Day index
            slot: Slot index
            faculty: Faculty index or UNASSIGNED (not checked)
            batch: Batch index or ALL_BATCHES (checks every batch)
            room: Room index
            consecutive: This is the first half of a two-slot block
            lab: The block is a lab (enforces one lab per batch per day)

        Returns:
            True if every hard constraint holds
        """
        key = (day, slot, faculty, batch, room, consecutive, lab)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        result = self._check(day, slot, faculty, batch, room, consecutive, lab)
        self.cache.put(key, result)
        return result

    def _check(
        self,
        day: int,
        slot: int,
        faculty: int,
        batch: int,
        room: int,
        consecutive: bool,
        lab: bool,
    ) -> bool:
        if slot == LUNCH_SLOT:
            return False

        if faculty != UNASSIGNED and self.faculty_busy[faculty][day][slot]:
            return False

        if batch != ALL_BATCHES:
            if self.batch_busy[batch][day][slot]:
                return False
        elif any(self.batch_busy[b][day][slot] for b in range(BATCHES)):
            return False

        if self.room_busy[day][slot][room]:
            return False

        if consecutive and (slot + 1 >= TIME_SLOTS or slot + 1 == LUNCH_SLOT):
            return False

        if consecutive and lab and batch != ALL_BATCHES and self.batch_labs_per_day[batch][day]:
            return False

        return True

    def assign(self, assignment: Assignment) -> None:
        """Commit one slot-hour and push it onto the history stack."""
        ts = assignment.time_slot
        session = assignment.session
        day, slot, room = ts.day, ts.slot, ts.room

        self.timetable[day][slot][room] = session

        if session.faculty != UNASSIGNED:
            self.faculty_busy[session.faculty][day][slot] = True
            self.faculty_load[session.faculty] += 1

        for b in self._batches_of(session):
            self.batch_busy[b][day][slot] = True

        self.room_busy[day][slot][room] = True

        lab_changed = False
        if session.is_lab and session.batch != ALL_BATCHES:
            lab_changed = not self.batch_labs_per_day[session.batch][day]
            self.batch_labs_per_day[session.batch][day] = True

        self.slots_used_per_day[day] += 1
        self.history.append(assignment)

        self.cache.invalidate(day, slot, session.batch, lab_changed)

    def unassign_last(self) -> Assignment | None:
        """Pop the most recent assignment and restore every matrix."""
        if not self.history:
            return None

        assignment = self.history.pop()
        ts = assignment.time_slot
        session = assignment.session
        day, slot, room = ts.day, ts.slot, ts.room

        self.timetable[day][slot][room] = EMPTY_SESSION

        if session.faculty != UNASSIGNED:
            self.faculty_busy[session.faculty][day][slot] = False
            self.faculty_load[session.faculty] -= 1

        for b in self._batches_of(session):
            self.batch_busy[b][day][slot] = False

        self.room_busy[day][slot][room] = False

        lab_changed = False
        if session.is_lab and session.batch != ALL_BATCHES:
            # The other half of a two-slot lab may still be on the grid
            if not self._has_lab_on_day(session.batch, day):
                self.batch_labs_per_day[session.batch][day] = False
                lab_changed = True

        self.slots_used_per_day[day] -= 1

        self.cache.invalidate(day, slot, session.batch, lab_changed)
        return assignment

    def _has_lab_on_day(self, batch: int, day: int) -> bool:
        for t in range(TIME_SLOTS):
            for session in self.timetable[day][t]:
                if not session.is_empty and session.is_lab and session.batch == batch:
                    return True
        return False

    @staticmethod
    def _batches_of(session: Session) -> range:
        if session.batch == ALL_BATCHES:
            return range(BATCHES)
        return range(session.batch, session.batch + 1)

    def session_at(self, day: int, slot: int, room: int) -> Session:
        return self.timetable[day][slot][room]

    def snapshot(self) -> GridSnapshot:
        """Capture the full state for equality comparison."""
        return GridSnapshot(
            timetable=_freeze(self.timetable),
            faculty_busy=_freeze(self.faculty_busy),
            batch_busy=_freeze(self.batch_busy),
            room_busy=_freeze(self.room_busy),
            batch_labs_per_day=_freeze(self.batch_labs_per_day),
            faculty_load=tuple(self.faculty_load),
            slots_used_per_day=tuple(self.slots_used_per_day),
            history_length=len(self.history),
        )

    @property
    def committed_hours(self) -> int:
        return len(self.history)
