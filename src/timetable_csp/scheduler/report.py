"""Conversion of a finished grid into the day/slot/room report."""

from ..constants import (
    ALL_BATCHES,
    ALL_BATCHES_LABEL,
    DAYS,
    TIME_SLOTS,
    get_day_name,
    get_slot_time_range,
    is_lunch_slot,
)
from ..models import (
    DaySchedule,
    GenerationStats,
    RoomEntry,
    ScheduleReport,
    Session,
    SlotRow,
)
from .grid import GridState


def batch_label(batch: int) -> int | str:
    """Display label for a batch: 1-based number or 'ALL'."""
    if batch == ALL_BATCHES:
        return ALL_BATCHES_LABEL
    return batch + 1


def _room_entry(room: int, session: Session, lunch: bool) -> RoomEntry:
    if lunch:
        return RoomEntry(room_number=room + 1, is_empty=False, is_lunch=True)
    if session.is_empty:
        return RoomEntry(room_number=room + 1)
    return RoomEntry(
        room_number=room + 1,
        is_empty=False,
        course_code=session.course_code,
        course_name=session.course_name,
        faculty=session.faculty + 1,
        batch=batch_label(session.batch),
        is_lab=session.is_lab,
    )


def build_report(grid: GridState, stats: GenerationStats | None = None) -> ScheduleReport:
    """Read the grid into a ScheduleReport. Does not mutate the grid.

    Room and faculty numbers in the report are 1-based.
    """
    days: list[DaySchedule] = []
    for d in range(DAYS):
        slots: list[SlotRow] = []
        for t in range(TIME_SLOTS):
            lunch = is_lunch_slot(t)
            rooms = [
                _room_entry(r, grid.session_at(d, t, r), lunch) for r in range(grid.num_rooms)
            ]
            slots.append(SlotRow(time=get_slot_time_range(t), is_lunch=lunch, rooms=rooms))
        days.append(
            DaySchedule(name=get_day_name(d), total_hours=grid.slots_used_per_day[d], slots=slots)
        )

    return ScheduleReport(
        days=days,
        faculty_load={f + 1: load for f, load in enumerate(grid.faculty_load)},
        day_distribution={get_day_name(d): grid.slots_used_per_day[d] for d in range(DAYS)},
        stats=stats if stats is not None else GenerationStats(),
    )
