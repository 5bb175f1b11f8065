"""Candidate slot search for a single requirement."""

from ..constants import ALL_BATCHES, DAYS, LUNCH_SLOT, TIME_SLOTS
from ..models import TimeSlot
from .grid import GridState


def get_valid_time_slots(
    grid: GridState,
    faculty: int,
    batch: int,
    is_lab: bool,
    duration: int,
) -> list[TimeSlot]:
    """Enumerate and rank every (day, slot, room) a requirement can start at.

    Two-hour requirements need the start slot free with the consecutive
    flag set and the following slot free in the same room. One-hour
    requirements need a single free slot. Lab requirements skip days on
    which the batch already has a lab.

    Candidates are ordered by the number of slot-hours already used on
    their day (least-loaded day first), then by (day, slot, room).

    Args:
        grid: Current grid state
        faculty: Faculty index that would teach the session
        batch: Batch index or ALL_BATCHES
        is_lab: Whether the requirement is a lab block
        duration: Session length in slots (1 or 2)

    Returns:
        Sorted list of candidate start slots
    """
    candidates: list[TimeSlot] = []

    for d in range(DAYS):
        if is_lab and batch != ALL_BATCHES and grid.batch_labs_per_day[batch][d]:
            continue

        for t in range(TIME_SLOTS):
            if t == LUNCH_SLOT:
                continue

            if duration > 1:
                if t + 1 >= TIME_SLOTS or t + 1 == LUNCH_SLOT:
                    continue
                for r in range(grid.num_rooms):
                    if grid.is_available(
                        d, t, faculty, batch, r, consecutive=True, lab=is_lab
                    ) and grid.is_available(d, t + 1, faculty, batch, r):
                        candidates.append(TimeSlot(d, t, r))
            else:
                for r in range(grid.num_rooms):
                    if grid.is_available(d, t, faculty, batch, r):
                        candidates.append(TimeSlot(d, t, r))

    candidates.sort(key=lambda ts: (grid.slots_used_per_day[ts.day], ts))
    return candidates
