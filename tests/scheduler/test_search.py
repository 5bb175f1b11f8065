"""Tests for candidate slot search."""

from timetable_csp.constants import ALL_BATCHES, DAYS, LUNCH_SLOT, TIME_SLOTS
from timetable_csp.models import Assignment, Session, TimeSlot
from timetable_csp.scheduler.grid import GridState
from timetable_csp.scheduler.search import get_valid_time_slots


class TestGetValidTimeSlots:
    """Tests for get_valid_time_slots function."""

    def test_single_hour_count_on_empty_grid(self):
        grid = GridState(num_rooms=2, num_faculty=1)
        slots = get_valid_time_slots(grid, 0, 0, is_lab=False, duration=1)
        assert len(slots) == DAYS * (TIME_SLOTS - 1) * 2

    def test_two_hour_count_on_empty_grid(self):
        grid = GridState(num_rooms=1, num_faculty=1)
        slots = get_valid_time_slots(grid, 0, ALL_BATCHES, is_lab=False, duration=2)
        # Starts 0,1,2 before lunch and 5..8 after it
        assert len(slots) == DAYS * 7

    def test_never_starts_at_or_before_lunch(self):
        grid = GridState(num_rooms=1, num_faculty=1)
        slots = get_valid_time_slots(grid, 0, 0, is_lab=True, duration=2)
        starts = {ts.slot for ts in slots}
        assert LUNCH_SLOT not in starts
        assert LUNCH_SLOT - 1 not in starts
        assert TIME_SLOTS - 1 not in starts

    def test_sorted_lexicographically_when_days_tie(self):
        grid = GridState(num_rooms=2, num_faculty=1)
        slots = get_valid_time_slots(grid, 0, 0, is_lab=False, duration=1)
        assert slots == sorted(slots)
        assert slots[0] == TimeSlot(0, 0, 0)

    def test_least_loaded_day_first(self):
        grid = GridState(num_rooms=2, num_faculty=2)
        session = Session("CS101", "Algorithms", faculty=1, batch=2)
        grid.assign(Assignment(TimeSlot(0, 9, 1), session))
        slots = get_valid_time_slots(grid, 0, 0, is_lab=False, duration=1)
        assert slots[0].day == 1
        assert slots[-1].day == 0

    def test_lab_skips_days_with_lab(self):
        grid = GridState(num_rooms=2, num_faculty=2)
        lab = Session("CS101", "Algorithms", faculty=1, batch=0, is_lab=True)
        grid.assign(Assignment(TimeSlot(3, 0, 0), lab))
        grid.assign(Assignment(TimeSlot(3, 1, 0), lab))
        slots = get_valid_time_slots(grid, 0, 0, is_lab=True, duration=2)
        assert all(ts.day != 3 for ts in slots)
        # Another batch can still have a lab that day
        other = get_valid_time_slots(grid, 0, 1, is_lab=True, duration=2)
        assert any(ts.day == 3 for ts in other)

    def test_one_hour_lab_skips_days_with_lab(self):
        grid = GridState(num_rooms=2, num_faculty=2)
        lab = Session("CS101", "Algorithms", faculty=1, batch=0, is_lab=True)
        grid.assign(Assignment(TimeSlot(2, 6, 1), lab))
        slots = get_valid_time_slots(grid, 0, 0, is_lab=True, duration=1)
        assert slots
        assert all(ts.day != 2 for ts in slots)
        # A tutorial for the same batch may still use that day
        tutorial = get_valid_time_slots(grid, 0, 0, is_lab=False, duration=1)
        assert any(ts.day == 2 for ts in tutorial)

    def test_second_slot_must_be_free_in_same_room(self):
        grid = GridState(num_rooms=1, num_faculty=2)
        grid.assign(Assignment(TimeSlot(0, 1, 0), Session("X", "X", faculty=1, batch=1)))
        slots = get_valid_time_slots(grid, 0, ALL_BATCHES, is_lab=False, duration=2)
        day0 = {ts.slot for ts in slots if ts.day == 0}
        assert 0 not in day0
        assert 1 not in day0
        assert 2 in day0

    def test_no_candidates_when_faculty_fully_busy(self):
        grid = GridState(num_rooms=1, num_faculty=1)
        for d in range(DAYS):
            for t in range(TIME_SLOTS):
                grid.faculty_busy[0][d][t] = True
        grid.cache.clear()
        assert get_valid_time_slots(grid, 0, 0, is_lab=False, duration=1) == []
