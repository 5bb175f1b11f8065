"""Constants for the weekly timetable grid."""

# Week grid dimensions
DAYS = 5
TIME_SLOTS = 10
BATCHES = 3

# Slot index reserved for lunch on every day
LUNCH_SLOT = 4

# Slot 0 starts at 08:00, each slot is one hour
FIRST_SLOT_HOUR = 8

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

# Sentinels
ALL_BATCHES = -1
UNASSIGNED = -1

ALL_BATCHES_LABEL = "ALL"

DEFAULT_MAX_ATTEMPTS = 5

# Longest session the grid supports (a consecutive two-slot block)
MAX_SESSION_HOURS = 2

# Non-lunch slots available to any single resource per day
USABLE_SLOTS_PER_DAY = TIME_SLOTS - 1


def is_lunch_slot(slot: int) -> bool:
    """Check if a slot index is the lunch break."""
    return slot == LUNCH_SLOT


def get_slot_time_range(slot: int) -> str:
    """Get time range string for a slot (e.g., slot 0 -> '08:00-09:00')."""
    if slot < 0 or slot >= TIME_SLOTS:
        return ""
    start = FIRST_SLOT_HOUR + slot
    return f"{start:02d}:00-{start + 1:02d}:00"


def get_day_name(day: int) -> str:
    """Get display name for a day index."""
    return DAY_NAMES[day]


def usable_slots_per_week() -> int:
    """Number of non-lunch slots in one week for a single resource."""
    return DAYS * USABLE_SLOTS_PER_DAY
