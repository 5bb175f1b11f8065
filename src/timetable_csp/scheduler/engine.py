"""Backtracking timetable scheduler with randomized restarts."""

import logging
import random
import time
from collections.abc import Sequence

from ..constants import (
    DAYS,
    DEFAULT_MAX_ATTEMPTS,
    usable_slots_per_week,
)
from ..exceptions import ConfigurationError, ScheduleNotGeneratedError
from ..models import (
    DEFAULT_COURSES,
    Assignment,
    CourseRequirement,
    GenerationStats,
    Requirement,
    ScheduleReport,
    SearchStatus,
    Session,
)
from .cache import FeasibilityCache
from .grid import GridState
from .report import build_report
from .requirements import generate_requirements, total_slot_hours
from .search import get_valid_time_slots

logger = logging.getLogger(__name__)


def validate_parameters(
    num_rooms: int,
    num_faculty: int,
    courses: Sequence[CourseRequirement],
) -> None:
    """Reject configurations before any search begins.

    Raises:
        ConfigurationError: On non-positive counts, an empty catalogue,
            invalid hour counts or duplicate course codes
    """
    for name, value in (("num_rooms", num_rooms), ("num_faculty", num_faculty)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}", field=name)
        if value <= 0:
            raise ConfigurationError(f"{name} must be positive, got {value}", field=name)

    if not courses:
        raise ConfigurationError("course list is empty", field="courses")

    seen: set[str] = set()
    for course in courses:
        course.validate()
        if course.course_code in seen:
            raise ConfigurationError(
                f"duplicate course code '{course.course_code}'", field="courses"
            )
        seen.add(course.course_code)


def find_capacity_shortfall(
    num_rooms: int,
    num_faculty: int,
    courses: Sequence[CourseRequirement],
) -> str | None:
    """Detect catalogues that cannot fit the grid whatever the ordering.

    Returns:
        Human-readable reason, or None if no counting bound is violated
    """
    weekly_slots = usable_slots_per_week()
    required = total_slot_hours(courses)

    if required > num_rooms * weekly_slots:
        return (
            f"{required} slot-hours required but {num_rooms} room(s) offer "
            f"only {num_rooms * weekly_slots}"
        )

    if required > num_faculty * weekly_slots:
        return (
            f"{required} slot-hours required but {num_faculty} faculty member(s) "
            f"can teach only {num_faculty * weekly_slots}"
        )

    per_batch = sum(
        c.theory_hours + c.lab_hours_per_batch + c.tutorial_hours_per_batch for c in courses
    )
    if per_batch > weekly_slots:
        return f"each batch needs {per_batch} hours but a week has {weekly_slots} usable slots"

    labs_per_batch = sum(1 for c in courses if c.lab_hours_per_batch > 0)
    if labs_per_batch > DAYS:
        return (
            f"each batch needs {labs_per_batch} labs but at most one lab "
            f"per day fits in {DAYS} days"
        )

    return None


class TimetableCSP:
    """Constraint-satisfaction timetable generator.

    Requirements are committed one at a time in most-constrained-first
    order. For a requirement without a fixed faculty, faculty candidates
    are tried from least to most loaded; for each candidate the best
    ranked slot is committed and the search recurses. A dead end undoes
    the commit through the history stack and moves to the next faculty
    candidate. When a whole attempt is exhausted the grid is reset and
    the requirement order is re-randomized, up to max_attempts times.

    One instance owns its grid, history and cache; concurrent runs need
    separate instances.
    """

    def __init__(
        self,
        num_rooms: int,
        num_faculty: int,
        courses: Sequence[CourseRequirement] | None = None,
        *,
        rng: random.Random | None = None,
        seed: int | None = None,
        selective_cache: bool = True,
        max_backtracks: int | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            num_rooms: Number of rooms (positive)
            num_faculty: Number of faculty members (positive)
            courses: Course catalogue; defaults to DEFAULT_COURSES
            rng: Random source for tie-breaking; built from seed if None
            seed: Seed for a fresh random source when rng is not given
            selective_cache: Invalidate only affected cache entries
                instead of clearing the whole cache on every mutation
            max_backtracks: Undo budget per attempt; unlimited if None

        Raises:
            ConfigurationError: If the parameters are invalid
        """
        self.courses: list[CourseRequirement] = list(
            DEFAULT_COURSES if courses is None else courses
        )
        validate_parameters(num_rooms, num_faculty, self.courses)

        if max_backtracks is not None and max_backtracks < 0:
            raise ConfigurationError(
                f"max_backtracks must be non-negative, got {max_backtracks}",
                field="max_backtracks",
            )

        self.num_rooms = num_rooms
        self.num_faculty = num_faculty
        self.rng = rng if rng is not None else random.Random(seed)
        self.max_backtracks = max_backtracks

        self.cache = FeasibilityCache(selective=selective_cache)
        self.grid = GridState(num_rooms, num_faculty, self.cache)
        self.status = SearchStatus.SEARCHING
        self.stats = GenerationStats()
        self.last_failure_reason: str | None = None
        self._backtracks_this_attempt = 0

    @property
    def required_slot_hours(self) -> int:
        return total_slot_hours(self.courses)

    def initialize(self) -> None:
        """Reset grid state and cache for a fresh attempt."""
        self.grid.reset()
        self.status = SearchStatus.SEARCHING
        self._backtracks_this_attempt = 0

    def assign(self, assignment: Assignment) -> None:
        self.grid.assign(assignment)

    def unassign_last(self) -> Assignment | None:
        return self.grid.unassign_last()

    def get_valid_time_slots(self, faculty: int, batch: int, is_lab: bool, duration: int):
        return get_valid_time_slots(self.grid, faculty, batch, is_lab, duration)

    def schedule_requirement(self, requirement: Requirement, faculty: int) -> bool:
        """Commit the best candidate slot for a requirement.

        Two-hour requirements commit the start slot and the following slot
        in the same room as two history entries.

        Returns:
            True if a slot was committed
        """
        candidates = self.get_valid_time_slots(
            faculty, requirement.batch, requirement.is_lab, requirement.duration
        )
        if not candidates:
            return False

        time_slot = candidates[0]
        session = Session(
            course_code=requirement.course_code,
            course_name=requirement.course_name,
            faculty=faculty,
            batch=requirement.batch,
            is_lab=requirement.is_lab,
        )
        self.assign(Assignment(time_slot, session))
        if requirement.duration > 1:
            self.assign(Assignment(time_slot.next(), session))

        logger.debug(
            f"Placed {requirement.course_code} {requirement.kind.value} "
            f"batch={requirement.batch} faculty={faculty} at {time_slot}"
        )
        return True

    def _undo_requirement(self, requirement: Requirement) -> None:
        for _ in range(requirement.duration):
            self.unassign_last()
        self._backtracks_this_attempt += 1
        self.stats.backtracks += 1

    def _budget_exhausted(self) -> bool:
        return (
            self.max_backtracks is not None
            and self._backtracks_this_attempt >= self.max_backtracks
        )

    def _faculty_candidates(self, requirement: Requirement) -> list[int]:
        """Faculty to try, least loaded first with random tie-break."""
        if requirement.has_fixed_faculty:
            return [requirement.faculty]
        candidates = list(range(self.num_faculty))
        self.rng.shuffle(candidates)
        candidates.sort(key=lambda f: self.grid.faculty_load[f])
        return candidates

    def backtrack(self, requirements: Sequence[Requirement], index: int = 0) -> bool:
        """Commit requirements[index:] or leave the grid as it was.

        Returns:
            True if every remaining requirement was committed
        """
        if index >= len(requirements):
            self.status = SearchStatus.SUCCEEDED
            return True

        requirement = requirements[index]

        for faculty in self._faculty_candidates(requirement):
            if not self.schedule_requirement(requirement, faculty):
                continue
            if self.backtrack(requirements, index + 1):
                return True
            self._undo_requirement(requirement)
            if self._budget_exhausted():
                break

        self.status = SearchStatus.EXHAUSTED
        return False

    def generate_timetable(self) -> bool:
        """Run one search attempt from an empty grid."""
        self.initialize()
        requirements = generate_requirements(self.courses, self.rng)
        return self.backtrack(requirements, 0)

    def generate_timetable_with_restarts(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> bool:
        """Search for a full timetable, restarting on failure.

        Args:
            max_attempts: Number of attempts, each with a fresh grid and a
                re-randomized requirement order

        Returns:
            True if a feasible timetable was found
        """
        if max_attempts < 1:
            raise ConfigurationError(
                f"max_attempts must be at least 1, got {max_attempts}", field="max_attempts"
            )

        self.stats = GenerationStats()
        self.cache.reset_counters()
        self.last_failure_reason = None
        started = time.perf_counter()

        shortfall = find_capacity_shortfall(self.num_rooms, self.num_faculty, self.courses)
        if shortfall:
            logger.warning(f"Timetable is infeasible: {shortfall}")
            self.initialize()
            self.status = SearchStatus.EXHAUSTED
            self.last_failure_reason = shortfall
            self.stats.elapsed_seconds = time.perf_counter() - started
            return False

        logger.info(
            f"Scheduling {len(self.courses)} courses ({self.required_slot_hours} slot-hours) "
            f"across {self.num_rooms} rooms and {self.num_faculty} faculty"
        )

        succeeded = False
        for attempt in range(1, max_attempts + 1):
            self.stats.attempts = attempt
            logger.debug(f"Attempt {attempt}/{max_attempts}")
            if self.generate_timetable():
                succeeded = True
                break
            logger.info(f"Attempt {attempt} exhausted after {self._backtracks_this_attempt} backtracks")

        self.stats.cache_hits = self.cache.hits
        self.stats.cache_misses = self.cache.misses
        self.stats.elapsed_seconds = time.perf_counter() - started

        if succeeded:
            self.stats.assignments = self.grid.committed_hours
            logger.info(
                f"Timetable generated in {self.stats.attempts} attempt(s), "
                f"{self.stats.backtracks} backtracks, {self.stats.elapsed_seconds:.3f}s"
            )
            return True

        # A failed run never exposes a partially committed grid
        self.initialize()
        self.status = SearchStatus.EXHAUSTED
        self.last_failure_reason = f"no feasible timetable found in {max_attempts} attempt(s)"
        logger.warning(f"Failed to generate timetable: {self.last_failure_reason}")
        return False

    def get_report(self) -> ScheduleReport:
        """Build the day/slot/room report of the generated timetable.

        Raises:
            ScheduleNotGeneratedError: If no generation has succeeded
        """
        if self.status != SearchStatus.SUCCEEDED:
            raise ScheduleNotGeneratedError()
        return build_report(self.grid, stats=self.stats)

    def __repr__(self) -> str:
        return (
            f"TimetableCSP(rooms={self.num_rooms}, faculty={self.num_faculty}, "
            f"courses={len(self.courses)}, status={self.status.value})"
        )
