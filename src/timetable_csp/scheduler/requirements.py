"""Expansion of course requirements into atomic scheduling requests."""

import random
from collections.abc import Iterable

from ..constants import ALL_BATCHES, BATCHES, UNASSIGNED
from ..models import CourseRequirement, Requirement, SessionKind


def expand_course(course: CourseRequirement) -> list[Requirement]:
    """Expand one course into its theory, lab and tutorial requirements.

    Produces one theory requirement shared by all batches, then one lab
    and one tutorial requirement per batch. Session types with zero hours
    are skipped.
    """
    requirements: list[Requirement] = []

    if course.theory_hours > 0:
        requirements.append(
            Requirement(
                course_code=course.course_code,
                course_name=course.course_name,
                faculty=UNASSIGNED,
                batch=ALL_BATCHES,
                is_lab=False,
                duration=course.theory_hours,
                kind=SessionKind.THEORY,
            )
        )

    for b in range(BATCHES):
        if course.lab_hours_per_batch > 0:
            requirements.append(
                Requirement(
                    course_code=course.course_code,
                    course_name=course.course_name,
                    faculty=UNASSIGNED,
                    batch=b,
                    is_lab=True,
                    duration=course.lab_hours_per_batch,
                    kind=SessionKind.LAB,
                )
            )
        if course.tutorial_hours_per_batch > 0:
            requirements.append(
                Requirement(
                    course_code=course.course_code,
                    course_name=course.course_name,
                    faculty=UNASSIGNED,
                    batch=b,
                    is_lab=False,
                    duration=course.tutorial_hours_per_batch,
                    kind=SessionKind.TUTORIAL,
                )
            )

    return requirements


def requirement_priority(requirement: Requirement) -> int:
    """Sort key: all-batches first, then per-batch labs, then the rest."""
    if requirement.is_all_batches:
        return 0
    if requirement.is_lab:
        return 1
    return 2


def generate_requirements(
    courses: Iterable[CourseRequirement],
    rng: random.Random | None = None,
) -> list[Requirement]:
    """Build the ordered requirement list for one search attempt.

    The list is shuffled first and then stably sorted by priority, so
    requirements of equal priority appear in a random order. Restarts
    rely on this to explore a different branch of the search.

    Args:
        courses: Course catalogue
        rng: Random source for the tie shuffle; no shuffle if None

    Returns:
        Requirements ordered most-constrained first
    """
    requirements = [req for course in courses for req in expand_course(course)]
    if rng is not None:
        rng.shuffle(requirements)
    requirements.sort(key=requirement_priority)
    return requirements


def total_slot_hours(courses: Iterable[CourseRequirement]) -> int:
    """Slot-hours a full schedule of the catalogue commits."""
    return sum(course.total_slot_hours for course in courses)
