"""Request boundary: turns a request payload into a timetable response."""

import logging
from typing import Any

from .constants import DEFAULT_MAX_ATTEMPTS
from .exceptions import ConfigurationError
from .models import CourseRequirement, ScheduleReport
from .scheduler import TimetableCSP

logger = logging.getLogger(__name__)


def _parse_count(payload: dict[str, Any], key: str, required: bool = True) -> int | None:
    """Read a positive integer field, accepting numeric strings."""
    value = payload.get(key)
    if value is None or value == "":
        if required:
            raise ConfigurationError(f"required parameter '{key}' is missing", field=key)
        return None
    if isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be an integer, got {value!r}", field=key)
    try:
        number = int(str(value).strip())
    except ValueError as e:
        raise ConfigurationError(f"'{key}' must be an integer, got {value!r}", field=key) from e
    if number <= 0:
        raise ConfigurationError(f"'{key}' must be positive, got {number}", field=key)
    return number


def _parse_courses(payload: dict[str, Any]) -> list[CourseRequirement] | None:
    raw = payload.get("courses")
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ConfigurationError("'courses' must be a list", field="courses")
    for item in raw:
        if not isinstance(item, dict):
            raise ConfigurationError(
                f"course entries must be objects, got {item!r}", field="courses"
            )
    return [CourseRequirement.from_dict(item) for item in raw]


def _parse_seed(payload: dict[str, Any]) -> int | str | None:
    seed = payload.get("seed")
    if seed is None or (isinstance(seed, (int, str)) and not isinstance(seed, bool)):
        return seed
    raise ConfigurationError(
        f"'seed' must be an integer or string, got {seed!r}", field="seed"
    )


def handle_timetable_request(payload: dict[str, Any] | None) -> tuple[int, dict[str, Any]]:
    """Generate a timetable for a request payload.

    Recognized fields: numRooms, numFaculty (required), maxRestarts or
    maxAttempts, courses, seed.

    Returns:
        Tuple of (HTTP-style status code, response body):
        - 200 with the timetable on success
        - 400 when parameters are missing or malformed
        - 500 when no feasible timetable was found
    """
    payload = payload or {}
    if not isinstance(payload, dict):
        return 400, {"success": False, "message": "request body must be a JSON object"}
    num_rooms = num_faculty = None
    try:
        num_rooms = _parse_count(payload, "numRooms")
        num_faculty = _parse_count(payload, "numFaculty")
        max_attempts = (
            _parse_count(payload, "maxRestarts", required=False)
            or _parse_count(payload, "maxAttempts", required=False)
            or DEFAULT_MAX_ATTEMPTS
        )
        seed = _parse_seed(payload)
        courses = _parse_courses(payload)
        engine = TimetableCSP(num_rooms, num_faculty, courses, seed=seed)
    except ConfigurationError as e:
        logger.warning(f"Rejected timetable request: {e}")
        body: dict[str, Any] = {"success": False, "message": str(e)}
        if num_rooms is not None and num_faculty is not None:
            body["timetable"] = ScheduleReport.empty(num_rooms, num_faculty).to_dict()
        return 400, body

    if engine.generate_timetable_with_restarts(max_attempts):
        return 200, {
            "success": True,
            "message": "Successfully generated timetable",
            "timetable": engine.get_report().to_dict(),
        }

    return 500, {
        "success": False,
        "message": (
            "Failed to generate a valid timetable after multiple attempts: "
            f"{engine.last_failure_reason}"
        ),
    }
