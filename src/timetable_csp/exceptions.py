"""Custom exceptions for the timetable generator."""


class TimetableError(Exception):
    """Base exception for timetable errors."""

    pass


class ConfigurationError(TimetableError):
    """Engine parameters or course catalogue are invalid."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        location = f" ({field})" if field else ""
        super().__init__(f"Invalid configuration{location}: {message}")


class CourseFileError(ConfigurationError):
    """Course catalogue file could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"cannot load courses from '{path}': {reason}", field="courses")


class ScheduleNotGeneratedError(TimetableError):
    """Report requested before a successful generation."""

    def __init__(self):
        super().__init__(
            "No timetable available. Call generate_timetable_with_restarts() "
            "and check that it returned True before requesting the report."
        )


class InvariantViolationError(TimetableError):
    """A committed grid breaks one of the scheduling invariants."""

    def __init__(self, violations: list[str]):
        self.violations = violations
        shown = "; ".join(violations[:5])
        more = f" (and {len(violations) - 5} more)" if len(violations) > 5 else ""
        super().__init__(f"Timetable invariants violated: {shown}{more}")
