"""Tests for data models."""

import pytest

from timetable_csp.exceptions import ConfigurationError
from timetable_csp.models import (
    DEFAULT_COURSES,
    CourseRequirement,
    GenerationStats,
    RoomEntry,
    ScheduleReport,
    Session,
    TimeSlot,
)


class TestCourseRequirement:
    """Tests for CourseRequirement model."""

    def test_defaults(self):
        course = CourseRequirement("CS101", "Algorithms")
        assert course.theory_hours == 2
        assert course.lab_hours_per_batch == 2
        assert course.tutorial_hours_per_batch == 1
        assert course.total_slot_hours == 11

    def test_from_dict_snake_case(self):
        course = CourseRequirement.from_dict(
            {"course_code": "CS101", "course_name": "Algorithms", "theory_hours": 1}
        )
        assert course.course_code == "CS101"
        assert course.theory_hours == 1
        assert course.lab_hours_per_batch == 2

    def test_from_dict_camel_case(self):
        course = CourseRequirement.from_dict(
            {
                "courseCode": "ML2001",
                "courseName": "OS",
                "theoryHours": 2,
                "labHoursPerBatch": 0,
                "tutorialHoursPerBatch": "1",
            }
        )
        assert course == CourseRequirement("ML2001", "OS", 2, 0, 1)

    def test_from_dict_name_defaults_to_code(self):
        assert CourseRequirement.from_dict({"courseCode": "X1"}).course_name == "X1"

    def test_from_dict_missing_code(self):
        with pytest.raises(ConfigurationError):
            CourseRequirement.from_dict({"courseName": "OS"})

    def test_from_dict_bad_hours(self):
        with pytest.raises(ConfigurationError):
            CourseRequirement.from_dict({"courseCode": "X", "theoryHours": "two"})

    @pytest.mark.parametrize("hours", [2.7, "1.5", True, [2]])
    def test_from_dict_rejects_non_whole_hours(self, hours):
        with pytest.raises(ConfigurationError):
            CourseRequirement.from_dict({"courseCode": "X", "labHoursPerBatch": hours})

    def test_from_dict_accepts_whole_floats(self):
        assert CourseRequirement.from_dict({"courseCode": "X", "theoryHours": 1.0}).theory_hours == 1

    @pytest.mark.parametrize("hours", [-1, 3])
    def test_validate_rejects_out_of_range(self, hours):
        with pytest.raises(ConfigurationError):
            CourseRequirement("X", "X", lab_hours_per_batch=hours).validate()

    def test_default_catalogue(self):
        assert len(DEFAULT_COURSES) == 5
        assert {c.course_name for c in DEFAULT_COURSES} == {"OS", "DBMS", "DS", "CN", "ML"}

    def test_to_dict(self):
        data = CourseRequirement("CS101", "Algorithms").to_dict()
        assert data["course_code"] == "CS101"
        assert data["tutorial_hours_per_batch"] == 1


class TestTimeSlot:
    """Tests for TimeSlot model."""

    def test_ordering_is_lexicographic(self):
        slots = [TimeSlot(1, 0, 0), TimeSlot(0, 2, 1), TimeSlot(0, 2, 0), TimeSlot(0, 1, 5)]
        assert sorted(slots) == [
            TimeSlot(0, 1, 5),
            TimeSlot(0, 2, 0),
            TimeSlot(0, 2, 1),
            TimeSlot(1, 0, 0),
        ]

    def test_next(self):
        assert TimeSlot(2, 5, 3).next() == TimeSlot(2, 6, 3)

    def test_str(self):
        assert str(TimeSlot(1, 2, 3)) == "D1T2R3"


class TestSession:
    """Tests for Session model."""

    def test_empty(self):
        assert Session.empty().is_empty

    def test_not_empty(self):
        assert not Session("CS101", "Algorithms", faculty=0, batch=0).is_empty


class TestScheduleReport:
    """Tests for ScheduleReport model."""

    def test_empty_report(self):
        report = ScheduleReport.empty(num_rooms=3, num_faculty=2)
        assert len(report.days) == 5
        assert report.faculty_load == {1: 0, 2: 0}
        assert report.total_hours == 0
        row = report.days[0].slots[0]
        assert all(entry.is_empty for entry in row.rooms)

    def test_room_entry_lunch_dict(self):
        assert RoomEntry(room_number=2, is_empty=False, is_lunch=True).to_dict() == {
            "roomNumber": 2,
            "isLunch": True,
        }

    def test_stats_to_dict(self):
        stats = GenerationStats(attempts=2, backtracks=3)
        data = stats.to_dict()
        assert data["attempts"] == 2
        assert data["backtracks"] == 3
