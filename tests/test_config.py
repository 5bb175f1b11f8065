"""Tests for course catalogue loading."""

import json

import pytest

from timetable_csp.config import CourseCatalogLoader, load_courses
from timetable_csp.exceptions import ConfigurationError, CourseFileError
from timetable_csp.models import CourseRequirement


class TestJSONCatalogue:
    """Tests for JSON catalogues."""

    def test_list_of_courses(self, tmp_path):
        path = tmp_path / "courses.json"
        path.write_text(
            json.dumps(
                [
                    {"courseCode": "ML2001", "courseName": "OS"},
                    {"course_code": "ML2002", "course_name": "DBMS", "lab_hours_per_batch": 0},
                ]
            ),
            encoding="utf-8",
        )
        courses = load_courses(path)
        assert courses == [
            CourseRequirement("ML2001", "OS"),
            CourseRequirement("ML2002", "DBMS", 2, 0, 1),
        ]

    def test_wrapped_in_object(self, tmp_path):
        path = tmp_path / "courses.json"
        path.write_text(json.dumps({"courses": [{"courseCode": "A"}]}), encoding="utf-8")
        assert [c.course_code for c in load_courses(path)] == ["A"]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "courses.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CourseFileError):
            load_courses(path)

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "courses.json"
        path.write_text(json.dumps(["ML2001"]), encoding="utf-8")
        with pytest.raises(CourseFileError):
            load_courses(path)


class TestCSVCatalogue:
    """Tests for CSV catalogues."""

    def test_full_columns(self, tmp_path):
        path = tmp_path / "courses.csv"
        path.write_text(
            "course_code,course_name,theory_hours,lab_hours_per_batch,tutorial_hours_per_batch\n"
            "CS101,Algorithms,2,2,1\n"
            "CS102,Networks,1,0,2\n",
            encoding="utf-8",
        )
        assert load_courses(path) == [
            CourseRequirement("CS101", "Algorithms", 2, 2, 1),
            CourseRequirement("CS102", "Networks", 1, 0, 2),
        ]

    def test_missing_hour_columns_use_defaults(self, tmp_path):
        path = tmp_path / "courses.csv"
        path.write_text("course_code,course_name\nCS101,Algorithms\n", encoding="utf-8")
        assert load_courses(path) == [CourseRequirement("CS101", "Algorithms")]

    def test_missing_code_column(self, tmp_path):
        path = tmp_path / "courses.csv"
        path.write_text("name\nAlgorithms\n", encoding="utf-8")
        with pytest.raises(CourseFileError):
            load_courses(path)


class TestLoaderErrors:
    """Tests for loader error handling."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(CourseFileError) as exc_info:
            CourseCatalogLoader(tmp_path / "nope.json").load()
        assert "file not found" in str(exc_info.value)

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "courses.yaml"
        path.write_text("x", encoding="utf-8")
        with pytest.raises(CourseFileError):
            load_courses(path)

    def test_is_configuration_error(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_courses(tmp_path / "nope.csv")
