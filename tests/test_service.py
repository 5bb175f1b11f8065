"""Tests for the request boundary."""

import pytest

from timetable_csp.scheduler import check_report
from timetable_csp.service import handle_timetable_request


class TestSuccessfulRequest:
    """Tests for requests that produce a timetable."""

    def test_default_catalogue(self):
        status, body = handle_timetable_request({"numRooms": 7, "numFaculty": 5, "seed": 1})
        assert status == 200
        assert body["success"] is True
        assert body["message"] == "Successfully generated timetable"
        assert check_report(body["timetable"]) == []

    def test_numeric_strings_accepted(self):
        status, body = handle_timetable_request(
            {"numRooms": "7", "numFaculty": "5", "maxRestarts": "3", "seed": 2}
        )
        assert status == 200
        assert body["timetable"]["stats"]["attempts"] <= 3

    def test_custom_courses(self):
        payload = {
            "numRooms": 4,
            "numFaculty": 2,
            "seed": 0,
            "courses": [
                {"courseCode": "CS101", "courseName": "Algorithms", "theoryHours": 2,
                 "labHoursPerBatch": 0, "tutorialHoursPerBatch": 1},
            ],
        }
        status, body = handle_timetable_request(payload)
        assert status == 200
        assert sum(d["hours"] for d in body["timetable"]["dayDistribution"]) == 5


class TestRejectedRequest:
    """Tests for malformed requests."""

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            {},
            {"numRooms": 7},
            {"numFaculty": 5},
            {"numRooms": "abc", "numFaculty": 5},
            {"numRooms": 0, "numFaculty": 5},
            {"numRooms": 7, "numFaculty": -2},
            {"numRooms": True, "numFaculty": 5},
            {"numRooms": 7, "numFaculty": 5, "courses": "ML2001"},
            {"numRooms": 7, "numFaculty": 5, "courses": ["ML2001"]},
            {"numRooms": 7, "numFaculty": 5, "courses": [None]},
            {"numRooms": 7, "numFaculty": 5, "seed": [1, 2]},
            {"numRooms": 7, "numFaculty": 5, "seed": 1.5},
            {"numRooms": 7, "numFaculty": 5, "courses": [{"courseCode": "X", "theoryHours": 1.5}]},
            [7, 5],
        ],
    )
    def test_bad_parameters(self, payload):
        status, body = handle_timetable_request(payload)
        assert status == 400
        assert body["success"] is False
        assert body["message"]

    def test_empty_course_list_returns_empty_timetable(self):
        status, body = handle_timetable_request({"numRooms": 3, "numFaculty": 2, "courses": []})
        assert status == 400
        timetable = body["timetable"]
        assert len(timetable["days"]) == 5
        assert all(item["hours"] == 0 for item in timetable["facultyLoad"])
        assert len(timetable["days"][0]["slots"][0]["rooms"]) == 3

    def test_bad_seed_names_field(self):
        status, body = handle_timetable_request({"numRooms": 7, "numFaculty": 5, "seed": {}})
        assert status == 400
        assert "seed" in body["message"]

    def test_string_seed_accepted(self):
        status, _ = handle_timetable_request({"numRooms": 7, "numFaculty": 5, "seed": "abc"})
        assert status == 200

    def test_missing_count_has_no_timetable(self):
        _, body = handle_timetable_request({"numRooms": 3})
        assert "timetable" not in body


class TestFailedRequest:
    """Tests for well-formed requests with no feasible timetable."""

    def test_single_room(self):
        status, body = handle_timetable_request({"numRooms": 1, "numFaculty": 5, "seed": 0})
        assert status == 500
        assert body["success"] is False
        assert "room" in body["message"]
        assert "timetable" not in body
