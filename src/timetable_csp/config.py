"""Course catalogue loader."""

import json
from pathlib import Path

import pandas as pd

from .exceptions import CourseFileError
from .models import CourseRequirement

CSV_COLUMNS = [
    "course_code",
    "course_name",
    "theory_hours",
    "lab_hours_per_batch",
    "tutorial_hours_per_batch",
]


class CourseCatalogLoader:
    """Loader for course catalogues stored as JSON or CSV.

    JSON files hold either a list of course objects or an object with a
    "courses" list. Keys may be snake_case or camelCase. CSV files need a
    header row with at least course_code; missing hour columns fall back
    to the default hours.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> list[CourseRequirement]:
        """Load and return the courses in file order.

        Raises:
            CourseFileError: If the file is missing or malformed
        """
        if not self.path.exists():
            raise CourseFileError(str(self.path), "file not found")

        suffix = self.path.suffix.lower()
        if suffix == ".json":
            records = self._load_json()
        elif suffix == ".csv":
            records = self._load_csv()
        else:
            raise CourseFileError(str(self.path), f"unsupported file type '{suffix}'")

        return [CourseRequirement.from_dict(record) for record in records]

    def _load_json(self) -> list[dict]:
        """Load course records from JSON."""
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CourseFileError(str(self.path), f"invalid JSON: {e}") from e

        if isinstance(data, dict):
            data = data.get("courses", [])
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise CourseFileError(str(self.path), "expected a list of course objects")
        return data

    def _load_csv(self) -> list[dict]:
        """Load course records from CSV."""
        try:
            df = pd.read_csv(self.path, dtype={"course_code": str, "course_name": str})
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise CourseFileError(str(self.path), f"invalid CSV: {e}") from e

        df.columns = [str(c).strip() for c in df.columns]
        if "course_code" not in df.columns:
            raise CourseFileError(str(self.path), "missing 'course_code' column")

        # Drop blank rows and NaN cells so defaults apply
        df = df.dropna(subset=["course_code"])
        records = []
        for row in df.to_dict(orient="records"):
            records.append({k: v for k, v in row.items() if k in CSV_COLUMNS and pd.notna(v)})
        return records


def load_courses(path: Path | str) -> list[CourseRequirement]:
    """Load a course catalogue from a JSON or CSV file."""
    return CourseCatalogLoader(path).load()
