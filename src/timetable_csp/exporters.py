"""Export functionality for timetable reports."""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from .models import RoomEntry, ScheduleReport

LUNCH_LABEL = "LUNCH"


def format_room_entry(entry: RoomEntry) -> str:
    """Short cell text for a room entry (e.g. 'ML2001 OS (Lab) F2 B1')."""
    if entry.is_lunch:
        return LUNCH_LABEL
    if entry.is_empty:
        return ""
    kind = " (Lab)" if entry.is_lab else ""
    return f"{entry.course_code} {entry.course_name}{kind} F{entry.faculty} B{entry.batch}"


def report_to_dataframe(report: ScheduleReport) -> pd.DataFrame:
    """Flatten the report grid into one row per (day, slot, room)."""
    rows = []
    for day in report.days:
        for row in day.slots:
            for entry in row.rooms:
                rows.append(
                    {
                        "day": day.name,
                        "time": row.time,
                        "room": entry.room_number,
                        "is_lunch": entry.is_lunch,
                        "is_empty": entry.is_empty,
                        "course_code": entry.course_code,
                        "course_name": entry.course_name,
                        "faculty": entry.faculty,
                        "batch": entry.batch,
                        "is_lab": entry.is_lab,
                    }
                )
    columns = [
        "day", "time", "room", "is_lunch", "is_empty",
        "course_code", "course_name", "faculty", "batch", "is_lab",
    ]
    return pd.DataFrame(rows, columns=columns)


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, report: ScheduleReport, output_path: str | Path) -> None:
        """Export report to file.

        Args:
            report: ScheduleReport to export
            output_path: Path to output file or directory
        """
        pass


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, report: ScheduleReport, output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                report.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class CSVExporter(BaseExporter):
    """Export to CSV format (multiple files)."""

    def export(self, report: ScheduleReport, output_path: str | Path) -> None:
        """Export report to CSV files.

        Creates three files:
        - timetable.csv: One row per day, slot and room
        - faculty_load.csv: Hours per faculty member
        - day_distribution.csv: Hours per day
        """
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        report_to_dataframe(report).to_csv(output_dir / "timetable.csv", index=False)
        self._write_csv(
            output_dir / "faculty_load.csv",
            [{"faculty": f, "hours": h} for f, h in report.faculty_load.items()],
        )
        self._write_csv(
            output_dir / "day_distribution.csv",
            [{"day": d, "hours": h} for d, h in report.day_distribution.items()],
        )

    def _write_csv(self, output_path: Path, rows: list[dict]) -> None:
        """Write rows to CSV file."""
        if not rows:
            return

        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=rows[0].keys())
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    def export(self, report: ScheduleReport, output_path: str | Path) -> None:
        """Export report to an Excel workbook.

        Creates one sheet per day (time rows x room columns) plus
        "Faculty Load" and "Day Distribution" sheets.
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            for day in report.days:
                self._export_day_sheet(day, writer)

            pd.DataFrame(
                [{"Faculty": f, "Hours": h} for f, h in report.faculty_load.items()],
                columns=["Faculty", "Hours"],
            ).to_excel(writer, sheet_name="Faculty Load", index=False)

            pd.DataFrame(
                [{"Day": d, "Hours": h} for d, h in report.day_distribution.items()],
                columns=["Day", "Hours"],
            ).to_excel(writer, sheet_name="Day Distribution", index=False)

    def _export_day_sheet(self, day, writer: pd.ExcelWriter) -> None:
        """Export one day as a time x room grid."""
        rows = []
        for row in day.slots:
            record = {"Time": row.time}
            for entry in row.rooms:
                record[f"Room {entry.room_number}"] = format_room_entry(entry)
            rows.append(record)

        df = pd.DataFrame(rows)
        df.to_excel(writer, sheet_name=day.name, index=False)

        worksheet = writer.sheets[day.name]
        for cell in worksheet[1]:
            cell.font = Font(bold=True)
            cell.alignment = Alignment(horizontal="center")
        worksheet.column_dimensions["A"].width = 14.0
        for i in range(2, len(df.columns) + 1):
            worksheet.column_dimensions[get_column_letter(i)].width = 28.0


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]()
