"""CLI entry point for the timetable generator."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import load_courses
from .constants import DEFAULT_MAX_ATTEMPTS, LUNCH_SLOT
from .exceptions import TimetableError
from .exporters import format_room_entry, get_exporter
from .models import DEFAULT_COURSES, CourseRequirement, ScheduleReport
from .scheduler import TimetableCSP, check_report

app = typer.Typer(
    name="timetable-csp",
    help="Generate weekly academic timetables",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_catalogue(courses_file: Optional[Path]) -> list[CourseRequirement]:
    if courses_file is None:
        return list(DEFAULT_COURSES)
    return load_courses(courses_file)


@app.command()
def generate(
    rooms: Annotated[
        int,
        typer.Option("-r", "--rooms", help="Number of rooms"),
    ] = 7,
    faculty: Annotated[
        int,
        typer.Option("-f", "--faculty", help="Number of faculty members"),
    ] = 5,
    attempts: Annotated[
        int,
        typer.Option("-a", "--attempts", help="Maximum restart attempts"),
    ] = DEFAULT_MAX_ATTEMPTS,
    seed: Annotated[
        Optional[int],
        typer.Option("-s", "--seed", help="Random seed for reproducible timetables"),
    ] = None,
    courses_file: Annotated[
        Optional[Path],
        typer.Option("-c", "--courses", help="Course catalogue (JSON or CSV)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file or directory path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", help="Output format"),
    ] = OutputFormat.json,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate a weekly timetable."""
    _configure_logging(verbose)

    try:
        courses = _load_catalogue(courses_file)
        engine = TimetableCSP(rooms, faculty, courses, seed=seed)
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    with console.status("[bold green]Generating timetable..."):
        succeeded = engine.generate_timetable_with_restarts(attempts)

    if not succeeded:
        console.print(
            f"[bold red]✗ No feasible timetable:[/bold red] {engine.last_failure_reason}"
        )
        raise typer.Exit(1)

    report = engine.get_report()
    console.print(
        f"\n[bold green]✓[/bold green] Timetable generated in {engine.stats.attempts} "
        f"attempt(s), {engine.stats.backtracks} backtracks"
    )
    _show_load_tables(report)

    if verbose:
        _show_grid(report)

    if output:
        exporter = get_exporter(format.value)

        if format == OutputFormat.csv:
            output_path = output if output.is_dir() else output.parent / output.stem
        else:
            suffix = ".xlsx" if format == OutputFormat.excel else ".json"
            output_path = output if output.suffix else output.with_suffix(suffix)

        with console.status(f"[bold green]Exporting to {format.value}..."):
            exporter.export(report, output_path)

        console.print(f"\n[bold green]✓[/bold green] Exported to: {output_path}")


@app.command()
def courses(
    courses_file: Annotated[
        Optional[Path],
        typer.Argument(help="Course catalogue (JSON or CSV); built-in courses if omitted"),
    ] = None,
) -> None:
    """Show a course catalogue and the slot-hours it requires."""
    try:
        catalogue = _load_catalogue(courses_file)
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    table = Table(title="Courses")
    table.add_column("Code", style="cyan")
    table.add_column("Name", style="blue")
    table.add_column("Theory", style="green")
    table.add_column("Lab / batch", style="yellow")
    table.add_column("Tutorial / batch", style="magenta")
    table.add_column("Slot-hours", style="red")

    for course in catalogue:
        table.add_row(
            course.course_code,
            course.course_name,
            str(course.theory_hours),
            str(course.lab_hours_per_batch),
            str(course.tutorial_hours_per_batch),
            str(course.total_slot_hours),
        )

    console.print(table)
    console.print(f"  Total slot-hours: {sum(c.total_slot_hours for c in catalogue)}")


@app.command()
def check(
    input_file: Annotated[
        Path,
        typer.Argument(help="Timetable JSON exported by the generate command"),
    ],
    courses_file: Annotated[
        Optional[Path],
        typer.Option("-c", "--courses", help="Course catalogue the timetable was built from"),
    ] = None,
) -> None:
    """Validate an exported timetable against the scheduling constraints."""
    if not input_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_file}")
        raise typer.Exit(1)

    try:
        catalogue = load_courses(courses_file) if courses_file else None
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    try:
        with open(input_file, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        console.print(f"[bold red]Error:[/bold red] Invalid JSON in {input_file}: {e}")
        raise typer.Exit(1)

    if not isinstance(data, dict):
        console.print(f"[bold red]Error:[/bold red] Expected a JSON object in {input_file}")
        raise typer.Exit(1)

    # Accept a bare report or a full service response
    report = data.get("timetable", data)
    if not isinstance(report, dict):
        console.print(f"[bold red]Error:[/bold red] No timetable object in {input_file}")
        raise typer.Exit(1)

    violations = check_report(report, catalogue)

    if not violations:
        console.print("[bold green]✓ Timetable is valid[/bold green]")
        return

    console.print(f"[bold red]✗ Timetable has {len(violations)} violation(s)[/bold red]")
    for violation in violations:
        console.print(f"  [red]• {violation}[/red]")
    raise typer.Exit(1)


def _show_load_tables(report: ScheduleReport) -> None:
    """Show faculty and day load summaries."""
    faculty_table = Table(title="Faculty Load")
    faculty_table.add_column("Faculty", style="cyan")
    faculty_table.add_column("Hours", style="green")
    for number, hours in report.faculty_load.items():
        faculty_table.add_row(str(number), str(hours))
    console.print(faculty_table)

    day_table = Table(title="Hours by Day")
    day_table.add_column("Day", style="cyan")
    day_table.add_column("Hours", style="green")
    for day, hours in report.day_distribution.items():
        day_table.add_row(day, str(hours))
    console.print(day_table)


def _show_grid(report: ScheduleReport) -> None:
    """Show the full grid, one table per day."""
    for day in report.days:
        table = Table(title=day.name)
        table.add_column("Time", style="cyan")
        for entry in day.slots[LUNCH_SLOT].rooms:
            table.add_column(f"Room {entry.room_number}", max_width=24)
        for row in day.slots:
            cells = [format_room_entry(entry) for entry in row.rooms]
            style = "dim" if row.is_lunch else None
            table.add_row(row.time, *cells, style=style)
        console.print(table)


if __name__ == "__main__":
    app()
