from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

import typer

from ..config import load_config
from ..data.loader import LoadedData, assignment_to_dict, load_data
from ..data.store import InMemoryStore
from ..errors import DuplicateKeyError, NotFoundError, ValidationError
from ..models.assignment import Assignment
from ..models.timetable import build_weekly_grid
from ..render.csv_out import csv_blocks, write_csv_blocks
from ..scheduler.auto import unscheduled_subjects
from ..scheduler.service import AssignmentService
from ..validate.checks import validate_schedule
from ..validate.report import (
    format_conflict_report,
    format_validation_report,
    write_validation_report,
)


def _setup_logging(project_root: Path, level: int = logging.INFO) -> None:
    logs_dir = project_root / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(logs_dir / "acadsched.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def _default_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _grid_csv(loaded: LoadedData, assignments: List[Assignment], project_root: Path) -> str:
    layout = load_config(project_root).layout()
    grid = build_weekly_grid(assignments, layout)
    return csv_blocks(
        grid,
        {s.id: s for s in loaded.staff},
        {s.id: s for s in loaded.subjects},
        {c.id: c for c in loaded.classrooms},
    )


def _open_store(loaded: LoadedData) -> InMemoryStore:
    # A dataset that double-books a key cannot seed the store
    try:
        return loaded.to_store()
    except DuplicateKeyError as e:
        typer.echo(f"error: dataset breaks uniqueness: {e}", err=True)
        raise typer.Exit(code=2)


def run_pipeline(project_root: Path, *, log_level: int | None = None) -> tuple[str, str]:
    """Load the dataset, project the grid, audit it, and write outputs/."""
    _setup_logging(project_root)
    if log_level is not None:
        logging.getLogger().setLevel(log_level)
    layout = load_config(project_root).layout()
    loaded = load_data(project_root)

    report = validate_schedule(loaded.assignments, {s.id: s for s in loaded.staff}, layout)
    outputs_dir = project_root / "outputs"
    write_validation_report(report, outputs_dir)
    csv = _grid_csv(loaded, loaded.assignments, project_root)
    write_csv_blocks(csv, outputs_dir)
    logging.getLogger(__name__).info(
        f"Pipeline: {len(loaded.assignments)} assignments, clash_count={report['clash_count']}"
    )
    return csv, format_validation_report(report)


app = typer.Typer(add_completion=False, help="Academic timetable conflict checker and auto-scheduler")


@app.command("check")
def cli_check(
    staff: str = typer.Option(..., help="Staff id"),
    subject: str = typer.Option(..., help="Subject id"),
    day: str = typer.Option(..., help="Day name, e.g. Monday"),
    slot: str = typer.Option(..., help="Slot label or period number"),
    department: str = typer.Option(..., help="Department"),
    semester: str = typer.Option("odd", help="Semester parity (odd/even)"),
    classroom: str | None = typer.Option(None, help="Classroom id"),
    exclude: str | None = typer.Option(None, help="Assignment id to ignore (edit re-check)"),
    root: Path | None = typer.Option(None, help="Project root holding data/ and configs/"),
    log_level: str = typer.Option("WARNING", help="Log level"),
) -> None:
    project_root = root or _default_root()
    _setup_logging(project_root, getattr(logging, log_level.upper(), logging.WARNING))
    layout = load_config(project_root).layout()
    service = AssignmentService(_open_store(load_data(project_root)), layout)
    try:
        candidate = Assignment(
            staff_id=staff,
            subject_id=subject,
            department=department,
            semester=semester,
            day=day,
            slot=layout.parse_slot(slot),
            classroom_id=classroom,
        )
        report = service.check(candidate, exclude_id=exclude)
    except (ValidationError, NotFoundError, ValueError) as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=2)
    typer.echo(json.dumps(report.to_dict(), indent=2))
    if report.has_conflicts:
        typer.echo(format_conflict_report(report), err=True)
        raise typer.Exit(code=1)


@app.command("grid")
def cli_grid(root: Path | None = typer.Option(None, help="Project root")) -> None:
    project_root = root or _default_root()
    loaded = load_data(project_root)
    typer.echo(_grid_csv(loaded, loaded.assignments, project_root))


@app.command("auto")
def cli_auto(
    department: str | None = typer.Option(None, help="Only subjects of this department"),
    semester: str | None = typer.Option(None, help="Only subjects of this semester parity"),
    write: bool = typer.Option(False, help="Write proposals to outputs/json/proposals.json"),
    root: Path | None = typer.Option(None, help="Project root"),
    log_level: str = typer.Option("INFO", help="Log level"),
) -> None:
    project_root = root or _default_root()
    _setup_logging(project_root, getattr(logging, log_level.upper(), logging.INFO))
    loaded = load_data(project_root)
    store = _open_store(loaded)
    service = AssignmentService(store, load_config(project_root).layout())
    try:
        proposals = service.auto_fill(department, semester)
        missing = unscheduled_subjects(
            store.list_subjects(department, semester), store.list_assignments() + proposals
        )
    except ValueError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=2)
    payload = [assignment_to_dict(a) for a in proposals]
    typer.echo(json.dumps(payload, indent=2))
    for s in missing:
        typer.echo(f"unscheduled: {s.code}", err=True)
    if write:
        json_dir = project_root / "outputs" / "json"
        json_dir.mkdir(parents=True, exist_ok=True)
        with (json_dir / "proposals.json").open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)


@app.command("validate")
def cli_validate(root: Path | None = typer.Option(None, help="Project root")) -> None:
    _, validation = run_pipeline(root or _default_root())
    typer.echo(validation)


@app.command("workload")
def cli_workload(
    staff: str = typer.Option(..., help="Staff id"),
    department: str = typer.Option(..., help="Department"),
    semester: str = typer.Option("odd", help="Semester parity (odd/even)"),
    root: Path | None = typer.Option(None, help="Project root"),
) -> None:
    project_root = root or _default_root()
    service = AssignmentService(
        _open_store(load_data(project_root)), load_config(project_root).layout()
    )
    try:
        load = service.workload(staff, department, semester)
    except (NotFoundError, ValueError) as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=2)
    typer.echo(json.dumps(load.to_dict(), indent=2))
