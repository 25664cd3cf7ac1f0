"""Conflict checking, weekly grid projection and greedy auto-scheduling for academic timetables."""

from .errors import (
    ConflictError,
    DuplicateKeyError,
    NotFoundError,
    SchedulingError,
    ValidationError,
    WriteRaceError,
)
from .models.timetable import build_weekly_grid
from .scheduler.auto import auto_schedule
from .validate.checks import check_conflicts

__all__ = [
    "ConflictError",
    "DuplicateKeyError",
    "NotFoundError",
    "SchedulingError",
    "ValidationError",
    "WriteRaceError",
    "auto_schedule",
    "build_weekly_grid",
    "check_conflicts",
]
