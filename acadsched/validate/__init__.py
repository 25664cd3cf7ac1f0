from .checks import (
    Conflict,
    ConflictKind,
    ConflictReport,
    DailyLoad,
    Workload,
    check_conflicts,
    daily_load,
    find_classroom_clash,
    find_staff_clash,
    validate_candidate,
    validate_schedule,
    workload_for,
)

__all__ = [
    "Conflict",
    "ConflictKind",
    "ConflictReport",
    "DailyLoad",
    "Workload",
    "check_conflicts",
    "daily_load",
    "find_classroom_clash",
    "find_staff_clash",
    "validate_candidate",
    "validate_schedule",
    "workload_for",
]
