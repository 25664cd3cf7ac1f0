# Re-export common types
from .assignment import Assignment, Slot
from .classroom import Classroom, ClassroomKind
from .period import WeekLayout, hourly_slots, numbered_periods
from .staff import Staff, StaffRole
from .subject import Semester, Subject, SubjectKind
from .timetable import WeeklyGrid, build_weekly_grid

__all__ = [
    "Assignment",
    "Slot",
    "Classroom",
    "ClassroomKind",
    "WeekLayout",
    "hourly_slots",
    "numbered_periods",
    "Staff",
    "StaffRole",
    "Semester",
    "Subject",
    "SubjectKind",
    "WeeklyGrid",
    "build_weekly_grid",
]
