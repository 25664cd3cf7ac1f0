from .auto import admissible_staff, auto_schedule, unscheduled_subjects
from .service import AssignmentService

__all__ = ["AssignmentService", "admissible_staff", "auto_schedule", "unscheduled_subjects"]
