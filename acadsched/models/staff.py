from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StaffRole(str, Enum):
    ASSISTANT_PROFESSOR = "Assistant Professor"
    PROFESSOR = "Professor"

    @property
    def max_hours(self) -> int:
        return ROLE_MAX_HOURS[self]


# Weekly hour ceiling per role
ROLE_MAX_HOURS = {
    StaffRole.ASSISTANT_PROFESSOR: 18,
    StaffRole.PROFESSOR: 12,
}


@dataclass(frozen=True)
class Staff:
    id: str
    name: str
    department: str
    role: StaffRole
    is_active: bool = True
    email: str | None = None
    max_periods_per_day: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", StaffRole(self.role))

    @property
    def max_hours(self) -> int:
        return self.role.max_hours
