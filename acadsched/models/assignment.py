from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple, Union

from .subject import Semester

Slot = Union[str, int]


@dataclass(frozen=True)
class Assignment:
    staff_id: str
    subject_id: str
    department: str
    semester: Semester
    day: str
    slot: Slot
    classroom_id: str | None = None
    id: str | None = None  # None until persisted
    created_by: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "semester", Semester(self.semester))

    def with_id(self, assignment_id: str) -> "Assignment":
        return replace(self, id=assignment_id)

    @property
    def staff_key(self) -> Tuple[str, str, Slot]:
        return (self.staff_id, self.day, self.slot)

    @property
    def classroom_key(self) -> Tuple[str, str, Slot] | None:
        if self.classroom_id is None:
            return None
        return (self.classroom_id, self.day, self.slot)
