from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ClassroomKind(str, Enum):
    LECTURE_HALL = "lecture_hall"
    LAB = "lab"
    SEMINAR_ROOM = "seminar_room"


@dataclass(frozen=True)
class Classroom:
    id: str
    name: str
    capacity: int
    kind: ClassroomKind = ClassroomKind.LECTURE_HALL
    department: str | None = None  # affinity only, not enforced
    is_active: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ClassroomKind(self.kind))
