from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Semester(str, Enum):
    ODD = "odd"
    EVEN = "even"


class SubjectKind(str, Enum):
    THEORY = "theory"
    LAB = "lab"


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    code: str
    department: str
    semester: Semester
    credits: int = 0
    kind: SubjectKind = SubjectKind.THEORY
    is_active: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "semester", Semester(self.semester))
        object.__setattr__(self, "kind", SubjectKind(self.kind))
