from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from ..models.assignment import Assignment
from ..models.classroom import Classroom
from ..models.staff import Staff
from ..models.subject import Subject
from .store import InMemoryStore


@dataclass
class LoadedData:
    staff: List[Staff] = field(default_factory=list)
    subjects: List[Subject] = field(default_factory=list)
    classrooms: List[Classroom] = field(default_factory=list)
    assignments: List[Assignment] = field(default_factory=list)

    def to_store(self) -> InMemoryStore:
        return InMemoryStore(self.staff, self.subjects, self.classrooms, self.assignments)


def load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _records(path: Path, key: str) -> List[Dict[str, Any]]:
    # Each file is either a bare list or {"<key>": [...]}
    if not path.exists():
        return []
    data = load_json(path)
    if isinstance(data, dict):
        return list(data.get(key, []))
    return list(data)


def staff_from_dict(d: Dict[str, Any]) -> Staff:
    return Staff(
        id=d["id"],
        name=d["name"],
        department=d["department"],
        role=d["role"],
        is_active=d.get("is_active", True),
        email=d.get("email"),
        max_periods_per_day=d.get("max_periods_per_day"),
    )


def subject_from_dict(d: Dict[str, Any]) -> Subject:
    return Subject(
        id=d["id"],
        name=d["name"],
        code=d["code"],
        department=d["department"],
        semester=d["semester"],
        credits=int(d.get("credits", 0)),
        kind=d.get("kind", "theory"),
        is_active=d.get("is_active", True),
    )


def classroom_from_dict(d: Dict[str, Any]) -> Classroom:
    return Classroom(
        id=d["id"],
        name=d["name"],
        capacity=int(d.get("capacity", 0)),
        kind=d.get("kind", "lecture_hall"),
        department=d.get("department"),
        is_active=d.get("is_active", True),
    )


def assignment_from_dict(d: Dict[str, Any]) -> Assignment:
    return Assignment(
        staff_id=d["staff_id"],
        subject_id=d["subject_id"],
        department=d["department"],
        semester=d["semester"],
        day=d["day"],
        slot=d["slot"],
        classroom_id=d.get("classroom_id"),
        id=d.get("id"),
        created_by=d.get("created_by"),
    )


def assignment_to_dict(a: Assignment) -> Dict[str, Any]:
    return {
        "id": a.id,
        "staff_id": a.staff_id,
        "subject_id": a.subject_id,
        "classroom_id": a.classroom_id,
        "department": a.department,
        "semester": a.semester.value,
        "day": a.day,
        "slot": a.slot,
        "created_by": a.created_by,
    }


def load_data(root: Path) -> LoadedData:
    data_dir = root / "data"
    return LoadedData(
        staff=[staff_from_dict(d) for d in _records(data_dir / "staff.json", "staff")],
        subjects=[subject_from_dict(d) for d in _records(data_dir / "subjects.json", "subjects")],
        classrooms=[
            classroom_from_dict(d) for d in _records(data_dir / "classrooms.json", "classrooms")
        ],
        assignments=[
            assignment_from_dict(d) for d in _records(data_dir / "assignments.json", "assignments")
        ],
    )
