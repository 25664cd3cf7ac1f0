from __future__ import annotations

import itertools
import logging
from typing import Dict, Iterable, List, Protocol, Tuple

from ..errors import DuplicateKeyError, NotFoundError
from ..models.assignment import Assignment, Slot
from ..models.classroom import Classroom
from ..models.staff import Staff
from ..models.subject import Semester, Subject

logger = logging.getLogger(__name__)

Key = Tuple[str, str, Slot]  # (staff or classroom id, day, slot)


class EntityStore(Protocol):
    """Read/write operations the scheduling core needs from a data store."""

    def get_staff(self, staff_id: str) -> Staff | None: ...

    def get_subject(self, subject_id: str) -> Subject | None: ...

    def get_classroom(self, classroom_id: str) -> Classroom | None: ...

    def list_staff(self, active_only: bool = True) -> List[Staff]: ...

    def list_subjects(
        self,
        department: str | None = None,
        semester: Semester | str | None = None,
        active_only: bool = True,
    ) -> List[Subject]: ...

    def list_assignments(self) -> List[Assignment]: ...

    def list_assignments_by_staff_and_day(self, staff_id: str, day: str) -> List[Assignment]: ...

    def list_assignments_by_staff_department_semester(
        self, staff_id: str, department: str, semester: Semester | str
    ) -> List[Assignment]: ...

    def find_assignment_by_staff_day_slot(
        self, staff_id: str, day: str, slot: Slot
    ) -> Assignment | None: ...

    def find_assignment_by_classroom_day_slot(
        self, classroom_id: str, day: str, slot: Slot
    ) -> Assignment | None: ...

    def insert_assignment(self, record: Assignment) -> str: ...

    def delete_assignment(self, assignment_id: str) -> None: ...


class InMemoryStore:
    """Dict-backed store with the same indexes and uniqueness rules as a real one.

    ``insert_assignment`` is the single authority for the (staff, day, slot)
    and (classroom, day, slot) invariants: it raises DuplicateKeyError when
    either key is already held.
    """

    def __init__(
        self,
        staff: Iterable[Staff] = (),
        subjects: Iterable[Subject] = (),
        classrooms: Iterable[Classroom] = (),
        assignments: Iterable[Assignment] = (),
    ):
        self.staff: Dict[str, Staff] = {}
        self.subjects: Dict[str, Subject] = {}
        self.classrooms: Dict[str, Classroom] = {}
        self.assignments: Dict[str, Assignment] = {}
        # Track (staff, day, slot) and (classroom, day, slot) -> assignment id
        self.staff_busy: Dict[Key, str] = {}
        self.room_busy: Dict[Key, str] = {}
        self._ids = itertools.count(1)
        for s in staff:
            self.add_staff(s)
        for s in subjects:
            self.add_subject(s)
        for c in classrooms:
            self.add_classroom(c)
        for a in assignments:
            self.insert_assignment(a)

    # Reference records

    def add_staff(self, staff: Staff) -> None:
        self.staff[staff.id] = staff

    def add_subject(self, subject: Subject) -> None:
        for other in self.subjects.values():
            if other.code == subject.code and other.id != subject.id:
                raise DuplicateKeyError(("code", subject.code), other.id)
        self.subjects[subject.id] = subject

    def add_classroom(self, classroom: Classroom) -> None:
        self.classrooms[classroom.id] = classroom

    def get_staff(self, staff_id: str) -> Staff | None:
        return self.staff.get(staff_id)

    def get_subject(self, subject_id: str) -> Subject | None:
        return self.subjects.get(subject_id)

    def get_classroom(self, classroom_id: str) -> Classroom | None:
        return self.classrooms.get(classroom_id)

    def list_staff(self, active_only: bool = True) -> List[Staff]:
        return [s for s in self.staff.values() if s.is_active or not active_only]

    def list_subjects(
        self,
        department: str | None = None,
        semester: Semester | str | None = None,
        active_only: bool = True,
    ) -> List[Subject]:
        out: List[Subject] = []
        for s in self.subjects.values():
            if active_only and not s.is_active:
                continue
            if department is not None and s.department != department:
                continue
            if semester is not None and s.semester != Semester(semester):
                continue
            out.append(s)
        return out

    def list_classrooms(self, active_only: bool = True) -> List[Classroom]:
        return [c for c in self.classrooms.values() if c.is_active or not active_only]

    # Assignments

    def list_assignments(self) -> List[Assignment]:
        return list(self.assignments.values())

    def list_assignments_by_staff_and_day(self, staff_id: str, day: str) -> List[Assignment]:
        return [a for a in self.assignments.values() if a.staff_id == staff_id and a.day == day]

    def list_assignments_by_staff_department_semester(
        self, staff_id: str, department: str, semester: Semester | str
    ) -> List[Assignment]:
        semester = Semester(semester)
        return [
            a
            for a in self.assignments.values()
            if a.staff_id == staff_id and a.department == department and a.semester == semester
        ]

    def find_assignment_by_staff_day_slot(
        self, staff_id: str, day: str, slot: Slot
    ) -> Assignment | None:
        aid = self.staff_busy.get((staff_id, day, slot))
        return self.assignments.get(aid) if aid is not None else None

    def find_assignment_by_classroom_day_slot(
        self, classroom_id: str, day: str, slot: Slot
    ) -> Assignment | None:
        aid = self.room_busy.get((classroom_id, day, slot))
        return self.assignments.get(aid) if aid is not None else None

    def _next_id(self) -> str:
        while True:
            aid = f"a{next(self._ids)}"
            if aid not in self.assignments:
                return aid

    def insert_assignment(self, record: Assignment) -> str:
        if record.staff_key in self.staff_busy:
            raise DuplicateKeyError(record.staff_key, self.staff_busy[record.staff_key])
        room_key = record.classroom_key
        if room_key is not None and room_key in self.room_busy:
            raise DuplicateKeyError(room_key, self.room_busy[room_key])
        if record.id is not None and record.id in self.assignments:
            raise DuplicateKeyError(("id", record.id), record.id)
        aid = record.id if record.id is not None else self._next_id()
        self.assignments[aid] = record.with_id(aid)
        self.staff_busy[record.staff_key] = aid
        if room_key is not None:
            self.room_busy[room_key] = aid
        logger.debug(f"Insert {aid}: {record.staff_id} {record.day} {record.slot}")
        return aid

    def delete_assignment(self, assignment_id: str) -> None:
        a = self.assignments.pop(assignment_id, None)
        if a is None:
            raise NotFoundError(f"Assignment not found: {assignment_id}")
        self.staff_busy.pop(a.staff_key, None)
        if a.classroom_key is not None:
            self.room_busy.pop(a.classroom_key, None)
        logger.debug(f"Delete {assignment_id}")
