from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List

from ..data.store import EntityStore
from ..errors import (
    ConflictError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
    WriteRaceError,
)
from ..models.assignment import Assignment
from ..models.classroom import Classroom
from ..models.period import WeekLayout
from ..models.staff import Staff
from ..models.subject import Semester, Subject
from ..models.timetable import WeeklyGrid, build_weekly_grid
from ..validate.checks import (
    Conflict,
    ConflictKind,
    ConflictReport,
    Workload,
    check_conflicts,
    validate_candidate,
    workload_for,
)
from .auto import auto_schedule

logger = logging.getLogger(__name__)


class AssignmentService:
    """Check, create and remove assignments against an entity store.

    Each check re-reads the relevant assignments from the store. The store
    stays the final authority on uniqueness: an insert that loses a race
    surfaces as WriteRaceError and is not retried.
    """

    def __init__(self, store: EntityStore, layout: WeekLayout):
        self.store = store
        self.layout = layout

    def _snapshot(self, candidate: Assignment) -> List[Assignment]:
        # Only the indexed subsets the rules look at
        related = list(
            self.store.list_assignments_by_staff_and_day(candidate.staff_id, candidate.day)
        )
        related.extend(
            self.store.list_assignments_by_staff_department_semester(
                candidate.staff_id, candidate.department, candidate.semester
            )
        )
        if candidate.classroom_id is not None:
            held = self.store.find_assignment_by_classroom_day_slot(
                candidate.classroom_id, candidate.day, candidate.slot
            )
            if held is not None:
                related.append(held)
        rows: Dict[str, Assignment] = {}
        for a in related:
            rows[a.id] = a
        return list(rows.values())

    def check(self, candidate: Assignment, exclude_id: str | None = None) -> ConflictReport:
        validate_candidate(candidate, self.layout)
        staff = self.store.get_staff(candidate.staff_id)
        if staff is None:
            raise NotFoundError(f"Staff not found: {candidate.staff_id}")
        if self.store.get_subject(candidate.subject_id) is None:
            raise NotFoundError(f"Subject not found: {candidate.subject_id}")
        if candidate.classroom_id is not None and self.store.get_classroom(candidate.classroom_id) is None:
            raise NotFoundError(f"Classroom not found: {candidate.classroom_id}")

        snapshot = self._snapshot(candidate)
        subjects: Dict[str, Subject] = {}
        classrooms: Dict[str, Classroom] = {}
        staff_by_id: Dict[str, Staff] = {}
        for a in snapshot + [candidate]:
            subj = self.store.get_subject(a.subject_id)
            if subj is not None:
                subjects[subj.id] = subj
            if a.classroom_id is not None:
                room = self.store.get_classroom(a.classroom_id)
                if room is not None:
                    classrooms[room.id] = room
            member = self.store.get_staff(a.staff_id)
            if member is not None:
                staff_by_id[member.id] = member

        return check_conflicts(
            candidate,
            snapshot,
            staff,
            exclude_id,
            subjects=subjects,
            classrooms=classrooms,
            staff_by_id=staff_by_id,
            layout=self.layout,
        )

    def create(self, candidate: Assignment, created_by: str | None = None) -> Assignment:
        if candidate.id is not None:
            raise ValidationError(f"Candidate already carries an id: {candidate.id}")
        report = self.check(candidate)
        if report.has_conflicts:
            raise ConflictError(report)
        record = candidate if created_by is None else replace(candidate, created_by=created_by)
        try:
            aid = self.store.insert_assignment(record)
        except DuplicateKeyError as e:
            if e.key == record.staff_key:
                kind = ConflictKind.STAFF
            elif e.key == record.classroom_key:
                kind = ConflictKind.CLASSROOM
            else:
                raise
            logger.warning(f"Write race on {e.key}: held by {e.existing_id}")
            race = ConflictReport(
                (Conflict(kind, f"Slot was taken concurrently: {e.key}", e.existing_id),)
            )
            raise WriteRaceError(race) from e
        logger.info(f"Created {aid}: {record.staff_id} {record.day} {record.slot}")
        return record.with_id(aid)

    def remove(self, assignment_id: str) -> None:
        self.store.delete_assignment(assignment_id)
        logger.info(f"Removed {assignment_id}")

    def weekly_grid(self) -> WeeklyGrid:
        return build_weekly_grid(self.store.list_assignments(), self.layout)

    def workload(self, staff_id: str, department: str, semester: Semester | str) -> Workload:
        staff = self.store.get_staff(staff_id)
        if staff is None:
            raise NotFoundError(f"Staff not found: {staff_id}")
        rows = self.store.list_assignments_by_staff_department_semester(
            staff_id, department, semester
        )
        return workload_for(rows, staff, department, semester)

    def auto_fill(
        self, department: str | None = None, semester: Semester | str | None = None
    ) -> List[Assignment]:
        """Proposals for active subjects that have no assignment yet. Not persisted."""
        existing = self.store.list_assignments()
        covered = {a.subject_id for a in existing}
        subjects = [
            s for s in self.store.list_subjects(department, semester) if s.id not in covered
        ]
        return auto_schedule(self.store.list_staff(), subjects, existing, self.layout)
