from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from ..errors import NotFoundError, ValidationError
from ..models.assignment import Assignment, Slot
from ..models.classroom import Classroom
from ..models.period import WeekLayout
from ..models.staff import Staff
from ..models.subject import Semester, Subject
from ..models.timetable import build_weekly_grid

logger = logging.getLogger(__name__)


class ConflictKind(str, Enum):
    STAFF = "staff"
    CLASSROOM = "classroom"
    WORKLOAD = "workload"


@dataclass(frozen=True)
class Conflict:
    kind: ConflictKind
    message: str
    with_id: str | None = None  # colliding assignment, when there is one

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


@dataclass(frozen=True)
class ConflictReport:
    """Itemized outcome of a check. Conflicts carry no severity order."""

    conflicts: Tuple[Conflict, ...] = ()

    @property
    def has_conflicts(self) -> bool:
        return len(self.conflicts) > 0

    def kinds(self) -> List[ConflictKind]:
        return [c.kind for c in self.conflicts]

    def to_dict(self) -> Dict[str, object]:
        return {
            "has_conflicts": self.has_conflicts,
            "conflicts": [c.to_dict() for c in self.conflicts],
        }


@dataclass(frozen=True)
class DailyLoad:
    current: int
    maximum: int

    @property
    def can_add(self) -> bool:
        return self.current < self.maximum


@dataclass(frozen=True)
class Workload:
    current_hours: int
    max_hours: int

    @property
    def remaining_hours(self) -> int:
        return self.max_hours - self.current_hours

    @property
    def utilization_percentage(self) -> int:
        if self.max_hours <= 0:
            return 0
        # round half up
        return int(self.current_hours * 100 / self.max_hours + 0.5)

    def to_dict(self) -> Dict[str, int]:
        return {
            "current_hours": self.current_hours,
            "max_hours": self.max_hours,
            "remaining_hours": self.remaining_hours,
            "utilization_percentage": self.utilization_percentage,
        }


def validate_candidate(candidate: Assignment, layout: WeekLayout | None = None) -> None:
    missing = [
        name
        for name in ("staff_id", "subject_id", "department", "day")
        if not getattr(candidate, name)
    ]
    if candidate.slot is None or candidate.slot == "":
        missing.append("slot")
    if missing:
        raise ValidationError(f"Candidate is missing required fields: {', '.join(missing)}")
    if layout is None:
        return
    if not layout.has_day(candidate.day):
        raise ValidationError(f"Invalid day selected: {candidate.day!r}")
    if not layout.has_slot(candidate.slot):
        raise ValidationError(f"Invalid slot selected: {candidate.slot!r}")


def _others(assignments: Iterable[Assignment], exclude_id: str | None) -> Iterator[Assignment]:
    for a in assignments:
        if exclude_id is not None and a.id == exclude_id:
            continue
        yield a


def find_staff_clash(
    assignments: Iterable[Assignment],
    staff_id: str,
    day: str,
    slot: Slot,
    exclude_id: str | None = None,
) -> Assignment | None:
    for a in _others(assignments, exclude_id):
        if a.staff_id == staff_id and a.day == day and a.slot == slot:
            return a
    return None


def find_classroom_clash(
    assignments: Iterable[Assignment],
    classroom_id: str,
    day: str,
    slot: Slot,
    exclude_id: str | None = None,
) -> Assignment | None:
    for a in _others(assignments, exclude_id):
        if a.classroom_id == classroom_id and a.day == day and a.slot == slot:
            return a
    return None


def daily_load(
    assignments: Iterable[Assignment],
    staff_id: str,
    day: str,
    max_per_day: int,
    exclude_id: str | None = None,
) -> DailyLoad:
    current = sum(1 for a in _others(assignments, exclude_id) if a.staff_id == staff_id and a.day == day)
    return DailyLoad(current=current, maximum=max_per_day)


def workload_for(
    assignments: Iterable[Assignment],
    staff: Staff,
    department: str,
    semester: Semester | str,
    exclude_id: str | None = None,
) -> Workload:
    semester = Semester(semester)
    current = sum(
        1
        for a in _others(assignments, exclude_id)
        if a.staff_id == staff.id and a.department == department and a.semester == semester
    )
    return Workload(current_hours=current, max_hours=staff.max_hours)


def _name(records: Mapping[str, object] | None, key: str | None) -> str:
    if key is None:
        return "Unknown"
    if records and key in records:
        return getattr(records[key], "name", key)
    return key


def check_conflicts(
    candidate: Assignment,
    assignments: Iterable[Assignment],
    staff: Staff | None,
    exclude_id: str | None = None,
    *,
    subjects: Mapping[str, Subject] | None = None,
    classrooms: Mapping[str, Classroom] | None = None,
    staff_by_id: Mapping[str, Staff] | None = None,
    layout: WeekLayout | None = None,
) -> ConflictReport:
    """Check one candidate against a snapshot of the current assignments.

    Every rule runs so that all violations surface together:
      - staff double-booking on (staff, day, slot)
      - classroom double-booking on (classroom, day, slot), if a room is set
      - weekly hour ceiling within the candidate's department and semester
      - daily period ceiling, only for staff that define one

    ``exclude_id`` skips the assignment being edited. Nothing passed in is
    mutated. A missing staff record raises NotFoundError since the workload
    rules cannot be evaluated without it.
    """
    validate_candidate(candidate, layout)
    if staff is None:
        raise NotFoundError(f"Staff not found: {candidate.staff_id}")
    if staff.id != candidate.staff_id:
        raise ValidationError(
            f"Staff record {staff.id} does not match candidate staff {candidate.staff_id}"
        )

    snapshot = tuple(assignments)
    conflicts: List[Conflict] = []

    clash = find_staff_clash(snapshot, candidate.staff_id, candidate.day, candidate.slot, exclude_id)
    if clash is not None:
        msg = (
            f"Staff already teaching {_name(subjects, clash.subject_id)} "
            f"at {candidate.day} {candidate.slot}"
        )
        if clash.classroom_id is not None:
            msg += f" in {_name(classrooms, clash.classroom_id)}"
        conflicts.append(Conflict(ConflictKind.STAFF, msg, clash.id))

    if candidate.classroom_id is not None:
        room_clash = find_classroom_clash(
            snapshot, candidate.classroom_id, candidate.day, candidate.slot, exclude_id
        )
        if room_clash is not None:
            conflicts.append(
                Conflict(
                    ConflictKind.CLASSROOM,
                    f"Classroom {_name(classrooms, candidate.classroom_id)} already booked "
                    f"at {candidate.day} {candidate.slot} for "
                    f"{_name(subjects, room_clash.subject_id)} by "
                    f"{_name(staff_by_id, room_clash.staff_id)}",
                    room_clash.id,
                )
            )

    load = workload_for(snapshot, staff, candidate.department, candidate.semester, exclude_id)
    if load.current_hours >= load.max_hours:
        conflicts.append(
            Conflict(
                ConflictKind.WORKLOAD,
                f"Staff {staff.name} has reached maximum hours ({load.max_hours}) "
                f"for {candidate.department} {candidate.semester.value} semester",
            )
        )

    if staff.max_periods_per_day is not None:
        day_load = daily_load(
            snapshot, staff.id, candidate.day, staff.max_periods_per_day, exclude_id
        )
        if not day_load.can_add:
            conflicts.append(
                Conflict(
                    ConflictKind.WORKLOAD,
                    f"Staff has reached maximum periods per day ({day_load.maximum}) "
                    f"on {candidate.day}",
                )
            )

    for c in conflicts:
        logger.debug(f"Conflict [{c.kind.value}] {c.message}")
    return ConflictReport(tuple(conflicts))


def validate_schedule(
    assignments: Iterable[Assignment],
    staff_by_id: Mapping[str, Staff],
    layout: WeekLayout,
) -> Dict[str, object]:
    """Audit a whole schedule against the uniqueness and workload invariants."""
    snapshot = tuple(assignments)
    report: Dict[str, object] = {}

    staff_slots: Counter = Counter(a.staff_key for a in snapshot)
    room_slots: Counter = Counter(a.classroom_key for a in snapshot if a.classroom_key is not None)
    staff_clashes = sorted(f"{s}:{d}:{t}" for (s, d, t), c in staff_slots.items() if c > 1)
    room_clashes = sorted(f"{r}:{d}:{t}" for (r, d, t), c in room_slots.items() if c > 1)
    report["staff_clashes"] = staff_clashes
    report["classroom_clashes"] = room_clashes
    report["clash_count"] = len(staff_clashes) + len(room_clashes)

    loads: Counter = Counter((a.staff_id, a.department, a.semester.value) for a in snapshot)
    overruns: Dict[str, int] = {}
    unknown_staff: set[str] = set()
    for (sid, dept, sem), count in loads.items():
        member = staff_by_id.get(sid)
        if member is None:
            unknown_staff.add(sid)
            continue
        if count > member.max_hours:
            overruns[f"{sid}:{dept}:{sem}"] = count - member.max_hours
    report["workload_overruns"] = overruns
    report["unknown_staff"] = sorted(unknown_staff)

    grid = build_weekly_grid(snapshot, layout)
    report["out_of_schedule"] = [a.id for a in grid.dropped]
    return report
