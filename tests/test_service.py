from __future__ import annotations

import pytest

from acadsched.data.store import InMemoryStore
from acadsched.errors import (
    ConflictError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
    WriteRaceError,
)
from acadsched.models import Assignment, Classroom, Staff, Subject, WeekLayout
from acadsched.scheduler.service import AssignmentService
from acadsched.validate.checks import ConflictKind

LAYOUT = WeekLayout.hourly()


def _store(cls=InMemoryStore) -> InMemoryStore:
    return cls(
        staff=[
            Staff(id="s1", name="Dr. Meera Rao", department="CSE", role="Professor"),
            Staff(id="s2", name="Arjun Nair", department="CSE", role="Assistant Professor"),
        ],
        subjects=[
            Subject(id="X", name="Data Structures", code="CS301", department="CSE", semester="odd"),
            Subject(id="Y", name="Database Systems", code="CS302", department="CSE", semester="odd"),
        ],
        classrooms=[
            Classroom(id="C", name="LH-101", capacity=60),
            Classroom(id="D", name="LH-102", capacity=60),
        ],
    )


def _cand(staff: str = "s1", subject: str = "X", room: str | None = "C",
          day: str = "Monday", slot="09:00-10:00") -> Assignment:
    return Assignment(
        staff_id=staff, subject_id=subject, classroom_id=room, department="CSE",
        semester="odd", day=day, slot=slot,
    )


def test_create_persists_with_id_and_creator() -> None:
    store = _store()
    service = AssignmentService(store, LAYOUT)
    created = service.create(_cand(), created_by="admin1")
    assert created.id is not None
    assert created.created_by == "admin1"
    assert store.list_assignments() == [created]


def test_create_rejects_conflicts_with_report() -> None:
    service = AssignmentService(_store(), LAYOUT)
    service.create(_cand())
    with pytest.raises(ConflictError) as exc:
        service.create(_cand(subject="Y", room="D"))
    assert exc.value.report.kinds() == [ConflictKind.STAFF]
    assert "Data Structures" in str(exc.value)


def test_classroom_conflict_names_holder() -> None:
    service = AssignmentService(_store(), LAYOUT)
    service.create(_cand())
    report = service.check(_cand(staff="s2", subject="Y"))
    assert report.kinds() == [ConflictKind.CLASSROOM]
    assert "LH-101" in report.conflicts[0].message
    assert "Dr. Meera Rao" in report.conflicts[0].message


def test_edit_recheck_with_exclude_id() -> None:
    service = AssignmentService(_store(), LAYOUT)
    a = service.create(_cand())
    assert not service.check(_cand(), exclude_id=a.id).has_conflicts


class StaleStore(InMemoryStore):
    """Reads miss rows written by another writer; inserts still see them."""

    def list_assignments_by_staff_and_day(self, staff_id, day):
        return []

    def list_assignments_by_staff_department_semester(self, staff_id, department, semester):
        return []

    def find_assignment_by_classroom_day_slot(self, classroom_id, day, slot):
        return None


def test_lost_write_race_surfaces_as_conflict() -> None:
    store = _store(StaleStore)
    store.insert_assignment(_cand().with_id("a1"))
    service = AssignmentService(store, LAYOUT)
    with pytest.raises(WriteRaceError) as exc:
        service.create(_cand(subject="Y", room="D"))
    assert isinstance(exc.value, ConflictError)
    assert exc.value.report.conflicts[0].with_id == "a1"
    assert len(store.list_assignments()) == 1


def test_lost_classroom_race_reports_classroom_kind() -> None:
    store = _store(StaleStore)
    store.insert_assignment(_cand().with_id("a1"))
    service = AssignmentService(store, LAYOUT)
    with pytest.raises(WriteRaceError) as exc:
        service.create(_cand(staff="s2", subject="Y"))
    assert [c.kind for c in exc.value.report.conflicts] == [ConflictKind.CLASSROOM]
    assert exc.value.report.conflicts[0].with_id == "a1"


def test_create_rejects_candidate_carrying_id() -> None:
    store = _store()
    store.insert_assignment(_cand().with_id("a1"))
    service = AssignmentService(store, LAYOUT)
    with pytest.raises(ValidationError):
        service.create(_cand(day="Tuesday").with_id("a1"))
    assert len(store.list_assignments()) == 1


class Untouchable:
    def __getattr__(self, name):
        raise AssertionError(f"store accessed: {name}")


def test_invalid_candidate_rejected_before_store_access() -> None:
    service = AssignmentService(Untouchable(), LAYOUT)
    with pytest.raises(ValidationError):
        service.check(_cand(day="Sunday"))
    with pytest.raises(ValidationError):
        service.check(_cand(slot="07:00-08:00"))


@pytest.mark.parametrize(
    "cand",
    [_cand(staff="ghost"), _cand(subject="ghost"), _cand(room="ghost")],
)
def test_missing_references_are_not_found(cand) -> None:
    with pytest.raises(NotFoundError):
        AssignmentService(_store(), LAYOUT).check(cand)


def test_remove_then_missing() -> None:
    service = AssignmentService(_store(), LAYOUT)
    a = service.create(_cand())
    service.remove(a.id)
    assert service.store.list_assignments() == []
    assert not service.check(_cand()).has_conflicts
    with pytest.raises(NotFoundError):
        service.remove(a.id)


def test_store_enforces_uniqueness() -> None:
    store = _store()
    store.insert_assignment(_cand())
    with pytest.raises(DuplicateKeyError):
        store.insert_assignment(_cand(staff="s2", subject="Y"))
    with pytest.raises(DuplicateKeyError):
        store.add_subject(Subject(id="Z", name="Dup", code="CS301", department="CSE", semester="odd"))


def test_workload_and_grid() -> None:
    service = AssignmentService(_store(), LAYOUT)
    for slot in LAYOUT.slots[:3]:
        service.create(_cand(room=None, slot=slot))
    load = service.workload("s1", "CSE", "odd")
    assert (load.current_hours, load.max_hours, load.utilization_percentage) == (3, 12, 25)
    grid = service.weekly_grid()
    assert len(grid.cell("Monday", "08:00-09:00")) == 1
    with pytest.raises(NotFoundError):
        service.workload("ghost", "CSE", "odd")


def test_auto_fill_proposes_uncovered_subjects_only() -> None:
    service = AssignmentService(_store(), LAYOUT)
    service.create(_cand())
    proposals = service.auto_fill()
    assert [p.subject_id for p in proposals] == ["Y"]
    assert (proposals[0].staff_id, proposals[0].slot) == ("s1", "08:00-09:00")
    assert len(service.store.list_assignments()) == 1
