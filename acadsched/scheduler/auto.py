from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Sequence

from ..models.assignment import Assignment, Slot
from ..models.period import WeekLayout
from ..models.staff import Staff
from ..models.subject import Subject
from ..validate.checks import check_conflicts


def admissible_staff(
    staff: Sequence[Staff],
    subject: Subject,
    day: str,
    slot: Slot,
    working: Sequence[Assignment],
) -> List[Staff]:
    """Active staff who could take ``subject`` at (day, slot) with zero conflicts."""
    out: List[Staff] = []
    for member in staff:
        if not member.is_active:
            continue
        probe = Assignment(
            staff_id=member.id,
            subject_id=subject.id,
            department=subject.department,
            semester=subject.semester,
            day=day,
            slot=slot,
        )
        if not check_conflicts(probe, working, member).has_conflicts:
            out.append(member)
    return out


def auto_schedule(
    staff: Iterable[Staff],
    subjects: Iterable[Subject],
    existing: Iterable[Assignment],
    layout: WeekLayout,
    *,
    subject_key: Callable[[Subject], Any] | None = None,
    staff_key: Callable[[Staff], Any] | None = None,
    id_factory: Callable[[int], str] | None = None,
) -> List[Assignment]:
    """Greedy single pass: at most one new placement per subject.

    Subjects are taken in order (``subject_key`` if given, else input order),
    then layout days, then layout slots. The first (day, slot) with any
    admissible staff wins and the first such staff member (``staff_key``
    order, else input order) is assigned. No backtracking, no balancing,
    no randomness. Subjects that fit nowhere are left out without error;
    see ``unscheduled_subjects``. Only the new proposals are returned.
    """
    logger = logging.getLogger(__name__)

    staff_order = sorted(staff, key=staff_key) if staff_key else list(staff)
    subject_order = sorted(subjects, key=subject_key) if subject_key else list(subjects)
    working: List[Assignment] = list(existing)
    proposals: List[Assignment] = []

    for subject in subject_order:
        placed = False
        for day in layout.days:
            for slot in layout.slots:
                cands = admissible_staff(staff_order, subject, day, slot, working)
                if not cands:
                    continue
                chosen = cands[0]
                a = Assignment(
                    staff_id=chosen.id,
                    subject_id=subject.id,
                    department=subject.department,
                    semester=subject.semester,
                    day=day,
                    slot=slot,
                )
                if id_factory is not None:
                    a = a.with_id(id_factory(len(proposals)))
                proposals.append(a)
                working.append(a)
                logger.info(f"Auto {subject.code} {day} {slot} -> {chosen.name}")
                placed = True
                break
            if placed:
                break
        if not placed:
            logger.warning(f"Auto: no admissible staff/slot for {subject.code}")

    return proposals


def unscheduled_subjects(
    subjects: Iterable[Subject], assignments: Iterable[Assignment]
) -> List[Subject]:
    covered = {a.subject_id for a in assignments}
    return [s for s in subjects if s.id not in covered]
