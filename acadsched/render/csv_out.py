from __future__ import annotations

from pathlib import Path
from typing import List, Mapping

from ..models.classroom import Classroom
from ..models.staff import Staff
from ..models.subject import Subject
from ..models.timetable import WeeklyGrid


def csv_blocks(
    grid: WeeklyGrid,
    staff: Mapping[str, Staff],
    subjects: Mapping[str, Subject],
    classrooms: Mapping[str, Classroom],
) -> str:
    # One block per day: Day,Slot,Subject,Code,Staff,Classroom
    lines: List[str] = []
    header = "Day,Slot,Subject,Code,Staff,Classroom"
    for day in grid.layout.days:
        lines.append(header)
        for slot in grid.layout.slots:
            cell = grid.cell(day, slot)
            if not cell:
                lines.append(f"{day},{slot},,,,")
                continue
            for a in cell:
                subj = subjects.get(a.subject_id)
                member = staff.get(a.staff_id)
                room = classrooms.get(a.classroom_id) if a.classroom_id else None
                lines.append(
                    ",".join(
                        [
                            day,
                            str(slot),
                            subj.name if subj else "Unknown",
                            subj.code if subj else "Unknown",
                            member.name if member else "Unknown",
                            room.name if room else "",
                        ]
                    )
                )
        lines.append("")  # blank line
    return "\n".join(lines)


def write_csv_blocks(text: str, outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    path = outputs_dir / "timetable.csv"
    with path.open("w", encoding="utf-8") as f:
        f.write(text)
    return path
