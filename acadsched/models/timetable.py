from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Tuple

from .assignment import Assignment, Slot
from .period import WeekLayout

Key = Tuple[str, Slot]  # (day, slot)

logger = logging.getLogger(__name__)


@dataclass
class WeeklyGrid:
    layout: WeekLayout
    cells: Dict[Key, List[Assignment]] = field(default_factory=dict)
    dropped: List[Assignment] = field(default_factory=list)

    def __post_init__(self) -> None:
        for key in self.layout.cells():
            self.cells.setdefault(key, [])

    def place(self, a: Assignment) -> bool:
        key = (a.day, a.slot)
        if not (self.layout.has_day(a.day) and self.layout.has_slot(a.slot)):
            self.dropped.append(a)
            return False
        self.cells[key].append(a)
        return True

    def cell(self, day: str, slot: Slot) -> List[Assignment]:
        return self.cells[(day, slot)]

    def rows(self) -> Iterator[Tuple[str, Slot, List[Assignment]]]:
        for day, slot in self.layout.cells():
            yield day, slot, self.cells[(day, slot)]

    def flatten(self) -> List[Assignment]:
        return [a for _, _, cell in self.rows() for a in cell]

    def occupied(self, day: str, slot: Slot) -> bool:
        return bool(self.cells.get((day, slot)))

    def as_dict(self) -> Dict[str, Dict[Slot, List[Assignment]]]:
        out: Dict[str, Dict[Slot, List[Assignment]]] = {d: {} for d in self.layout.days}
        for day, slot, cell in self.rows():
            out[day][slot] = list(cell)
        return out


def build_weekly_grid(assignments: Iterable[Assignment], layout: WeekLayout) -> WeeklyGrid:
    """Project a flat assignment collection onto the day x slot grid.

    Every canonical cell exists, possibly empty. Assignments whose day or slot
    is outside the layout are kept aside in ``grid.dropped`` rather than
    placed. Cells keep input order when they hold more than one assignment.
    """
    grid = WeeklyGrid(layout)
    for a in assignments:
        if not grid.place(a):
            logger.debug(f"Grid drop {a.id} ({a.day} {a.slot}) outside week layout")
    return grid
