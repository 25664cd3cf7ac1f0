from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .assignment import Slot

WEEKDAYS: Tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def hourly_slots(first_hour: int = 8, last_hour: int = 17) -> List[str]:
    """Hour-long interval labels, e.g. "08:00-09:00" ... "16:00-17:00"."""
    return [f"{h:02d}:00-{h + 1:02d}:00" for h in range(first_hour, last_hour)]


def numbered_periods(count: int = 8) -> List[int]:
    return list(range(1, count + 1))


@dataclass(frozen=True)
class WeekLayout:
    """Canonical ordered days and slots for one configured week.

    Exactly one slot representation is active: hour labels (str) when
    granularity is "hour", period numbers (int) when it is "period".
    """

    days: Tuple[str, ...]
    slots: Tuple[Slot, ...]
    granularity: str = "hour"

    @classmethod
    def hourly(cls, week_length: int = 5, first_hour: int = 8, last_hour: int = 17) -> "WeekLayout":
        return cls(WEEKDAYS[:week_length], tuple(hourly_slots(first_hour, last_hour)), "hour")

    @classmethod
    def periods(cls, week_length: int = 5, count: int = 8) -> "WeekLayout":
        return cls(WEEKDAYS[:week_length], tuple(numbered_periods(count)), "period")

    def has_day(self, day: str) -> bool:
        return day in self.days

    def has_slot(self, slot: Slot) -> bool:
        # bool is an int subclass; never a valid slot
        if isinstance(slot, bool):
            return False
        return slot in self.slots

    def parse_slot(self, raw: str) -> Slot:
        if self.granularity == "period":
            return int(raw)
        return raw

    def cells(self) -> List[Tuple[str, Slot]]:
        return [(d, s) for d in self.days for s in self.slots]
