from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from .errors import ValidationError
from .models.period import WeekLayout


@dataclass(frozen=True)
class TimetableConfig:
    week_length: int = 5
    granularity: str = "hour"  # hour, period
    first_hour: int = 8
    last_hour: int = 17
    periods: int = 8

    def layout(self) -> WeekLayout:
        if self.granularity == "period":
            return WeekLayout.periods(self.week_length, self.periods)
        return WeekLayout.hourly(self.week_length, self.first_hour, self.last_hour)


def _project_root() -> Path:
    # acadsched/config.py -> project root is parents[1]
    return Path(__file__).resolve().parents[1]


def load_config(project_root: Path | str | None = None) -> TimetableConfig:
    """Load configs/timetable.toml if present, else defaults.

    Expected tables:
      [week]  length = 5 | 6
      [slots] granularity = "hour" | "period", first_hour, last_hour, periods
    """
    root = _project_root() if project_root is None else Path(project_root)
    cfg = root / "configs" / "timetable.toml"
    if not cfg.exists():
        return TimetableConfig()
    try:
        data: Dict[str, Any] = tomllib.loads(cfg.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValidationError(f"Unreadable config {cfg}: {e}") from e
    return config_from_dict(data)


def config_from_dict(data: Dict[str, Any]) -> TimetableConfig:
    base = TimetableConfig()
    week = data.get("week", {})
    slots = data.get("slots", {})
    for name, table in (("week", week), ("slots", slots)):
        if not isinstance(table, dict):
            raise ValidationError(f"[{name}] must be a table, got {table!r}")
    try:
        loaded = TimetableConfig(
            week_length=int(week.get("length", base.week_length)),
            granularity=str(slots.get("granularity", base.granularity)),
            first_hour=int(slots.get("first_hour", base.first_hour)),
            last_hour=int(slots.get("last_hour", base.last_hour)),
            periods=int(slots.get("periods", base.periods)),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"non-numeric config value: {e}") from e
    if loaded.week_length not in (5, 6):
        raise ValidationError(f"week.length must be 5 or 6, got {loaded.week_length}")
    if loaded.granularity not in ("hour", "period"):
        raise ValidationError(f"slots.granularity must be 'hour' or 'period', got {loaded.granularity!r}")
    if loaded.granularity == "hour" and not 0 <= loaded.first_hour < loaded.last_hour <= 24:
        raise ValidationError(f"invalid hour range {loaded.first_hour}-{loaded.last_hour}")
    if loaded.granularity == "period" and loaded.periods < 1:
        raise ValidationError(f"slots.periods must be positive, got {loaded.periods}")
    return loaded
