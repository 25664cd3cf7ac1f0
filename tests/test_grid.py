from __future__ import annotations

from collections import Counter

from acadsched.models import Assignment, WeekLayout, build_weekly_grid, hourly_slots


def _a(aid: str, day: str, slot, staff: str = "s1") -> Assignment:
    return Assignment(
        id=aid, staff_id=staff, subject_id="X", department="CSE", semester="odd", day=day, slot=slot
    )


def test_hourly_slot_labels() -> None:
    slots = hourly_slots()
    assert slots[0] == "08:00-09:00"
    assert slots[-1] == "16:00-17:00"
    assert len(slots) == 9


def test_every_cell_initialized() -> None:
    layout = WeekLayout.hourly(week_length=6)
    grid = build_weekly_grid([], layout)
    assert list(grid.as_dict()) == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
    for day, slot, cell in grid.rows():
        assert cell == []
    assert len(list(grid.rows())) == 6 * 9


def test_out_of_schedule_entries_dropped_not_lost() -> None:
    layout = WeekLayout.periods(week_length=5, count=8)
    rows = [_a("a1", "Monday", 1), _a("a2", "Saturday", 1), _a("a3", "Monday", 9), _a("a4", "Monday", "1")]
    grid = build_weekly_grid(rows, layout)
    assert [a.id for a in grid.flatten()] == ["a1"]
    assert [a.id for a in grid.dropped] == ["a2", "a3", "a4"]


def test_shared_cell_keeps_input_order() -> None:
    layout = WeekLayout.periods()
    rows = [_a("a1", "Tuesday", 3, "s1"), _a("a2", "Tuesday", 3, "s2"), _a("a3", "Tuesday", 3, "s3")]
    grid = build_weekly_grid(rows, layout)
    assert [a.id for a in grid.cell("Tuesday", 3)] == ["a1", "a2", "a3"]
    assert grid.occupied("Tuesday", 3)
    assert not grid.occupied("Tuesday", 4)


def test_flatten_matches_input_multiset() -> None:
    layout = WeekLayout.hourly()
    rows = [
        _a("a1", "Friday", "16:00-17:00"),
        _a("a2", "Monday", "08:00-09:00"),
        _a("a3", "Wednesday", "12:00-13:00", "s2"),
        _a("a4", "Wednesday", "12:00-13:00", "s3"),
        _a("bad", "Sunday", "08:00-09:00"),
    ]
    grid = build_weekly_grid(rows, layout)
    kept = Counter(a.id for a in grid.flatten())
    assert kept + Counter(a.id for a in grid.dropped) == Counter(a.id for a in rows)
    assert [a.id for a in grid.flatten()] == ["a2", "a3", "a4", "a1"]
