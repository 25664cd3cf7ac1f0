from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from .checks import ConflictReport


def write_validation_report(report: Dict[str, object], outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    path = outputs_dir / "validation.json"
    with path.open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)
    return path


def format_validation_report(report: Dict[str, object]) -> str:
    lines: list[str] = []
    lines.append(f"clash_count: {report.get('clash_count')}")
    for section in ("staff_clashes", "classroom_clashes"):
        items = report.get(section, [])
        lines.append(f"{section}: {len(items)}")
        for item in items:
            lines.append(f"  - {item}")
    overruns = report.get("workload_overruns", {})
    lines.append("workload_overruns:")
    if isinstance(overruns, dict):
        for k, v in overruns.items():
            lines.append(f"  - {k}: +{v}")
    lines.append(f"unknown_staff: {len(report.get('unknown_staff', []))} entries")
    lines.append(f"out_of_schedule: {len(report.get('out_of_schedule', []))} entries")
    return "\n".join(lines)


def format_conflict_report(report: ConflictReport) -> str:
    if not report.has_conflicts:
        return "No conflicts"
    return "\n".join(f"[{c.kind.value}] {c.message}" for c in report.conflicts)
