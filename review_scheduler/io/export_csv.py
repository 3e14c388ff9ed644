"""CSV export of a schedule grid and its workload summary."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional

import pandas as pd

from review_scheduler.config import WorkloadWeights
from review_scheduler.domain.assignment import normalize_assignment_map, normalize_dar_entities, normalize_special_projects
from review_scheduler.domain.models import Employee, Schedule
from review_scheduler.services.conflicts import can_assign_dar
from review_scheduler.services.workload import calculate_workload


def format_entity_list(value: Any) -> str:
    """Join an entity list with '/'; a single value is returned as-is."""
    if isinstance(value, (list, tuple)):
        return "/".join(str(v) for v in value)
    return value or ""


def format_special_projects(value: Any) -> str:
    """Render special projects in any stored shape as one cell."""
    sp = normalize_special_projects(value)
    parts = []
    if sp.three_p_email:
        parts.append("3P Email")
    if sp.three_p_backup_email:
        parts.append("3P Backup Email")
    if sp.float:
        parts.append("Float")
    if sp.other.strip():
        parts.append(sp.other.strip())
    parts.extend(str(p) for p in sp.legacy_projects)
    return "/".join(parts)


def _dar_column_name(idx: int, names: tuple) -> str:
    label = f"DAR {idx + 1}"
    return f"{label}\n{'/'.join(names)}" if names else label


def build_schedule_frame(
    employees: List[Employee],
    assignments: Any,
    dar_entities: Optional[Mapping],
    dar_count: int,
    weights: Optional[WorkloadWeights] = None,
) -> pd.DataFrame:
    """
    One row per active employee with DAR columns, other assignments and workload score.

    A DAR cell shows the column's entities only when the employee is assigned
    to it and holds DAR or Float skill.
    """
    assignment_map = normalize_assignment_map(assignments)
    dar_map = normalize_dar_entities(dar_entities)

    rows = []
    for employee in employees:
        if employee.archived:
            continue
        assignment = assignment_map.get(str(employee.id))
        row = {"TEAM MEMBER": employee.name}

        for idx in range(dar_count):
            names = dar_map.get(idx, ())
            assigned = assignment is not None and idx in assignment.dars
            row[_dar_column_name(idx, names)] = "/".join(names) if assigned and can_assign_dar(employee) else ""

        row["CPOE"] = "CPOE" if assignment is not None and assignment.cpoe else ""
        row["New Incoming Items"] = format_entity_list(assignment.new_incoming if assignment else None)
        row["Cross-Training"] = format_entity_list(assignment.cross_training if assignment else None)
        row["Special Projects/Assignments"] = format_special_projects(assignment.special_projects if assignment else None)
        row["Workload Score"] = calculate_workload(assignment, dar_entities, weights)
        rows.append(row)

    columns = (
        ["TEAM MEMBER"]
        + [_dar_column_name(idx, dar_map.get(idx, ())) for idx in range(dar_count)]
        + ["CPOE", "New Incoming Items", "Cross-Training", "Special Projects/Assignments", "Workload Score"]
    )
    return pd.DataFrame(rows, columns=columns)


def build_workload_summary(employees: List[Employee], assignments: Any, avg_workload: float) -> pd.DataFrame:
    """Metric/Value table: average workload, active employees, employees with assignments."""
    return pd.DataFrame(
        [
            {"Metric": "Average Workload", "Value": f"{avg_workload:.1f}"},
            {"Metric": "Total Employees", "Value": sum(1 for e in employees if not e.archived)},
            {"Metric": "Employees with Assignments", "Value": len(normalize_assignment_map(assignments))},
        ]
    )


def export_schedule_csv(
    schedule: Schedule,
    employees: List[Employee],
    csv_path: str | Path,
    weights: Optional[WorkloadWeights] = None,
) -> int:
    """
    Export a schedule grid to CSV.

    Returns:
        Number of employee rows written
    """
    df = build_schedule_frame(employees, schedule.assignments, schedule.dar_entities, schedule.dar_count, weights)
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)} rows for schedule {schedule.name} to {csv_path}")
    return len(df)


def export_workload_summary_csv(
    schedule: Schedule,
    employees: List[Employee],
    avg_workload: float,
    csv_path: str | Path,
) -> int:
    """Export the workload summary table to CSV. Returns number of rows written."""
    df = build_workload_summary(employees, schedule.assignments, avg_workload)
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported workload summary to {csv_path}")
    return len(df)


def summarize_schedule(analysis) -> str:
    """Text report of conflicts, warnings, imbalances and workload per employee."""
    lines = [f"Conflicts: {len(analysis.conflicts)}"]
    lines.extend(f"  [ERROR] {c['message']}" for c in analysis.conflicts)
    lines.append(f"Warnings: {len(analysis.warnings)}")
    lines.extend(f"  [WARN] {w['message']}" for w in analysis.warnings)
    lines.append(f"Imbalances: {len(analysis.imbalances)}")
    lines.extend(f"  [{i['type'].upper()}] {i['message']}" for i in analysis.imbalances)
    lines.append("")

    if not analysis.workload_map:
        lines.append("No active employees.")
        return "\n".join(lines)

    # one row per employee id; names may repeat
    workloads = pd.DataFrame(
        [
            {"employee": data["employee_name"], "workload": data["workload"]}
            for data in analysis.workload_map.values()
        ]
    ).sort_values("workload", ascending=False, kind="stable")
    lines.append(f"Workload per employee (average {analysis.avg_workload:.1f}):")
    lines.append(workloads.to_string(index=False))
    return "\n".join(lines)
