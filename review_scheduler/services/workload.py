"""Workload scoring and imbalance detection."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional

from review_scheduler.config import ImbalanceThresholds, WorkloadWeights
from review_scheduler.domain.assignment import normalize_assignment, normalize_assignment_map
from review_scheduler.domain.records import record_field


def calculate_workload(
    assignment: Any,
    dar_entities: Optional[Mapping] = None,
    weights: Optional[WorkloadWeights] = None,
) -> int:
    """
    Calculate the workload score for one employee's assignment.

    Scoring (default weights):
        3 per DAR column, 2 for CPOE, 2 per new-incoming entity,
        1 per cross-training entity, 1 if any special project is assigned.

    Args:
        assignment: Assignment or stored assignment record (None scores 0)
        dar_entities: DAR column configuration; accepted but not used in scoring
        weights: Point values (defaults to WorkloadWeights())

    Returns:
        Non-negative workload score
    """
    if not assignment:
        return 0
    w = weights or WorkloadWeights()
    a = normalize_assignment(assignment)

    workload = len(a.dars) * w.dar
    if a.cpoe:
        workload += w.cpoe
    workload += len(a.new_incoming) * w.new_incoming
    workload += len(a.cross_training) * w.cross_training
    if a.special_projects.is_assigned:
        workload += w.special_projects

    return workload


def _percent(ratio: float) -> int:
    # halves round up, not to even
    return math.floor(ratio * 100 + 0.5)


def detect_workload_imbalances(
    assignments: Any,
    employees: Any,
    dar_entities: Optional[Mapping] = None,
    thresholds: Optional[ImbalanceThresholds] = None,
    weights: Optional[WorkloadWeights] = None,
) -> Dict[str, Any]:
    """
    Compute workload per active employee and flag over/under-loaded staff.

    An employee is overloaded above ``overloaded_ratio`` times the average and
    underloaded below ``underloaded_ratio`` times the average. Employees with
    zero workload are never flagged as underloaded, and nothing is flagged
    when the average is zero.

    Returns:
        Dict with:
        - imbalances: List of imbalance records
        - workload_map: employee_id -> {employee_id, employee_name, workload, assignment}
        - avg_workload: mean workload over non-archived employees (0 if none)
    """
    t = thresholds or ImbalanceThresholds()
    workload_map: Dict[str, Dict[str, Any]] = {}

    if not isinstance(employees, (list, tuple)):
        return {"imbalances": [], "workload_map": workload_map, "avg_workload": 0}

    assignment_map = normalize_assignment_map(assignments)

    total_workload = 0
    for employee in employees:
        if employee is None or record_field(employee, "archived"):
            continue
        employee_id = record_field(employee, "id")
        assignment = assignment_map.get(str(employee_id))
        workload = calculate_workload(assignment, dar_entities, weights)
        workload_map[employee_id] = {
            "employee_id": employee_id,
            "employee_name": record_field(employee, "name"),
            "workload": workload,
            "assignment": normalize_assignment(assignment),
        }
        total_workload += workload

    avg_workload = total_workload / len(workload_map) if workload_map else 0

    imbalances: List[Dict[str, Any]] = []
    if avg_workload > 0:
        for employee_id, data in workload_map.items():
            ratio = data["workload"] / avg_workload
            if ratio > t.overloaded_ratio:
                kind, severity = "overloaded", "warning"
            elif ratio < t.underloaded_ratio and data["workload"] > 0:
                kind, severity = "underloaded", "info"
            else:
                continue
            imbalances.append({
                "type": kind,
                "severity": severity,
                "employee_id": employee_id,
                "employee_name": data["employee_name"],
                "workload": data["workload"],
                "avg_workload": avg_workload,
                "ratio": ratio,
                "message": (
                    f"{data['employee_name']} has {_percent(ratio)}% of average workload ({kind})"
                ),
            })

    return {
        "imbalances": imbalances,
        "workload_map": workload_map,
        "avg_workload": avg_workload,
    }
