"""Bulk assignment: per-employee validation preview and merge into the assignment map."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Sequence

from review_scheduler.domain.assignment import (
    AssignmentMap,
    SpecialProjects,
    canonical_field,
    normalize_assignment,
    normalize_assignment_map,
)
from review_scheduler.domain.models import Employee
from review_scheduler.domain.records import record_field, record_has_any_skill

ASSIGNMENT_TYPES = ("dar", "cpoe", "new_incoming", "cross_training", "special_projects")

# NOTE: bulk DAR eligibility accepts Trace where the grid's conflict check
# accepts Float (see services.conflicts.DAR_QUALIFYING_SKILLS). Both are kept.
BULK_DAR_SKILLS = ("DAR", "Trace")


def _check_employee(employee: Employee, assignment_type: str, selected_entities: Sequence[str]) -> str:
    """Return the failure reason for one employee, or "" if the assignment is allowed."""
    if assignment_type not in ASSIGNMENT_TYPES:
        return "Invalid assignment type"
    if assignment_type == "dar":
        if record_has_any_skill(employee, *BULK_DAR_SKILLS):
            return ""
        return "Employee does not have DAR/Trace skill"
    if assignment_type == "cpoe":
        if record_has_any_skill(employee, "CPOE"):
            return ""
        return "Employee does not have CPOE skill"
    # entity-bearing types: the entity choice is shared by the whole batch
    return "" if len(selected_entities) > 0 else "No entities selected"


def validate_bulk_assignment(
    selected_employees: Iterable[str],
    employees: Any,
    assignment_type: str,
    dar_index: Optional[int] = 0,
    selected_entities: Optional[Sequence[str]] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Validate a bulk assignment for each selected employee independently.

    Args:
        selected_employees: Employee ids chosen in the grid
        employees: All employees
        assignment_type: dar, cpoe, new_incoming, cross_training or special_projects
            (camelCase spellings such as ``newIncoming`` are accepted)
        dar_index: Target DAR column for ``dar``
        selected_entities: Entity names for the entity-bearing types

    Returns:
        Dict with:
        - successful: [{employee_id, employee_name, type, dar_index, entities}]
        - failed: [{employee_id, employee_name, reason}]
        Every selected id appears in exactly one list; ids not found in
        ``employees`` fail with "Employee not found".
    """
    assignment_type = canonical_field(assignment_type)
    entities = list(selected_entities or [])
    selected = list(dict.fromkeys(str(emp_id) for emp_id in selected_employees))
    selected_set = set(selected)

    results: Dict[str, List[Dict[str, Any]]] = {"successful": [], "failed": []}
    known = set()

    if isinstance(employees, (list, tuple)):
        for employee in employees:
            if employee is None:
                continue
            emp_id = record_field(employee, "id")
            emp_name = record_field(employee, "name")
            if str(emp_id) not in selected_set or str(emp_id) in known:
                continue
            known.add(str(emp_id))

            reason = _check_employee(employee, assignment_type, entities)
            if reason:
                results["failed"].append({
                    "employee_id": emp_id,
                    "employee_name": emp_name,
                    "reason": reason,
                })
            else:
                results["successful"].append({
                    "employee_id": emp_id,
                    "employee_name": emp_name,
                    "type": assignment_type,
                    "dar_index": dar_index if assignment_type == "dar" else None,
                    "entities": list(entities),
                })

    for emp_id in selected:
        if emp_id not in known:
            results["failed"].append({
                "employee_id": emp_id,
                "employee_name": None,
                "reason": "Employee not found",
            })

    return results


def apply_bulk_assignments(assignments: Any, successful: Iterable[Dict[str, Any]]) -> AssignmentMap:
    """
    Merge validated bulk results into a copy of the assignment map.

    - dar: add the column to the employee's DARs if not already there
    - cpoe: set the flag
    - new_incoming / cross_training / special_projects: replace the field
      with the batch's entity list

    The input map is not modified.
    """
    merged = dict(normalize_assignment_map(assignments))

    for result in successful:
        emp_id = str(result["employee_id"])
        kind = canonical_field(result["type"])
        current = normalize_assignment(merged.get(emp_id))
        entities = tuple(result.get("entities") or ())

        if kind == "dar":
            dar_index = result.get("dar_index")
            if dar_index is None or dar_index in current.dars:
                continue
            updated = replace(current, dars=current.dars + (int(dar_index),))
        elif kind == "cpoe":
            updated = replace(current, cpoe=True)
        elif kind == "new_incoming":
            updated = replace(current, new_incoming=entities)
        elif kind == "cross_training":
            updated = replace(current, cross_training=entities)
        elif kind == "special_projects":
            updated = replace(current, special_projects=SpecialProjects(legacy_projects=entities))
        else:
            raise ValueError(f"Unknown bulk assignment type: {result['type']}")

        merged[emp_id] = updated

    return merged
