"""Skill-mismatch conflicts and assignment-load warnings for a schedule."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from review_scheduler.domain.assignment import ENTITY_FIELDS, normalize_assignment_map
from review_scheduler.domain.models import Employee
from review_scheduler.domain.records import record_field, record_has_any_skill

# Skills that qualify an employee for a DAR column in the grid
DAR_QUALIFYING_SKILLS = ("DAR", "Float")


def can_assign_dar(employee: Optional[Employee]) -> bool:
    """True if the employee holds DAR or Float skill."""
    if employee is None:
        return False
    return record_has_any_skill(employee, *DAR_QUALIFYING_SKILLS)


def detect_conflicts(
    assignments: Any,
    employees: Any,
    dar_entities: Optional[Mapping] = None,
) -> Dict[str, Any]:
    """
    Detect all conflicts and warnings in a schedule.

    Per employee, in this order:
    1. skill_mismatch conflict for every DAR column without DAR/Float skill
    2. multiple_dars warning when assigned to more than one DAR column
    3. skill_mismatch conflict for CPOE without CPOE skill
    4. multiple_entities warning when new-incoming plus cross-training
       entities number more than one

    Assignments for employee ids not in ``employees`` are skipped.

    Returns:
        Dict with conflicts, warnings and has_issues
    """
    conflicts: List[Dict[str, Any]] = []
    warnings: List[Dict[str, Any]] = []

    if not isinstance(employees, (list, tuple)):
        return {"conflicts": conflicts, "warnings": warnings, "has_issues": False}

    employee_map = {
        str(record_field(emp, "id")): emp for emp in employees if emp is not None and record_field(emp, "id")
    }

    for employee_id, assignment in normalize_assignment_map(assignments).items():
        employee = employee_map.get(employee_id)
        if employee is None:
            continue
        name = record_field(employee, "name")

        for dar_index in assignment.dars:
            if not can_assign_dar(employee):
                conflicts.append({
                    "type": "skill_mismatch",
                    "severity": "error",
                    "employee_id": employee_id,
                    "employee_name": name,
                    "field": "dars",
                    "dar_index": dar_index,
                    "message": f"{name} is assigned to DAR {dar_index + 1} but lacks DAR or Float skill",
                })

        if len(assignment.dars) > 1:
            warnings.append({
                "type": "multiple_dars",
                "severity": "warning",
                "employee_id": employee_id,
                "employee_name": name,
                "field": "dars",
                "count": len(assignment.dars),
                "message": f"{name} is assigned to {len(assignment.dars)} DAR columns",
            })

        if assignment.cpoe and not record_has_any_skill(employee, "CPOE"):
            conflicts.append({
                "type": "skill_mismatch",
                "severity": "error",
                "employee_id": employee_id,
                "employee_name": name,
                "field": "cpoe",
                "message": f"{name} is assigned to CPOE but lacks CPOE skill",
            })

        assigned_entities = [
            {"field": field, "entity": entity}
            for field in ENTITY_FIELDS
            for entity in assignment.entities_for(field)
            if entity
        ]
        if len(assigned_entities) > 1:
            warnings.append({
                "type": "multiple_entities",
                "severity": "warning",
                "employee_id": employee_id,
                "employee_name": name,
                "count": len(assigned_entities),
                "entities": assigned_entities,
                "message": f"{name} is assigned to {len(assigned_entities)} different entities",
            })

    return {
        "conflicts": conflicts,
        "warnings": warnings,
        "has_issues": bool(conflicts or warnings),
    }
