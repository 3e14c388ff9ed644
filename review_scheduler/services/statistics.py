"""Assignment statistics across schedules (CPOE load, entity coverage, special projects)."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, List, Sequence, Tuple

from review_scheduler.domain.assignment import ENTITY_FIELDS, canonical_field, normalize_assignment_map
from review_scheduler.domain.models import Employee, Entity, Schedule
from review_scheduler.domain.records import record_field

TREND_THRESHOLD = 0.1


def _names_by_id(employees: Sequence[Employee]) -> Dict[str, str]:
    return {str(record_field(e, "id")): record_field(e, "name") for e in employees if e is not None}


def calculate_trend(timeline: List[Tuple[Any, float]]) -> str:
    """
    Classify a (date, count) series as increasing, decreasing or stable.

    Compares the mean of the first half of the series with the second half.
    """
    if len(timeline) < 2:
        return "stable"

    ordered = sorted(timeline, key=lambda item: item[0])
    midpoint = len(ordered) // 2
    first_half = [count for _, count in ordered[:midpoint]]
    second_half = [count for _, count in ordered[midpoint:]]

    diff = sum(second_half) / len(second_half) - sum(first_half) / len(first_half)
    if diff > TREND_THRESHOLD:
        return "increasing"
    if diff < -TREND_THRESHOLD:
        return "decreasing"
    return "stable"


def calculate_cpoe_stats(schedules: Any, employees: Any) -> Dict[str, Any]:
    """
    Count CPOE assignments per employee across schedules.

    Returns:
        Dict with total_count, employee_breakdown (most CPOE first) and trend
    """
    if not isinstance(schedules, (list, tuple)) or not isinstance(employees, (list, tuple)):
        return {"total_count": 0, "employee_breakdown": [], "trend": "stable"}

    names = _names_by_id(employees)
    per_employee: Dict[str, Dict[str, Any]] = {}
    timeline: List[Tuple[Any, int]] = []

    for schedule in schedules:
        schedule_count = 0
        for emp_id, assignment in normalize_assignment_map(schedule.assignments).items():
            if not assignment.cpoe:
                continue
            schedule_count += 1
            data = per_employee.setdefault(emp_id, {"employee_id": emp_id, "count": 0, "schedules": []})
            data["count"] += 1
            data["schedules"].append(schedule.id)
        if schedule.start_date:
            timeline.append((schedule.start_date, schedule_count))

    breakdown = sorted(
        ({**data, "employee_name": names.get(emp_id, "Unknown Employee")} for emp_id, data in per_employee.items()),
        key=lambda d: d["count"],
        reverse=True,
    )
    return {
        "total_count": sum(d["count"] for d in breakdown),
        "employee_breakdown": breakdown,
        "trend": calculate_trend(timeline),
    }


def calculate_entity_stats(
    schedules: Any,
    entities: Any,
    employees: Any,
    assignment_type: str,
) -> List[Dict[str, Any]]:
    """
    Per-entity assignment history for new-incoming or cross-training work.

    Entities that appear in history but are no longer configured are
    reported with ``entity_id=None``. Assigned entities come first by
    total assignments, never-assigned entities last.
    """
    if not all(isinstance(x, (list, tuple)) for x in (schedules, entities, employees)):
        return []

    field = canonical_field(assignment_type)
    names = _names_by_id(employees)
    entity_map: Dict[str, Dict[str, Any]] = {
        record_field(entity, "name"): {
            "entity_id": record_field(entity, "id"),
            "entity_name": record_field(entity, "name"),
            "total_assignments": 0,
            "employees": {},
            "never_assigned": True,
        }
        for entity in entities
    }

    # unknown fields have no history
    history = schedules if field in ENTITY_FIELDS else []
    for schedule in history:
        for emp_id, assignment in normalize_assignment_map(schedule.assignments).items():
            for entity_name in assignment.entities_for(field):
                data = entity_map.setdefault(entity_name, {
                    "entity_id": None,
                    "entity_name": entity_name,
                    "total_assignments": 0,
                    "employees": {},
                    "never_assigned": False,
                })
                data["total_assignments"] += 1
                data["never_assigned"] = False

                emp = data["employees"].setdefault(emp_id, {"employee_id": emp_id, "count": 0, "last_assigned": None})
                emp["count"] += 1
                if schedule.start_date and (emp["last_assigned"] is None or schedule.start_date > emp["last_assigned"]):
                    emp["last_assigned"] = schedule.start_date

    results = []
    for data in entity_map.values():
        employee_list = sorted(
            ({**emp, "employee_name": names.get(emp_id, "Unknown Employee")} for emp_id, emp in data["employees"].items()),
            key=lambda e: e["count"],
            reverse=True,
        )
        results.append({**data, "employees": employee_list})

    return sorted(results, key=lambda d: (d["never_assigned"], -d["total_assignments"]))


def calculate_special_project_stats(schedules: Any, employees: Any) -> Dict[str, Dict[str, Any]]:
    """Counts and employee names per special-project kind; legacy list/string projects count as other."""
    if not isinstance(schedules, (list, tuple)) or not isinstance(employees, (list, tuple)):
        return {
            "three_p_email": {"count": 0, "employees": []},
            "three_p_backup_email": {"count": 0, "employees": []},
            "float": {"count": 0, "employees": []},
            "other": {"count": 0, "projects": [], "employees": []},
        }

    counts: Dict[str, int] = defaultdict(int)
    employee_ids: Dict[str, List[str]] = defaultdict(list)
    projects: List[str] = []

    def _record(kind: str, emp_id: str) -> None:
        counts[kind] += 1
        if emp_id not in employee_ids[kind]:
            employee_ids[kind].append(emp_id)

    for schedule in schedules:
        for emp_id, assignment in normalize_assignment_map(schedule.assignments).items():
            sp = assignment.special_projects
            if sp.three_p_email:
                _record("three_p_email", emp_id)
            if sp.three_p_backup_email:
                _record("three_p_backup_email", emp_id)
            if sp.float:
                _record("float", emp_id)
            for project in ((sp.other,) if sp.other else ()) + sp.legacy_projects:
                _record("other", emp_id)
                if project not in projects:
                    projects.append(project)

    names = _names_by_id(employees)

    def _summary(kind: str) -> Dict[str, Any]:
        return {
            "count": counts[kind],
            "employees": [names.get(emp_id, "Unknown") for emp_id in employee_ids[kind]],
        }

    other = _summary("other")
    other["projects"] = projects
    return {
        "three_p_email": _summary("three_p_email"),
        "three_p_backup_email": _summary("three_p_backup_email"),
        "float": _summary("float"),
        "other": other,
    }


def get_last_entity_assignments(
    schedules: List[Schedule],
    employees: List[Employee],
    entities: List[Entity],
) -> Dict[str, Dict[str, Any]]:
    """
    Most recent published assignment of each configured entity.

    Returns:
        entity name -> {employee_name, employee_id, schedule_name, start_date,
        assignment_type}; all None for entities never assigned
    """
    if not all(isinstance(x, (list, tuple)) for x in (schedules, employees, entities)):
        return {}

    result: Dict[str, Dict[str, Any]] = {
        record_field(entity, "name"): {
            "employee_name": None,
            "employee_id": None,
            "schedule_name": None,
            "start_date": None,
            "assignment_type": None,
        }
        for entity in entities
    }
    names = _names_by_id(employees)

    published = sorted(
        (s for s in schedules if s.status == "published" and s.start_date),
        key=lambda s: s.start_date,
        reverse=True,
    )
    for schedule in published:
        for emp_id, assignment in normalize_assignment_map(schedule.assignments).items():
            if emp_id not in names:
                continue
            for field in ENTITY_FIELDS:
                for entity_name in assignment.entities_for(field):
                    slot = result.get(entity_name)
                    if slot is None or slot["employee_name"] is not None:
                        continue
                    result[entity_name] = {
                        "employee_name": names[emp_id],
                        "employee_id": emp_id,
                        "schedule_name": schedule.name,
                        "start_date": schedule.start_date,
                        "assignment_type": field,
                    }

    return result


def get_entity_assignment_frequency(
    schedules: Any,
    employees: Any,
    entities: Any,
) -> Dict[str, Dict[str, Any]]:
    """
    How often each configured entity was assigned across published schedules.

    Both new-incoming and cross-training count. Assignments of employees
    missing from ``employees`` and names that are not configured entities
    are ignored.

    Returns:
        entity name -> {total_assignments, employee_assignments: {employee_id: count}}
    """
    if not all(isinstance(x, (list, tuple)) for x in (schedules, employees, entities)):
        return {}

    frequency: Dict[str, Dict[str, Any]] = {
        record_field(entity, "name"): {"total_assignments": 0, "employee_assignments": {}} for entity in entities
    }
    names = _names_by_id(employees)

    for schedule in schedules:
        if schedule.status != "published":
            continue
        for emp_id, assignment in normalize_assignment_map(schedule.assignments).items():
            if emp_id not in names:
                continue
            for field in ENTITY_FIELDS:
                for entity_name in assignment.entities_for(field):
                    data = frequency.get(entity_name)
                    if data is None:
                        continue
                    data["total_assignments"] += 1
                    data["employee_assignments"][emp_id] = data["employee_assignments"].get(emp_id, 0) + 1

    return frequency
