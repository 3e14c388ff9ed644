"""Boundary validation for employee, entity and schedule records.

These checks run where data enters the application (loading a schedule,
saving an employee). The scheduling services downstream assume records that
passed here and only degrade softly on anything else.
"""

from __future__ import annotations

import re
from collections import Counter
from datetime import date
from typing import Any, Dict, List, Mapping

from review_scheduler.domain.models import SKILLS

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
SCHEDULE_STATUSES = ("draft", "published")
MIN_DAR_COUNT = 3
MAX_DAR_COUNT = 8


def _as_dict(record: Any) -> Dict[str, Any]:
    """Plain dict view of a mapping or an ORM row."""
    if isinstance(record, Mapping):
        return dict(record)
    table = getattr(record, "__table__", None)
    if table is not None:
        return {col.name: getattr(record, col.name) for col in table.columns}
    return {}


def _error(field: str, message: str, code: str = "invalid") -> Dict[str, str]:
    return {"field": field, "message": message, "code": code}


def _result(errors: List[Dict[str, str]]) -> Dict[str, Any]:
    return {"valid": not errors, "errors": errors}


def _parse_date(value: Any):
    if isinstance(value, date):
        return value
    if isinstance(value, str) and DATE_RE.match(value):
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None
    return None


def validate_employee(data: Any) -> Dict[str, Any]:
    """Validate an employee record."""
    record = _as_dict(data)
    errors: List[Dict[str, str]] = []

    name = record.get("name")
    if not isinstance(name, str) or not name:
        errors.append(_error("name", "Employee name is required", "required"))
    elif not name.strip():
        errors.append(_error("name", "Employee name cannot be only whitespace"))
    elif len(name) > 100:
        errors.append(_error("name", "Name is too long", "too_long"))

    skills = record.get("skills")
    if not isinstance(skills, (list, tuple)) or len(skills) == 0:
        errors.append(_error("skills", "At least one skill is required", "required"))
    else:
        for i, skill in enumerate(skills):
            if skill not in SKILLS:
                errors.append(_error(f"skills.{i}", f"Skill must be one of: {', '.join(SKILLS)}"))

    if not isinstance(record.get("archived"), bool):
        errors.append(_error("archived", "Archived flag must be a boolean", "invalid_type"))

    email = record.get("email")
    if email not in (None, "") and not (isinstance(email, str) and EMAIL_RE.match(email)):
        errors.append(_error("email", "Invalid email address"))

    return _result(errors)


def validate_entity(data: Any) -> Dict[str, Any]:
    """Validate an entity record."""
    record = _as_dict(data)
    errors: List[Dict[str, str]] = []

    name = record.get("name")
    if not isinstance(name, str) or not name:
        errors.append(_error("name", "Entity name is required", "required"))
    elif len(name) > 200:
        errors.append(_error("name", "Entity name is too long", "too_long"))

    return _result(errors)


def find_duplicate_entity_names(entities: Any) -> List[str]:
    """Entity names used by more than one entity, sorted."""
    if not isinstance(entities, (list, tuple)):
        return []
    counts = Counter(_as_dict(e).get("name") for e in entities)
    return sorted(name for name, count in counts.items() if name is not None and count > 1)


def _validate_assignment(emp_id: str, raw: Any) -> List[Dict[str, str]]:
    prefix = f"assignments.{emp_id}"
    if not isinstance(raw, Mapping):
        return [_error(prefix, "Assignment must be an object", "invalid_type")]

    errors: List[Dict[str, str]] = []
    dars = raw.get("dars")
    if dars is not None and (
        not isinstance(dars, (list, tuple))
        or any(isinstance(d, bool) or not isinstance(d, int) for d in dars)
    ):
        errors.append(_error(f"{prefix}.dars", "DAR assignments must be a list of column numbers", "invalid_type"))

    cpoe = raw.get("cpoe")
    if cpoe is not None and not isinstance(cpoe, bool):
        errors.append(_error(f"{prefix}.cpoe", "CPOE must be a boolean", "invalid_type"))

    for key in ("new_incoming", "newIncoming", "cross_training", "crossTraining"):
        value = raw.get(key)
        if value is not None and (
            not isinstance(value, (list, tuple)) or any(not isinstance(v, str) for v in value)
        ):
            errors.append(_error(f"{prefix}.{key}", "Entity assignments must be a list of names", "invalid_type"))

    sp = raw.get("special_projects", raw.get("specialProjects"))
    if sp is not None and not isinstance(sp, (Mapping, list, tuple, str)):
        errors.append(_error(f"{prefix}.special_projects", "Special projects must be an object, list or string", "invalid_type"))
    elif isinstance(sp, Mapping):
        other = sp.get("other")
        if other is not None and not isinstance(other, str):
            errors.append(_error(f"{prefix}.special_projects.other", "Other project must be text", "invalid_type"))

    return errors


def validate_schedule(data: Any) -> Dict[str, Any]:
    """Validate a schedule record including its assignments and DAR configuration."""
    record = _as_dict(data)
    errors: List[Dict[str, str]] = []

    name = record.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append(_error("name", "Schedule name is required", "required"))

    start = _parse_date(record.get("start_date"))
    end = _parse_date(record.get("end_date"))
    if start is None:
        errors.append(_error("start_date", "Invalid date format (expected YYYY-MM-DD)"))
    if end is None:
        errors.append(_error("end_date", "Invalid date format (expected YYYY-MM-DD)"))
    if start is not None and end is not None and end < start:
        errors.append(_error("end_date", "End date must be on or after start date"))

    if record.get("status") not in SCHEDULE_STATUSES:
        errors.append(_error("status", 'Status must be either "draft" or "published"'))

    dar_count = record.get("dar_count")
    if isinstance(dar_count, bool) or not isinstance(dar_count, int):
        errors.append(_error("dar_count", "DAR count must be a number", "invalid_type"))
    elif dar_count < MIN_DAR_COUNT:
        errors.append(_error("dar_count", f"Must have at least {MIN_DAR_COUNT} DAR columns", "too_small"))
    elif dar_count > MAX_DAR_COUNT:
        errors.append(_error("dar_count", f"Cannot have more than {MAX_DAR_COUNT} DAR columns", "too_big"))

    assignments = record.get("assignments")
    if not isinstance(assignments, Mapping):
        errors.append(_error("assignments", "Assignments must be an object", "invalid_type"))
    else:
        for emp_id, raw in assignments.items():
            errors.extend(_validate_assignment(str(emp_id), raw))

    dar_entities = record.get("dar_entities")
    if not isinstance(dar_entities, Mapping):
        errors.append(_error("dar_entities", "DAR entities must be an object", "invalid_type"))
    else:
        for idx, names in dar_entities.items():
            if not isinstance(names, (list, tuple)) or any(not isinstance(n, str) for n in names):
                errors.append(_error(f"dar_entities.{idx}", "DAR entities must be a list of names", "invalid_type"))

    return _result(errors)


def validate_or_raise(result: Dict[str, Any]) -> None:
    """
    Raise if a validation result is not valid.

    Raises:
        ValueError: With every error message joined
    """
    if result["valid"]:
        return
    messages = "; ".join(f"{err['field']}: {err['message']}" for err in result["errors"])
    raise ValueError(f"Validation failed: {messages}")
