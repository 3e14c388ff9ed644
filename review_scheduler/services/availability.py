"""Entity availability for DAR columns and employee entity fields.

An entity already consumed elsewhere in the schedule is not offered again.
Entities are matched by name, not id.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Set

from review_scheduler.domain.assignment import ENTITY_FIELDS, canonical_field, normalize_assignment_map, normalize_dar_entities
from review_scheduler.domain.models import Entity
from review_scheduler.domain.records import record_field


def _filter_entities(entities: Any, excluded: Set[str]) -> List[Entity]:
    if not isinstance(entities, (list, tuple)):
        return []
    return [e for e in entities if record_field(e, "name") not in excluded]


def get_available_entities_for_dar(
    dar_index: int,
    dar_entities: Optional[Mapping],
    entities: Any,
) -> List[Entity]:
    """
    Entities that may still be attached to a DAR column.

    Entities on every *other* column are excluded; those already on
    ``dar_index`` stay available so the column can be edited in place.

    Returns:
        Filtered entities in input order ([] if entities is not a list)
    """
    excluded: Set[str] = set()
    for idx, names in normalize_dar_entities(dar_entities).items():
        if idx != dar_index:
            excluded.update(names)
    return _filter_entities(entities, excluded)


def get_available_entities_for_assignment(
    employee_id: str,
    field: str,
    assignments: Any,
    dar_entities: Optional[Mapping],
    entities: Any,
) -> List[Entity]:
    """
    Entities that may be chosen for one employee's new-incoming or cross-training field.

    Excluded:
    - every entity on any DAR column
    - every new-incoming/cross-training entity of other employees
    - the same employee's entities in the *other* field (selections in
      ``field`` itself stay available)

    Returns:
        Filtered entities in input order ([] if entities is not a list)
    """
    field = canonical_field(field)
    excluded: Set[str] = set()

    for names in normalize_dar_entities(dar_entities).values():
        excluded.update(names)

    for emp_id, assignment in normalize_assignment_map(assignments).items():
        for f in ENTITY_FIELDS:
            if emp_id == str(employee_id) and f == field:
                continue
            excluded.update(assignment.entities_for(f))

    return _filter_entities(entities, excluded)
