"""In-memory assignment types and boundary normalization.

Stored schedules carry assignment records in several historical shapes:
camelCase or snake_case keys, entity fields as a list or a single string,
and ``specialProjects`` as an object, a list of strings, a plain string or
nothing. Everything is converted to the canonical dataclasses below before
any scoring, conflict or availability logic looks at it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Tuple

ENTITY_FIELDS = ("new_incoming", "cross_training")

# Accepted spellings for each canonical field, checked in order
_FIELD_ALIASES = {
    "dars": ("dars",),
    "cpoe": ("cpoe",),
    "new_incoming": ("new_incoming", "newIncoming"),
    "cross_training": ("cross_training", "crossTraining"),
    "special_projects": ("special_projects", "specialProjects"),
}

_SPECIAL_PROJECT_ALIASES = {
    "three_p_email": ("three_p_email", "threePEmail"),
    "three_p_backup_email": ("three_p_backup_email", "threePBackupEmail"),
    "float": ("float",),
    "other": ("other",),
}


@dataclass(frozen=True)
class SpecialProjects:
    """Canonical special-projects record.

    ``legacy_projects`` holds the entries of the older list/string shapes so
    that their "assigned" semantics survive normalization unchanged.
    """

    three_p_email: bool = False
    three_p_backup_email: bool = False
    float: bool = False
    other: str = ""
    legacy_projects: Tuple[str, ...] = ()

    @property
    def is_assigned(self) -> bool:
        if self.three_p_email or self.three_p_backup_email or self.float:
            return True
        if self.other.strip():
            return True
        return len(self.legacy_projects) > 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "three_p_email": self.three_p_email,
            "three_p_backup_email": self.three_p_backup_email,
            "float": self.float,
            "other": self.other,
        }
        if self.legacy_projects:
            data["legacy_projects"] = list(self.legacy_projects)
        return data


@dataclass(frozen=True)
class Assignment:
    """One employee's assignments for a schedule period."""

    dars: Tuple[int, ...] = ()
    cpoe: bool = False
    new_incoming: Tuple[str, ...] = ()
    cross_training: Tuple[str, ...] = ()
    special_projects: SpecialProjects = field(default_factory=SpecialProjects)

    def entities_for(self, field_name: str) -> Tuple[str, ...]:
        if field_name == "new_incoming":
            return self.new_incoming
        if field_name == "cross_training":
            return self.cross_training
        raise ValueError(f"Unknown entity field: {field_name}")

    def is_empty(self) -> bool:
        return not (
            self.dars
            or self.cpoe
            or self.new_incoming
            or self.cross_training
            or self.special_projects.is_assigned
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dars": list(self.dars),
            "cpoe": self.cpoe,
            "new_incoming": list(self.new_incoming),
            "cross_training": list(self.cross_training),
            "special_projects": self.special_projects.to_dict(),
        }


# AssignmentMap: employee id -> Assignment
AssignmentMap = Dict[str, Assignment]


def canonical_field(name: str) -> str:
    """Map a stored field spelling (e.g. ``newIncoming``) to its canonical name."""
    for canonical, aliases in _FIELD_ALIASES.items():
        if name in aliases:
            return canonical
    return name


def _lookup(raw: Mapping[str, Any], aliases: Iterable[str], default=None):
    for key in aliases:
        if key in raw:
            return raw[key]
    return default


def normalize_special_projects(value: Any) -> SpecialProjects:
    """
    Convert any stored special-projects shape to a SpecialProjects record.

    - object/mapping: boolean flags plus ``other`` (non-string ``other`` is dropped)
    - list: every entry kept as a legacy project
    - string: kept as a single legacy project when non-blank
    - None or anything else: empty record
    """
    if isinstance(value, SpecialProjects):
        return value
    if isinstance(value, Mapping):
        other = _lookup(value, _SPECIAL_PROJECT_ALIASES["other"], "")
        legacy = value.get("legacy_projects") or ()
        return SpecialProjects(
            three_p_email=bool(_lookup(value, _SPECIAL_PROJECT_ALIASES["three_p_email"], False)),
            three_p_backup_email=bool(_lookup(value, _SPECIAL_PROJECT_ALIASES["three_p_backup_email"], False)),
            float=bool(_lookup(value, _SPECIAL_PROJECT_ALIASES["float"], False)),
            other=other if isinstance(other, str) else "",
            legacy_projects=tuple(legacy) if isinstance(legacy, (list, tuple)) else (),
        )
    if isinstance(value, (list, tuple)):
        return SpecialProjects(legacy_projects=tuple(value))
    if isinstance(value, str) and value.strip():
        return SpecialProjects(legacy_projects=(value,))
    return SpecialProjects()


def has_special_projects(value: Any) -> bool:
    """True if a special-projects value, in any stored shape, counts as assigned."""
    return normalize_special_projects(value).is_assigned


def _normalize_entity_list(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    # legacy single-value form
    return (value,) if value else ()


def _normalize_dars(value: Any) -> Tuple[int, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    seen = []
    for item in value:
        if isinstance(item, bool):
            continue
        if isinstance(item, int):
            idx = item
        elif isinstance(item, str) and item.strip().isdigit():
            idx = int(item)
        else:
            continue
        if idx not in seen:
            seen.append(idx)
    return tuple(seen)


def normalize_assignment(raw: Any) -> Assignment:
    """Build an Assignment from a stored record; None or junk gives an empty one."""
    if isinstance(raw, Assignment):
        return raw
    if not isinstance(raw, Mapping):
        return Assignment()
    return Assignment(
        dars=_normalize_dars(_lookup(raw, _FIELD_ALIASES["dars"])),
        cpoe=bool(_lookup(raw, _FIELD_ALIASES["cpoe"], False)),
        new_incoming=_normalize_entity_list(_lookup(raw, _FIELD_ALIASES["new_incoming"])),
        cross_training=_normalize_entity_list(_lookup(raw, _FIELD_ALIASES["cross_training"])),
        special_projects=normalize_special_projects(_lookup(raw, _FIELD_ALIASES["special_projects"])),
    )


def normalize_assignment_map(raw: Any) -> AssignmentMap:
    """Normalize a whole employee-id -> assignment mapping, preserving key order."""
    if not isinstance(raw, Mapping):
        return {}
    return {str(emp_id): normalize_assignment(value) for emp_id, value in raw.items()}


def serialize_assignment_map(assignments: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Plain-dict form of an assignment map, suitable for a JSON column."""
    return {emp_id: a.to_dict() for emp_id, a in normalize_assignment_map(assignments).items()}


def normalize_dar_entities(raw: Any) -> Dict[int, Tuple[str, ...]]:
    """
    Normalize DAR column configuration to ``{column index: entity names}``.

    Keys may be ints or numeric strings (JSON round-trips turn them into
    strings); non-numeric keys are dropped. A single string value is treated
    as a one-entity list.
    """
    if not isinstance(raw, Mapping):
        return {}
    result: Dict[int, Tuple[str, ...]] = {}
    for key, value in raw.items():
        try:
            idx = int(key)
        except (TypeError, ValueError):
            continue
        result[idx] = _normalize_entity_list(value)
    return result
