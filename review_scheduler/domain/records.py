"""Field access that works on ORM rows and plain dict records alike."""

from __future__ import annotations

from typing import Any, Mapping


def record_field(record: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping key or an object attribute."""
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def record_has_any_skill(record: Any, *skills: str) -> bool:
    """True if an employee record holds at least one of the given skills."""
    own = record_field(record, "skills") or []
    return any(skill in own for skill in skills)
