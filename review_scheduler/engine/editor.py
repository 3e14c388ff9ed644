"""ScheduleEditor - one editing session over a schedule's assignment map."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from review_scheduler.config import SchedulerConfig
from review_scheduler.domain.assignment import (
    Assignment,
    AssignmentMap,
    canonical_field,
    normalize_assignment_map,
    normalize_dar_entities,
    normalize_special_projects,
)
from review_scheduler.domain.models import Employee, Entity, Schedule
from review_scheduler.services.availability import (
    get_available_entities_for_assignment,
    get_available_entities_for_dar,
)
from review_scheduler.services.bulk import apply_bulk_assignments
from review_scheduler.services.conflicts import detect_conflicts
from review_scheduler.services.workload import detect_workload_imbalances

from .history import UndoRedoManager


@dataclass
class ScheduleAnalysis:
    conflicts: List[Dict[str, Any]]
    warnings: List[Dict[str, Any]]
    has_issues: bool
    imbalances: List[Dict[str, Any]]
    workload_map: Dict[str, Dict[str, Any]]
    avg_workload: float


def analyze_schedule(
    assignments: Any,
    employees: List[Employee],
    dar_entities: Optional[Mapping] = None,
    cfg: Optional[SchedulerConfig] = None,
) -> ScheduleAnalysis:
    """Run conflict detection and workload analysis over one assignment map."""
    cfg = cfg or SchedulerConfig()
    conflict_result = detect_conflicts(assignments, employees, dar_entities)
    workload_result = detect_workload_imbalances(
        assignments, employees, dar_entities, thresholds=cfg.thresholds, weights=cfg.weights
    )
    return ScheduleAnalysis(
        conflicts=conflict_result["conflicts"],
        warnings=conflict_result["warnings"],
        has_issues=conflict_result["has_issues"],
        imbalances=workload_result["imbalances"],
        workload_map=workload_result["workload_map"],
        avg_workload=workload_result["avg_workload"],
    )


class ScheduleEditor:
    """
    Editing session for one schedule.

    Every mutation goes through the undo history as a whole new assignment
    map; previous snapshots are never modified. DAR column entities are
    session configuration and are not part of the history.
    """

    def __init__(
        self,
        employees: List[Employee],
        entities: List[Entity],
        assignments: Any = None,
        dar_entities: Optional[Mapping] = None,
        cfg: Optional[SchedulerConfig] = None,
    ):
        self.cfg = cfg or SchedulerConfig()
        self.employees = employees
        self.entities = entities
        self.dar_entities = {idx: list(names) for idx, names in normalize_dar_entities(dar_entities).items()}
        self._history: UndoRedoManager[AssignmentMap] = UndoRedoManager(
            normalize_assignment_map(assignments), limit=self.cfg.undo_limit
        )

    @classmethod
    def from_schedule(
        cls,
        schedule: Schedule,
        employees: List[Employee],
        entities: List[Entity],
        cfg: Optional[SchedulerConfig] = None,
    ) -> "ScheduleEditor":
        """Start a session from a stored schedule."""
        return cls(employees, entities, schedule.assignments, schedule.dar_entities, cfg)

    # ---- history -----------------------------------------------------------

    @property
    def state(self) -> AssignmentMap:
        return self._history.get_current_state()

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo()

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo()

    def set_state(self, new_state: Union[Any, Callable[[AssignmentMap], Any]]) -> AssignmentMap:
        """Replace the assignment map; a callable receives the current map."""
        if callable(new_state):
            new_state = new_state(self.state)
        resolved = normalize_assignment_map(new_state)
        self._history.add_change(resolved)
        return resolved

    def undo(self) -> AssignmentMap:
        return self._history.undo()

    def redo(self) -> AssignmentMap:
        return self._history.redo()

    def clear_history(self) -> None:
        self._history.clear()

    # ---- field edits -------------------------------------------------------

    def _update(self, employee_id: str, **changes) -> AssignmentMap:
        def _apply(current: AssignmentMap) -> AssignmentMap:
            updated = dict(current)
            updated[str(employee_id)] = replace(current.get(str(employee_id), Assignment()), **changes)
            return updated
        return self.set_state(_apply)

    def toggle_dar(self, employee_id: str, dar_index: int) -> AssignmentMap:
        """Add the DAR column to the employee, or remove it if already assigned."""
        dars = self.state.get(str(employee_id), Assignment()).dars
        if dar_index in dars:
            dars = tuple(d for d in dars if d != dar_index)
        else:
            dars = dars + (dar_index,)
        return self._update(employee_id, dars=dars)

    def set_cpoe(self, employee_id: str, value: bool) -> AssignmentMap:
        return self._update(employee_id, cpoe=bool(value))

    def set_entities(self, employee_id: str, field: str, names: Iterable[str]) -> AssignmentMap:
        """Replace the employee's new-incoming or cross-training entities."""
        field = canonical_field(field)
        if field not in ("new_incoming", "cross_training"):
            raise ValueError(f"Not an entity field: {field}")
        return self._update(employee_id, **{field: tuple(names)})

    def set_special_projects(self, employee_id: str, special_projects: Any) -> AssignmentMap:
        return self._update(employee_id, special_projects=normalize_special_projects(special_projects))

    def apply_bulk(self, successful: List[Dict[str, Any]]) -> AssignmentMap:
        """Merge validated bulk results as a single undo step; no-op for an empty batch."""
        if not successful:
            return self.state
        return self.set_state(lambda current: apply_bulk_assignments(current, successful))

    def set_dar_entities(self, dar_index: int, names: Iterable[str]) -> None:
        """Attach entities to a DAR column (not tracked in history)."""
        self.dar_entities[dar_index] = list(names)

    # ---- derived views -----------------------------------------------------

    def analyze(self) -> ScheduleAnalysis:
        return analyze_schedule(self.state, self.employees, self.dar_entities, self.cfg)

    def available_entities_for_dar(self, dar_index: int) -> List[Entity]:
        return get_available_entities_for_dar(dar_index, self.dar_entities, self.entities)

    def available_entities_for(self, employee_id: str, field: str) -> List[Entity]:
        return get_available_entities_for_assignment(
            employee_id, field, self.state, self.dar_entities, self.entities
        )
