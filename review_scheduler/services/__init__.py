"""Services for scheduling logic."""

from .availability import get_available_entities_for_assignment, get_available_entities_for_dar
from .bulk import apply_bulk_assignments, validate_bulk_assignment
from .conflicts import can_assign_dar, detect_conflicts
from .workload import calculate_workload, detect_workload_imbalances

__all__ = [
    "get_available_entities_for_assignment",
    "get_available_entities_for_dar",
    "apply_bulk_assignments",
    "validate_bulk_assignment",
    "can_assign_dar",
    "detect_conflicts",
    "calculate_workload",
    "detect_workload_imbalances",
]
