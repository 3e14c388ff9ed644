"""Domain models and data access layer."""

from .assignment import (
    Assignment,
    AssignmentMap,
    SpecialProjects,
    has_special_projects,
    normalize_assignment,
    normalize_assignment_map,
    normalize_dar_entities,
    normalize_special_projects,
)
from .models import Base, Employee, Entity, Schedule, SKILLS
from .repositories import EmployeeRepository, EntityRepository, ScheduleRepository

__all__ = [
    "Assignment",
    "AssignmentMap",
    "SpecialProjects",
    "has_special_projects",
    "normalize_assignment",
    "normalize_assignment_map",
    "normalize_dar_entities",
    "normalize_special_projects",
    "Base",
    "Employee",
    "Entity",
    "Schedule",
    "SKILLS",
    "EmployeeRepository",
    "EntityRepository",
    "ScheduleRepository",
]
