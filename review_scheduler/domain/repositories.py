"""Repository classes for data access."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from .assignment import normalize_dar_entities, serialize_assignment_map
from .models import Employee, Entity, Schedule


class EmployeeRepository:
    """Repository for employee data access."""

    @staticmethod
    def get_all(session: Session) -> List[Employee]:
        """Get all employees, archived included."""
        return session.query(Employee).order_by(Employee.name).all()

    @staticmethod
    def get_active(session: Session) -> List[Employee]:
        """Get employees that are not archived."""
        return (
            session.query(Employee)
            .filter(Employee.archived.is_(False))
            .order_by(Employee.name)
            .all()
        )

    @staticmethod
    def get_by_id(session: Session, employee_id: str) -> Optional[Employee]:
        """Get employee by ID."""
        return session.query(Employee).filter(Employee.id == employee_id).first()

    @staticmethod
    def create(session: Session, employee: Employee) -> Employee:
        """Create a new employee."""
        session.add(employee)
        session.commit()
        session.refresh(employee)
        return employee

    @staticmethod
    def bulk_create(session: Session, employees: List[Employee]) -> None:
        """Create multiple employees."""
        session.add_all(employees)
        session.commit()

    @staticmethod
    def archive(session: Session, employee: Employee) -> Employee:
        """Archive an employee; archived staff drop out of workload analysis."""
        employee.archived = True
        session.commit()
        return employee


class EntityRepository:
    """Repository for entity data access."""

    @staticmethod
    def get_all(session: Session) -> List[Entity]:
        """Get all entities ordered by name."""
        return session.query(Entity).order_by(Entity.name).all()

    @staticmethod
    def get_by_id(session: Session, entity_id: str) -> Optional[Entity]:
        """Get entity by ID."""
        return session.query(Entity).filter(Entity.id == entity_id).first()

    @staticmethod
    def get_by_name(session: Session, name: str) -> Optional[Entity]:
        """Get entity by its unique name."""
        return session.query(Entity).filter(Entity.name == name).first()

    @staticmethod
    def create(session: Session, entity: Entity) -> Entity:
        """Create a new entity."""
        session.add(entity)
        session.commit()
        session.refresh(entity)
        return entity

    @staticmethod
    def bulk_create(session: Session, entities: List[Entity]) -> None:
        """Create multiple entities."""
        session.add_all(entities)
        session.commit()


class ScheduleRepository:
    """Repository for schedule data access."""

    @staticmethod
    def get_all(session: Session) -> List[Schedule]:
        """Get all schedules, most recent first."""
        return session.query(Schedule).order_by(Schedule.start_date.desc()).all()

    @staticmethod
    def get_published(session: Session) -> List[Schedule]:
        """Get published schedules, most recent first."""
        return (
            session.query(Schedule)
            .filter(Schedule.status == "published")
            .order_by(Schedule.start_date.desc())
            .all()
        )

    @staticmethod
    def get_by_id(session: Session, schedule_id: str) -> Optional[Schedule]:
        """Get schedule by ID."""
        return session.query(Schedule).filter(Schedule.id == schedule_id).first()

    @staticmethod
    def create(session: Session, schedule: Schedule) -> Schedule:
        """Create a new schedule."""
        session.add(schedule)
        session.commit()
        session.refresh(schedule)
        return schedule

    @staticmethod
    def save_assignments(
        session: Session,
        schedule: Schedule,
        assignments: Mapping[str, Any],
        dar_entities: Mapping[Any, Any] | None = None,
    ) -> Schedule:
        """
        Replace a schedule's assignment map (and optionally its DAR entities).

        The map is stored in canonical serialized form regardless of the
        shape it was handed in.
        """
        schedule.assignments = serialize_assignment_map(assignments)
        if dar_entities is not None:
            schedule.dar_entities = {
                str(idx): list(names) for idx, names in normalize_dar_entities(dar_entities).items()
            }
        session.commit()
        return schedule

    @staticmethod
    def publish(session: Session, schedule: Schedule) -> Schedule:
        """Mark a schedule as published."""
        schedule.status = "published"
        schedule.published_at = datetime.utcnow()
        session.commit()
        return schedule
