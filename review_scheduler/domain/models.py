"""SQLAlchemy models for the clinical review scheduler."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase

SKILLS = ("DAR", "Trace", "CPOE", "Float")


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Employee(Base):
    """Staff member with the skills that gate what they may be assigned."""

    __tablename__ = "employees"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)
    skills = Column(JSON, nullable=False, default=list)  # subset of SKILLS
    email = Column(String(200), nullable=True)
    notes = Column(Text, nullable=True)
    archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=datetime.utcnow)

    def has_any_skill(self, *skills: str) -> bool:
        """True if the employee holds at least one of the given skills."""
        own = self.skills or []
        return any(skill in own for skill in skills)

    @property
    def is_active(self) -> bool:
        return not self.archived

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, name='{self.name}', skills={self.skills})>"


class Entity(Base):
    """Facility or location that DAR columns and employee tasks are attributed to.

    The name is the effective key for availability checks, so it is unique.
    """

    __tablename__ = "entities"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<Entity(id={self.id}, name='{self.name}')>"


class Schedule(Base):
    """A schedule period: the assignment map plus its DAR column configuration."""

    __tablename__ = "schedules"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="draft")  # draft, published
    dar_count = Column(Integer, nullable=False, default=5)

    # employee id -> serialized Assignment
    assignments = Column(JSON, nullable=False, default=dict)
    # DAR column index (as string, JSON keys) -> list of entity names
    dar_entities = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=datetime.utcnow)
    published_at = Column(DateTime, nullable=True)

    @property
    def is_published(self) -> bool:
        return self.status == "published"

    def __repr__(self) -> str:
        return f"<Schedule(id={self.id}, name='{self.name}', status={self.status})>"
