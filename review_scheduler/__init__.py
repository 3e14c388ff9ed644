"""Clinical review scheduler: assignment rules, workload balance and edit history.

Modules:
- config: load and validate configuration (JSON or YAML)
- domain: assignment types, SQLAlchemy models and repositories
- services: workload scoring, conflict detection, entity availability,
  bulk assignment, boundary validation and assignment statistics
- engine: undo/redo history and the schedule editing session
- io: CSV export of schedules and workload summaries
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "domain",
    "services",
    "engine",
    "io",
    "cli",
]
