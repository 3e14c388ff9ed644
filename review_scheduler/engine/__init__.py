"""Edit history and schedule editing sessions."""

from .editor import ScheduleAnalysis, ScheduleEditor, analyze_schedule
from .history import UndoRedoManager

__all__ = [
    "ScheduleAnalysis",
    "ScheduleEditor",
    "analyze_schedule",
    "UndoRedoManager",
]
