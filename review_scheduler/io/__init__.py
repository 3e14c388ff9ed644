"""I/O utilities for CSV export."""

from .export_csv import (
    build_schedule_frame,
    build_workload_summary,
    export_schedule_csv,
    export_workload_summary_csv,
    summarize_schedule,
)

__all__ = [
    "build_schedule_frame",
    "build_workload_summary",
    "export_schedule_csv",
    "export_workload_summary_csv",
    "summarize_schedule",
]
