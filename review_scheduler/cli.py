"""Command-line interface for the clinical review scheduler."""

from __future__ import annotations

import argparse

from review_scheduler.config import load_config
from review_scheduler.domain.db import DEFAULT_DB_URL, get_session, init_database
from review_scheduler.domain.repositories import EmployeeRepository, ScheduleRepository
from review_scheduler.engine.editor import analyze_schedule
from review_scheduler.io.export_csv import export_schedule_csv, export_workload_summary_csv, summarize_schedule
from review_scheduler.services.validation import validate_or_raise, validate_schedule


def _load_schedule(session, schedule_id: str):
    schedule = ScheduleRepository.get_by_id(session, schedule_id)
    if schedule is None:
        raise ValueError(f"No schedule found with id {schedule_id}")
    return schedule


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    cfg = load_config(args.config)
    init_database(args.db or cfg.db_url)
    print("[OK] Database ready")


def _cmd_analyze(args: argparse.Namespace) -> None:
    """Print conflicts, warnings and workload balance for a schedule."""
    cfg = load_config(args.config)
    session = get_session(args.db or cfg.db_url)

    try:
        schedule = _load_schedule(session, args.schedule)
        employees = EmployeeRepository.get_all(session)

        analysis = analyze_schedule(schedule.assignments, employees, schedule.dar_entities, cfg)
        print(f"[INFO] Schedule {schedule.name} ({schedule.start_date} to {schedule.end_date})")
        print(summarize_schedule(analysis))
        session.close()

    except Exception as e:
        session.close()
        print(f"[ERROR] Analysis failed: {e}")
        raise


def _cmd_validate(args: argparse.Namespace) -> None:
    """Validate a stored schedule record."""
    cfg = load_config(args.config)
    session = get_session(args.db or cfg.db_url)

    try:
        schedule = _load_schedule(session, args.schedule)
        validate_or_raise(validate_schedule(schedule))
        session.close()
        print(f"[OK] Validation passed for {schedule.name}")

    except Exception as e:
        session.close()
        print(f"[ERROR] Validation failed: {e}")
        raise


def _cmd_export(args: argparse.Namespace) -> None:
    """Export a schedule grid (and optionally its workload summary) to CSV."""
    cfg = load_config(args.config)
    session = get_session(args.db or cfg.db_url)

    try:
        schedule = _load_schedule(session, args.schedule)
        employees = EmployeeRepository.get_all(session)

        count = export_schedule_csv(schedule, employees, args.out, weights=cfg.weights)
        print(f"[OK] Exported {count} employees to {args.out}")

        if args.summary:
            analysis = analyze_schedule(schedule.assignments, employees, schedule.dar_entities, cfg)
            export_workload_summary_csv(schedule, employees, analysis.avg_workload, args.summary)
            print(f"[OK] Exported workload summary to {args.summary}")

        session.close()

    except Exception as e:
        session.close()
        print(f"[ERROR] Export failed: {e}")
        raise


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="review-scheduler",
        description="Clinical review staff scheduler",
    )
    parser.add_argument("--db", help=f"Database URL (default: db_url from config, else {DEFAULT_DB_URL})")
    parser.add_argument("--config", help="Path to config YAML/JSON (optional)")

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    ana = sub.add_parser("analyze", help="Report conflicts and workload balance for a schedule")
    ana.add_argument("--schedule", required=True, help="Schedule ID")
    ana.set_defaults(func=_cmd_analyze)

    val = sub.add_parser("validate", help="Validate a stored schedule")
    val.add_argument("--schedule", required=True, help="Schedule ID")
    val.set_defaults(func=_cmd_validate)

    exp = sub.add_parser("export", help="Export a schedule to CSV")
    exp.add_argument("--schedule", required=True, help="Schedule ID")
    exp.add_argument("--out", required=True, help="Path to schedule CSV")
    exp.add_argument("--summary", help="Optional: path to workload summary CSV")
    exp.set_defaults(func=_cmd_export)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
