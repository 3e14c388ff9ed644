"""Tests for CSV export."""

from datetime import date

import pandas as pd

from review_scheduler.domain.models import Employee, Schedule
from review_scheduler.engine.editor import analyze_schedule
from review_scheduler.io.export_csv import (
    build_schedule_frame,
    build_workload_summary,
    export_schedule_csv,
    export_workload_summary_csv,
    format_special_projects,
    summarize_schedule,
)


def _employees():
    return [
        Employee(id="e1", name="Ann", skills=["DAR", "CPOE"], archived=False),
        Employee(id="e2", name="Bob", skills=["Trace"], archived=False),
        Employee(id="e3", name="Old", skills=["DAR"], archived=True),
    ]


def _schedule():
    return Schedule(
        id="s1",
        name="Week 1",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 7),
        status="draft",
        dar_count=3,
        assignments={
            "e1": {"dars": [0], "cpoe": True, "newIncoming": ["E3", "E4"], "specialProjects": {"threePEmail": True, "other": "Audit"}},
            "e2": {"dars": [0], "crossTraining": "E5"},
        },
        dar_entities={"0": ["E1", "E2"]},
    )


def test_schedule_frame_layout():
    """Test columns, archived filtering and DAR cell rules."""
    schedule = _schedule()
    df = build_schedule_frame(_employees(), schedule.assignments, schedule.dar_entities, schedule.dar_count)

    assert list(df.columns) == [
        "TEAM MEMBER", "DAR 1\nE1/E2", "DAR 2", "DAR 3",
        "CPOE", "New Incoming Items", "Cross-Training", "Special Projects/Assignments", "Workload Score",
    ]
    assert list(df["TEAM MEMBER"]) == ["Ann", "Bob"]

    ann, bob = df.iloc[0], df.iloc[1]
    assert ann["DAR 1\nE1/E2"] == "E1/E2"
    assert ann["CPOE"] == "CPOE"
    assert ann["New Incoming Items"] == "E3/E4"
    assert ann["Special Projects/Assignments"] == "3P Email/Audit"
    assert ann["Workload Score"] == 3 + 2 + 4 + 1

    # Trace does not qualify for a DAR cell
    assert bob["DAR 1\nE1/E2"] == ""
    assert bob["Cross-Training"] == "E5"
    assert bob["Workload Score"] == 4


def test_format_special_projects_shapes():
    """Test special-project cell rendering."""
    assert format_special_projects({"threePBackupEmail": True, "float": True}) == "3P Backup Email/Float"
    assert format_special_projects(["A", "B"]) == "A/B"
    assert format_special_projects(None) == ""


def test_workload_summary():
    """Test summary metrics."""
    df = build_workload_summary(_employees(), _schedule().assignments, 7.0)
    assert list(df["Metric"]) == ["Average Workload", "Total Employees", "Employees with Assignments"]
    assert list(df["Value"]) == ["7.0", 2, 2]


def test_export_files(tmp_path):
    """Test CSV files written to disk."""
    schedule = _schedule()
    out = tmp_path / "schedule.csv"
    summary = tmp_path / "summary.csv"

    assert export_schedule_csv(schedule, _employees(), out) == 2
    assert export_workload_summary_csv(schedule, _employees(), 7.0, summary) == 3

    df = pd.read_csv(out, keep_default_na=False)
    assert list(df["TEAM MEMBER"]) == ["Ann", "Bob"]
    assert list(df["Workload Score"]) == [10, 4]
    assert pd.read_csv(summary)["Metric"].tolist()[0] == "Average Workload"


def test_summarize_schedule():
    """Test the text report."""
    schedule = _schedule()
    analysis = analyze_schedule(schedule.assignments, _employees(), schedule.dar_entities)
    report = summarize_schedule(analysis)

    assert "Conflicts: 1" in report
    assert "Bob is assigned to DAR 1 but lacks DAR or Float skill" in report
    assert "Warnings: 1" in report
    assert "average 7.0" in report


def test_summarize_empty_schedule():
    """Test the report with no active employees."""
    report = summarize_schedule(analyze_schedule({}, []))
    assert report.endswith("No active employees.")


def test_summarize_keeps_employees_with_same_name():
    """Test each employee gets a row even when names repeat."""
    employees = [
        Employee(id="s1", name="Sam", skills=["DAR"], archived=False),
        Employee(id="s2", name="Sam", skills=["DAR"], archived=False),
    ]
    report = summarize_schedule(analyze_schedule({"s1": {"dars": [0]}, "s2": {"dars": [1]}}, employees))
    table = report.split("Workload per employee")[1]

    assert table.count("Sam") == 2
