"""Tests for the schedule editing session."""

from datetime import date

import pytest

from review_scheduler.config import SchedulerConfig
from review_scheduler.domain.assignment import Assignment
from review_scheduler.domain.models import Employee, Entity, Schedule
from review_scheduler.engine.editor import ScheduleEditor, analyze_schedule
from review_scheduler.services.bulk import validate_bulk_assignment


def _employees():
    return [
        Employee(id="e1", name="Ann", skills=["DAR", "CPOE"], archived=False),
        Employee(id="e2", name="Bob", skills=["Trace"], archived=False),
    ]


def _entities():
    return [Entity(id=f"ent-{i}", name=name) for i, name in enumerate(["E1", "E2", "E3"])]


def test_toggle_dar_adds_then_removes():
    """Test DAR toggling and that each toggle is one undo step."""
    editor = ScheduleEditor(_employees(), _entities())

    editor.toggle_dar("e1", 0)
    editor.toggle_dar("e1", 2)
    assert editor.state["e1"].dars == (0, 2)

    editor.toggle_dar("e1", 0)
    assert editor.state["e1"].dars == (2,)

    editor.undo()
    assert editor.state["e1"].dars == (0, 2)


def test_snapshots_are_not_mutated():
    """Test that undo restores the exact previous map."""
    editor = ScheduleEditor(_employees(), _entities(), {"e1": {"cpoe": False}})
    before = editor.state

    editor.set_cpoe("e1", True)
    assert before["e1"].cpoe is False
    assert editor.undo() is before


def test_set_state_with_callable():
    """Test functional updates receive the current map."""
    editor = ScheduleEditor(_employees(), _entities(), {"e1": {"dars": [1]}})
    editor.set_state(lambda current: {**current, "e2": {"newIncoming": ["E2"]}})

    assert editor.state["e1"].dars == (1,)
    assert editor.state["e2"].new_incoming == ("E2",)
    assert editor.can_undo is True


def test_set_entities_rejects_non_entity_field():
    """Test that only new-incoming and cross-training take entities."""
    editor = ScheduleEditor(_employees(), _entities())
    editor.set_entities("e1", "crossTraining", ["E1"])
    assert editor.state["e1"].cross_training == ("E1",)

    with pytest.raises(ValueError):
        editor.set_entities("e1", "dars", ["E1"])


def test_special_projects_edit():
    """Test special projects are normalized on edit."""
    editor = ScheduleEditor(_employees(), _entities())
    editor.set_special_projects("e1", {"threePEmail": True})
    assert editor.state["e1"].special_projects.three_p_email is True


def test_apply_bulk_is_one_step():
    """Test that a bulk batch is undone in one step and empty batches are skipped."""
    editor = ScheduleEditor(_employees(), _entities())
    result = validate_bulk_assignment(["e1", "e2"], editor.employees, "dar", 1)
    editor.apply_bulk(result["successful"])

    assert editor.state["e1"].dars == (1,)
    assert editor.state["e2"].dars == (1,)

    editor.apply_bulk([])
    editor.undo()
    assert editor.state == {}
    assert editor.can_undo is False


def test_history_limit_from_config():
    """Test that the configured undo limit applies."""
    editor = ScheduleEditor(_employees(), _entities(), cfg=SchedulerConfig(undo_limit=2))
    for value in (True, False, True):
        editor.set_cpoe("e1", value)
    editor.undo()
    editor.undo()
    assert editor.can_undo is False


def test_available_entities_track_edits():
    """Test availability reflects DAR columns and current assignments."""
    editor = ScheduleEditor(_employees(), _entities(), dar_entities={"0": ["E1"]})
    editor.set_entities("e2", "newIncoming", ["E2"])

    assert [e.name for e in editor.available_entities_for_dar(1)] == ["E2", "E3"]
    assert [e.name for e in editor.available_entities_for("e1", "crossTraining")] == ["E3"]

    editor.set_dar_entities(1, ["E3"])
    assert [e.name for e in editor.available_entities_for("e1", "crossTraining")] == []
    assert editor.can_undo is True
    editor.undo()
    assert editor.dar_entities == {0: ["E1"], 1: ["E3"]}


def test_analyze_reports_conflicts_and_workload():
    """Test the combined analysis of the current map."""
    editor = ScheduleEditor(_employees(), _entities())
    editor.toggle_dar("e2", 0)
    editor.set_cpoe("e2", True)

    analysis = editor.analyze()
    assert len(analysis.conflicts) == 2
    assert analysis.has_issues is True
    assert analysis.workload_map["e2"]["workload"] == 5
    assert analysis.avg_workload == 2.5


def test_from_schedule():
    """Test starting a session from a stored schedule."""
    schedule = Schedule(
        id="s1",
        name="Week 1",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 7),
        dar_count=5,
        assignments={"e1": {"dars": [0], "cpoe": True}},
        dar_entities={"0": ["E1"]},
    )
    editor = ScheduleEditor.from_schedule(schedule, _employees(), _entities())

    assert editor.state["e1"] == Assignment(dars=(0,), cpoe=True)
    assert editor.dar_entities == {0: ["E1"]}
    assert editor.can_undo is False


def test_analyze_schedule_function():
    """Test the standalone analysis entry point."""
    analysis = analyze_schedule({"e1": {"dars": [0, 1]}}, _employees())
    assert analysis.conflicts == []
    assert [w["type"] for w in analysis.warnings] == ["multiple_dars"]
    assert analysis.imbalances == []
