"""Tests for undo/redo history."""

from review_scheduler.engine.history import UndoRedoManager


def test_undo_redo_round_trip():
    """Test that undo returns the previous state and redo restores it."""
    history = UndoRedoManager("s0")
    history.add_change("s1")

    assert history.undo() == "s0"
    assert history.can_redo() is True
    assert history.redo() == "s1"
    assert history.get_current_state() == "s1"


def test_new_change_clears_redo():
    """Test that a change after undo discards redo history."""
    history = UndoRedoManager("s0")
    history.add_change("s1")
    history.undo()
    history.add_change("s2")

    assert history.can_redo() is False
    assert history.get_redo_stack_size() == 0
    assert history.undo() == "s0"


def test_undo_stack_is_capped():
    """Test that the oldest states are evicted past the limit."""
    history = UndoRedoManager(0, limit=3)
    for state in range(1, 6):
        history.add_change(state)

    assert history.get_undo_stack_size() == 3
    assert [history.undo() for _ in range(3)] == [4, 3, 2]
    assert history.can_undo() is False


def test_redo_may_exceed_limit_until_next_change():
    """Test that redo does not trim the undo stack but the next change does."""
    history = UndoRedoManager(0, limit=2)
    history.add_change(1)
    history.add_change(2)
    history.undo()
    history.add_change(3)
    history.undo()
    history.redo()
    assert history.get_undo_stack_size() == 2

    history.add_change(4)
    assert history.get_undo_stack_size() == 2


def test_empty_history_is_noop():
    """Test that undo/redo with nothing to do return the current state."""
    history = UndoRedoManager({"a": 1})
    assert history.undo() == {"a": 1}
    assert history.redo() == {"a": 1}
    assert history.can_undo() is False
    assert history.can_redo() is False


def test_clear_keeps_current_state():
    """Test clear drops both stacks."""
    history = UndoRedoManager("s0")
    history.add_change("s1")
    history.add_change("s2")
    history.undo()
    history.clear()

    assert history.get_current_state() == "s1"
    assert history.get_undo_stack_size() == 0
    assert history.get_redo_stack_size() == 0


def test_default_limit():
    """Test the default history depth."""
    history = UndoRedoManager(0)
    for state in range(1, 60):
        history.add_change(state)
    assert history.get_undo_stack_size() == 50
