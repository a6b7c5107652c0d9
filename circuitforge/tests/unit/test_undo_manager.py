"""Tests for UndoManager."""

import pytest

from circuitforge.controllers.undo_manager import UndoManager
from circuitforge.models.circuit import CircuitSnapshot
from circuitforge.tests.conftest import make_component


def _snap(n):
    """Snapshot with n resistors, distinguishable by size."""
    return CircuitSnapshot(components=tuple(make_component("resistor", f"R{i}") for i in range(n)))


@pytest.fixture
def manager():
    um = UndoManager()
    um.push(_snap(0))
    return um


class TestUndoRedo:
    def test_initial_state(self, manager):
        assert not manager.can_undo()
        assert not manager.can_redo()
        assert manager.current() == _snap(0)

    def test_undo_returns_previous(self, manager):
        manager.push(_snap(1))
        assert manager.undo() == _snap(0)
        assert manager.can_redo()

    def test_redo_returns_next(self, manager):
        manager.push(_snap(1))
        manager.undo()
        assert manager.redo() == _snap(1)
        assert not manager.can_redo()

    def test_nothing_to_undo(self, manager):
        assert manager.undo() is None

    def test_nothing_to_redo(self, manager):
        assert manager.redo() is None

    def test_push_clears_redo(self, manager):
        manager.push(_snap(1))
        manager.undo()
        manager.push(_snap(2))
        assert not manager.can_redo()
        assert manager.undo() == _snap(0)

    def test_counts(self, manager):
        manager.push(_snap(1))
        manager.push(_snap(2))
        assert manager.get_undo_count() == 2
        manager.undo()
        assert manager.get_undo_count() == 1
        assert manager.get_redo_count() == 1

    def test_clear(self, manager):
        manager.push(_snap(1))
        manager.clear()
        assert len(manager) == 0
        assert manager.current() is None
        assert not manager.can_undo()


class TestMaxDepth:
    def test_default_depth_is_fifty(self):
        assert UndoManager().max_depth == 50

    def test_oldest_dropped(self):
        um = UndoManager(max_depth=3)
        for n in range(5):
            um.push(_snap(n))
        assert len(um) == 3
        assert um.undo() == _snap(3)
        assert um.undo() == _snap(2)
        assert um.undo() is None

    def test_fifty_one_edits_keep_fifty(self):
        um = UndoManager()
        for n in range(51):
            um.push(_snap(n % 3))
        assert len(um) == 50
        assert um.get_undo_count() == 49

    def test_invalid_depth(self):
        with pytest.raises(ValueError):
            UndoManager(max_depth=0)
