"""Tests for the bounded undo/redo history."""

import pytest

from graph import Node, generators
from engine.history import History


@pytest.fixture()
def history():
    return History(generators.path(2))


class TestHistory:
    def test_starts_with_initial_entry(self, history):
        assert len(history) == 1
        assert history.current == generators.path(2)
        assert not history.can_undo
        assert not history.can_redo

    def test_undo_redo_at_ends_are_no_ops(self, history):
        assert history.undo() is None
        assert history.redo() is None
        assert history.cursor == 0

    def test_undo_then_redo_restores_graph(self, history):
        g = history.current.with_node(Node("3"))
        history.commit(g)
        assert history.undo() == generators.path(2)
        assert history.redo() == g
        assert history.current == g

    def test_commit_after_undo_discards_redo_branch(self, history):
        a = generators.path(3)
        b = generators.path(4)
        c = generators.cycle(3)
        history.commit(a)
        history.commit(b)
        history.undo()
        history.commit(c)
        assert not history.can_redo
        assert history.entries == [generators.path(2), a, c]

    def test_capacity_evicts_oldest(self):
        history = History(generators.empty(1), capacity=50)
        for n in range(1, 52):
            history.commit(generators.path(n % 20 + 1))
        assert len(history) == 50
        assert history.cursor == 49
        assert history.current == generators.path(51 % 20 + 1)

    def test_eviction_keeps_undo_depth(self):
        history = History(generators.empty(1), capacity=3)
        for n in (2, 3, 4, 5):
            history.commit(generators.path(n))
        assert history.undo() == generators.path(4)
        assert history.undo() == generators.path(3)
        assert history.undo() is None

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            History(generators.empty(1), capacity=0)
