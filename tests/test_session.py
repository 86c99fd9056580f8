"""Tests for the editor session lifecycle."""

import pytest

from graph import ConfigError, DomainError, ErrorKind, generators


class TestGraphChanges:
    def test_opens_with_default_graph(self, editor):
        assert editor.graph == generators.default_graph()
        assert editor.graph_name == "Sample Graph"
        assert editor.start_node == "1"
        assert editor.algorithm.id == "dijkstra"

    def test_load_text_commits_on_success(self, editor):
        result = editor.load_text("cycle 4")
        assert result.success
        assert editor.graph == generators.cycle(4)
        assert editor.graph_name == "cycle 4"
        assert len(editor.history) == 2

    def test_failed_parse_changes_nothing(self, editor):
        result = editor.load_text("complete 99")
        assert not result.success
        assert editor.graph == generators.default_graph()
        assert len(editor.history) == 1

    def test_load_sample(self, editor):
        editor.load_sample("cycle5")
        assert editor.graph_name == "Cycle C₅"
        with pytest.raises(DomainError):
            editor.load_sample("nope")

    def test_generate(self, editor):
        editor.generate("complete", 4)
        assert editor.graph_name == "Complete graph (4 nodes)"
        with pytest.raises(DomainError):
            editor.generate("complete", 40)

    def test_clear(self, editor):
        editor.clear()
        assert editor.graph.is_empty()
        assert editor.graph_name == "Empty Graph"
        assert editor.start_node is None

    def test_manual_edits_are_custom(self, editor):
        node = editor.add_node(10, 20)
        assert node.id == "6"
        assert editor.graph_name == "Custom Graph"
        edge = editor.add_edge("6", "2", weight=3)
        assert editor.graph.get_edge(edge.id).weight == 3
        editor.move_node("6", 0, 0)
        editor.remove_edge(edge.id)
        assert len(editor.history) == 5

    def test_rejected_edit_does_not_commit(self, editor):
        with pytest.raises(DomainError):
            editor.add_edge("1", "2")
        assert len(editor.history) == 1

    def test_removed_start_node_falls_back(self, editor):
        editor.configure("1", "3")
        editor.remove_node("1")
        assert editor.start_node == "2"
        editor.remove_node("3")
        assert editor.end_node is None

    def test_undo_redo_restore_graph_and_name(self, editor):
        editor.load_sample("petersen")
        assert editor.undo() == generators.default_graph()
        assert editor.graph_name == "Sample Graph"
        editor.redo()
        assert editor.graph_name == "Petersen Graph"
        assert editor.redo() is None


class TestRuns:
    def test_run_loads_controller_without_committing(self, editor):
        result = editor.run()
        assert result.success
        assert editor.result is result
        assert editor.controller.total_steps == len(result.steps)
        assert len(editor.history) == 1

    def test_graph_change_discards_result(self, editor):
        editor.run()
        editor.controller.play()
        editor.load_sample("path5")
        assert editor.result is None
        assert editor.controller.total_steps == 0
        assert editor.scheduler.active_count == 0

    def test_algorithm_switch_discards_result(self, editor):
        editor.run()
        editor.select_algorithm("bfs")
        assert editor.result is None
        with pytest.raises(ConfigError):
            editor.select_algorithm("nope")

    def test_configure_validates_nodes(self, editor):
        with pytest.raises(ConfigError):
            editor.configure("1", "42")
        editor.configure("1", "3")
        result = editor.run()
        assert result.final_data["path"][0] == "1"
        assert result.final_data["path"][-1] == "3"

    def test_empty_graph_run_fails(self, editor):
        editor.clear()
        result = editor.run()
        assert not result.success
        assert result.error_kind is ErrorKind.DOMAIN
        assert editor.view()["error"]["kind"] == "domain"

    def test_negative_weight_run_fails(self, editor):
        editor.remove_edge("e1")
        editor.add_edge("1", "2", weight=-1)
        result = editor.run()
        assert result.error_kind is ErrorKind.DOMAIN
        assert editor.controller.total_steps == 0

    def test_prim_needs_no_start_node(self, editor):
        editor.select_algorithm("prim")
        editor.configure(None, None)
        assert editor.run().success

    def test_export_needs_a_successful_run(self, editor):
        with pytest.raises(DomainError):
            editor.export()
        editor.select_algorithm("bfs")
        editor.run()
        snapshot = editor.export()
        assert snapshot["algorithm_id"] == "bfs"
        assert snapshot["graph"] == editor.graph.to_dict()
        editor.clear()
        editor.run()
        with pytest.raises(DomainError):
            editor.export()


class TestView:
    def test_empty_state(self, editor):
        editor.clear()
        view = editor.view()
        assert view["empty"] is True
        assert view["empty_state"]["title"] == "No Graph Available"
        assert "graph" not in view

    def test_before_run(self, editor):
        view = editor.view()
        assert view["empty"] is False
        assert view["description"] is None
        assert view["step"]["label"] == "No steps yet"
        assert view["code"]["active_line"] is None
        assert all(n["highlight"] is None for n in view["graph"]["nodes"])

    def test_after_steps(self, editor):
        editor.run()
        editor.controller.step_forward()
        view = editor.view()
        assert view["step"]["label"] == f"Step 2 of {editor.controller.total_steps}"
        assert view["description"] == "Visit node 1 with distance 0"
        current = [n["id"] for n in view["graph"]["nodes"] if n["highlight"] == "current"]
        assert current == ["1"]
        assert view["metrics"]["algorithm_name"] == "Dijkstra's Algorithm"

    def test_close_releases_timer(self, editor):
        editor.run()
        editor.controller.play()
        editor.close()
        assert editor.scheduler.active_count == 0
