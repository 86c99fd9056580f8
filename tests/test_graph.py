"""Tests for the canonical Node / Edge / Graph model."""

import pytest

from graph import DomainError, Edge, ErrorKind, Graph, Node


def triangle():
    return Graph(
        [Node("1"), Node("2"), Node("3")],
        [Edge("e1-2", "1", "2"), Edge("e2-3", "2", "3"), Edge("e3-1", "3", "1")],
    )


class TestConstruction:
    def test_label_defaults_to_id(self):
        assert Node("a").label == "a"

    def test_duplicate_node_id_rejected(self):
        with pytest.raises(DomainError):
            Graph([Node("1"), Node("1")])

    def test_edge_to_missing_node_rejected(self):
        with pytest.raises(DomainError) as exc:
            Graph([Node("1")], [Edge("e", "1", "9")])
        assert "missing node '9'" in exc.value.message
        assert exc.value.kind is ErrorKind.DOMAIN

    def test_duplicate_edge_id_rejected(self):
        with pytest.raises(DomainError):
            Graph([Node("1"), Node("2"), Node("3")], [Edge("e", "1", "2"), Edge("e", "2", "3")])

    def test_reciprocal_edge_is_dropped(self):
        g = Graph([Node("1"), Node("2")], [Edge("a", "1", "2"), Edge("b", "2", "1")])
        assert g.edge_count() == 1
        assert g.get_edge("a") is not None
        assert g.get_edge("b") is None

    def test_self_loop_counted_once(self):
        g = Graph([Node("1")], [Edge("loop", "1", "1")])
        assert g.degree("1") == 1


class TestQueries:
    def test_neighbours_in_insertion_order(self):
        g = triangle()
        assert [n for n, _ in g.neighbours("1")] == ["2", "3"]

    def test_edge_between_either_direction(self):
        g = triangle()
        assert g.get_edge_between("2", "1").id == "e1-2"
        assert g.get_edge_between("1", "2").id == "e1-2"

    def test_nodes_view_is_read_only(self):
        g = triangle()
        with pytest.raises(TypeError):
            g.nodes["4"] = Node("4")

    def test_has_negative_edges(self):
        g = Graph([Node("1"), Node("2")], [Edge("e", "1", "2", -3)])
        assert g.has_negative_edges()
        assert not triangle().has_negative_edges()


class TestEdits:
    def test_with_node_leaves_original_untouched(self):
        g = triangle()
        g2 = g.with_node(Node("4"))
        assert g.node_count() == 3
        assert g2.node_count() == 4

    def test_without_node_drops_incident_edges(self):
        g = triangle().without_node("1")
        assert g.node_ids() == ["2", "3"]
        assert g.edge_pairs() == {frozenset({"2", "3"})}

    def test_without_missing_node_raises(self):
        with pytest.raises(DomainError):
            triangle().without_node("9")

    def test_with_existing_connection_raises(self):
        with pytest.raises(DomainError):
            triangle().with_edge(Edge("dup", "2", "1"))

    def test_without_edge(self):
        g = triangle().without_edge("e2-3")
        assert g.edge_count() == 2
        assert g.get_edge_between("2", "3") is None

    def test_move_node(self):
        g = triangle().with_node_moved("2", 10, 20)
        assert g.get_node("2").position == (10.0, 20.0)

    def test_next_node_id_fills_gaps(self):
        g = Graph([Node("1"), Node("3")])
        assert g.next_node_id() == "2"
        assert Graph().next_node_id() == "1"


class TestIdentityAndSerialisation:
    def test_equality_ignores_insertion_order(self):
        a = Graph([Node("1"), Node("2")], [Edge("e", "1", "2")])
        b = Graph([Node("2"), Node("1")], [Edge("e", "1", "2")])
        assert a == b
        assert hash(a) == hash(b)

    def test_dict_round_trip(self):
        g = triangle().with_node_moved("1", 5, -5)
        assert Graph.from_dict(g.to_dict()) == g

    def test_from_dict_accepts_flat_coordinates_and_default_ids(self):
        g = Graph.from_dict({
            "nodes": [{"id": 1, "x": 0, "y": 1}, {"id": 2}],
            "edges": [{"source": 1, "target": 2}],
        })
        assert g.get_node("1").position == (0.0, 1.0)
        assert g.get_edge("e1-2").weight == 1.0

    def test_from_dict_malformed(self):
        with pytest.raises(DomainError) as exc:
            Graph.from_dict({"nodes": [{"label": "no id"}]})
        assert exc.value.message.startswith("Malformed graph data")

    @pytest.mark.parametrize("data", [
        [1, 2],
        {"nodes": ["1"]},
        {"nodes": "abc"},
        {"nodes": [{"id": "1", "position": [0, 0]}]},
        {"nodes": [{"id": "1"}, {"id": "2"}], "edges": [7]},
    ])
    def test_from_dict_rejects_wrong_shapes(self, data):
        with pytest.raises(DomainError) as exc:
            Graph.from_dict(data)
        assert exc.value.message.startswith("Malformed graph data")

    @pytest.mark.parametrize("weight", ["nan", "inf", float("-inf")])
    def test_from_dict_rejects_non_finite_weights(self, weight):
        data = {
            "nodes": [{"id": "1"}, {"id": "2"}],
            "edges": [{"source": "1", "target": "2", "weight": weight}],
        }
        with pytest.raises(DomainError) as exc:
            Graph.from_dict(data)
        assert "finite" in exc.value.message
