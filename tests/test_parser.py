"""Tests for the text-to-graph parser cascade."""

import pytest

from graph import SUGGESTION, ErrorKind, generators, parse


class TestNamedGraphs:
    def test_complete_matches_generator(self):
        result = parse("complete 4")
        assert result.success
        assert result.strategy == "named"
        assert result.graph.edge_pairs() == generators.complete(4).edge_pairs()

    @pytest.mark.parametrize("text,edges", [
        ("K5", 10),
        ("complete graph 5", 10),
        ("CYCLE 4", 4),
        ("path 3", 2),
        ("star 6", 5),
        ("wheel 5", 8),
        ("petersen", 15),
    ])
    def test_spellings(self, text, edges):
        result = parse(text)
        assert result.success, result.error
        assert result.graph.edge_count() == edges

    def test_bipartite_is_not_read_as_complete(self):
        result = parse("k(2,3)")
        assert result.success
        assert result.graph.edge_pairs() == generators.bipartite(2, 3).edge_pairs()

    def test_size_out_of_range_is_domain_error(self):
        result = parse("complete 25")
        assert not result.success
        assert result.error_kind is ErrorKind.DOMAIN
        assert result.error == "Invalid size: 25. Use 1-20 nodes."
        assert result.graph is None

    def test_zero_size(self):
        assert parse("cycle 0").error_kind is ErrorKind.DOMAIN

    def test_custom_limit(self):
        assert not parse("complete 6", max_nodes=5).success
        petersen = parse("petersen", max_nodes=9)
        assert petersen.error_kind is ErrorKind.DOMAIN
        assert petersen.error == "The Petersen graph has 10 nodes; the limit is 9."

    @pytest.mark.parametrize("text,edges", [("k 5", 10), ("c_4", 4), ("k 2 3", 6)])
    def test_short_forms_with_separators(self, text, edges):
        result = parse(text)
        assert result.strategy == "named"
        assert result.graph.edge_count() == edges


class TestNaturalLanguage:
    @pytest.mark.parametrize("text,kind,n", [
        ("5 nodes in a circle", "cycle", 5),
        ("4 nodes all connected", "complete", 4),
        ("6 nodes in a line", "path", 6),
        ("star with 6 points", "star", 6),
        ("tree with 4 nodes", "tree", 4),
        ("empty graph with 3", "empty", 3),
    ])
    def test_phrases(self, text, kind, n):
        result = parse(text)
        assert result.success, result.error
        assert result.strategy == "natural"
        assert result.graph == generators.SINGLE_SIZE[kind](n)


class TestAdjacencyList:
    def test_entries(self):
        result = parse("1: 2, 3; 2: 3")
        assert result.success
        assert result.strategy == "adjacency-list"
        assert result.graph.node_ids() == ["1", "2", "3"]
        assert result.graph.edge_count() == 3

    def test_reciprocal_listing_collapses(self):
        result = parse("a: b\nb: a")
        assert result.graph.edge_count() == 1

    def test_bad_entry(self):
        result = parse("1: 2; 3")
        assert not result.success
        assert result.error_kind is ErrorKind.FORMAT


class TestEdgeList:
    def test_triangle(self):
        result = parse("1-2, 2-3, 3-1")
        assert result.success
        assert result.strategy == "edge-list"
        assert set(result.graph.node_ids()) == {"1", "2", "3"}
        assert result.graph.edge_count() == 3

    @pytest.mark.parametrize("text", ["b-c, c-1, 1-b", "c1 - k5, k5 - w2, w2 - c1"])
    def test_letter_ids_are_not_named_graphs(self, text):
        result = parse(text)
        assert result.success, result.error
        assert result.strategy == "edge-list"
        assert result.graph.node_count() == 3
        assert result.graph.edge_count() == 3

    @pytest.mark.parametrize("text", ["a b; b c", "a->b, b->c", "a - b\nb - c"])
    def test_separators(self, text):
        result = parse(text)
        assert result.success
        assert result.graph.node_ids() == ["a", "b", "c"]
        assert result.graph.edge_count() == 2

    def test_duplicates_collapse(self):
        assert parse("1-2, 1-2, 2-1").graph.edge_count() == 1

    def test_bad_token(self):
        result = parse("1-2, ???")
        assert not result.success
        assert result.error_kind is ErrorKind.FORMAT
        assert "???" in result.error

    def test_too_many_nodes(self):
        text = ", ".join(f"{i}-{i + 1}" for i in range(1, 21))
        result = parse(text)
        assert not result.success
        assert result.error_kind is ErrorKind.DOMAIN


class TestAdjacencyMatrix:
    def test_three_by_three(self):
        result = parse("[[0,1,0],[1,0,1],[0,1,0]]")
        assert result.success
        assert result.strategy == "matrix"
        assert result.graph.edge_pairs() == {frozenset({"1", "2"}), frozenset({"2", "3"})}

    def test_two_by_two(self):
        result = parse("[[0,1],[1,0]]")
        assert result.success
        assert result.graph.node_count() == 2
        assert result.graph.edge_count() == 1

    def test_not_square(self):
        result = parse("[[0,1],[1,0],[0,0]]")
        assert result.error_kind is ErrorKind.FORMAT

    def test_ragged(self):
        result = parse("[[0,1,0],[1,0]]")
        assert result.error_kind is ErrorKind.FORMAT

    def test_non_numeric(self):
        result = parse("[[0,x],[1,0]]")
        assert result.error_kind is ErrorKind.FORMAT


class TestFailures:
    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_input(self, text):
        result = parse(text)
        assert not result.success
        assert result.error_kind is ErrorKind.FORMAT
        assert result.error == "Please enter a graph description"

    def test_unrecognised_input_gets_suggestion(self):
        result = parse("???")
        assert not result.success
        assert result.error == "Could not parse input"
        assert result.suggestion == SUGGESTION
        assert result.to_dict()["kind"] == "format"
