"""Tests for AdjacencyIndex and graph algorithms."""

import pytest

from dagiter import CycleError, DuplicateNodeError, Node, UnknownNodeError, build_graph
from dagiter._graph import AdjacencyIndex, find_unsorted, topological_sort


class TestTopologicalSort:
    """Tests for the topological_sort algorithm."""

    def test_empty_graph(self) -> None:
        assert topological_sort({}) == []

    def test_single_node(self) -> None:
        assert topological_sort({"a": []}) == ["a"]

    def test_linear_chain(self) -> None:
        # a -> b -> c (c depends on b, b depends on a)
        assert topological_sort({"a": ["b"], "b": ["c"]}) == ["a", "b", "c"]

    def test_diamond_dependency(self) -> None:
        # a -> b, a -> c, b -> d, c -> d
        assert topological_sort({"a": ["b", "c"], "b": ["d"], "c": ["d"]}) == ["a", "b", "c", "d"]

    def test_ties_follow_names_order(self) -> None:
        assert topological_sort({"a": ["c"], "b": ["c"]}, ["b", "a"]) == ["b", "a", "c"]

    def test_names_without_edges_are_kept(self) -> None:
        assert topological_sort({"a": ["b"]}, ["z"]) == ["z", "a", "b"]

    def test_cycle_detection(self) -> None:
        with pytest.raises(CycleError, match="Cycle") as exc_info:
            topological_sort({"a": ["b"], "b": ["a"]})
        assert exc_info.value.nodes == ("a", "b")

    def test_self_loop_detection(self) -> None:
        with pytest.raises(CycleError):
            topological_sort({"a": ["a"]})

    def test_longer_cycle(self) -> None:
        with pytest.raises(CycleError):
            topological_sort({"a": ["b"], "b": ["c"], "c": ["a"]})

    def test_find_unsorted(self) -> None:
        # d hangs behind the b <-> c cycle
        assert find_unsorted({"a": ["b"], "b": ["c"], "c": ["b", "d"]}) == ["b", "c", "d"]
        assert find_unsorted({"a": ["b"]}) == []


class TestAdjacencyIndexConstruction:
    """Tests for AdjacencyIndex construction."""

    def test_empty(self) -> None:
        index = AdjacencyIndex.from_edges([])
        assert index.names == ()
        assert len(index) == 0
        assert index.edge_count == 0

    def test_single_edge(self) -> None:
        index = AdjacencyIndex.from_edges([("a", "b")])
        assert index.names == ("a", "b")
        assert len(index) == 2

    def test_names_in_first_seen_order(self) -> None:
        index = AdjacencyIndex.from_edges([("c", "a"), ("b", "a"), ("c", "d")])
        assert index.names == ("c", "a", "d", "b")

    def test_repeated_edge_recorded_once(self) -> None:
        index = AdjacencyIndex.from_edges([("a", "b"), ("a", "b")])
        assert index.children("a") == ("b",)
        assert index.parents("b") == ("a",)
        assert index.edge_count == 1

    def test_accepts_generator(self) -> None:
        index = AdjacencyIndex.from_edges((src, dst) for src, dst in [("a", "b"), ("b", "c")])
        assert index.edge_count == 2

    def test_contains(self) -> None:
        index = AdjacencyIndex.from_edges([("a", "b")])
        assert "a" in index
        assert "b" in index
        assert "c" not in index


class TestAdjacencyIndexQueries:
    """Tests for AdjacencyIndex query methods."""

    def test_children_keep_declaration_order(self) -> None:
        index = AdjacencyIndex.from_edges([("a", "c"), ("a", "b")])
        assert index.children("a") == ("c", "b")

    def test_parents_keep_declaration_order(self) -> None:
        index = AdjacencyIndex.from_edges([("b", "c"), ("a", "c")])
        assert index.parents("c") == ("b", "a")

    def test_missing_name_is_empty(self) -> None:
        index = AdjacencyIndex.from_edges([("a", "b")])
        assert index.children("nonexistent") == ()
        assert index.parents("nonexistent") == ()
        assert index.child_count("nonexistent") == 0

    def test_child_count(self) -> None:
        index = AdjacencyIndex.from_edges([("a", "b"), ("a", "c"), ("b", "c")])
        assert index.child_count("a") == 2
        assert index.child_count("b") == 1
        assert index.child_count("c") == 0

    def test_sources_follow_given_order(self) -> None:
        index = AdjacencyIndex.from_edges([("a", "c"), ("b", "c"), ("c", "d")])
        assert index.sources(["d", "c", "b", "a"]) == ["b", "a"]

    def test_isolated_name_is_not_a_source(self) -> None:
        index = AdjacencyIndex.from_edges([("b", "c")])
        assert index.sources(["a", "b", "c"]) == ["b"]
        assert not index.is_source("a")

    def test_topological_order(self) -> None:
        index = AdjacencyIndex.from_edges([("a", "b"), ("a", "c"), ("b", "c"), ("c", "d")])
        assert index.topological_order() == ["a", "b", "c", "d"]

    def test_topological_order_prefers_given_order(self) -> None:
        index = AdjacencyIndex.from_edges([("a", "c"), ("b", "c")])
        assert index.topological_order() == ["a", "b", "c"]
        assert index.topological_order(["b", "a"]) == ["b", "a", "c"]

    def test_topological_order_rejects_cycle(self) -> None:
        with pytest.raises(CycleError):
            AdjacencyIndex.from_edges([("a", "b"), ("b", "a")]).topological_order()

    def test_has_cycle(self) -> None:
        assert AdjacencyIndex.from_edges([("a", "b"), ("b", "c")]).has_cycle() is False
        assert AdjacencyIndex.from_edges([("a", "b"), ("b", "a")]).has_cycle() is True

    def test_cycle_members(self) -> None:
        index = AdjacencyIndex.from_edges([("x", "a"), ("a", "b"), ("b", "a")])
        assert index.cycle_members() == ["a", "b"]


class TestBuildGraph:
    """Tests for the validating build_graph helper."""

    def test_builds_index(self) -> None:
        index = build_graph([Node("a", 1), Node("b", 2)], [("a", "b")])
        assert index.children("a") == ("b",)

    def test_rejects_duplicate_names(self) -> None:
        with pytest.raises(DuplicateNodeError):
            build_graph([Node("a", 1), Node("a", 2)], [])

    def test_rejects_unknown_endpoint(self) -> None:
        with pytest.raises(UnknownNodeError):
            build_graph([Node("a", 1)], [("a", "b")])
