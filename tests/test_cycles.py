import pathlib
import sys
import threading

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from incigraph.algorithms.cycles import canonical_key, enumerate_cycles_of_length  # noqa: E402
from incigraph.core.errors import ConcurrentMutationError, SearchCancelled  # noqa: E402
from incigraph.core.graph import Graph  # noqa: E402
from incigraph.demo import complex_graph, simple_graph  # noqa: E402


def names(cycles):
    return [[v.name for v in c] for c in cycles]


def graph_from_edges(vertices, edges):
    G = Graph()
    for v in vertices:
        G.add_vertex(v)
    for s, t in edges:
        G.add_edge(s, t)
    return G


class TestCanonicalKey:
    def test_vertex_set_key_is_sorted_names(self):
        assert canonical_key(["C", "A", "B"]) == ("A", "B", "C")
        assert canonical_key(["A", "C", "B"]) == ("A", "B", "C")

    def test_rotation_key(self):
        assert canonical_key(["C", "A", "B"], "rotation") == ("A", "B", "C")
        assert canonical_key(["B", "C", "A"], "rotation") == ("A", "B", "C")
        assert canonical_key(["A", "C", "B"], "rotation") == ("A", "C", "B")
        assert canonical_key([], "rotation") == ()

    def test_accepts_vertices(self):
        G = graph_from_edges("XY", [])
        assert canonical_key(G.vertices()) == ("X", "Y")

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            canonical_key(["A"], "reflection")


class TestScenarios:
    def test_five_vertex_triangles(self, five_vertex_graph):
        cycles = enumerate_cycles_of_length(five_vertex_graph, 3)
        assert names(cycles) == [["A", "B", "C"], ["A", "D", "C"]]
        keys = {canonical_key(c) for c in cycles}
        assert len(keys) == 2

    def test_single_vertex_without_edges(self):
        G = Graph()
        G.add_vertex("A")
        assert enumerate_cycles_of_length(G, 1) == []

    def test_empty_graph(self, empty_graph):
        assert enumerate_cycles_of_length(empty_graph, 1) == []

    def test_length_above_vertex_count(self, five_vertex_graph):
        assert enumerate_cycles_of_length(five_vertex_graph, 6) == []
        assert enumerate_cycles_of_length(five_vertex_graph, 100) == []

    def test_simple_demo_graph(self):
        G = simple_graph()
        assert enumerate_cycles_of_length(G, 2) == []
        assert names(enumerate_cycles_of_length(G, 3)) == [["A", "B", "C"], ["A", "D", "C"]]
        assert names(enumerate_cycles_of_length(G, 4)) == [["A", "E", "D", "C"]]
        assert enumerate_cycles_of_length(G, 5) == []

    def test_complex_demo_two_cycles(self):
        assert names(enumerate_cycles_of_length(complex_graph(), 2)) == [["A", "G"]]

    def test_graph_method_delegates(self, five_vertex_graph):
        assert names(five_vertex_graph.find_cycles_of_length(3)) == [
            ["A", "B", "C"],
            ["A", "D", "C"],
        ]


class TestDeduplication:
    def test_no_two_cycles_share_a_vertex_set(self):
        G = complex_graph()
        for length in range(1, G.number_of_vertices() + 1):
            cycles = enumerate_cycles_of_length(G, length)
            keys = [tuple(sorted(v.name for v in c)) for c in cycles]
            assert len(keys) == len(set(keys))
            for c in cycles:
                assert len(c) == length
                assert len({v.name for v in c}) == length

    def test_cycles_are_closed_walks(self):
        G = complex_graph()
        for length in range(2, 6):
            for c in enumerate_cycles_of_length(G, length):
                for a, b in zip(c, c[1:] + c[:1]):
                    assert G.are_adjacent(a, b)

    def test_rotations_collapse(self):
        G = graph_from_edges("ABC", [("A", "B"), ("B", "C"), ("C", "A")])
        assert names(enumerate_cycles_of_length(G, 3)) == [["A", "B", "C"]]
        assert names(enumerate_cycles_of_length(G, 3, dedup="rotation")) == [["A", "B", "C"]]

    def test_reversed_triangle_kept_only_in_rotation_mode(self):
        G = graph_from_edges(
            "ABC",
            [("A", "B"), ("B", "C"), ("C", "A"), ("A", "C"), ("C", "B"), ("B", "A")],
        )
        assert names(enumerate_cycles_of_length(G, 3)) == [["A", "B", "C"]]
        assert names(enumerate_cycles_of_length(G, 3, dedup="rotation")) == [
            ["A", "B", "C"],
            ["A", "C", "B"],
        ]

    def test_same_vertex_set_different_order(self):
        G = graph_from_edges(
            "ABCD",
            [
                ("A", "B"),
                ("B", "C"),
                ("C", "D"),
                ("D", "A"),
                ("A", "C"),
                ("C", "B"),
                ("B", "D"),
            ],
        )
        assert names(enumerate_cycles_of_length(G, 4)) == [["A", "B", "C", "D"]]
        assert names(enumerate_cycles_of_length(G, 4, dedup="rotation")) == [
            ["A", "B", "C", "D"],
            ["A", "C", "B", "D"],
        ]

    def test_parallel_edges_do_not_duplicate_cycles(self):
        G = graph_from_edges("AB", [("A", "B"), ("A", "B"), ("B", "A")])
        assert names(enumerate_cycles_of_length(G, 2)) == [["A", "B"]]


class TestSelfLoops:
    def test_length_one_finds_self_loops(self):
        G = graph_from_edges("ABC", [("A", "A"), ("A", "B"), ("C", "C")])
        assert names(enumerate_cycles_of_length(G, 1)) == [["A"], ["C"]]

    def test_loop_on_start_does_not_leak_into_longer_cycles(self):
        G = graph_from_edges("AB", [("A", "A"), ("A", "B"), ("B", "A")])
        assert names(enumerate_cycles_of_length(G, 2)) == [["A", "B"]]

    def test_closing_step_revisit_is_not_a_cycle(self):
        # A->B->A with a loop on A would give the walk [A, B, A]
        G = graph_from_edges("ABC", [("A", "A"), ("A", "B"), ("B", "A")])
        assert enumerate_cycles_of_length(G, 3) == []


class TestLongCycles:
    @pytest.mark.slow
    def test_ring_longer_than_recursion_limit(self):
        n = 1100
        assert n > sys.getrecursionlimit()
        ring = [f"v{i}" for i in range(n)]
        G = graph_from_edges(ring, [(ring[i], ring[(i + 1) % n]) for i in range(n)])
        cycles = enumerate_cycles_of_length(G, n)
        assert len(cycles) == 1
        assert [v.name for v in cycles[0]] == ring

    def test_ring_with_rotation_dedup(self):
        ring = list("ABCDEF")
        G = graph_from_edges(ring, [(ring[i], ring[(i + 1) % 6]) for i in range(6)])
        assert names(enumerate_cycles_of_length(G, 6, dedup="rotation")) == [ring]
        assert enumerate_cycles_of_length(G, 5) == []


class TestArguments:
    @pytest.mark.parametrize("bad", [0, -2, 2.5, True, "3", None])
    def test_invalid_length(self, five_vertex_graph, bad):
        with pytest.raises(ValueError):
            enumerate_cycles_of_length(five_vertex_graph, bad)

    def test_invalid_dedup(self, five_vertex_graph):
        with pytest.raises(ValueError):
            enumerate_cycles_of_length(five_vertex_graph, 3, dedup="sorted")


class TestCancellationAndMutation:
    def test_cancel_token(self, five_vertex_graph):
        token = threading.Event()
        token.set()
        with pytest.raises(SearchCancelled):
            enumerate_cycles_of_length(five_vertex_graph, 3, cancel=token)

    def test_unset_token_changes_nothing(self, five_vertex_graph):
        token = threading.Event()
        cycles = enumerate_cycles_of_length(five_vertex_graph, 3, cancel=token)
        assert len(cycles) == 2

    def test_mutation_during_search_is_detected(self, five_vertex_graph):
        class MutatingToken:
            calls = 0

            def is_set(self):
                self.calls += 1
                if self.calls == 2:
                    five_vertex_graph.add_vertex("late")
                return False

        with pytest.raises(ConcurrentMutationError):
            enumerate_cycles_of_length(five_vertex_graph, 3, cancel=MutatingToken())

    def test_search_on_copy_is_unaffected_by_later_mutation(self, five_vertex_graph):
        snapshot = five_vertex_graph.copy()
        five_vertex_graph.add_vertex("F")
        five_vertex_graph.add_edge("C", "F")
        assert names(enumerate_cycles_of_length(snapshot, 3)) == [
            ["A", "B", "C"],
            ["A", "D", "C"],
        ]
