import io
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from incigraph.core.graph import Graph  # noqa: E402
from incigraph.demo import simple_graph  # noqa: E402
from incigraph.utils import printing  # noqa: E402


class TestPrinting:
    def test_empty_graph(self, empty_graph):
        assert printing.format_incidence_matrix(empty_graph) == "Graph is empty."
        assert printing.format_edge_diagram(empty_graph) == "Graph is empty."

    def test_edge_diagram(self, weighted_graph):
        assert printing.format_edge_diagram(weighted_graph).splitlines() == [
            "x --(4)--> y",
            "y --(2)--> z",
            "z --(7)--> x",
            "x --(9)--> y",
        ]

    def test_incidence_matrix_table(self):
        G = Graph()
        G.add_vertex("A")
        G.add_vertex("B")
        G.add_edge("A", "B", weight=12)
        assert printing.format_incidence_matrix(G).splitlines() == [
            "    e1",
            "A   12",
            "B  -12",
        ]

    def test_demo_table_shape(self):
        lines = printing.format_incidence_matrix(simple_graph()).splitlines()
        assert lines[0].split() == [f"e{j}" for j in range(1, 8)]
        assert [line.split()[0] for line in lines[1:]] == list("ABCDE")

    def test_cycles(self, five_vertex_graph):
        cycles = five_vertex_graph.find_cycles_of_length(3)
        assert printing.format_cycles(cycles, 3).splitlines() == [
            "Cycles of length 3:",
            "A -> B -> C",
            "A -> D -> C",
        ]
        assert printing.format_cycles([], 4) == "No cycles of length 4 found."

    def test_print_to_stream(self, weighted_graph):
        buf = io.StringIO()
        printing.print_edge_diagram(weighted_graph, file=buf)
        printing.print_graph(weighted_graph, file=buf)
        out = buf.getvalue()
        assert "x --(4)--> y" in out
        assert "e4" in out
