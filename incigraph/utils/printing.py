from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from typing import TextIO

EMPTY_GRAPH = "Graph is empty."


def format_incidence_matrix(graph) -> str:
    """Incidence matrix as aligned text: ``e1 e2 ...`` header, one line per vertex."""
    if graph.number_of_vertices() == 0:
        return EMPTY_GRAPH
    dense = graph.incidence_matrix()
    names = graph.vertex_names()
    headers = [f"e{j + 1}" for j in range(graph.number_of_edges())]
    cells = [[str(int(x)) for x in row] for row in dense]
    widths = [
        max([len(h)] + [len(r[j]) for r in cells]) for j, h in enumerate(headers)
    ]
    name_w = max(len(n) for n in names)
    lines = [" " * name_w + "  " + " ".join(h.rjust(w) for h, w in zip(headers, widths))]
    for name, row in zip(names, cells):
        lines.append(name.ljust(name_w) + "  " + " ".join(c.rjust(w) for c, w in zip(row, widths)))
    return "\n".join(line.rstrip() for line in lines)


def format_edge_diagram(graph) -> str:
    """One ``A --(w)--> B`` line per edge, in column order."""
    if graph.number_of_vertices() == 0:
        return EMPTY_GRAPH
    return "\n".join(
        f"{e.source.name} --({e.weight})--> {e.destination.name}" for e in graph.all_edges()
    )


def format_cycle(cycle: Sequence) -> str:
    return " -> ".join(getattr(v, "name", str(v)) for v in cycle)


def format_cycles(cycles: Iterable[Sequence], length: int) -> str:
    lines = [format_cycle(c) for c in cycles]
    if not lines:
        return f"No cycles of length {length} found."
    return "\n".join([f"Cycles of length {length}:"] + lines)


def print_graph(graph, file: TextIO | None = None) -> None:
    print(format_incidence_matrix(graph), file=file or sys.stdout)


def print_edge_diagram(graph, file: TextIO | None = None) -> None:
    print(format_edge_diagram(graph), file=file or sys.stdout)
