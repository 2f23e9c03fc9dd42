"""Sample graphs used by the command-line demo and the tests."""

from incigraph.core.graph import Graph

#                    A  B  C  D  E
SIMPLE_ADJACENCY = [
    [0, 1, 0, 1, 1],  # A
    [0, 0, 1, 0, 0],  # B
    [1, 0, 0, 0, 0],  # C
    [0, 0, 1, 0, 0],  # D
    [0, 0, 0, 1, 0],  # E
]
SIMPLE_MARKS = ["1", "2", "3", "4", "5"]

#                    A   B  C  D   E  F  G  H
COMPLEX_ADJACENCY = [
    [0, 3, 0, 0, 0, 0, 7, 0],  # A
    [0, 0, 2, 0, 0, 0, 0, 1],  # B
    [0, 0, 0, 3, 0, 1, 0, 0],  # C
    [0, 21, 0, 0, 2, 0, 0, 0],  # D
    [0, 0, 0, 0, 0, 0, 3, 0],  # E
    [0, 0, 0, 0, 74, 0, 0, 2],  # F
    [9, 0, 1, 0, 0, 0, 0, 0],  # G
    [1, 0, 0, 0, 0, 0, 6, 0],  # H
]
COMPLEX_MARKS = ["1", "2", "3", "4", "5", "6", "7", "8"]

DEMOS = {
    "simple": (SIMPLE_ADJACENCY, SIMPLE_MARKS),
    "complex": (COMPLEX_ADJACENCY, COMPLEX_MARKS),
}


def simple_graph() -> Graph:
    return Graph.from_adjacency_matrix(SIMPLE_ADJACENCY, SIMPLE_MARKS)


def complex_graph() -> Graph:
    return Graph.from_adjacency_matrix(COMPLEX_ADJACENCY, COMPLEX_MARKS)


def load_demo(name: str) -> Graph:
    try:
        matrix, marks = DEMOS[name]
    except KeyError:
        raise ValueError(f"Unknown demo {name!r}; choose from {sorted(DEMOS)}") from None
    return Graph.from_adjacency_matrix(matrix, marks)
