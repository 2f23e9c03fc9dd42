# Fixed-length cycle enumeration
import logging
import numbers

from incigraph.core.errors import ConcurrentMutationError, SearchCancelled

logger = logging.getLogger(__name__)

DEDUP_MODES = ("vertex_set", "rotation")


def canonical_key(cycle, dedup="vertex_set"):
    """Key under which a cycle is deduplicated.

    Parameters
    --
    cycle : sequence of Vertex or str
        Cycle in traversal order, closing vertex not repeated.
    dedup : {'vertex_set', 'rotation'}, optional
        - ``'vertex_set'`` : sorted vertex names. Rotation invariant, and also
          merges different cycles over the same vertex set.
        - ``'rotation'`` : the lexicographically smallest rotation of the name
          sequence. Only true rotations share a key.

    Returns
    ---
    tuple[str, ...]

    """
    names = [getattr(v, "name", v) for v in cycle]
    if dedup == "vertex_set":
        return tuple(sorted(names))
    if dedup == "rotation":
        if not names:
            return ()
        return min(tuple(names[i:] + names[:i]) for i in range(len(names)))
    raise ValueError(f"dedup must be one of {DEDUP_MODES}, got {dedup!r}")


def enumerate_cycles_of_length(graph, length, *, dedup="vertex_set", cancel=None):
    """Enumerate simple cycles that visit exactly ``length`` vertices.

    Depth-first backtracking from every vertex in row order. A path of ``k``
    vertices is extended along each outgoing edge (column order) to a vertex not
    yet on the path; returning to the start vertex is only allowed on the step
    that reaches ``length``. A full-length path is a cycle when its last vertex is
    adjacent to its first. Cycles sharing a canonical key with an earlier one are
    dropped.

    Parameters
    --
    graph : Graph
        Any object exposing ``vertices()``, ``outgoing_edges()``,
        ``are_adjacent()`` and ``version``.
    length : int
        Number of vertices in the cycle (>= 1). ``1`` matches self-loops only.
    dedup : {'vertex_set', 'rotation'}, optional
        Canonical key used for deduplication, see :func:`canonical_key`.
    cancel : object with ``is_set()``, optional
        Cooperative cancel token (e.g. ``threading.Event``), polled on every step.

    Returns
    ---
    list[list[Vertex]]
        Cycles in discovery order, each in traversal order.

    Raises
    --
    ValueError
        If ``length`` is not an integer >= 1 or ``dedup`` is unknown.
    SearchCancelled
        If ``cancel`` becomes set during the search.
    ConcurrentMutationError
        If the graph is mutated while the search is running.

    Notes
    -
    - Exhaustive: up to ``out_degree ** length`` paths per start vertex.
    - Reversed traversals of the same cycle are not merged.

    """
    if isinstance(length, bool) or not isinstance(length, numbers.Integral):
        raise ValueError(f"length must be an integer, got {length!r}")
    length = int(length)
    if length < 1:
        raise ValueError(f"length must be >= 1, got {length}")
    if dedup not in DEDUP_MODES:
        raise ValueError(f"dedup must be one of {DEDUP_MODES}, got {dedup!r}")

    vertices = graph.vertices()
    if length > len(vertices):
        logger.debug("length %d exceeds %d vertices; no cycles", length, len(vertices))
        return []

    version = graph.version
    cycles = []
    seen = set()
    path = []
    on_path = set()
    # (vertex, iterator over its outgoing edges), one frame per path step below ``length``
    stack = []

    def _check():
        if cancel is not None and cancel.is_set():
            raise SearchCancelled(f"cycle search cancelled after {len(cycles)} cycles")
        if graph.version != version:
            raise ConcurrentMutationError("graph was mutated during cycle enumeration")

    def _leave(vertex):
        path.pop()
        # only the start vertex can sit on the path twice
        if not path or path[0] != vertex:
            on_path.discard(vertex)

    def _enter(vertex):
        _check()
        path.append(vertex)
        on_path.add(vertex)
        if len(path) < length:
            stack.append((vertex, iter(graph.outgoing_edges(vertex))))
            return
        # the start may only reappear through a self-loop; keep cycles simple
        if len(on_path) == length and graph.are_adjacent(path[-1], path[0]):
            key = canonical_key(path, dedup)
            if key not in seen:
                seen.add(key)
                cycles.append(list(path))
        _leave(vertex)

    for start in vertices:
        _enter(start)
        while stack:
            vertex, edges = stack[-1]
            edge = next(edges, None)
            if edge is None:
                stack.pop()
                _leave(vertex)
                continue
            dest = edge.destination
            closing = len(path) == length - 1
            if dest not in on_path or (closing and dest == path[0]):
                _enter(dest)

    logger.debug(
        "found %d cycles of length %d over %d vertices (dedup=%s)",
        len(cycles),
        length,
        len(vertices),
        dedup,
    )
    return cycles
