from __future__ import annotations

import contextlib
import io
import math
from collections.abc import Iterable, Sequence
from typing import Any, Literal

import numpy as np

# Small helpers


def _normalize(
    values: Iterable[float], lo: float | None = None, hi: float | None = None, eps: float = 1e-12
):
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return arr
    if lo is None:
        lo = np.nanmin(arr)
    if hi is None:
        hi = np.nanmax(arr)
    if not math.isfinite(lo):
        lo = 0.0
    if not math.isfinite(hi):
        hi = 1.0
    denom = max(hi - lo, eps)
    return (arr - lo) / denom


def _greyscale(v: float) -> str:
    v = float(np.clip(v, 0.0, 1.0))
    c = int(round(v * 255))
    return f"#{c:02x}{c:02x}{c:02x}"


def _suppress_repr_warnings(g: Any) -> None:
    """Monkey-patch _repr_* methods to hide stderr noise from visualization libs."""
    repr_methods = [m for m in dir(g) if m.startswith("_repr_") and callable(getattr(g, m))]
    for method_name in repr_methods:
        original = getattr(g, method_name)

        def make_wrapper(orig_func):
            def wrapper(*args, **kwargs):
                with contextlib.redirect_stderr(io.StringIO()):
                    return orig_func(*args, **kwargs)

            return wrapper

        setattr(g, method_name, make_wrapper(original))


def _edge_records(graph, edge_indexes: Iterable[int] | None = None) -> list[tuple[int, str, str, int]]:
    """(column, source, target, weight) for every materialized edge."""
    wanted = None if edge_indexes is None else set(edge_indexes)
    out = []
    for row in graph.edges_view().iter_rows(named=True):
        if wanted is not None and row["edge_index"] not in wanted:
            continue
        out.append((row["edge_index"], row["source"], row["target"], row["weight"]))
    return out


# Label builders


def build_vertex_labels(
    graph, key: Literal["name", "mark", "both"] | None = None
) -> dict[str, str]:
    """Vertex name -> display label.

    ``key=None`` or ``'name'`` labels with the name, ``'mark'`` with the mark
    (falling back to the name when the mark is empty), ``'both'`` with
    ``name\\nmark``.
    """
    labels: dict[str, str] = {}
    for v in graph.vertices():
        if key in (None, "name"):
            labels[v.name] = str(v.name)
        elif key == "mark":
            labels[v.name] = str(v.mark) if v.mark != "" else str(v.name)
        elif key == "both":
            labels[v.name] = f"{v.name}\\n{v.mark}" if v.mark != "" else str(v.name)
        else:
            raise ValueError("key must be None, 'name', 'mark' or 'both'")
    return labels


def build_edge_labels(graph) -> dict[int, str]:
    """Edge column -> weight label."""
    return {j: str(w) for j, _, _, w in _edge_records(graph)}


# Edge style from weights


def edge_style_from_weights(
    graph,
    *,
    min_width: float = 0.5,
    max_width: float = 5.0,
) -> dict[int, dict[str, str]]:
    """Compute visual edge styles (pen width and grey level) from edge weights.

    Parameters
    ----------
    graph : Graph
        Graph exposing ``edges_view()``.
    min_width : float, optional
        Minimum line width for edges. Default is 0.5.
    max_width : float, optional
        Maximum line width for edges. Default is 5.0.

    Returns
    -------
    dict[int, dict[str, str]]
        A mapping from edge column to a style dict with keys:
        - ``penwidth`` : stroke width (stringified float)
        - ``color`` : hex grey, darker for heavier edges

    Notes
    -----
    - Normalization is performed across all edges in the graph; with a single
      distinct weight every edge gets ``min_width``.

    """
    records = _edge_records(graph)
    x = _normalize([float(w) for _, _, _, w in records])
    styles: dict[int, dict[str, str]] = {}
    for (j, _, _, _), xv in zip(records, x):
        pen = min_width + float(xv) * (max_width - min_width)
        color = _greyscale(0.6 * (1.0 - float(xv)))  # heavier => darker
        styles[j] = {"penwidth": f"{pen:.3f}", "color": color}
    return styles


def cycle_edge_styles(
    graph,
    cycles: Sequence[Sequence],
    *,
    colors: Sequence[str] = ("firebrick3", "dodgerblue3", "darkgreen", "darkorange2", "purple3"),
    penwidth: float = 3.0,
) -> dict[int, dict[str, str]]:
    """Styles that highlight the edges of each cycle in its own color.

    For every consecutive pair of a cycle (including the closing pair) the first
    column joining that pair is colored. Later cycles win on shared edges.
    """
    first_col: dict[tuple[str, str], int] = {}
    for j, s, t, _ in _edge_records(graph):
        first_col.setdefault((s, t), j)
    styles: dict[int, dict[str, str]] = {}
    for k, cycle in enumerate(cycles):
        names = [getattr(v, "name", v) for v in cycle]
        color = colors[k % len(colors)]
        for a, b in zip(names, names[1:] + names[:1]):
            j = first_col.get((a, b))
            if j is not None:
                styles[j] = {"color": color, "penwidth": f"{penwidth:.3f}"}
    return styles


# Backends


def _add_nodes_graphviz(
    Gv, node_names: Iterable[str], custom_vertex_attr: dict[str, dict[str, str]] | None = None
):
    custom_vertex_attr = custom_vertex_attr or {}
    for v in node_names:
        attrs = {"shape": "circle", "style": "filled", "fillcolor": "lightblue"}
        attrs.update(custom_vertex_attr.get(v, {}))
        Gv.node(v, **attrs)


def _add_nodes_pydot(
    Gd, node_names: Iterable[str], custom_vertex_attr: dict[str, dict[str, str]] | None = None
):
    import pydot

    custom_vertex_attr = custom_vertex_attr or {}
    for v in node_names:
        attrs = {"shape": "circle", "style": "filled", "fillcolor": "lightblue"}
        attrs.update(custom_vertex_attr.get(v, {}))
        Gd.add_node(pydot.Node(_pydot_id(v), **attrs))


def _pydot_id(name: str) -> str:
    # pydot does not quote ids with spaces or punctuation itself
    return name if name.isidentifier() else '"' + name.replace('"', '\\"') + '"'


def to_graphviz(
    graph,
    *,
    layout: str = "circo",
    graph_attr: dict[str, str] | None = None,
    node_attr: dict[str, str] | None = None,
    edge_attr: dict[str, str] | None = None,
    custom_edge_attr: dict[int, dict[str, str]] | None = None,
    custom_vertex_attr: dict[str, dict[str, str]] | None = None,
    edge_indexes: list[int] | None = None,
    suppress_warnings: bool = True,
):
    import graphviz

    Gv = graphviz.Digraph(
        engine=layout, graph_attr=graph_attr, node_attr=node_attr, edge_attr=edge_attr
    )

    # every vertex is drawn, isolated ones included
    _add_nodes_graphviz(Gv, [str(v.name) for v in graph.vertices()], custom_vertex_attr)

    for j, s, t, _ in _edge_records(graph, edge_indexes):
        a = {"arrowhead": "normal"}
        if custom_edge_attr and j in custom_edge_attr:
            a.update(custom_edge_attr[j])
        Gv.edge(str(s), str(t), **a)

    if suppress_warnings:
        _suppress_repr_warnings(Gv)
    return Gv


def to_pydot(
    graph,
    *,
    layout: str = "circo",
    graph_attr: dict[str, str] | None = None,
    node_attr: dict[str, str] | None = None,
    edge_attr: dict[str, str] | None = None,
    custom_edge_attr: dict[int, dict[str, str]] | None = None,
    custom_vertex_attr: dict[str, dict[str, str]] | None = None,
    edge_indexes: list[int] | None = None,
):
    import pydot

    Gd = pydot.Dot(graph_type="digraph", layout=layout, **(graph_attr or {}))
    if node_attr:
        Gd.set_node_defaults(**node_attr)
    if edge_attr:
        Gd.set_edge_defaults(**edge_attr)

    _add_nodes_pydot(Gd, [str(v.name) for v in graph.vertices()], custom_vertex_attr)

    for j, s, t, _ in _edge_records(graph, edge_indexes):
        a = {"arrowhead": "normal"}
        if custom_edge_attr and j in custom_edge_attr:
            a.update(custom_edge_attr[j])
        Gd.add_edge(pydot.Edge(_pydot_id(str(s)), _pydot_id(str(t)), **a))
    return Gd


# One-call plotting API


def plot(
    graph,
    *,
    backend: Literal["graphviz", "pydot"] = "graphviz",
    layout: str = "circo",
    show_edge_labels: bool = True,
    vertex_label_key: Literal["name", "mark", "both"] | None = None,
    use_weight_style: bool = False,
    highlight_cycles: Sequence[Sequence] | None = None,
    suppress_warnings: bool = True,
    **kwargs,
):
    """Build a fully styled graph object ready for rendering with Graphviz or Pydot.

    Parameters
    ----------
    graph : Graph
        Graph exposing ``vertices()`` and ``edges_view()``.
    backend : {'graphviz', 'pydot'}, optional
        Visualization backend to use. Default is ``'graphviz'``.
    layout : str, optional
        Layout engine. Default ``'circo'`` places the vertices on a circle.
    show_edge_labels : bool, optional
        Label edges with their weight. Default is ``True``.
    vertex_label_key : {'name', 'mark', 'both'}, optional
        What vertices are labelled with. ``None`` uses the name.
    use_weight_style : bool, optional
        Scale pen width and grey level by weight. Default is ``False``.
    highlight_cycles : sequence of cycles, optional
        Cycles (as returned by the cycle search) whose edges are colored.
    suppress_warnings : bool, optional
        Suppress backend rendering warnings (stderr). Graphviz only.
    **kwargs
        ``graph_attr``, ``node_attr``, ``edge_attr`` and ``edge_indexes`` are
        forwarded to `to_graphviz()` or `to_pydot()`.

    Returns
    -------
    graphviz.Digraph or pydot.Dot

    Raises
    ------
    ValueError
        If an invalid `backend` name is provided.

    """
    if backend not in ("graphviz", "pydot"):
        raise ValueError("backend must be 'graphviz' or 'pydot'")

    custom_edge_attr: dict[int, dict[str, str]] = {}
    if use_weight_style:
        custom_edge_attr = edge_style_from_weights(graph)
    if show_edge_labels:
        for j, txt in build_edge_labels(graph).items():
            custom_edge_attr.setdefault(j, {})["label"] = txt
    if highlight_cycles:
        for j, style in cycle_edge_styles(graph, highlight_cycles).items():
            custom_edge_attr.setdefault(j, {}).update(style)

    vlabels = build_vertex_labels(graph, key=vertex_label_key)
    custom_vertex_attr = {k: {"label": v} for k, v in vlabels.items()}

    common = dict(
        layout=layout,
        graph_attr=kwargs.get("graph_attr"),
        node_attr=kwargs.get("node_attr"),
        edge_attr=kwargs.get("edge_attr"),
        custom_edge_attr=custom_edge_attr,
        custom_vertex_attr=custom_vertex_attr,
        edge_indexes=kwargs.get("edge_indexes"),
    )
    if backend == "graphviz":
        return to_graphviz(graph, suppress_warnings=suppress_warnings, **common)
    return to_pydot(graph, **common)


# Renderer


def render(obj: Any, path: str, format: str = "svg") -> str:
    """Render a Graphviz or Pydot graph object to disk and return the output path.

    Parameters
    ----------
    obj : graphviz.Digraph or pydot.Dot
        The graph object returned by `plot()`.
    path : str
        Destination file path. A matching extension is stripped (Graphviz) or
        appended (Pydot) so the result ends in ``.<format>``.
    format : {'svg', 'png', 'raw'}, optional
        Output format. Default is ``'svg'``. ``'raw'`` is Pydot only.

    Returns
    -------
    str
        Full path to the written output file.

    Raises
    ------
    TypeError
        If `obj` is not a supported graph type.

    Notes
    -----
    - Both backends need the Graphviz binaries (``dot``/``circo``) on PATH.

    """
    kind = obj.__class__.__module__
    fmt = format.lower()
    path = str(path)
    if "graphviz" in kind:
        stem = path[: -len(fmt) - 1] if path.lower().endswith(f".{fmt}") else path
        return obj.render(stem, format=fmt, cleanup=True)
    elif "pydot" in kind:
        if fmt == "png":
            out = path if path.lower().endswith(".png") else f"{path}.png"
            obj.write_png(out)
            return out
        elif fmt in ("svg",):
            out = path if path.lower().endswith(".svg") else f"{path}.svg"
            obj.write_svg(out)
            return out
        else:
            obj.write_raw(path)
            return path
    else:
        raise TypeError("Unknown graph object; expected graphviz.Digraph or pydot.Dot")
