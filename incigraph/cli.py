"""
incigraph command-line demo.

Builds a graph (a bundled demo or an adjacency matrix from JSON), prints it,
optionally renders it with Graphviz, and lists the cycles of a given length.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from incigraph.algorithms.cycles import DEDUP_MODES, enumerate_cycles_of_length
from incigraph.core.errors import GraphError
from incigraph.core.graph import Graph
from incigraph.demo import DEMOS, load_demo
from incigraph.utils import printing

logger = logging.getLogger("incigraph.cli")

EXIT_OK = 0
EXIT_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="incigraph",
        description="Incidence-matrix digraph demo: print, render and find fixed-length cycles.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--demo",
        choices=sorted(DEMOS),
        default="simple",
        help="Bundled sample graph (default: simple)",
    )
    source.add_argument(
        "--matrix",
        type=Path,
        help='JSON file with {"matrix": [[...]], "marks": [...]}',
    )
    parser.add_argument(
        "--length",
        "-l",
        type=int,
        help="Cycle length (number of vertices). Prompted for when omitted.",
    )
    parser.add_argument(
        "--dedup",
        choices=DEDUP_MODES,
        default="vertex_set",
        help="How duplicate cycles are recognised (default: vertex_set)",
    )
    parser.add_argument(
        "--no-print",
        dest="print_graph",
        action="store_false",
        help="Do not print the edge diagram and incidence matrix",
    )
    parser.add_argument("--render", type=Path, help="Render the graph to this file (needs graphviz)")
    parser.add_argument(
        "--format",
        "-f",
        choices=["svg", "png"],
        default="png",
        help="Render format (default: png)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def load_matrix_file(path: Path) -> Graph:
    """Graph from a JSON file holding ``matrix`` and ``marks``."""
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, dict) or "matrix" not in payload:
        raise ValueError(f"{path}: expected an object with a 'matrix' key")
    matrix = payload["matrix"]
    marks = payload.get("marks")
    if marks is None:
        marks = [str(i + 1) for i in range(len(matrix))]
    return Graph.from_adjacency_matrix(matrix, marks)


def _prompt_length(stdin, stdout):
    print("Enter the desired cycle length: ", file=stdout)
    reply = stdin.readline().strip()
    try:
        return int(reply)
    except ValueError:
        logger.info("cycle length %r is not an integer; skipping search", reply)
        return None


def run(args, stdin=None, stdout=None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    if args.matrix is not None:
        graph = load_matrix_file(args.matrix)
        title = str(args.matrix)
    else:
        graph = load_demo(args.demo)
        title = f"{args.demo.capitalize()} graph"
    logger.info("loaded %r: %d vertices, %d edges", title, len(graph), graph.number_of_edges())

    if args.print_graph:
        print(f"{title}:", file=stdout)
        print(printing.format_edge_diagram(graph), file=stdout)
        print(file=stdout)
        print(printing.format_incidence_matrix(graph), file=stdout)
        print(file=stdout)

    length = args.length if args.length is not None else _prompt_length(stdin, stdout)
    cycles = []
    if length is not None:
        cycles = enumerate_cycles_of_length(graph, length, dedup=args.dedup)
        print(printing.format_cycles(cycles, length), file=stdout)

    if args.render is not None:
        from incigraph.utils import plotting

        obj = plotting.plot(graph, vertex_label_key="name", highlight_cycles=cycles)
        out = plotting.render(obj, str(args.render), format=args.format)
        print(f"Graph visualized and saved to {out}", file=stdout)
    return EXIT_OK


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except (GraphError, ValueError, TypeError, OSError) as exc:
        logger.debug("command failed", exc_info=True)
        print(f"incigraph: error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
