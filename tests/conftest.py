"""Shared fixtures and helpers for graph and cycle tests."""

import pathlib
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from incigraph.core.graph import Graph  # noqa: E402

# ======================================================================
# FIXTURES
# ======================================================================


@pytest.fixture
def empty_graph():
    return Graph()


@pytest.fixture
def five_vertex_graph():
    """A..E with A->B, B->C, C->A, A->D, D->C (all weight 1)."""
    G = Graph()
    for name in "ABCDE":
        G.add_vertex(name, name.lower())
    G.add_edge("A", "B")
    G.add_edge("B", "C")
    G.add_edge("C", "A")
    G.add_edge("A", "D")
    G.add_edge("D", "C")
    return G


@pytest.fixture
def weighted_graph():
    """Three vertices, mixed weights, one duplicate ordered pair."""
    G = Graph()
    G.add_vertex("x", "first")
    G.add_vertex("y", "second")
    G.add_vertex("z", "third")
    G.add_edge("x", "y", weight=4)
    G.add_edge("y", "z", weight=2)
    G.add_edge("z", "x", weight=7)
    G.add_edge("x", "y", weight=9)
    return G


@pytest.fixture
def tmpdir_fixture():
    """Temporary directory for file I/O (input/output) tests."""
    tmpdir = Path(tempfile.mkdtemp())
    yield tmpdir
    shutil.rmtree(tmpdir)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
