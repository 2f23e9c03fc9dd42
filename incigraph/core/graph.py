import logging
import threading
import warnings

import numpy as np
import scipy.sparse as sp

from incigraph.algorithms.traversal import Traversal

from ._CacheManager import CacheManager
from ._helpers import Vertex, _coerce_weight, positional_name
from ._History import History
from ._Views import ViewsClass
from .errors import (
    CorruptMatrixError,
    DimensionMismatchError,
    DuplicateNameError,
    InvalidWeightError,
    VertexNotFoundError,
)

logger = logging.getLogger(__name__)

# ===================================


class Graph(Traversal, ViewsClass, History):
    """Directed weighted graph stored as a signed incidence matrix.

    The graph is backed by a DOK (Dictionary Of Keys) sparse matrix with one row
    per vertex (insertion order) and one column per added edge. Supports:
    incremental construction, bulk construction from an adjacency matrix,
    adjacency/outgoing-edge queries, Polars-backed views and a mutation log.

    Parameters
    --
    dtype : numpy dtype, optional
        Integer dtype of the incidence matrix. Defaults to ``numpy.int64``.

    Notes
    -
    - Column ``j`` holds ``+w`` on the source row and ``-w`` on the destination
      row; every other entry is zero.
    - Each mutation reallocates the matrix at its new shape and copies the old
      entries forward; shapes never change in place.
    - A self-loop cannot be written as a signed pair on one row. Its column stays
      all-zero and the ``(row, weight)`` is kept in ``_self_loops``; queries
      read both.
    - Mutators are serialized by an instance lock. Readers do not lock; do not
      mutate while a cycle search is running.

    See Also

    add_vertex, add_edge, build_from_adjacency_matrix, find_cycles_of_length

    """

    # Construction

    def __init__(self, dtype=np.int64):
        dtype = np.dtype(dtype)
        if not np.issubdtype(dtype, np.signedinteger):
            raise TypeError(f"Incidence matrix dtype must be a signed integer, got {dtype}")
        self._dtype = dtype

        # Vertex mappings
        self._vertices = []  # row index -> Vertex
        self._name_to_idx = {}  # name -> row index

        # Incidence matrix
        self._matrix = sp.dok_matrix((0, 0), dtype=dtype)
        self._num_edges = 0
        self._self_loops = {}  # column index -> (row index, weight)

        # Structural version (bumped by every mutation; drives cache validity)
        self._version = 0
        self._cache = CacheManager(self)
        self._lock = threading.RLock()

        # History and Timeline
        self._init_history()

    @classmethod
    def from_adjacency_matrix(cls, matrix, marks, **kwargs):
        """Build a new graph from a square adjacency matrix.

        See :meth:`build_from_adjacency_matrix`.
        """
        g = cls(**kwargs)
        g.build_from_adjacency_matrix(matrix, marks)
        return g

    # Matrix maintenance

    def _rebuild_matrix(self, rows: int, cols: int):
        """Reallocate the incidence matrix at ``(rows, cols)`` and copy entries forward."""
        old = self._matrix.tocoo()
        new = sp.dok_matrix((rows, cols), dtype=self._dtype)
        for i, j, v in zip(old.row.tolist(), old.col.tolist(), old.data.tolist()):
            if i < rows and j < cols:
                new[i, j] = v
        self._matrix = new

    def _touch(self):
        self._version += 1

    # Mutation

    def add_vertex(self, name, mark=""):
        """Append a vertex.

        Parameters
        --
        name : str
            Vertex name (must be unique in this graph).
        mark : str, optional
            Display label; not used by any algorithm.

        Returns
        ---
        Vertex
            The new vertex.

        Raises
        --
        DuplicateNameError
            If ``name`` already exists. The graph is left unchanged.

        Notes
        -
        - The new row is all zero; existing edge columns are preserved.

        """
        with self._lock:
            if name in self._name_to_idx:
                raise DuplicateNameError(name)
            vertex = Vertex(name, mark)
            idx = len(self._vertices)
            self._rebuild_matrix(idx + 1, self._num_edges)
            self._vertices.append(vertex)
            self._name_to_idx[name] = idx
            self._touch()
        logger.debug("added vertex %r (mark=%r) at row %d", name, mark, idx)
        return vertex

    def add_edge(self, source, destination, weight=1):
        """Add a directed edge ``source -> destination``.

        Parameters
        --
        source : str
            Source vertex name.
        destination : str
            Destination vertex name.
        weight : int, optional
            Strictly positive integer weight (default 1).

        Returns
        ---
        int
            Column index of the new edge.

        Raises
        --
        VertexNotFoundError
            If either endpoint is unknown.
        InvalidWeightError
            If ``weight`` is not a strictly positive integer.

        Notes
        -
        - Adding the same ordered pair twice creates two columns; they materialize
          as equal ``Edge`` objects.
        - Self-loops are accepted (see class notes).

        """
        with self._lock:
            missing = [n for n in (source, destination) if n not in self._name_to_idx]
            if missing:
                raise VertexNotFoundError(*dict.fromkeys(missing))
            weight = _coerce_weight(weight)
            si = self._name_to_idx[source]
            di = self._name_to_idx[destination]
            col = self._num_edges
            self._rebuild_matrix(len(self._vertices), col + 1)
            if si == di:
                self._self_loops[col] = (si, weight)
                logger.warning(
                    "self-loop on %r stored outside the incidence matrix (column %d)", source, col
                )
            else:
                self._matrix[si, col] = weight
                self._matrix[di, col] = -weight
            self._num_edges = col + 1
            self._touch()
        logger.debug("added edge %r -> %r (weight=%d) at column %d", source, destination, weight, col)
        return col

    def build_from_adjacency_matrix(self, matrix, marks):
        """Populate the graph from a square adjacency matrix.

        Parameters
        --
        matrix : array-like of shape (n, n)
            ``matrix[i][j] > 0`` creates an edge from vertex ``i`` to vertex ``j``
            with that weight. Zero and negative cells are not edges.
        marks : sequence of str, length n
            Display marks, one per vertex.

        Returns
        ---
        Graph
            ``self``, for chaining.

        Raises
        --
        DimensionMismatchError
            If ``matrix`` is not square or ``len(marks) != n``. Nothing is added.
        DuplicateNameError
            If a positional name is already taken. Nothing is added.

        Notes
        -
        - Vertex names are positional: ``A``, ``B``, ..., ``Z``, ``AA``, ...
        - Edge columns follow row-major scan order.
        - Intended for an empty graph. On a non-empty graph a ``UserWarning`` is
          emitted and vertices are appended.

        """
        try:
            arr = np.asarray(matrix)
        except ValueError as exc:  # ragged rows
            raise DimensionMismatchError(f"Adjacency matrix rows differ in length: {exc}") from exc
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise DimensionMismatchError(
                f"Adjacency matrix must be square, got shape {arr.shape}"
            )
        marks = list(marks)
        n = arr.shape[0]
        if len(marks) != n:
            raise DimensionMismatchError(
                f"Expected {n} vertex marks for a {n}x{n} matrix, got {len(marks)}"
            )
        if arr.size and (arr.dtype == bool or not np.issubdtype(arr.dtype, np.number)):
            raise TypeError(f"Adjacency matrix must be numeric, got dtype {arr.dtype}")
        positive = arr[arr > 0] if arr.size else arr
        if positive.size and np.any(positive != np.floor(positive)):
            raise InvalidWeightError("Adjacency matrix weights must be integers")

        names = [positional_name(i) for i in range(n)]
        with self._lock:
            for name in names:
                if name in self._name_to_idx:
                    raise DuplicateNameError(name)
            if self._vertices:
                warnings.warn(
                    "build_from_adjacency_matrix() on a non-empty graph; "
                    "mixing bulk and incremental construction is not supported",
                    UserWarning,
                    stacklevel=2,
                )
            for name, mark in zip(names, marks):
                self.add_vertex(name, mark)
            for i in range(n):
                for j in range(n):
                    if arr[i, j] > 0:
                        self.add_edge(names[i], names[j], weight=arr[i, j].item())
        logger.debug("built %d vertices / %d edges from adjacency matrix", n, self._num_edges)
        return self

    # Lookups

    def has_vertex(self, name) -> bool:
        """Test for the existence of a vertex."""
        try:
            return name in self._name_to_idx
        except TypeError:
            return False

    def get_vertex(self, name):
        """Vertex by name, or None."""
        idx = self._row_of(name)
        return None if idx is None else self._vertices[idx]

    def index_of(self, name):
        """Matrix row of a vertex, or None."""
        return self._row_of(name)

    def vertices(self):
        """All vertices in row order.

        Returns
        ---
        list[Vertex]

        """
        return list(self._vertices)

    def vertex_names(self):
        return [v.name for v in self._vertices]

    def number_of_vertices(self):
        return len(self._vertices)

    def number_of_edges(self):
        """Count edges (columns in the incidence matrix, self-loops included)."""
        return self._num_edges

    @property
    def shape(self):
        return (len(self._vertices), self._num_edges)

    @property
    def version(self):
        """Structural version; changes on every mutation."""
        return self._version

    @property
    def cache(self):
        """Cache management (CSR/CSC materialization)."""
        return self._cache

    def incidence_matrix(self, sparse: bool = False):
        """Return a copy of the incidence matrix.

        Parameters
        --
        sparse : bool, optional (default=False)
            If True, return a SciPy CSR matrix; otherwise a dense NumPy ndarray.

        Returns
        ---
        scipy.sparse.csr_matrix | numpy.ndarray
            Shape ``(number_of_vertices(), number_of_edges())``.

        """
        if sparse:
            return self._matrix.tocsr()
        return self._matrix.toarray()

    def validate(self):
        """Check the column invariant.

        Returns
        ---
        bool
            True when every column is well formed.

        Raises
        --
        CorruptMatrixError
            If a regular column does not hold exactly one positive and one
            negative entry of equal magnitude, or a self-loop column is not empty.

        """
        if self._matrix.shape != self.shape:
            raise CorruptMatrixError(
                f"matrix shape {self._matrix.shape} does not match graph shape {self.shape}"
            )
        for col in range(self._num_edges):
            entries = list(self._column_entries(col))
            if col in self._self_loops:
                if entries:
                    raise CorruptMatrixError(f"self-loop column {col} has matrix entries")
                continue
            pos = [v for _, v in entries if v > 0]
            neg = [v for _, v in entries if v < 0]
            if len(entries) != 2 or len(pos) != 1 or len(neg) != 1 or pos[0] != -neg[0]:
                raise CorruptMatrixError(f"column {col} is malformed: {entries}")
        return True

    # Cycles

    def find_cycles_of_length(self, length, **kwargs):
        """Simple cycles with exactly ``length`` vertices.

        Shortcut for :func:`incigraph.algorithms.cycles.enumerate_cycles_of_length`.
        """
        from incigraph.algorithms.cycles import enumerate_cycles_of_length

        return enumerate_cycles_of_length(self, length, **kwargs)

    # Copy

    def copy(self, history: bool = False):
        """Independent copy of the graph.

        Parameters
        --
        history : bool
            If True, copy the mutation history too.

        """
        new = type(self)(dtype=self._dtype)
        new._vertices = list(self._vertices)
        new._name_to_idx = dict(self._name_to_idx)
        new._matrix = self._matrix.copy()
        new._num_edges = self._num_edges
        new._self_loops = dict(self._self_loops)
        new._version = self._version
        if history:
            new._history = [dict(evt) for evt in self._history]
            new._history_seq = self._history_seq
        return new

    # Dunder

    def __len__(self):
        return len(self._vertices)

    def __contains__(self, name):
        return self.has_vertex(name)

    def __repr__(self):
        return f"Graph(vertices={len(self._vertices)}, edges={self._num_edges})"
