# Traversal (adjacency and edge reconstruction)
from incigraph.core._helpers import Edge, Vertex


class Traversal:
    """Read-only queries answered straight from the signed incidence matrix.

    Every query here is tolerant: unknown vertices give ``False`` or ``[]``
    instead of raising. Vertices may be passed as names or ``Vertex`` objects.
    """

    def _row_of(self, vertex):
        name = vertex.name if isinstance(vertex, Vertex) else vertex
        try:
            return self._name_to_idx.get(name)
        except TypeError:  # unhashable input is never a vertex
            return None

    def _row_entries(self, row):
        csr = self._cache.csr
        start, end = csr.indptr[row], csr.indptr[row + 1]
        return zip(csr.indices[start:end].tolist(), csr.data[start:end].tolist())

    def _column_entries(self, col):
        csc = self._cache.csc
        start, end = csc.indptr[col], csc.indptr[col + 1]
        return zip(csc.indices[start:end].tolist(), csc.data[start:end].tolist())

    def _first_negative_row(self, col):
        for row, value in self._column_entries(col):
            if value < 0:
                return row
        return None

    def _column_edge(self, col):
        """Materialize column ``col`` as an Edge, or None if the column is malformed."""
        loop = self._self_loops.get(col)
        if loop is not None:
            row, weight = loop
            v = self._vertices[row]
            return Edge(v, v, weight)
        source = dest = None
        weight = 0
        for row, value in self._column_entries(col):
            if value > 0 and source is None:
                source, weight = row, value
            elif value < 0 and dest is None:
                dest = row
        if source is None or dest is None:
            return None
        return Edge(self._vertices[source], self._vertices[dest], weight)

    def are_adjacent(self, u, v):
        """Whether a directed edge ``u -> v`` exists.

        Parameters
        --
        u, v : str or Vertex

        Returns
        ---
        bool
            False when either vertex is unknown.

        """
        ui = self._row_of(u)
        vi = self._row_of(v)
        if ui is None or vi is None:
            return False
        if ui == vi and any(row == ui for row, _ in self._self_loops.values()):
            return True
        heads = {col for col, value in self._row_entries(ui) if value > 0}
        if not heads:
            return False
        return any(value < 0 and col in heads for col, value in self._row_entries(vi))

    def outgoing_edges(self, vertex):
        """Edges leaving ``vertex``, in column order.

        Each column where the vertex's row is positive is paired with the first
        (lowest-index) row holding a negative entry in that column.

        Parameters
        --
        vertex : str or Vertex

        Returns
        ---
        list[Edge]
            Empty when the vertex is unknown.

        """
        vi = self._row_of(vertex)
        if vi is None:
            return []
        source = self._vertices[vi]
        weights = {col: value for col, value in self._row_entries(vi) if value > 0}
        for col, (row, weight) in self._self_loops.items():
            if row == vi:
                weights[col] = weight
        out = []
        for col in sorted(weights):
            if col in self._self_loops:
                out.append(Edge(source, source, weights[col]))
                continue
            dest = self._first_negative_row(col)
            if dest is not None:
                out.append(Edge(source, self._vertices[dest], weights[col]))
        return out

    def successors(self, vertex):
        """Distinct destination names reachable in one step, first-seen order.

        Parameters
        --
        vertex : str or Vertex

        Returns
        ---
        list[str]

        """
        seen = {}
        for edge in self.outgoing_edges(vertex):
            seen.setdefault(edge.destination.name, None)
        return list(seen)

    def predecessors(self, vertex):
        """Distinct source names with an edge into ``vertex``, column order.

        Returns
        ---
        list[str]

        """
        vi = self._row_of(vertex)
        if vi is None:
            return []
        cols = [col for col, value in self._row_entries(vi) if value < 0]
        cols += [col for col, (row, _) in self._self_loops.items() if row == vi]
        seen = {}
        for col in sorted(cols):
            edge = self._column_edge(col)
            if edge is not None and edge.destination.name == self._vertices[vi].name:
                seen.setdefault(edge.source.name, None)
        return list(seen)

    def all_edges(self):
        """Reconstruct every edge, one per column, in column order.

        Returns
        ---
        list[Edge]
            Columns without both a positive and a negative entry are skipped.

        """
        out = []
        for col in range(self._num_edges):
            edge = self._column_edge(col)
            if edge is not None:
                out.append(edge)
        return out

    def get_edge(self, source, destination):
        """First edge (lowest column) joining ``source -> destination``.

        When the same ordered pair was added more than once, the earliest column
        decides the weight.

        Returns
        ---
        Edge or None

        """
        for edge in self.outgoing_edges(source):
            if edge.destination.name == (
                destination.name if isinstance(destination, Vertex) else destination
            ):
                return edge
        return None
