import polars as pl


class ViewsClass:
    """Polars DF [DataFrame] views over the graph's read-only state."""

    def vertices_view(self):
        """Vertex table in row order.

        Returns
        ---
        polars.DataFrame
            Columns: ``index`` (matrix row), ``name``, ``mark``.

        """
        return pl.DataFrame(
            {
                "index": list(range(len(self._vertices))),
                "name": [v.name for v in self._vertices],
                "mark": [v.mark for v in self._vertices],
            },
            schema={"index": pl.Int64, "name": pl.Utf8, "mark": pl.Utf8},
        )

    def edges_view(self):
        """Edge table reconstructed from the incidence matrix.

        Returns
        ---
        polars.DataFrame
            Columns: ``edge_index`` (matrix column), ``source``, ``target``, ``weight``.
            Malformed columns are absent, so ``edge_index`` may have gaps.

        """
        idx, src, tgt, w = [], [], [], []
        for col in range(self._num_edges):
            edge = self._column_edge(col)
            if edge is None:
                continue
            idx.append(col)
            src.append(edge.source.name)
            tgt.append(edge.destination.name)
            w.append(edge.weight)
        return pl.DataFrame(
            {"edge_index": idx, "source": src, "target": tgt, "weight": w},
            schema={
                "edge_index": pl.Int64,
                "source": pl.Utf8,
                "target": pl.Utf8,
                "weight": pl.Int64,
            },
        )

    def incidence_view(self):
        """Incidence matrix as a table: ``vertex`` plus one ``e1..eN`` column per edge.

        Self-loop columns hold zeros, as in the matrix itself.
        """
        dense = self._matrix.toarray()
        data = {"vertex": [v.name for v in self._vertices]}
        schema = {"vertex": pl.Utf8}
        for col in range(self._num_edges):
            key = f"e{col + 1}"
            data[key] = dense[:, col].tolist()
            schema[key] = pl.Int64
        return pl.DataFrame(data, schema=schema)
