class CacheManager:
    """Cache manager for materialized views (CSR/CSC) of the incidence matrix."""

    def __init__(self, graph):
        self._G = graph
        self._csr = None
        self._csc = None
        self._csr_version = None
        self._csc_version = None

    # ==================== CSR/CSC Properties ====================

    @property
    def csr(self):
        """Get CSR (Compressed Sparse Row) format.
        Builds and caches on first access; rows give a vertex's incident columns.
        """
        if self._csr is None or self._csr_version != self._G._version:
            csr = self._G._matrix.tocsr()
            csr.sort_indices()
            self._csr = csr
            self._csr_version = self._G._version
        return self._csr

    @property
    def csc(self):
        """Get CSC (Compressed Sparse Column) format.
        Builds and caches on first access; row indices are sorted per column so
        "first row holding a negative entry" means the lowest row index.
        """
        if self._csc is None or self._csc_version != self._G._version:
            csc = self._G._matrix.tocsc()
            csc.sort_indices()
            self._csc = csc
            self._csc_version = self._G._version
        return self._csc

    def has_csr(self) -> bool:
        """True if CSR cache exists and matches current graph version."""
        return self._csr is not None and self._csr_version == self._G._version

    def has_csc(self) -> bool:
        """True if CSC cache exists and matches current graph version."""
        return self._csc is not None and self._csc_version == self._G._version

    # ==================== Cache Management ====================

    def invalidate(self, formats=None):
        """Invalidate cached formats.

        Parameters
        --
        formats : list[str], optional
            Formats to invalidate ('csr', 'csc'). If None, invalidate all.

        """
        if formats is None:
            formats = ["csr", "csc"]

        for fmt in formats:
            if fmt == "csr":
                self._csr = None
                self._csr_version = None
            elif fmt == "csc":
                self._csc = None
                self._csc_version = None
            else:
                raise ValueError(f"Unknown cache format: {fmt!r}")

    def build(self, formats=None):
        """Pre-build specified formats (eager caching)."""
        if formats is None:
            formats = ["csr", "csc"]

        for fmt in formats:
            if fmt == "csr":
                _ = self.csr
            elif fmt == "csc":
                _ = self.csc
            else:
                raise ValueError(f"Unknown cache format: {fmt!r}")

    def info(self):
        """Get cache status.

        Returns
        ---
        dict
            Status of each cached format

        """

        def _format_info(matrix, version):
            if matrix is None:
                return {"cached": False}
            return {
                "cached": True,
                "version": version,
                "nnz": matrix.nnz,
                "shape": matrix.shape,
            }

        return {
            "csr": _format_info(self._csr, self._csr_version),
            "csc": _format_info(self._csc, self._csc_version),
        }
