class GraphError(Exception):
    """Base class for every error raised by incigraph."""


class DuplicateNameError(GraphError, ValueError):
    """A vertex with the same name already exists."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Vertex with name '{name}' already exists.")


class VertexNotFoundError(GraphError, KeyError):
    """An edge endpoint names a vertex that is not in the graph."""

    def __init__(self, *names):
        self.names = names
        joined = ", ".join(f"'{n}'" for n in names)
        super().__init__(f"Vertex not found: {joined}")

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class DimensionMismatchError(GraphError, ValueError):
    """Adjacency matrix is not square or the marks do not match its size."""


class InvalidWeightError(GraphError, ValueError):
    """Edge weight cannot be encoded as a signed incidence pair."""


class CorruptMatrixError(GraphError, RuntimeError):
    """An incidence column breaks the one-positive/one-negative rule."""


class SearchCancelled(GraphError):
    """The cycle search was stopped through its cancel token."""


class ConcurrentMutationError(GraphError, RuntimeError):
    """The graph changed while a cycle search was walking it."""
