import numbers
import string

from .errors import InvalidWeightError


class Vertex:
    """Named vertex carrying a display mark.

    Parameters
    --
    name : str
        Unique key inside a graph. Equality and hashing use the name only.
    mark : str, optional
        Free-form label for display; never used by any algorithm.

    """

    __slots__ = ("_name", "_mark")

    def __init__(self, name: str, mark: str = ""):
        self._name = name
        self._mark = mark

    @property
    def name(self) -> str:
        return self._name

    @property
    def mark(self) -> str:
        return self._mark

    def __eq__(self, other):
        if not isinstance(other, Vertex):
            return NotImplemented
        return self._name == other._name

    def __hash__(self):
        return hash(self._name)

    def __repr__(self):
        return f"({self._name}, {self._mark})"

    __str__ = __repr__


class Edge:
    """Directed weighted edge materialized from an incidence column.

    Identity is the ``(source, destination)`` pair; ``weight`` is a plain,
    mutable attribute and does not take part in ``==`` or ``hash``. Two
    columns joining the same ordered pair therefore produce equal edges even
    when their weights differ.
    """

    __slots__ = ("source", "destination", "weight")

    def __init__(self, source: Vertex, destination: Vertex, weight: int):
        self.source = source
        self.destination = destination
        self.weight = weight

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return self.source == other.source and self.destination == other.destination

    def __hash__(self):
        return hash((self.source, self.destination))

    def __repr__(self):
        return f"({self.source.name}, {self.destination.name}, {self.weight})"

    __str__ = __repr__

    def as_tuple(self) -> tuple[str, str, int]:
        return (self.source.name, self.destination.name, self.weight)


def positional_name(index: int) -> str:
    """Spreadsheet-style name for a 0-based position: A..Z, AA, AB, ..."""
    if index < 0:
        raise ValueError("index must be non-negative")
    letters = string.ascii_uppercase
    out = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        out = letters[rem] + out
    return out


def _coerce_weight(weight) -> int:
    # bool is an Integral; True would silently mean 1
    if isinstance(weight, bool):
        raise InvalidWeightError(f"Edge weight must be an integer, got {weight!r}")
    if not isinstance(weight, numbers.Integral):
        if isinstance(weight, numbers.Real) and float(weight).is_integer():
            weight = int(weight)
        else:
            raise InvalidWeightError(f"Edge weight must be an integer, got {weight!r}")
    weight = int(weight)
    if weight <= 0:
        raise InvalidWeightError(
            f"Edge weight must be strictly positive (sign encodes direction), got {weight}"
        )
    return weight
