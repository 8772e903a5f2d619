"""Data models for the call graph and the unit coupling graph.

Levels:
  Method level: call edges between "Unit.method" keys (CallGraphStore)
  Unit level:   unordered unit pairs with call counts (CouplingGraph)
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional

from ..exceptions import InvalidPairError


class CallEdge(NamedTuple):
    """A directed call from one method key to another."""

    caller: str
    callee: str


@dataclass(frozen=True, order=True)
class Pair:
    """Unordered pair of two distinct units, stored smaller-first.

    ``Pair.of("B", "A") == Pair.of("A", "B")``; both hash to the same key.
    """

    a: str
    b: str

    def __post_init__(self) -> None:
        if self.a == self.b:
            raise InvalidPairError(self.a)
        if self.a > self.b:
            a, b = self.b, self.a
            object.__setattr__(self, "a", a)
            object.__setattr__(self, "b", b)

    @classmethod
    def of(cls, x: str, y: str) -> "Pair":
        return cls(x, y)

    def __iter__(self):
        yield self.a
        yield self.b

    def __str__(self) -> str:
        return f"{self.a} -- {self.b}"


def owning_unit(key: str, separator: str = ".") -> Optional[str]:
    """Return the unit that owns a method key.

    The unit is everything before the last separator, so qualified unit
    names keep their package prefix. Returns None for keys with no
    separator or an empty unit part.
    """
    unit, sep, _ = key.rpartition(separator)
    if not sep or not unit:
        return None
    return unit
