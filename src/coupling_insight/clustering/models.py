"""Dendrogram and module models.

A dendrogram node is either a leaf wrapping one unit or a merge owning
exactly two children. Both expose the same traversal surface (``is_leaf``,
``children``, ``members``, ``similarity``) so callers never test for
missing children.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class DendrogramLeaf:
    """A single unit at the bottom of the dendrogram."""

    unit: str

    @property
    def is_leaf(self) -> bool:
        return True

    @property
    def children(self) -> tuple[()]:
        return ()

    @property
    def members(self) -> frozenset[str]:
        return frozenset((self.unit,))

    @property
    def similarity(self) -> float:
        return 0.0

    @property
    def ordered_members(self) -> tuple[str, ...]:
        return (self.unit,)


@dataclass(frozen=True)
class DendrogramMerge:
    """Fusion of two clusters at the recorded average-link similarity."""

    left: DendrogramNode
    right: DendrogramNode
    similarity: float
    ordered_members: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "ordered_members", self.left.ordered_members + self.right.ordered_members
        )

    @property
    def is_leaf(self) -> bool:
        return False

    @property
    def children(self) -> tuple[DendrogramNode, DendrogramNode]:
        return (self.left, self.right)

    @property
    def members(self) -> frozenset[str]:
        return frozenset(self.ordered_members)


DendrogramNode = Union[DendrogramLeaf, DendrogramMerge]


def iter_nodes(root: Optional[DendrogramNode]) -> Iterator[DendrogramNode]:
    """Pre-order walk over every node of a dendrogram."""
    if root is None:
        return
    stack: list[DendrogramNode] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def count_nodes(root: Optional[DendrogramNode]) -> int:
    return sum(1 for _ in iter_nodes(root))


@dataclass(frozen=True)
class Module:
    """A group of units cut from the dendrogram."""

    members: frozenset[str]
    average_coupling: float

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def pair_count(self) -> int:
        """Number of unordered unit pairs the average is taken over."""
        n = len(self.members)
        return n * (n - 1) // 2

    def sorted_members(self) -> list[str]:
        return sorted(self.members)


@dataclass
class ModuleExtraction:
    """Result of cutting a dendrogram into modules.

    ``repaired`` is set when the depth-first cut produced more than
    ``max_modules`` modules and smallest modules had to be merged; the
    result is then a partition but no longer a pure dendrogram cut.
    """

    modules: list[Module] = field(default_factory=list)
    max_modules: int = 1
    threshold: float = 0.0
    repaired: bool = False
    repair_merges: int = 0

    def __len__(self) -> int:
        return len(self.modules)

    def __iter__(self) -> Iterator[Module]:
        return iter(self.modules)

    @property
    def below_threshold(self) -> list[Module]:
        """Multi-unit modules accepted under CP because of the count limit."""
        return [m for m in self.modules if m.size > 1 and m.average_coupling < self.threshold]
