"""
edge.py — Edge & EdgeLocator
=============================
An Edge is owned by exactly one source vertex and lives in that vertex's
ordered edge list.  It is addressed from the outside by an EdgeLocator:
(source vertex, position in the source's edge list).

Design decisions:
  - Edges do NOT store their source.  The source is implied by which list
    they sit in, and the locator carries it when an observer needs it.
  - A locator is a lookup key, not a handle.  It holds no reference to the
    graph and is only meaningful against the graph instance that made it.
  - Both types are frozen dataclasses so they hash, compare and can be used
    as dict keys by drivers (e.g. a highlight colour per locator).
  - `reverse` is only set for graphs built from undirected connections,
    where each connection is stored as two paired directed edges.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union


# ---------------------------------------------------------------------------
# EdgeLocator
# ---------------------------------------------------------------------------
@dataclass(frozen=True, order=True)
class EdgeLocator:
    """
    Attributes:
        source   : Index of the vertex that owns the edge.
        position : Index of the edge inside `source`'s edge list.
    """

    source:   int
    position: int

    @classmethod
    def of(cls, value: Union["EdgeLocator", Sequence[int], None]) -> Optional["EdgeLocator"]:
        """Accept a locator, a (source, position) pair, or None."""
        if value is None or isinstance(value, EdgeLocator):
            return value
        source, position = value
        return cls(int(source), int(position))

    def as_tuple(self) -> tuple:
        return (self.source, self.position)

    def to_dict(self) -> dict:
        return {"source": self.source, "position": self.position}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["EdgeLocator"]:
        if data is None:
            return None
        return cls(int(data["source"]), int(data["position"]))

    def __repr__(self) -> str:
        return f"EdgeLocator({self.source}, {self.position})"


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        target  : Index of the head vertex.
        weight  : Non-negative integer cost.
        reverse : Locator of the paired opposite-direction edge, or None.
    """

    target:  int
    weight:  int
    reverse: Optional[EdgeLocator] = None

    def to_dict(self) -> dict:
        return {
            "target":  self.target,
            "weight":  self.weight,
            "reverse": self.reverse.to_dict() if self.reverse else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            target=int(data["target"]),
            weight=int(data["weight"]),
            reverse=EdgeLocator.from_dict(data.get("reverse")),
        )

    def __repr__(self) -> str:
        rev = f", reverse={self.reverse!r}" if self.reverse else ""
        return f"Edge(→{self.target}, w={self.weight}{rev})"
