"""
graph.py — WeightedGraph Container & Generators
================================================
Single source of truth for the graph.  The stepper and every driver read
from this object; nothing writes to it after construction.

Responsibilities:
  1. Validated construction                 (weighted lists / unweighted + default weight)
  2. Adjacency queries                      (out_degree, edges_of, edge_at)
  3. Edge identity                          (EdgeLocator resolution, principal_form)
  4. Factory class-methods                  (undirected pairs, cube preset, random)
  5. Import from adjacency-list text        (text → graph)
  6. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Vertices are dense ints in [0, N).  There is no Node object; a vertex
    exists because its edge list exists.
  - Edge lists are tuples of frozen Edges, so the graph is safe to share
    read-only between any number of steppers.
  - An undirected connection is two directed edges whose `reverse` fields
    point at each other.  `principal_form` collapses such a pair onto one
    locator so a visualizer can light one stick per connection.
"""

import logging
import random
import re
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from graph.edge import Edge, EdgeLocator
from graph.errors import InvalidGraph, InvalidLocator, OutOfRange

logger = logging.getLogger(__name__)

# uniform weight given to every edge of an unweighted adjacency list
DEFAULT_WEIGHT = 5

EdgeSpec = Union[Edge, Tuple[int, int], Tuple[int, int, Optional[Sequence[int]]]]

# the demo cube: vertex i sits on a corner, edges run along the cube's sides
CUBE_ADJACENCY: List[List[int]] = [
    [1, 3, 4],
    [0, 2, 5],
    [1, 3, 6],
    [0, 2, 7],
    [0, 5, 7],
    [1, 4, 6],
    [2, 5, 7],
    [3, 4, 6],
]


class WeightedGraph:
    """
    Immutable directed graph with non-negative integer weights.

    Attributes:
        _edges : tuple indexed by vertex → tuple of Edge in construction order.
    """

    def __init__(self, edges: Sequence[Sequence[EdgeSpec]]):
        n = len(edges)
        built: List[Tuple[Edge, ...]] = []
        for u, row in enumerate(edges):
            built.append(tuple(_coerce_edge(n, u, spec) for spec in row))
        self._edges: Tuple[Tuple[Edge, ...], ...] = tuple(built)
        self._check_reverse_pairs()
        logger.debug("built graph: %d vertices, %d edges", n, self.edge_count())

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def vertex_count(self) -> int:
        return len(self._edges)

    def edge_count(self) -> int:
        return sum(len(row) for row in self._edges)

    def out_degree(self, v: int) -> int:
        return len(self._row(v))

    def edges_of(self, v: int) -> Tuple[Edge, ...]:
        """Outgoing edges of `v` in construction order."""
        return self._row(v)

    def edge_at(self, locator: EdgeLocator) -> Edge:
        """Resolve a locator produced from this graph."""
        source, position = locator.source, locator.position
        if not 0 <= source < len(self._edges):
            raise InvalidLocator(f"{locator!r}: source outside [0, {len(self._edges)})")
        row = self._edges[source]
        if not 0 <= position < len(row):
            raise InvalidLocator(f"{locator!r}: position outside [0, {len(row)})")
        return row[position]

    def locators(self) -> Iterator[EdgeLocator]:
        """Every edge's locator, vertex by vertex, position by position."""
        for u, row in enumerate(self._edges):
            for i in range(len(row)):
                yield EdgeLocator(u, i)

    # ==================================================================
    # EDGE IDENTITY
    # ==================================================================
    def principal_form(self, locator: EdgeLocator) -> EdgeLocator:
        """
        Canonical locator for the connection `locator` belongs to.

        Of an edge and its paired reverse, the one with the lower
        (source, position) wins; for ordinary pairs that is the direction
        leaving the lower-indexed vertex.  Unpaired edges map to themselves.
        """
        edge = self.edge_at(locator)
        if edge.reverse is None:
            return locator
        return min(locator, edge.reverse)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {"edges": [[e.to_dict() for e in row] for row in self._edges]}

    @classmethod
    def from_dict(cls, data: dict) -> "WeightedGraph":
        return cls([[Edge.from_dict(ed) for ed in row] for row in data.get("edges", [])])

    # ==================================================================
    # GENERATORS — Factory class-methods
    # ==================================================================

    # ---------- Unweighted adjacency + uniform weight ----------
    @classmethod
    def from_unweighted(
        cls,
        adjacency: Sequence[Sequence[int]],
        default_weight: int = DEFAULT_WEIGHT,
        link_reverse: bool = False,
    ) -> "WeightedGraph":
        """
        Every listed neighbour becomes an edge of weight `default_weight`.
        With `link_reverse`, each u→v is paired with the first unpaired v→u.
        """
        rows = [[[v, default_weight, None] for v in row] for row in adjacency]
        if link_reverse:
            _pair_reverses(rows)
        return cls([[tuple(spec) for spec in row] for row in rows])

    # ---------- Undirected connections ----------
    @classmethod
    def from_undirected(
        cls,
        n: int,
        connections: Sequence[Tuple[int, int, int]],
    ) -> "WeightedGraph":
        """
        Store each (a, b, w) as a→b and b→a with linked `reverse` fields.
        A self-loop (a, a, w) is stored once, unpaired.
        """
        rows: List[List[tuple]] = [[] for _ in range(n)]
        for a, b, w in connections:
            for x in (a, b):
                if not 0 <= x < n:
                    raise OutOfRange(f"vertex {x} outside [0, {n})")
            if a == b:
                rows[a].append((a, w, None))
                continue
            pos_a, pos_b = len(rows[a]), len(rows[b])
            rows[a].append((b, w, (b, pos_b)))
            rows[b].append((a, w, (a, pos_a)))
        return cls(rows)

    # ---------- Cube preset ----------
    @classmethod
    def cube(cls, weight: int = DEFAULT_WEIGHT) -> "WeightedGraph":
        """The 8-corner cube, every side a paired connection of `weight`."""
        return cls.from_unweighted(CUBE_ADJACENCY, default_weight=weight, link_reverse=True)

    # ---------- Random Graph ----------
    @classmethod
    def generate_random(
        cls,
        num_vertices: int = 8,
        edge_probability: float = 0.3,
        weight_range: Tuple[int, int] = (0, 10),
        undirected: bool = True,
        connect: bool = False,
        seed: Optional[int] = None,
    ) -> "WeightedGraph":
        """
        Erdős–Rényi style random graph.
        Each possible edge is included with probability `edge_probability`.
        With `connect`, a shuffled spanning path is added so every vertex
        is reachable from every other (undirected) or from the path head.
        """
        rng = random.Random(seed)
        pairs: List[Tuple[int, int, int]] = []
        seen = set()

        for i in range(num_vertices):
            others = range(i + 1, num_vertices) if undirected else range(num_vertices)
            for j in others:
                if i == j:
                    continue
                if rng.random() < edge_probability:
                    pairs.append((i, j, rng.randint(*weight_range)))
                    seen.add((i, j))

        if connect:
            order = list(range(num_vertices))
            rng.shuffle(order)
            for a, b in zip(order, order[1:]):
                key = (min(a, b), max(a, b)) if undirected else (a, b)
                if key not in seen:
                    pairs.append((a, b, rng.randint(*weight_range)))
                    seen.add(key)

        if undirected:
            return cls.from_undirected(num_vertices, pairs)
        rows: List[List[tuple]] = [[] for _ in range(num_vertices)]
        for a, b, w in pairs:
            rows[a].append((b, w))
        return cls(rows)

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(
        cls,
        text: str,
        default_weight: int = DEFAULT_WEIGHT,
        link_reverse: bool = False,
    ) -> "WeightedGraph":
        """
        Parse a simple text adjacency list.

        Supported formats (one vertex per line):
            0: 1 2 3            → 0 connects to 1, 2, 3 (weight `default_weight`)
            0: 1(3) 2(7)        → 0→1 weight 3, 0→2 weight 7
            0 -> 1, 2           → alternate arrow syntax

        Vertex count is one more than the largest index mentioned.
        Blank lines and lines starting with '#' are skipped.
        """
        adjacency: Dict[int, List[Tuple[int, int]]] = {}
        highest = -1

        for lineno, raw in enumerate(text.strip().splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            parts = re.split(r":|->|→", line, maxsplit=1)
            if len(parts) != 2:
                raise InvalidGraph(f"line {lineno}: expected 'vertex: neighbours', got {line!r}")

            src = _parse_index(parts[0], lineno)
            highest = max(highest, src)
            row = adjacency.setdefault(src, [])

            for token in parts[1].replace(",", " ").split():
                m = re.fullmatch(r"(\d+)(?:\((\d+)\))?", token)
                if m is None:
                    raise InvalidGraph(f"line {lineno}: bad neighbour token {token!r}")
                tgt = int(m.group(1))
                w   = int(m.group(2)) if m.group(2) is not None else default_weight
                highest = max(highest, tgt)
                row.append((tgt, w))

        rows = [[[t, w, None] for t, w in adjacency.get(u, [])] for u in range(highest + 1)]
        if link_reverse:
            _pair_reverses(rows)
        return cls([[tuple(spec) for spec in row] for row in rows])

    # ==================================================================
    # INTERNAL
    # ==================================================================
    def _row(self, v: int) -> Tuple[Edge, ...]:
        if not isinstance(v, int) or not 0 <= v < len(self._edges):
            raise OutOfRange(f"vertex {v!r} outside [0, {len(self._edges)})")
        return self._edges[v]

    def _check_reverse_pairs(self) -> None:
        for loc in self.locators():
            edge = self.edge_at(loc)
            if edge.reverse is None:
                continue
            back = self.edge_at(edge.reverse)
            if back.target != loc.source or back.reverse != loc:
                raise InvalidGraph(
                    f"{loc!r} names {edge.reverse!r} as its reverse, "
                    f"but that edge does not point back"
                )

    def __repr__(self) -> str:
        return f"WeightedGraph(vertices={self.vertex_count()}, edges={self.edge_count()})"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _coerce_edge(n: int, source: int, spec: EdgeSpec) -> Edge:
    if isinstance(spec, Edge):
        target, weight, reverse = spec.target, spec.weight, spec.reverse
    elif len(spec) == 2:
        target, weight = spec
        reverse = None
    elif len(spec) == 3:
        target, weight, reverse = spec
        reverse = EdgeLocator.of(reverse)
    else:
        raise InvalidGraph(f"vertex {source}: edge spec {spec!r} is not (target, weight[, reverse])")

    if not isinstance(target, int) or isinstance(target, bool) or not 0 <= target < n:
        raise OutOfRange(f"vertex {source}: edge target {target!r} outside [0, {n})")
    if not isinstance(weight, int) or isinstance(weight, bool):
        raise InvalidGraph(f"vertex {source}: non-integer weight {weight!r} on edge to {target}")
    if weight < 0:
        raise InvalidGraph(f"vertex {source}: negative weight {weight} on edge to {target}")
    return Edge(target=target, weight=weight, reverse=reverse)


def _pair_reverses(rows: List[List[list]]) -> None:
    """Link each u→v to the first still-unpaired v→u of equal weight, in place."""
    for u, row in enumerate(rows):
        for i, spec in enumerate(row):
            v, w, rev = spec
            if rev is not None or v == u or not 0 <= v < len(rows):
                continue
            for j, back in enumerate(rows[v]):
                if back[0] == u and back[1] == w and back[2] is None:
                    spec[2] = (v, j)
                    back[2] = (u, i)
                    break


def _parse_index(token: str, lineno: int) -> int:
    token = token.strip()
    if not token.isdigit():
        raise InvalidGraph(f"line {lineno}: vertex {token!r} is not a non-negative integer")
    return int(token)
