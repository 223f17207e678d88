"""
dijkstra.py — Stepwise Dijkstra
================================
Single-source shortest paths that advance one micro-step per call.

Each advance() does exactly one of:
  1. Select the frontier vertex with minimum tentative distance  →  VertexSelected
  2. Announce the next outgoing edge of that vertex               →  EdgeExamined
  3. Relax that edge                                              →  RelaxationResult
  4. Close the vertex once all its edges are done                 →  VertexFinalized
  5. Report an empty frontier                                     →  RunFinished

State machine:
    READY / SELECTING_VERTEX  →  EXAMINING_EDGES(u, i)  (u has edges)
                              →  VERTEX_DONE(u)         (u has none)
    EXAMINING_EDGES(u, i)     →  EXAMINING_EDGES(u, i+1) … → VERTEX_DONE(u)
    VERTEX_DONE(u)            →  SELECTING_VERTEX
    SELECTING_VERTEX          →  FINISHED               (frontier empty)

Minimum selection compares (distance, vertex index): among equal distances
the lowest index wins.  Unreachable vertices (distance ∞) are still selected
and finalized in index order once everything reachable is done.

Thread safety:
  Not thread-safe.  State is mutated in place by advance(); a driver must
  not call it from more than one thread at a time.  The graph itself is
  never written and may be shared between steppers.
"""

import heapq
import logging
import math
from enum import Enum
from typing import Dict, Iterator, List, Optional, Set, Tuple, Union

from graph import EdgeLocator, WeightedGraph
from graph.errors import OutOfRange, StepperExhausted
from algorithms.events import (
    EdgeExamined,
    RelaxationResult,
    RunFinished,
    StepEvent,
    VertexFinalized,
    VertexSelected,
)

logger = logging.getLogger(__name__)

INFINITY = math.inf

Distance = Union[int, float]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, start):",                         # 0
    "    dist ← {v: ∞ for v in V}; dist[start] ← 0",       # 1
    "    prev ← {v: none for v in V}",                     # 2
    "    Q ← V",                                           # 3
    "    while Q is not empty:",                           # 4
    "        u ← argmin dist[v] for v in Q",               # 5
    "        remove u from Q",                             # 6
    "        for (i, e) in enumerate(edges(u)):",          # 7
    "            alt ← dist[u] + e.weight",                # 8
    "            if alt < dist[e.target]:",                # 9
    "                dist[e.target] ← alt",                # 10
    "                prev[e.target] ← (u, i)",             # 11
    "        u is final",                                  # 12
    "    return dist, prev",                               # 13
]


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    READY            = "ready"
    SELECTING_VERTEX = "selecting_vertex"
    EXAMINING_EDGES  = "examining_edges"
    VERTEX_DONE      = "vertex_done"
    FINISHED         = "finished"


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class ShortestPathStepper:
    """
    Attributes:
        graph       : The WeightedGraph being searched (read only).
        start       : Start vertex.
        steps_taken : Number of events emitted so far.
    """

    def __init__(self, graph: WeightedGraph, start: int):
        n = graph.vertex_count()
        if not isinstance(start, int) or isinstance(start, bool) or not 0 <= start < n:
            raise OutOfRange(f"start vertex {start!r} outside [0, {n})")

        self.graph:       WeightedGraph = graph
        self.start:       int           = start
        self.steps_taken: int           = 0

        self._dist:     List[Distance]                = [INFINITY] * n
        self._prev:     List[Optional[EdgeLocator]]   = [None] * n
        self._frontier: Set[int]                      = set(range(n))
        self._dist[start] = 0

        self._state:    StepperState          = StepperState.READY
        self._vertex:   Optional[int]         = None   # u while examining / done
        self._edge_idx: int                   = 0      # next edge of u to examine
        self._pending:  Optional[EdgeLocator] = None   # examined, not yet relaxed
        self._last:     Optional[StepEvent]   = None
        # id(event) → (event, alt, old dist); holding the event keeps its id unique
        self._relax_log: Dict[int, Tuple[RelaxationResult, Distance, Distance]] = {}

    # ------------------------------------------------------------------
    # The one operation
    # ------------------------------------------------------------------
    def advance(self) -> StepEvent:
        """Perform one micro-step and return the event describing it."""
        state = self._state
        if state is StepperState.FINISHED:
            raise StepperExhausted("run already finished; no further steps")

        if state in (StepperState.READY, StepperState.SELECTING_VERTEX):
            event = self._select()
        elif state is StepperState.EXAMINING_EDGES:
            event = self._relax() if self._pending is not None else self._examine()
        else:
            event = self._finalize()

        self.steps_taken += 1
        self._last = event
        logger.debug("step %d: %r", self.steps_taken, event)
        return event

    # ------------------------------------------------------------------
    # Micro-steps
    # ------------------------------------------------------------------
    def _select(self) -> StepEvent:
        if not self._frontier:
            self._state = StepperState.FINISHED
            logger.info(
                "run from %d finished after %d steps, %d of %d vertices reachable",
                self.start, self.steps_taken + 1,
                sum(1 for d in self._dist if d != INFINITY), len(self._dist),
            )
            return RunFinished()

        u = min(self._frontier, key=lambda v: (self._dist[v], v))
        self._frontier.remove(u)
        self._vertex   = u
        self._edge_idx = 0
        if self.graph.out_degree(u) == 0:
            self._state = StepperState.VERTEX_DONE
        else:
            self._state = StepperState.EXAMINING_EDGES
        return VertexSelected(u)

    def _examine(self) -> StepEvent:
        self._pending = EdgeLocator(self._vertex, self._edge_idx)
        return EdgeExamined(self._pending)

    def _relax(self) -> StepEvent:
        loc  = self._pending
        edge = self.graph.edge_at(loc)
        du   = self._dist[loc.source]
        alt  = INFINITY if du == INFINITY else du + edge.weight

        old_dist = self._dist[edge.target]
        old_prev = self._prev[edge.target]
        improved = alt < old_dist
        if improved:
            self._dist[edge.target] = alt
            self._prev[edge.target] = loc

        self._pending  = None
        self._edge_idx += 1
        if self._edge_idx >= self.graph.out_degree(loc.source):
            self._state = StepperState.VERTEX_DONE
        event = RelaxationResult(
            improved=improved,
            new_best_edge=self._prev[edge.target],
            previous_best_edge=old_prev,
        )
        self._relax_log[id(event)] = (event, alt, old_dist)
        return event

    def _finalize(self) -> StepEvent:
        u = self._vertex
        self._vertex = None
        self._state  = StepperState.SELECTING_VERTEX
        return VertexFinalized(u)

    # ------------------------------------------------------------------
    # Convenience drivers
    # ------------------------------------------------------------------
    def events(self) -> Iterator[StepEvent]:
        """Advance until RunFinished, yielding every event including it."""
        while not self.is_finished:
            yield self.advance()

    def run_to_completion(self) -> List[StepEvent]:
        """Drain the remaining events and return them."""
        return list(self.events())

    # ------------------------------------------------------------------
    # Result queries (tentative until is_finished)
    # ------------------------------------------------------------------
    def distance_to(self, v: int) -> Distance:
        """Shortest distance from start, or INFINITY if unreachable."""
        self._check_vertex(v)
        return self._dist[v]

    def predecessor_edge(self, v: int) -> Optional[EdgeLocator]:
        """Edge through which `v` is best reached, or None."""
        self._check_vertex(v)
        return self._prev[v]

    def distances(self) -> List[Distance]:
        return list(self._dist)

    def path_to(self, v: int) -> Optional[List[EdgeLocator]]:
        """
        Locators from start to `v` in travel order.
        Empty for the start vertex, None if `v` is unreachable.
        """
        self._check_vertex(v)
        if self._dist[v] == INFINITY:
            return None
        path: List[EdgeLocator] = []
        cur = v
        while cur != self.start:
            loc = self._prev[cur]
            path.append(loc)
            cur = loc.source
        path.reverse()
        return path

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> StepperState:
        return self._state

    @property
    def cursor(self) -> Optional[Tuple[int, int]]:
        """(vertex, edge_index) while examining edges, else None."""
        if self._state is StepperState.EXAMINING_EDGES:
            return (self._vertex, self._edge_idx)
        return None

    @property
    def frontier(self) -> List[int]:
        return sorted(self._frontier)

    @property
    def is_finished(self) -> bool:
        return self._state is StepperState.FINISHED

    @property
    def last_event(self) -> Optional[StepEvent]:
        return self._last

    @property
    def pseudocode_line(self) -> int:
        """Line of PSEUDOCODE the last emitted event corresponds to."""
        ev = self._last
        if ev is None:
            return 3
        if isinstance(ev, VertexSelected):
            return 6
        if isinstance(ev, EdgeExamined):
            return 8
        if isinstance(ev, RelaxationResult):
            return 11 if ev.improved else 9
        if isinstance(ev, VertexFinalized):
            return 12
        return 13

    # ------------------------------------------------------------------
    # Learning mode
    # ------------------------------------------------------------------
    def explain(self, event: StepEvent) -> str:
        """
        Plain-English account of `event`.

        A RelaxationResult must be an object this stepper emitted; its
        numbers are the ones computed when it was emitted, so earlier
        events explain correctly too.  Raises ValueError otherwise.
        """
        if isinstance(event, VertexSelected):
            d = _fmt(self._dist[event.vertex])
            return (
                f"Select vertex {event.vertex}: smallest tentative distance ({d}) "
                f"among unfinished vertices. This distance is now FINAL."
            )
        if isinstance(event, EdgeExamined):
            edge = self.graph.edge_at(event.locator)
            return (
                f"Examine edge {event.locator.source}→{edge.target} "
                f"(w={edge.weight}), position {event.locator.position}."
            )
        if isinstance(event, RelaxationResult):
            entry = self._relax_log.get(id(event))
            if entry is None or entry[0] is not event:
                raise ValueError(f"{event!r} was not emitted by this stepper")
            _, alt, old = entry
            if event.improved:
                return f"{_fmt(alt)} < {_fmt(old)} → UPDATE! New best edge {event.new_best_edge!r}."
            return f"{_fmt(alt)} ≥ {_fmt(old)} → no improvement."
        if isinstance(event, VertexFinalized):
            return f"All edges of vertex {event.vertex} examined."
        if isinstance(event, RunFinished):
            return "Frontier empty. Every reachable distance is final."
        raise TypeError(f"not a step event: {event!r}")

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _check_vertex(self, v: int) -> None:
        if not isinstance(v, int) or not 0 <= v < len(self._dist):
            raise OutOfRange(f"vertex {v!r} outside [0, {len(self._dist)})")

    def __repr__(self) -> str:
        return (
            f"ShortestPathStepper(start={self.start}, state={self._state.value}, "
            f"steps={self.steps_taken})"
        )


# ---------------------------------------------------------------------------
# Reference oracle
# ---------------------------------------------------------------------------
def reference_distances(graph: WeightedGraph, start: int) -> List[Distance]:
    """Plain heap-based Dijkstra, run to completion in one call."""
    n = graph.vertex_count()
    if not 0 <= start < n:
        raise OutOfRange(f"start vertex {start!r} outside [0, {n})")
    dist: List[Distance] = [INFINITY] * n
    dist[start] = 0
    pq = [(0, start)]

    while pq:
        d_u, u = heapq.heappop(pq)
        # stale entry
        if d_u != dist[u]:
            continue
        for e in graph.edges_of(u):
            alt = d_u + e.weight
            if alt < dist[e.target]:
                dist[e.target] = alt
                heapq.heappush(pq, (alt, e.target))
    return dist


def _fmt(d: Distance) -> str:
    return "∞" if d == INFINITY else str(d)
