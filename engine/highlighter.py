"""
highlighter.py — Event → Colour Driver
=======================================
Turns the stepper's event stream into the colour state a scene needs:
one colour per vertex and one per connection.

Palette:
    RED    vertex just selected / edge currently examined
    BLUE   vertex finalized / edge is a target's best predecessor
    WHITE  edge no longer of interest
    NONE   untouched

Edges are keyed by `graph.principal_form(locator)`, so both directions of
an undirected connection land on the same visual element.  A connection
that still carries some vertex's best predecessor edge returns to BLUE,
not WHITE, once its examination is over.
"""

from enum import Enum
from typing import Dict, Optional, Set, Tuple

from algorithms import (
    EdgeExamined,
    RelaxationResult,
    RunFinished,
    StepEvent,
    VertexFinalized,
    VertexSelected,
)
from graph import EdgeLocator, WeightedGraph


class Highlight(Enum):
    NONE  = "none"
    WHITE = "white"
    RED   = "red"
    BLUE  = "blue"


class Highlighter:
    """
    Attributes:
        vertex_colors : {vertex: Highlight} for every vertex touched so far.
        edge_colors   : {principal locator: Highlight} likewise.
    """

    def __init__(self, graph: WeightedGraph):
        self.graph = graph
        self.vertex_colors: Dict[int, Highlight]         = {}
        self.edge_colors:   Dict[EdgeLocator, Highlight] = {}
        self._examined:     Optional[EdgeLocator]        = None
        self._best:         Set[EdgeLocator]             = set()   # principal keys

    def reset(self) -> None:
        self.vertex_colors.clear()
        self.edge_colors.clear()
        self._examined = None
        self._best.clear()

    def apply(self, event: StepEvent) -> Tuple[Dict[int, Highlight], Dict[EdgeLocator, Highlight]]:
        """
        Fold one event into the colour state.
        Returns (vertex changes, edge changes) made by this event only.
        """
        v_changes: Dict[int, Highlight] = {}
        e_changes: Dict[EdgeLocator, Highlight] = {}

        # the edge examined last step is done with, whatever happens now
        if self._examined is not None:
            key = self.graph.principal_form(self._examined)
            done = Highlight.BLUE if key in self._best else Highlight.WHITE
            self._paint_edge(self._examined, done, e_changes)
            self._examined = None

        if isinstance(event, VertexSelected):
            self._paint_vertex(event.vertex, Highlight.RED, v_changes)
        elif isinstance(event, VertexFinalized):
            self._paint_vertex(event.vertex, Highlight.BLUE, v_changes)
        elif isinstance(event, EdgeExamined):
            self._paint_edge(event.locator, Highlight.RED, e_changes)
            self._examined = event.locator
        elif isinstance(event, RelaxationResult):
            if event.previous_best_edge is not None:
                self._best.discard(self.graph.principal_form(event.previous_best_edge))
                self._paint_edge(event.previous_best_edge, Highlight.WHITE, e_changes)
            if event.new_best_edge is not None:
                self._best.add(self.graph.principal_form(event.new_best_edge))
                self._paint_edge(event.new_best_edge, Highlight.BLUE, e_changes)
        elif not isinstance(event, RunFinished):
            raise TypeError(f"not a step event: {event!r}")

        return v_changes, e_changes

    def vertex_color(self, v: int) -> Highlight:
        return self.vertex_colors.get(v, Highlight.NONE)

    def edge_color(self, locator: EdgeLocator) -> Highlight:
        return self.edge_colors.get(self.graph.principal_form(locator), Highlight.NONE)

    def to_dict(self) -> dict:
        return {
            "vertices": {str(v): c.value for v, c in sorted(self.vertex_colors.items())},
            "edges": [
                {"locator": loc.to_dict(), "color": c.value}
                for loc, c in sorted(self.edge_colors.items())
            ],
        }

    # ------------------------------------------------------------------
    def _paint_vertex(self, v: int, color: Highlight, changes: Dict[int, Highlight]) -> None:
        self.vertex_colors[v] = color
        changes[v] = color

    def _paint_edge(self, loc: EdgeLocator, color: Highlight, changes: Dict[EdgeLocator, Highlight]) -> None:
        key = self.graph.principal_form(loc)
        self.edge_colors[key] = color
        changes[key] = color
