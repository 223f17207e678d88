"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete stepper run (every StepEvent), then computes the
analytics the UI shows next to the playback controls.

Usage:
    rec = Recorder()
    rec.start(graph=g, start=0)
    rec.run_to_completion()          # drains the stepper
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # JSON-safe snapshot for save/replay
"""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from algorithms import (
    EdgeExamined,
    INFINITY,
    RelaxationResult,
    ShortestPathStepper,
    StepEvent,
    VertexFinalized,
)
from engine.playback import Playback
from graph import WeightedGraph

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    start:                int   = 0
    vertices_finalized:   int   = 0
    edges_examined:       int   = 0
    relaxations_improved: int   = 0
    reachable:            int   = 0         # vertices with a finite distance
    total_events:         int   = 0         # number of StepEvents emitted
    wall_time_ms:         float = 0.0       # wall-clock time to run to completion


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        events   : Full list of StepEvents from the run.
        metrics  : Computed RunMetrics (available after run_to_completion).
        playback : The underlying Playback (if you want live step-by-step access).
    """

    def __init__(self):
        self.events:   List[StepEvent]      = []
        self.metrics:  Optional[RunMetrics] = None
        self.playback: Optional[Playback]   = None

        self._graph:   Optional[WeightedGraph]       = None
        self._stepper: Optional[ShortestPathStepper] = None
        self._start:   int                           = 0

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, graph: WeightedGraph, start: int) -> None:
        """Build the stepper and playback for this run."""
        self._graph   = graph
        self._start   = start
        self._stepper = ShortestPathStepper(graph, start)
        self.events   = []
        self.metrics  = None

        self.playback = Playback()
        self.playback.start(self._stepper)

    def run_to_completion(self) -> RunMetrics:
        """Drain the stepper, record every event, compute metrics."""
        if self.playback is None:
            raise RuntimeError("Call start() first.")

        t0 = time.monotonic()
        self.playback.jump_to_end()
        self.events = list(self.playback.events)
        wall_ms = (time.monotonic() - t0) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.info("recorded run from %d: %d events", self._start, len(self.events))
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def stepper(self) -> Optional[ShortestPathStepper]:
        return self._stepper

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        st = self._stepper
        n  = self._graph.vertex_count() if self._graph else 0
        preds = [st.predecessor_edge(v) for v in range(n)] if st else []
        return {
            "start":        self._start,
            "graph":        self._graph.to_dict() if self._graph else {},
            "metrics":      asdict(self.metrics) if self.metrics else {},
            "events":       [e.to_dict() for e in self.events],
            "distances":    [None if d == INFINITY else d for d in st.distances()] if st else [],
            "predecessors": [p.to_dict() if p else None for p in preds],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        ev = self.events
        return RunMetrics(
            start=self._start,
            vertices_finalized=sum(isinstance(e, VertexFinalized) for e in ev),
            edges_examined=sum(isinstance(e, EdgeExamined) for e in ev),
            relaxations_improved=sum(isinstance(e, RelaxationResult) and e.improved for e in ev),
            reachable=sum(1 for d in self._stepper.distances() if d != INFINITY),
            total_events=len(ev),
            wall_time_ms=round(wall_ms, 2),
        )
