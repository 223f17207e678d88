"""
algorithms/
-----------
The stepwise shortest-path engine and the events it emits.

    from algorithms import ShortestPathStepper, VertexSelected, …

A driver builds a stepper over a WeightedGraph and a start vertex, then
calls advance() at whatever pace it likes, dispatching on each event.
"""

from algorithms.events import (
    StepEvent,
    EVENT_TYPES,
    VertexSelected,
    EdgeExamined,
    RelaxationResult,
    VertexFinalized,
    RunFinished,
)
from algorithms.dijkstra import (
    ShortestPathStepper,
    StepperState,
    PSEUDOCODE,
    INFINITY,
    reference_distances,
)

__all__ = [
    "StepEvent",
    "EVENT_TYPES",
    "VertexSelected",
    "EdgeExamined",
    "RelaxationResult",
    "VertexFinalized",
    "RunFinished",
    "ShortestPathStepper",
    "StepperState",
    "PSEUDOCODE",
    "INFINITY",
    "reference_distances",
]
