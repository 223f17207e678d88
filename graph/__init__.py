"""
graph/
-----
Core data layer.  Public API:

    from graph import WeightedGraph, Edge, EdgeLocator
    from graph import OutOfRange, InvalidLocator, InvalidGraph, StepperExhausted
"""

from graph.edge   import Edge, EdgeLocator
from graph.errors import (
    GraphAlgoError,
    OutOfRange,
    InvalidLocator,
    InvalidGraph,
    StepperExhausted,
)
from graph.graph  import WeightedGraph, DEFAULT_WEIGHT, CUBE_ADJACENCY

__all__ = [
    "Edge",           "EdgeLocator",
    "WeightedGraph",  "DEFAULT_WEIGHT",  "CUBE_ADJACENCY",
    "GraphAlgoError", "OutOfRange",      "InvalidLocator",
    "InvalidGraph",   "StepperExhausted",
]
