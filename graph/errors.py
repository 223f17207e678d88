"""
errors.py — Exception Taxonomy
===============================
Every failure the core can raise is a contract violation by the caller.
Nothing here is retried internally; the driver decides what to do.

    GraphAlgoError
      ├── OutOfRange        vertex index outside [0, N)
      ├── InvalidLocator    locator does not resolve in this graph
      ├── InvalidGraph      rejected at construction (bad weight, bad pairing, bad text)
      └── StepperExhausted  advance() called after RunFinished
"""


class GraphAlgoError(Exception):
    """Base class for every error raised by the graph / stepper core."""


class OutOfRange(GraphAlgoError, IndexError):
    """Raised when a vertex index falls outside ``[0, vertex_count())``."""


class InvalidLocator(GraphAlgoError, IndexError):
    """Raised when an EdgeLocator's fields are out of range for a graph."""


class InvalidGraph(GraphAlgoError, ValueError):
    """Raised when construction input violates the graph invariants."""


class StepperExhausted(GraphAlgoError, RuntimeError):
    """Raised by ``advance()`` once the run has already finished."""


__all__ = [
    "GraphAlgoError",
    "OutOfRange",
    "InvalidLocator",
    "InvalidGraph",
    "StepperExhausted",
]
