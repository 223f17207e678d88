"""
events.py — Step Events
========================
The stepper hands back exactly one of these per advance() call.  Together
they are the whole vocabulary a driver needs to follow a run:

    VertexSelected    – u pulled off the frontier (its distance is now final)
    EdgeExamined      – edge (u, i) is about to be relaxed
    RelaxationResult  – outcome of that relaxation, with old/new best edge
    VertexFinalized   – every edge of u has been examined
    RunFinished       – frontier empty; the stepper is spent

Design decisions:
  - Each variant is a frozen dataclass.  An event is a SNAPSHOT of one
    decision; the stepper is the only writer, drivers are pure readers.
  - `StepEvent` is a closed Union.  Drivers dispatch with isinstance or
    `match` and should treat an unknown variant as a bug.
  - `kind` is a stable string tag so events serialise to JSON without the
    driver having to know Python class names.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from graph.edge import EdgeLocator


def _loc(locator: Optional[EdgeLocator]) -> Optional[dict]:
    return locator.to_dict() if locator is not None else None


@dataclass(frozen=True)
class VertexSelected:
    kind: ClassVar[str] = "vertex_selected"
    vertex: int

    def to_dict(self) -> dict:
        return {"kind": self.kind, "vertex": self.vertex}


@dataclass(frozen=True)
class EdgeExamined:
    kind: ClassVar[str] = "edge_examined"
    locator: EdgeLocator

    def to_dict(self) -> dict:
        return {"kind": self.kind, "locator": _loc(self.locator)}


@dataclass(frozen=True)
class RelaxationResult:
    """
    Attributes:
        improved           : True if the examined edge lowered the target's distance.
        new_best_edge      : Target's best predecessor edge after the relaxation.
        previous_best_edge : Target's best predecessor edge before it.
    When `improved` is False the two are identical.
    """

    kind: ClassVar[str] = "relaxation_result"
    improved:           bool
    new_best_edge:      Optional[EdgeLocator]
    previous_best_edge: Optional[EdgeLocator]

    def to_dict(self) -> dict:
        return {
            "kind":               self.kind,
            "improved":           self.improved,
            "new_best_edge":      _loc(self.new_best_edge),
            "previous_best_edge": _loc(self.previous_best_edge),
        }


@dataclass(frozen=True)
class VertexFinalized:
    kind: ClassVar[str] = "vertex_finalized"
    vertex: int

    def to_dict(self) -> dict:
        return {"kind": self.kind, "vertex": self.vertex}


@dataclass(frozen=True)
class RunFinished:
    kind: ClassVar[str] = "run_finished"

    def to_dict(self) -> dict:
        return {"kind": self.kind}


StepEvent = Union[VertexSelected, EdgeExamined, RelaxationResult, VertexFinalized, RunFinished]

EVENT_TYPES = (VertexSelected, EdgeExamined, RelaxationResult, VertexFinalized, RunFinished)


__all__ = [
    "StepEvent",
    "EVENT_TYPES",
    "VertexSelected",
    "EdgeExamined",
    "RelaxationResult",
    "VertexFinalized",
    "RunFinished",
]
