import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from graph import WeightedGraph


@pytest.fixture
def triangle() -> WeightedGraph:
    """0→1 (1), 0→2 (1), 1→0 (1); vertex 2 has no outgoing edges."""
    return WeightedGraph([
        [(1, 1), (2, 1)],
        [(0, 1)],
        [],
    ])


@pytest.fixture
def cube() -> WeightedGraph:
    return WeightedGraph.cube()


@pytest.fixture
def island() -> WeightedGraph:
    """Vertex 3 has no incoming edges from the 0-1-2 component."""
    return WeightedGraph([
        [(1, 4), (2, 1)],
        [],
        [(1, 2)],
        [(0, 1)],
    ])
