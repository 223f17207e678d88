"""
Unit tests for the event → colour Highlighter.
"""

import pytest

from algorithms import ShortestPathStepper
from engine import Highlight, Highlighter
from graph import EdgeLocator, WeightedGraph

L = EdgeLocator


def test_scenario_colours(triangle):
    stepper = ShortestPathStepper(triangle, 0)
    hl = Highlighter(triangle)

    v, e = hl.apply(stepper.advance())                 # VertexSelected(0)
    assert v == {0: Highlight.RED} and e == {}

    v, e = hl.apply(stepper.advance())                 # EdgeExamined(0,0)
    assert e == {L(0, 0): Highlight.RED}

    v, e = hl.apply(stepper.advance())                 # improved, new best (0,0)
    assert hl.edge_color(L(0, 0)) is Highlight.BLUE

    hl.apply(stepper.advance())                        # EdgeExamined(0,1)
    assert hl.edge_color(L(0, 1)) is Highlight.RED
    hl.apply(stepper.advance())
    assert hl.edge_color(L(0, 1)) is Highlight.BLUE

    hl.apply(stepper.advance())                        # VertexFinalized(0)
    assert hl.vertex_color(0) is Highlight.BLUE
    assert hl.vertex_color(2) is Highlight.NONE


def test_non_improving_edge_goes_white(triangle):
    stepper = ShortestPathStepper(triangle, 0)
    hl = Highlighter(triangle)
    for _ in range(9):                                  # through 1→0's relaxation
        hl.apply(stepper.advance())
    assert hl.edge_color(L(1, 0)) is Highlight.WHITE


def test_pairs_share_one_colour(cube):
    stepper = ShortestPathStepper(cube, 1)
    hl = Highlighter(cube)
    hl.apply(stepper.advance())                         # VertexSelected(1)
    v, e = hl.apply(stepper.advance())                  # EdgeExamined(1,0): 1→0
    # 1→0 is painted on its principal form 0→1
    assert e == {L(0, 0): Highlight.RED}
    assert hl.edge_color(L(1, 0)) is hl.edge_color(L(0, 0)) is Highlight.RED


def test_relaxation_moves_best_edge(island):
    stepper = ShortestPathStepper(island, 0)
    hl = Highlighter(island)
    for ev in stepper.events():
        hl.apply(ev)
    # 1 was first reached by (0,0), then by (2,0)
    assert hl.edge_color(L(0, 0)) is Highlight.WHITE
    assert hl.edge_color(L(2, 0)) is Highlight.BLUE
    assert hl.edge_color(L(0, 1)) is Highlight.BLUE
    assert all(hl.vertex_color(v) is Highlight.BLUE for v in range(4))


def test_to_dict_and_reset(triangle):
    hl = Highlighter(triangle)
    for ev in ShortestPathStepper(triangle, 0).events():
        hl.apply(ev)
    d = hl.to_dict()
    assert d["vertices"] == {"0": "blue", "1": "blue", "2": "blue"}
    assert {"locator": {"source": 0, "position": 0}, "color": "blue"} in d["edges"]

    hl.reset()
    assert hl.to_dict() == {"vertices": {}, "edges": []}


def test_rejects_unknown_event(triangle):
    with pytest.raises(TypeError):
        Highlighter(triangle).apply(object())


@pytest.mark.parametrize("start", [0, 5])
def test_tree_edges_stay_blue_after_reverse_examined(cube, start):
    stepper = ShortestPathStepper(cube, start)
    hl = Highlighter(cube)
    for ev in stepper.events():
        hl.apply(ev)

    tree = {
        cube.principal_form(stepper.predecessor_edge(v))
        for v in range(cube.vertex_count()) if v != start
    }
    for v in range(cube.vertex_count()):
        if v != start:
            assert hl.edge_color(stepper.predecessor_edge(v)) is Highlight.BLUE
    # every connection was examined; only the tree ones end blue
    for loc in cube.locators():
        expected = Highlight.BLUE if cube.principal_form(loc) in tree else Highlight.WHITE
        assert hl.edge_color(loc) is expected


def test_reverse_of_best_edge_returns_to_blue():
    graph = WeightedGraph.from_undirected(2, [(0, 1, 3)])
    stepper = ShortestPathStepper(graph, 0)
    hl = Highlighter(graph)
    for _ in range(5):                                  # through VertexSelected(1)
        hl.apply(stepper.advance())
    assert hl.edge_color(L(0, 0)) is Highlight.BLUE

    v, e = hl.apply(stepper.advance())                  # EdgeExamined(1,0): 1→0
    assert e == {L(0, 0): Highlight.RED}
    hl.apply(stepper.advance())                         # no improvement
    assert hl.edge_color(L(1, 0)) is Highlight.BLUE
