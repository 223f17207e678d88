"""
Unit tests for WeightedGraph and EdgeLocator.
"""

import pytest

from graph import (
    DEFAULT_WEIGHT,
    Edge,
    EdgeLocator,
    InvalidGraph,
    InvalidLocator,
    OutOfRange,
    WeightedGraph,
)


def test_basic_queries(triangle):
    assert triangle.vertex_count() == 3
    assert triangle.edge_count() == 3
    assert triangle.out_degree(0) == 2
    assert triangle.out_degree(2) == 0
    assert [e.target for e in triangle.edges_of(0)] == [1, 2]
    assert triangle.edges_of(2) == ()


@pytest.mark.parametrize("v", [-1, 3, 100])
def test_vertex_out_of_range(triangle, v):
    with pytest.raises(OutOfRange):
        triangle.out_degree(v)
    with pytest.raises(OutOfRange):
        triangle.edges_of(v)


def test_edge_at_resolves_locator(triangle):
    e = triangle.edge_at(EdgeLocator(0, 1))
    assert e.target == 2
    assert e.weight == 1
    assert e.reverse is None


@pytest.mark.parametrize("loc", [EdgeLocator(3, 0), EdgeLocator(-1, 0), EdgeLocator(1, 1), EdgeLocator(2, 0)])
def test_edge_at_invalid_locator(triangle, loc):
    with pytest.raises(InvalidLocator):
        triangle.edge_at(loc)


def test_locator_equality_and_coercion():
    assert EdgeLocator(1, 2) == EdgeLocator(1, 2)
    assert EdgeLocator(1, 2) != EdgeLocator(2, 1)
    assert EdgeLocator.of((1, 2)) == EdgeLocator(1, 2)
    assert EdgeLocator.of(None) is None
    assert len({EdgeLocator(0, 0), EdgeLocator(0, 0)}) == 1


def test_locators_in_order(triangle):
    assert list(triangle.locators()) == [EdgeLocator(0, 0), EdgeLocator(0, 1), EdgeLocator(1, 0)]


def test_from_unweighted_uses_default_weight():
    g = WeightedGraph.from_unweighted([[1, 2], [2], []], default_weight=7)
    assert [e.weight for e in g.edges_of(0)] == [7, 7]
    assert all(e.reverse is None for e in g.edges_of(0))

    g5 = WeightedGraph.from_unweighted([[1], [0]])
    assert g5.edge_at(EdgeLocator(0, 0)).weight == DEFAULT_WEIGHT


def test_negative_weight_rejected():
    with pytest.raises(InvalidGraph):
        WeightedGraph([[(1, -1)], []])


def test_non_integer_weight_rejected():
    with pytest.raises(InvalidGraph):
        WeightedGraph([[(1, 1.5)], []])


def test_target_out_of_range_rejected():
    with pytest.raises(OutOfRange):
        WeightedGraph([[(5, 1)], []])


def test_reverse_must_point_back():
    # (0,0) claims (1,0) as its reverse, but (1,0) goes nowhere near 0
    with pytest.raises(InvalidGraph):
        WeightedGraph([[(1, 1, (1, 0))], [(2, 1, (0, 0))], []])


def test_reverse_must_resolve():
    with pytest.raises(InvalidLocator):
        WeightedGraph([[(1, 1, (1, 4))], []])


def test_from_undirected_links_pairs():
    g = WeightedGraph.from_undirected(3, [(0, 1, 2), (2, 1, 3)])
    assert g.edge_at(EdgeLocator(0, 0)) == Edge(target=1, weight=2, reverse=EdgeLocator(1, 0))
    assert g.edge_at(EdgeLocator(1, 0)) == Edge(target=0, weight=2, reverse=EdgeLocator(0, 0))
    assert g.edge_at(EdgeLocator(2, 0)).reverse == EdgeLocator(1, 1)
    assert g.edge_at(EdgeLocator(1, 1)).reverse == EdgeLocator(2, 0)


def test_principal_form_collapses_pairs(cube):
    for loc in cube.locators():
        p = cube.principal_form(loc)
        assert cube.principal_form(p) == p
        rev = cube.edge_at(loc).reverse
        assert rev is not None
        assert cube.principal_form(rev) == p
        # lower source index wins
        assert p.source == min(loc.source, cube.edge_at(loc).target)


def test_principal_form_unpaired_is_identity(triangle):
    for loc in triangle.locators():
        assert triangle.principal_form(loc) == loc


def test_principal_form_invalid_locator(cube):
    with pytest.raises(InvalidLocator):
        cube.principal_form(EdgeLocator(0, 3))


def test_cube_preset(cube):
    assert cube.vertex_count() == 8
    assert cube.edge_count() == 24
    assert all(cube.out_degree(v) == 3 for v in range(8))
    assert all(e.weight == DEFAULT_WEIGHT for v in range(8) for e in cube.edges_of(v))
    # 12 sides, one principal locator each
    assert len({cube.principal_form(loc) for loc in cube.locators()}) == 12


def test_from_adjacency_list():
    text = """
    # three-vertex scenario
    0: 1(1) 2(1)
    1 -> 0(1)
    2:
    """
    g = WeightedGraph.from_adjacency_list(text)
    assert g.vertex_count() == 3
    assert [(e.target, e.weight) for e in g.edges_of(0)] == [(1, 1), (2, 1)]
    assert [(e.target, e.weight) for e in g.edges_of(1)] == [(0, 1)]
    assert g.edges_of(2) == ()


def test_from_adjacency_list_default_weight_and_implicit_vertices():
    g = WeightedGraph.from_adjacency_list("0: 3, 1", default_weight=2)
    assert g.vertex_count() == 4
    assert [(e.target, e.weight) for e in g.edges_of(0)] == [(3, 2), (1, 2)]


def test_from_adjacency_list_link_reverse():
    g = WeightedGraph.from_adjacency_list("0: 1(4)\n1: 0(4)", link_reverse=True)
    assert g.edge_at(EdgeLocator(0, 0)).reverse == EdgeLocator(1, 0)
    assert g.principal_form(EdgeLocator(1, 0)) == EdgeLocator(0, 0)


@pytest.mark.parametrize("text", ["0 1 2", "a: 1", "0: x(3)", "0: 1(-2)"])
def test_from_adjacency_list_malformed(text):
    with pytest.raises(InvalidGraph):
        WeightedGraph.from_adjacency_list(text)


def test_dict_round_trip(cube):
    again = WeightedGraph.from_dict(cube.to_dict())
    assert again.vertex_count() == cube.vertex_count()
    for loc in cube.locators():
        assert again.edge_at(loc) == cube.edge_at(loc)


def test_generate_random_is_seeded():
    a = WeightedGraph.generate_random(num_vertices=7, seed=3)
    b = WeightedGraph.generate_random(num_vertices=7, seed=3)
    assert a.to_dict() == b.to_dict()
    for loc in a.locators():
        assert a.edge_at(loc).weight >= 0
