"""Tests for BoundedGraph structure and adjacency bookkeeping."""

import pytest

from colorsim import DEFAULT_CAPACITY, BoundedGraph, Edge, Vertex

from conftest import PETERSEN_EDGES, build_graph


def ids(vertices):
    return sorted(v.id for v in vertices)


def test_add_vertex_rejects_duplicate_id():
    graph = BoundedGraph()
    assert graph.add_vertex(Vertex(3))
    assert not graph.add_vertex(Vertex(3))
    assert graph.vertex_count() == 1


def test_add_vertex_respects_capacity():
    graph = BoundedGraph(capacity=2)
    assert graph.add_vertex(Vertex(0))
    assert graph.add_vertex(Vertex(1))
    assert not graph.add_vertex(Vertex(2))
    assert not graph.add_vertex(Vertex(-1))


def test_default_and_unbounded_capacity():
    assert BoundedGraph().capacity == DEFAULT_CAPACITY
    assert not BoundedGraph().add_vertex(Vertex(DEFAULT_CAPACITY))
    assert BoundedGraph(capacity=None).add_vertex(Vertex(10_000))


def test_negative_capacity_is_rejected():
    with pytest.raises(ValueError):
        BoundedGraph(capacity=-1)


def test_absent_entry_differs_from_empty_entry():
    graph = BoundedGraph()
    v = Vertex(4)
    assert graph.get_neighbors(v) is None
    assert graph.get_incident_edges(v) is None
    graph.add_vertex(v)
    assert graph.get_neighbors(v) == []
    assert graph.get_incident_edges(v) == []
    assert graph.degree(v) == 0


def test_add_edge_is_symmetric(path_graph):
    a, b, c = (path_graph.get_vertex(i) for i in range(3))
    assert ids(path_graph.get_neighbors(a)) == [1]
    assert ids(path_graph.get_neighbors(b)) == [0, 2]
    assert ids(path_graph.get_neighbors(c)) == [1]
    assert path_graph.is_neighbor(a, b) and path_graph.is_neighbor(b, a)
    assert not path_graph.is_neighbor(a, c)
    assert path_graph.degree(b) == 2


def test_add_edge_failures():
    graph = build_graph(3, [(0, 1)])
    a, b, c = (graph.get_vertex(i) for i in range(3))

    assert not graph.add_edge(Edge(0), b, c)  # edge already incident to b
    assert not graph.add_edge(Edge(5), a, Vertex(9))  # missing endpoint
    assert not graph.add_edge(Edge(6), a, a)  # self-loop
    assert not graph.add_edge(Edge(7), b, a)  # parallel edge
    assert graph.edge_count() == 1
    assert graph.add_edge(Edge(8), a, c)


def test_find_edge_and_endpoints(path_graph):
    a, b, c = (path_graph.get_vertex(i) for i in range(3))
    assert path_graph.find_edge(a, b) == Edge(0)
    assert path_graph.find_edge(b, a) == Edge(0)
    assert path_graph.find_edge(a, c) is None
    assert path_graph.find_edge_set(b, c) == [Edge(1)]
    assert path_graph.find_edge_set(a, c) is None

    assert ids(path_graph.get_endpoints(Edge(1))) == [1, 2]
    assert path_graph.get_endpoints(Edge(9)) is None
    assert path_graph.get_opposite(b, Edge(0)) == a
    assert path_graph.is_incident(b, Edge(1))
    assert not path_graph.is_incident(a, Edge(1))
    assert path_graph.contains_edge(Edge(0))
    assert not path_graph.contains_edge(Edge(2))
    assert path_graph.incident_count(Edge(0)) == 2


def test_get_edges_lists_each_edge_once(petersen_graph):
    edges = petersen_graph.get_edges()
    assert len(edges) == len(PETERSEN_EDGES)
    assert sorted(e.id for e in edges) == list(range(len(PETERSEN_EDGES)))
    assert petersen_graph.edge_count() == 15


def test_queries_return_snapshots(path_graph):
    b = path_graph.get_vertex(1)
    neighbors = path_graph.get_neighbors(b)
    neighbors.clear()
    edges = path_graph.get_incident_edges(b)
    edges.append(Edge(42))
    assert path_graph.degree(b) == 2
    assert len(path_graph.get_incident_edges(b)) == 2


def test_remove_vertex_drops_reciprocal_entries(petersen_graph):
    victim = petersen_graph.get_vertex(0)
    assert petersen_graph.remove_vertex(victim)

    assert not petersen_graph.contains_vertex(victim)
    assert petersen_graph.vertex_count() == 9
    assert petersen_graph.edge_count() == 12
    for v in petersen_graph.get_vertices():
        assert 0 not in ids(petersen_graph.get_neighbors(v))
    assert not petersen_graph.remove_vertex(victim)


def test_remove_vertex_then_readd_gives_empty_entry(path_graph):
    b = path_graph.get_vertex(1)
    assert path_graph.remove_vertex(b)
    assert path_graph.add_vertex(Vertex(1))
    assert path_graph.get_neighbors(Vertex(1)) == []
    assert path_graph.edge_count() == 0


def test_remove_edge(path_graph):
    a, b = path_graph.get_vertex(0), path_graph.get_vertex(1)
    assert path_graph.remove_edge(Edge(0))
    assert not path_graph.is_neighbor(a, b)
    assert path_graph.edge_count() == 1
    assert not path_graph.remove_edge(Edge(0))


def test_remove_edge_refuses_half_present_edge(path_graph):
    # Corrupt the graph so edge 1 is only recorded at vertex 1.
    path_graph._adjacency[2] = []
    assert not path_graph.remove_edge(Edge(1))
    assert Edge(1) in path_graph.get_incident_edges(path_graph.get_vertex(1))


def test_vertex_equality_is_by_id():
    assert Vertex(1, cost=5) == Vertex(1, cost=0)
    assert hash(Vertex(1, cost=5)) == hash(Vertex(1))
    assert Vertex(1) != Vertex(2)
    assert Edge(3) == Edge(3)


def test_container_protocol(path_graph):
    assert len(path_graph) == 3
    assert Vertex(2) in path_graph
    assert Vertex(7) not in path_graph
    assert [v.id for v in path_graph] == [0, 1, 2]
    assert "vertices=3" in repr(path_graph)


def test_edge_endpoints_lists_each_edge_once(petersen_graph):
    triples = petersen_graph.edge_endpoints()
    assert len(triples) == len(PETERSEN_EDGES)
    assert sorted(e.id for _, _, e in triples) == list(range(len(PETERSEN_EDGES)))
    for u, v, edge in triples:
        assert u.id < v.id
        assert sorted((u.id, v.id)) == sorted(PETERSEN_EDGES[edge.id])
