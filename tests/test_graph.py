"""
Unit tests for the AnnotatedGraph container and reference inversion.

This module tests graph construction, the ID to index conversion, inbound list
population and its failure modes, and the NetworkX conversion helpers.
"""

import networkx as nx
import pytest

from ledger_core.errors import EmptyGraph, InvalidVertexId, RootIdUsedAsReference
from ledger_core.graph import (
    ROOT_ID,
    UNREACHED_DEPTH,
    AnnotatedGraph,
    AnnotatedVertex,
    build,
    invert,
    invert_references,
)
from ledger_core.vertex import Vertex


def reference_vertices():
    """Root plus the five rows of the reference database."""
    return [
        Vertex(),
        Vertex(left=1, right=1, timestamp=0),
        Vertex(left=1, right=2, timestamp=0),
        Vertex(left=2, right=2, timestamp=1),
        Vertex(left=3, right=3, timestamp=2),
        Vertex(left=3, right=4, timestamp=3),
    ]


class TestAnnotatedVertex:
    def test_default_initialization(self):
        av = AnnotatedVertex()
        assert av.vertex == Vertex()
        assert av.inbounds == []
        assert av.visited is False
        assert av.root_depth == UNREACHED_DEPTH

    def test_inbounds_not_shared(self):
        a, b = AnnotatedVertex(), AnnotatedVertex()
        a.inbounds.append(2)
        assert b.inbounds == []


class TestAnnotatedGraph:
    def test_build_wraps_vertices_in_order(self):
        vertices = reference_vertices()
        g = build(vertices)
        assert len(g) == 6
        assert [av.vertex for av in g] == vertices
        assert all(not av.visited and av.inbounds == [] for av in g)
        assert g.analyzed is False

    def test_build_does_not_validate(self):
        g = AnnotatedGraph.build([Vertex(left=42)])
        assert len(g) == 1

    def test_empty_graph(self):
        g = AnnotatedGraph()
        assert len(g) == 0
        assert list(g.ids()) == []

    def test_lookup_by_id(self):
        g = build(reference_vertices())
        assert g[ROOT_ID].vertex == Vertex()
        assert g[6].vertex == Vertex(left=3, right=4, timestamp=3)

    def test_index_of(self):
        g = build(reference_vertices())
        assert g.index_of(1) == 0
        assert g.index_of(6) == 5

    def test_index_of_out_of_range(self):
        g = build(reference_vertices())
        with pytest.raises(InvalidVertexId) as exc:
            g.index_of(7)
        assert exc.value.vertex_id == 7
        assert exc.value.max_id == 6
        assert "vertex with ID 7 doesn't exist. Max number is 6" in str(exc.value)

    def test_index_of_negative(self):
        g = build(reference_vertices())
        with pytest.raises(InvalidVertexId):
            g.index_of(-1)
        with pytest.raises(InvalidVertexId):
            g[-6]

    def test_index_of_zero(self):
        g = build(reference_vertices())
        with pytest.raises(RootIdUsedAsReference) as exc:
            g.index_of(0)
        assert "the graph cannot have the vertex with ID 0" in str(exc.value)


class TestInvertReferences:
    def test_single_reference(self):
        g = AnnotatedGraph([Vertex(), Vertex(left=1)])
        invert_references(g)
        assert g.vertices[0].inbounds == [2]
        assert g.vertices[1].inbounds == []

    def test_reference_database(self):
        g = build(reference_vertices())
        invert_references(g)
        assert g[1].inbounds == [2, 2, 3]
        assert g[2].inbounds == [3, 4, 4]
        assert g[3].inbounds == [5, 5, 6]
        assert g[4].inbounds == [6]
        assert g[5].inbounds == []
        assert g[6].inbounds == []
        assert g.edge_count() == 10

    def test_does_not_touch_traversal_state(self):
        g = build(reference_vertices())
        invert_references(g)
        assert all(not av.visited for av in g)
        assert all(av.root_depth == UNREACHED_DEPTH for av in g)

    def test_invalid_id(self):
        g = AnnotatedGraph([Vertex(), Vertex(left=3)])
        with pytest.raises(InvalidVertexId) as exc:
            invert_references(g)
        assert "vertex with ID 3 doesn't exist" in str(exc.value)

    def test_invalid_right_id(self):
        g = AnnotatedGraph([Vertex(), Vertex(left=1, right=9)])
        with pytest.raises(InvalidVertexId) as exc:
            invert_references(g)
        assert exc.value.vertex_id == 9

    def test_negative_id(self):
        """A negative parent ID must not wrap around to another vertex."""
        g = AnnotatedGraph([Vertex(), Vertex(left=-1)])
        with pytest.raises(InvalidVertexId) as exc:
            invert_references(g)
        assert exc.value.vertex_id == -1
        assert all(av.inbounds == [] for av in g)

    def test_invert_alias(self):
        g = AnnotatedGraph([Vertex(), Vertex(left=1)])
        invert(g)
        assert g[1].inbounds == [2]

    def test_zero_id(self):
        g = AnnotatedGraph([Vertex(), Vertex(right=0)])
        with pytest.raises(RootIdUsedAsReference):
            invert_references(g)

    @pytest.mark.parametrize("bad_id, error", [(2, InvalidVertexId), (0, RootIdUsedAsReference)])
    def test_single_vertex_graph(self, bad_id, error):
        g = AnnotatedGraph([Vertex(left=bad_id)])
        with pytest.raises(error):
            invert_references(g)

    def test_empty_graph(self):
        with pytest.raises(EmptyGraph) as exc:
            invert_references(AnnotatedGraph([]))
        assert "the graph cannot be empty" in str(exc.value)

    def test_second_call_duplicates_inbounds(self):
        """Inversion is not idempotent: a second call doubles every inbound list."""
        g = build(reference_vertices())
        invert_references(g)
        first = [list(av.inbounds) for av in g]
        invert_references(g)
        assert [len(av.inbounds) for av in g] == [2 * len(ids) for ids in first]
        assert g[1].inbounds == [2, 2, 3, 2, 2, 3]


class TestNetworkXConversion:
    def test_to_networkx(self):
        g = build(reference_vertices())
        G = g.to_networkx()
        assert isinstance(G, nx.MultiDiGraph)
        assert set(G.nodes) == {1, 2, 3, 4, 5, 6}
        assert G.number_of_edges() == 10
        assert G.number_of_edges(1, 2) == 2
        assert G.has_edge(4, 6)
        assert G.nodes[6]["timestamp"] == 3
        assert G.nodes[6]["root_depth"] == -1

    def test_to_networkx_validates_ids(self):
        g = AnnotatedGraph([Vertex(), Vertex(left=5)])
        with pytest.raises(InvalidVertexId):
            g.to_networkx()

    def test_find_cycle_none_on_dag(self):
        assert build(reference_vertices()).find_cycle() is None

    def test_find_cycle(self):
        g = AnnotatedGraph([Vertex(), Vertex(left=3), Vertex(left=2, right=1)])
        assert set(g.find_cycle()) == {2, 3}

    def test_export_graphml(self, tmp_path):
        g = build(reference_vertices())
        path = tmp_path / "ledger.graphml"
        g.export_graphml(str(path))
        loaded = nx.read_graphml(str(path))
        assert loaded.number_of_nodes() == 6
        assert loaded.number_of_edges() == 10
