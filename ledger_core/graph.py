"""
Annotated graph data structures for the DAG ledger.

This module defines the in-memory structure of one analysis run:
- AnnotatedVertex: a Vertex plus the state derived while walking the graph
- AnnotatedGraph: the index-addressed container of annotated vertices
- invert_references: turns declared parent links into inbound lists

Vertex IDs are 1-based. The synthetic root has ID 1 and lives at index 0;
`AnnotatedGraph.index_of` is the only place an ID becomes a list index.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

import networkx as nx

from .errors import EmptyGraph, InvalidVertexId, RootIdUsedAsReference
from .vertex import Vertex

logger = logging.getLogger(__name__)

ROOT_ID = 1
"""ID of the synthetic root vertex, the origin of every root depth."""

UNREACHED_DEPTH = 2**64 - 1
"""Root depth of a vertex the depth labeling has not reached."""


@dataclass
class AnnotatedVertex:
    """
    A Vertex equipped with the metadata needed to calculate statistics.

    Attributes:
        vertex: The underlying, immutable record
        inbounds: IDs of vertices that declared this vertex as a parent, in
            discovery order
        visited: Set once, when the depth labeling first dequeues the vertex
        root_depth: Shortest path length from the root, or UNREACHED_DEPTH
    """

    vertex: Vertex = field(default_factory=Vertex)
    inbounds: List[int] = field(default_factory=list)
    visited: bool = False
    root_depth: int = UNREACHED_DEPTH


class AnnotatedGraph:
    """
    Container for the annotated vertices of one analysis run.

    The graph owns every vertex by position. Construction does no validation;
    IDs are checked lazily by the passes that dereference them.

    Attributes:
        vertices: Annotated vertices, index = ID - 1
        analyzed: True once an Analyzer has run on this graph
    """

    def __init__(self, vertices: Iterable[Vertex] = ()):
        """Wrap each vertex with fresh traversal state."""
        self.vertices: List[AnnotatedVertex] = [AnnotatedVertex(v) for v in vertices]
        self.analyzed = False

    @classmethod
    def build(cls, vertices: Iterable[Vertex]) -> "AnnotatedGraph":
        return cls(vertices)

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[AnnotatedVertex]:
        return iter(self.vertices)

    def __getitem__(self, vertex_id: int) -> AnnotatedVertex:
        return self.vertices[self.index_of(vertex_id)]

    @property
    def max_id(self) -> int:
        return len(self.vertices)

    def ids(self) -> range:
        """Return every valid vertex ID in storage order."""
        return range(1, len(self.vertices) + 1)

    def index_of(self, vertex_id: int) -> int:
        """
        Convert a vertex ID into a storage index.

        Args:
            vertex_id: 1-based vertex ID

        Returns:
            int: The index of the vertex in `vertices`

        Raises:
            InvalidVertexId: If the ID is negative or greater than the vertex count
            RootIdUsedAsReference: If the ID is 0
        """
        if vertex_id > self.max_id or vertex_id < 0:
            raise InvalidVertexId(vertex_id, self.max_id)
        if vertex_id == 0:
            raise RootIdUsedAsReference()
        return vertex_id - 1

    def edge_count(self) -> int:
        """Return the number of inbound references recorded so far."""
        return sum(len(av.inbounds) for av in self.vertices)

    def unreached_ids(self) -> List[int]:
        return [vid for vid, av in zip(self.ids(), self.vertices) if not av.visited]

    def to_networkx(self) -> "nx.MultiDiGraph":
        """
        Convert the graph to a NetworkX MultiDiGraph for export and analysis.

        Nodes are vertex IDs; each edge runs from a parent to a vertex that
        references it, the direction the depth labeling walks. A vertex that
        names the same parent twice contributes two parallel edges.

        Returns:
            MultiDiGraph with vertex attributes (timestamp, visited, root_depth)
        """
        G = nx.MultiDiGraph()
        for vid, av in zip(self.ids(), self.vertices):
            G.add_node(
                vid,
                timestamp=av.vertex.timestamp,
                visited=av.visited,
                root_depth=av.root_depth if av.visited else -1,
            )
        for vid, av in zip(self.ids(), self.vertices):
            for parent in av.vertex.parents():
                self.index_of(parent)
                G.add_edge(parent, vid)
        return G

    def export_graphml(self, filepath: str) -> None:
        """
        Export the graph to GraphML format.

        Args:
            filepath: Path where to save the GraphML file
        """
        nx.write_graphml(self.to_networkx(), filepath)

    def find_cycle(self) -> Optional[List[int]]:
        """
        Look for a cycle among the declared parent links.

        Returns:
            The vertex IDs along one cycle, in traversal order, or None
        """
        try:
            edges = nx.find_cycle(self.to_networkx())
        except nx.NetworkXNoCycle:
            return None
        return [edge[0] for edge in edges]


def build(vertices: Iterable[Vertex]) -> AnnotatedGraph:
    """Create an annotated graph from vertices, the synthetic root first."""
    return AnnotatedGraph.build(vertices)


def invert_references(graph: AnnotatedGraph) -> None:
    """
    Fill in the inbound list of every referenced vertex.

    For the vertex with ID `i`, `i` is appended to the inbound list of its
    left parent, then of its right parent. Only the referenced vertices are
    modified. Calling this twice duplicates every inbound entry.

    Raises:
        EmptyGraph: If the graph has no vertices
        InvalidVertexId: If a parent ID is negative or greater than the vertex count
        RootIdUsedAsReference: If a parent ID is 0
    """
    if not len(graph):
        raise EmptyGraph()

    for current_id, av in zip(graph.ids(), graph.vertices):
        if av.vertex.left is not None:
            graph.vertices[graph.index_of(av.vertex.left)].inbounds.append(current_id)
        if av.vertex.right is not None:
            graph.vertices[graph.index_of(av.vertex.right)].inbounds.append(current_id)

    logger.debug(
        "Inverted references: %d inbound entries across %d vertices",
        graph.edge_count(),
        len(graph),
    )


# name used by callers of the core API
invert = invert_references
