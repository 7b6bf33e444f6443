"""
Depth labeling and the analysis run for the DAG ledger.

The analysis walks an AnnotatedGraph in two passes:
1. Inversion: declared parent links become inbound lists (`graph.invert_references`)
2. Labeling: a breadth-first search from the root assigns each reachable
   vertex its root depth, following inbound lists away from the root

Configuration: cycle rejection and the handling of unreachable vertices are
tunable via `AnalysisConfig` in `ledger_core.config`.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, Tuple

from .config import AnalysisConfig
from .enums import UnreachablePolicy
from .errors import AlreadyAnalyzed, CycleDetected, EmptyGraph, UnreachableVertices
from .graph import ROOT_ID, AnnotatedGraph, invert_references

logger = logging.getLogger(__name__)


def _new_stats() -> Dict[str, int]:
    return {
        "visits": 0,
        "skipped_revisits": 0,
        "max_queue_length": 0,
        "reachable": 0,
        "unreachable": 0,
    }


def label_depths(graph: AnnotatedGraph, stats: Dict[str, int] | None = None) -> None:
    """
    Find the root depth (shortest path to the root) of every vertex.

    The inbound lists must already be populated by `invert_references`;
    otherwise only the root is labeled.

    Args:
        graph: Graph to label in place
        stats: Optional counters to update while walking

    Raises:
        EmptyGraph: If the graph has no vertices
        InvalidVertexId: If an inbound ID is greater than the vertex count
        RootIdUsedAsReference: If an inbound ID is 0
    """
    if not len(graph):
        raise EmptyGraph()
    stats = stats if stats is not None else _new_stats()

    queue: Deque[Tuple[int, int]] = deque([(0, ROOT_ID)])
    while queue:
        path_len, vertex_id = queue.popleft()
        av = graph.vertices[graph.index_of(vertex_id)]
        if av.visited:
            stats["skipped_revisits"] += 1
            continue

        logger.debug("visiting vertex id: %d", vertex_id)
        av.visited = True
        stats["visits"] += 1
        if path_len < av.root_depth:
            av.root_depth = path_len

        queue.extend((path_len + 1, child_id) for child_id in av.inbounds)
        stats["max_queue_length"] = max(stats["max_queue_length"], len(queue))


class Analyzer:
    """
    Runs the full analysis on one AnnotatedGraph.

    Attributes:
        graph: The graph being analyzed, mutated in place
        config: Policies applied around the two passes
        stats: Counters recorded during `run`
    """

    def __init__(self, graph: AnnotatedGraph, config: AnalysisConfig | None = None):
        self.graph = graph
        self.config = config or AnalysisConfig()
        self.stats = _new_stats()

    def run(self) -> AnnotatedGraph:
        """
        Invert references, then label depths.

        Returns:
            AnnotatedGraph: The analyzed graph

        Raises:
            AlreadyAnalyzed: If the graph went through a previous run
            CycleDetected: If cycles are rejected and the graph has one
            UnreachableVertices: If the policy is REJECT and some vertex is
                not reachable from the root
            GraphError: Any error raised by the two passes
        """
        if self.graph.analyzed:
            raise AlreadyAnalyzed()
        if not len(self.graph):
            raise EmptyGraph()

        self.graph.analyzed = True
        invert_references(self.graph)

        if self.config.reject_cycles:
            cycle = self.graph.find_cycle()
            if cycle is not None:
                raise CycleDetected(cycle)

        label_depths(self.graph, self.stats)

        unreached = self.graph.unreached_ids()
        self.stats["reachable"] = len(self.graph) - len(unreached)
        self.stats["unreachable"] = len(unreached)
        if unreached:
            if self.config.unreachable_policy == UnreachablePolicy.REJECT:
                raise UnreachableVertices(unreached)
            logger.info("%d vertices are unreachable from the root", len(unreached))

        logger.debug("Analysis stats: %s", self.stats)
        return self.graph


def analyze(graph: AnnotatedGraph, config: AnalysisConfig | None = None) -> AnnotatedGraph:
    """Run inversion then depth labeling on `graph`; see `Analyzer.run`."""
    return Analyzer(graph, config).run()
