"""
Statistics over an analyzed DAG ledger.

This module provides the three averages reported for a graph:
- Average number of inbound references per vertex
- Average root depth per vertex
- Average number of vertices per depth level, the root level excluded

Each statistic divides by a count derived from the graph. When that count is
zero the result is `nan` and a warning is logged.
"""

from __future__ import annotations

import logging
import math
from typing import Dict

import numpy as np

from .config import AnalysisConfig
from .enums import UnreachablePolicy
from .graph import AnnotatedGraph

logger = logging.getLogger(__name__)


def _ratio(total: int, count: int, name: str) -> float:
    if count == 0:
        logger.warning("%s is undefined: no contributing vertices", name)
        return math.nan
    return total / count


def average_inbound_refs(graph: AnnotatedGraph) -> float:
    """Return the average number of inbound references per vertex."""
    total = sum(len(av.inbounds) for av in graph)
    return _ratio(total, len(graph), "average inbound references")


def average_depth(
    graph: AnnotatedGraph, policy: UnreachablePolicy = UnreachablePolicy.EXCLUDE
) -> float:
    """
    Return the average root depth per vertex.

    Args:
        graph: An analyzed graph
        policy: INCLUDE adds the sentinel depth of unreached vertices verbatim
            and divides by the vertex count; EXCLUDE and REJECT average the
            reached vertices only

    Returns:
        float: The average depth, or nan when nothing contributes
    """
    if policy == UnreachablePolicy.INCLUDE:
        depths = [av.root_depth for av in graph]
    else:
        depths = [av.root_depth for av in graph if av.visited]
    # python ints: the sentinel overflows int64
    return _ratio(sum(depths), len(depths), "average root depth")


def depth_histogram(graph: AnnotatedGraph) -> np.ndarray:
    """
    Count reached vertices per root depth.

    Returns:
        Array where element `d` is the number of vertices at depth `d`
    """
    depths = np.fromiter(
        (av.root_depth for av in graph if av.visited), dtype=np.int64
    )
    return np.bincount(depths, minlength=1)


def average_vertices_per_depth(graph: AnnotatedGraph) -> float:
    """
    Return the average number of vertices per depth level.

    Depth 0 (the root) is skipped; levels with no vertices do not count.
    """
    buckets = depth_histogram(graph)[1:]
    levels = buckets[buckets > 0]
    return _ratio(int(levels.sum()), int(levels.size), "average vertices per depth")


def summarize(graph: AnnotatedGraph, config: AnalysisConfig | None = None) -> Dict[str, float]:
    """Return every statistic of an analyzed graph as a dict."""
    cfg = config or AnalysisConfig()
    return {
        "avg_depth_per_vertex": average_depth(graph, cfg.unreachable_policy),
        "avg_vertices_per_depth": average_vertices_per_depth(graph),
        "avg_inbound_refs_per_vertex": average_inbound_refs(graph),
    }
