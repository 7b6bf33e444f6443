"""
DAG Ledger Core Package.

This package analyzes a ledger stored as a directed acyclic graph in which
every vertex names up to two parents, including:

- Vertex records and the database loader
- The annotated graph and reference inversion
- Breadth-first root depth labeling (Analyzer)
- Statistics over the analyzed graph

Typical use:

    vertices = load_vertices_from_file("database.txt")
    graph = build(vertices)
    analyze(graph)
    average_depth(graph)
"""

__version__ = "0.1.0"

from .enums import UnreachablePolicy, VertexField
from .errors import (
    AlreadyAnalyzed,
    CountMismatch,
    CycleDetected,
    EmptyGraph,
    FieldParseError,
    GraphError,
    HeaderError,
    InvalidVertexId,
    LedgerError,
    LoaderError,
    MalformedRow,
    RootIdUsedAsReference,
    TooFewItems,
    TooManyItems,
    UnreachableVertices,
)
from .vertex import Vertex
from .graph import (
    ROOT_ID,
    UNREACHED_DEPTH,
    AnnotatedGraph,
    AnnotatedVertex,
    build,
    invert,
    invert_references,
)
from .config import AnalysisConfig, load_config
from .engine import Analyzer, analyze, label_depths
from .metrics import (
    average_depth,
    average_inbound_refs,
    average_vertices_per_depth,
    depth_histogram,
    summarize,
)
from .loader import load_vertices_from_file, load_vertices_from_lines, load_vertices_from_text
