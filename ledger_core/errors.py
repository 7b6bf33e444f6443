"""
Exception hierarchy for loading and analyzing a DAG ledger.

Every failure aborts the run: errors are raised where they are detected and
reach the caller unchanged.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .enums import VertexField


class LedgerError(Exception):
    """Base class for all errors raised by ledger_core."""


# ----- graph errors -----
class GraphError(LedgerError):
    """The graph cannot be analyzed."""


class EmptyGraph(GraphError):
    def __init__(self):
        super().__init__("the graph cannot be empty")


class InvalidVertexId(GraphError):
    """A reference addresses an ID greater than the vertex count."""

    def __init__(self, vertex_id: int, max_id: int):
        self.vertex_id = vertex_id
        self.max_id = max_id
        super().__init__(
            f"vertex with ID {vertex_id} doesn't exist. Max number is {max_id}"
        )


class RootIdUsedAsReference(GraphError):
    """A reference resolves to ID 0."""

    def __init__(self):
        super().__init__("the graph cannot have the vertex with ID 0. The minimum is 1")


class CycleDetected(GraphError):
    def __init__(self, cycle: Sequence[int]):
        self.cycle = list(cycle)
        path = " -> ".join(str(v) for v in self.cycle + self.cycle[:1])
        super().__init__(f"the graph contains a cycle: {path}")


class UnreachableVertices(GraphError):
    def __init__(self, vertex_ids: Sequence[int]):
        self.vertex_ids = list(vertex_ids)
        shown = ", ".join(str(v) for v in self.vertex_ids[:10])
        more = "" if len(self.vertex_ids) <= 10 else ", ..."
        super().__init__(
            f"{len(self.vertex_ids)} vertices are unreachable from the root: {shown}{more}"
        )


class AlreadyAnalyzed(GraphError):
    def __init__(self):
        super().__init__("the graph has already been analyzed")


# ----- loader errors -----
class LoaderError(LedgerError):
    """The input could not be turned into vertices."""


class HeaderError(LoaderError):
    """The first line is missing or is not a vertex count."""


class MalformedRow(LoaderError):
    """A data row does not have exactly three items."""

    reason = "the row is malformed"

    def __init__(self, row: str, line_number: Optional[int] = None):
        self.row = row
        self.line_number = line_number
        message = f"{self.reason}: '{row}'"
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class TooFewItems(MalformedRow):
    reason = "the row has too few items"


class TooManyItems(MalformedRow):
    reason = "the row has too many items"


class FieldParseError(LoaderError):
    """One token of a data row is not a valid value for its field."""

    def __init__(self, field: VertexField, token: str, line_number: Optional[int] = None):
        self.field = field
        self.token = token
        self.line_number = line_number
        message = f"unable to parse the {field.value}: '{token}'"
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class CountMismatch(LoaderError):
    def __init__(self, actual: int, declared: int):
        self.actual = actual
        self.declared = declared
        super().__init__(
            f"The number vertices ({actual}) isn't equal to the number declared: {declared}"
        )


__all__ = [
    "LedgerError",
    "GraphError",
    "EmptyGraph",
    "InvalidVertexId",
    "RootIdUsedAsReference",
    "CycleDetected",
    "UnreachableVertices",
    "AlreadyAnalyzed",
    "LoaderError",
    "HeaderError",
    "MalformedRow",
    "TooFewItems",
    "TooManyItems",
    "FieldParseError",
    "CountMismatch",
]
