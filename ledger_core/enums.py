"""
Core enumerations for the DAG ledger analysis.

This module defines the named choices used across the loader, the analysis run
and the statistics: which field of a data row failed to parse, and how vertices
that the depth labeling never reached are treated.
"""

from enum import Enum


class VertexField(Enum):
    """
    Fields of one data row, in the order they appear on the line.

    The value is the human-readable name used in parse error messages.
    """

    LEFT = "left ID"
    """First parent reference."""

    RIGHT = "right ID"
    """Second parent reference."""

    TIMESTAMP = "timestamp"
    """Unsigned 32-bit timestamp."""


class UnreachablePolicy(Enum):
    """
    Treatment of vertices that are not reachable from the root.

    - INCLUDE: keep the sentinel depth in the average root depth (original output)
    - EXCLUDE: average root depth over reached vertices only
    - REJECT: fail the analysis run when any vertex is unreachable
    """

    INCLUDE = "include"
    """Sum the sentinel depth verbatim."""

    EXCLUDE = "exclude"
    """Skip unreached vertices in depth statistics."""

    REJECT = "reject"
    """Raise an error on a disconnected graph."""
