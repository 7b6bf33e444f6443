"""
Vertex records parsed from the ledger database.

Each data row declares up to two parent references and a timestamp:

    <left_id> <right_id> <timestamp>

A parent reference equal to the row's own ID means "no edge".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .enums import VertexField
from .errors import FieldParseError, TooFewItems, TooManyItems

MAX_TIMESTAMP = 2**32 - 1

_UNSIGNED = re.compile(r"[0-9]+")


def _parse_unsigned(token: str, field: VertexField) -> int:
    if not _UNSIGNED.fullmatch(token):
        raise FieldParseError(field, token)
    return int(token)


@dataclass(frozen=True)
class Vertex:
    """
    One entry of the ledger.

    Attributes:
        left: ID of the first parent, or None when there is no edge
        right: ID of the second parent, or None when there is no edge
        timestamp: Unsigned 32-bit timestamp

    The default instance is the synthetic root: no parents, timestamp 0.
    """

    left: Optional[int] = None
    right: Optional[int] = None
    timestamp: int = 0

    @classmethod
    def from_line(cls, line: str, vertex_id: int) -> "Vertex":
        """
        Parse one data row.

        Args:
            line: Raw row text
            vertex_id: Graph ID of the vertex the row describes

        Returns:
            Vertex: The parsed record with self-references removed

        Raises:
            TooFewItems: Fewer than three tokens
            TooManyItems: More than three tokens
            FieldParseError: A token is not a non-negative integer (or the
                timestamp does not fit in 32 bits)
        """
        chunks = line.split()
        if len(chunks) > 3:
            raise TooManyItems(line)
        if len(chunks) < 3:
            raise TooFewItems(line)

        left_id = _parse_unsigned(chunks[0], VertexField.LEFT)
        right_id = _parse_unsigned(chunks[1], VertexField.RIGHT)
        timestamp = _parse_unsigned(chunks[2], VertexField.TIMESTAMP)
        if timestamp > MAX_TIMESTAMP:
            raise FieldParseError(VertexField.TIMESTAMP, chunks[2])

        # a self-referenced parent is not an edge
        return cls(
            left=None if left_id == vertex_id else left_id,
            right=None if right_id == vertex_id else right_id,
            timestamp=timestamp,
        )

    def parents(self):
        """Return the declared parent IDs, left first."""
        return [p for p in (self.left, self.right) if p is not None]
