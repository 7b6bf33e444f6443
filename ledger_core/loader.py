"""
Database loader for the DAG ledger.

The database is a text file whose first line declares the number of data rows,
followed by one row per vertex:

    5
    1 1 0
    1 2 0
    2 2 1
    3 3 2
    3 4 3

The loader prepends the synthetic root, so the first data row is vertex 2,
matching its line number in the file.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, List

from .errors import CountMismatch, FieldParseError, HeaderError, MalformedRow
from .vertex import Vertex

logger = logging.getLogger(__name__)

_COUNT = re.compile(r"[0-9]+")


def _strip_eol(line: str) -> str:
    return line.rstrip("\r\n")


def parse_vertex_count(line: str) -> int:
    """Parse the header line holding the declared number of vertices."""
    line = _strip_eol(line)
    if not _COUNT.fullmatch(line):
        raise HeaderError(f"unable to parse the number of vertices: '{line}'")
    count = int(line)
    logger.debug("Extracted number of vertices in graph: %d", count)
    return count


def _parse_rows(lines: Iterator[str]) -> Iterator[Vertex]:
    # line 1 is the header, so row n sits on line n + 1 and is vertex n + 1
    for line_number, line in enumerate(lines, start=2):
        row = _strip_eol(line)
        try:
            yield Vertex.from_line(row, line_number)
        except MalformedRow as e:
            raise type(e)(row, line_number) from None
        except FieldParseError as e:
            raise FieldParseError(e.field, e.token, line_number) from None


def load_vertices_from_lines(lines: Iterable[str]) -> List[Vertex]:
    """
    Load vertices from an iterable of lines.

    Args:
        lines: Header line followed by data rows; trailing newlines are ignored

    Returns:
        List[Vertex]: The synthetic root followed by one vertex per data row

    Raises:
        HeaderError: If the input is empty or the header is not a count
        MalformedRow: If a row does not have exactly three items
        FieldParseError: If a row item is not a valid number
        CountMismatch: If the number of rows differs from the declared count
    """
    it = iter(lines)
    try:
        header = next(it)
    except StopIteration:
        raise HeaderError("end of file") from None
    expected = parse_vertex_count(header)

    rows = list(_parse_rows(it))
    if len(rows) != expected:
        raise CountMismatch(len(rows), expected)

    return [Vertex()] + rows


def load_vertices_from_text(text: str) -> List[Vertex]:
    """Load vertices from the full database text."""
    return load_vertices_from_lines(text.splitlines())


def load_vertices_from_file(path: str) -> List[Vertex]:
    """Load vertices from a database file path."""
    logger.info("Loading vertices from %s", path)
    with open(path, "r", encoding="utf-8") as f:
        return load_vertices_from_lines(f)
