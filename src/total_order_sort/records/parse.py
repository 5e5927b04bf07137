"""Parsing utilities for keyed records."""

from collections.abc import Iterable, Iterator
from typing import BinaryIO

from total_order_sort.errors import MalformedRecord
from total_order_sort.records.types import (
    DEFAULT_KEY_COLUMN,
    FIELD_SEPARATOR,
    INT64_MAX,
    INT64_MIN,
    INTEGER_PATTERN,
    KeyedRecord,
)


def extract_key(
    raw_line: bytes,
    column: int = DEFAULT_KEY_COLUMN,
    offset: int | None = None,
) -> int:
    """
    Extract the signed 64-bit sort key from the Nth tab-delimited field.

    The field is the byte range between the (N-1)th and Nth tab (or the end
    of the line for the last field). Line terminators are not part of it.

    Raises:
        MalformedRecord: the line has fewer than N fields, or the field is
            not a base-10 integer in int64 range.
    """
    if column < 1:
        raise ValueError(f"column must be >= 1, got {column}")

    # One terminator only: "\n" or "\r\n".
    line = raw_line.removesuffix(b"\n").removesuffix(b"\r")

    pos = 0
    for _ in range(column - 1):
        npos = line.find(FIELD_SEPARATOR, pos)
        if npos == -1:
            raise MalformedRecord(f"ran out of tabs before column {column}", offset)
        pos = npos + 1

    end = line.find(FIELD_SEPARATOR, pos)
    field = line[pos:] if end == -1 else line[pos:end]

    if INTEGER_PATTERN.fullmatch(field) is None:
        raise MalformedRecord(f"column {column} is not an integer: {field!r}", offset)

    key = int(field)
    if key < INT64_MIN or key > INT64_MAX:
        raise MalformedRecord(f"column {column} overflows int64: {field!r}", offset)
    return key


def iter_keyed_records(
    lines: Iterable[bytes],
    column: int = DEFAULT_KEY_COLUMN,
) -> Iterator[KeyedRecord]:
    """Yield (key, line) pairs, failing on the first malformed line."""
    offset = 0
    for raw_line in lines:
        yield extract_key(raw_line, column, offset), raw_line
        offset += len(raw_line)


def read_keyed_records(path: str, column: int = DEFAULT_KEY_COLUMN) -> Iterator[KeyedRecord]:
    """Read and key every record of a file."""
    with open(path, "rb") as handle:
        yield from iter_keyed_records(handle, column)


def iter_split_lines(handle: BinaryIO, start: int, length: int) -> Iterator[tuple[int, bytes]]:
    """
    Yield (offset, line) for the lines owned by the split [start, start + length).

    A split that does not begin at offset 0 skips its first (possibly partial)
    line; every split reads through the line that starts at or before its end.
    The two rules together give each line to exactly one split.
    """
    end = start + length
    handle.seek(start)
    pos = start
    if start != 0:
        pos += len(handle.readline())

    while pos <= end:
        line = handle.readline()
        if not line:
            break
        yield pos, line
        pos += len(line)
