"""Spill files written by map tasks, one per partition."""

from collections import OrderedDict
from pathlib import Path
from typing import BinaryIO

from total_order_sort.partition.types import BUFFER_SIZE


def spill_path(spill_dir: Path, partition: int) -> Path:
    """Return the spill file a map task writes for ``partition``."""
    return spill_dir / f"part_{partition:05d}.spill"


class LRUFileCache:
    """
    Appending handles to a map task's spill files.

    With many partitions a task cannot keep every spill file open, so at
    most ``max_handles`` stay open; the least recently written one is closed
    to make room and reopened in append mode when its partition comes up
    again.
    """

    def __init__(self, max_handles: int, spill_dir: Path):
        self._max_handles = max_handles
        self._spill_dir = spill_dir
        self._cache: OrderedDict[int, BinaryIO] = OrderedDict()

    def _handle_for(self, partition: int) -> BinaryIO:
        handle = self._cache.get(partition)
        if handle is not None:
            self._cache.move_to_end(partition)
            return handle

        while len(self._cache) >= self._max_handles:
            _, oldest = self._cache.popitem(last=False)
            oldest.close()

        path = spill_path(self._spill_dir, partition)
        handle = open(path, "ab", buffering=BUFFER_SIZE)  # noqa: SIM115
        self._cache[partition] = handle
        return handle

    def write(self, partition: int, data: bytes) -> None:
        """Append records to the partition's spill file."""
        self._handle_for(partition).write(data)

    def close_all(self) -> None:
        """Flush and close every open spill file."""
        while self._cache:
            _, handle = self._cache.popitem(last=False)
            handle.close()
