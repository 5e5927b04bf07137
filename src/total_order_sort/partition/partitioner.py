"""Key-range partitioning over published boundaries."""

from bisect import bisect_right
from collections.abc import Sequence
from pathlib import Path

from total_order_sort.partition.manifest import read_manifest


class RangePartitioner:
    """
    Map keys to partitions using sorted boundaries.

    Partition p holds the keys k with ``boundaries[p-1] <= k < boundaries[p]``,
    with open ends below the first boundary and above the last.
    """

    def __init__(self, boundaries: Sequence[int]):
        self._boundaries = tuple(boundaries)

    @classmethod
    def from_manifest(cls, manifest_path: str | Path, input_name: str) -> "RangePartitioner":
        return cls(read_manifest(manifest_path, input_name))

    @property
    def boundaries(self) -> tuple[int, ...]:
        return self._boundaries

    @property
    def num_partitions(self) -> int:
        return len(self._boundaries) + 1

    def partition(self, key: int) -> int:
        """Return the partition index in [0, num_partitions - 1] for ``key``."""
        return bisect_right(self._boundaries, key)
