"""Partition boundary computation from a key sample."""

from collections.abc import Sequence

from total_order_sort.partition.types import Boundaries


def build_boundaries(samples: Sequence[int], num_partitions: int) -> Boundaries:
    """
    Split a sorted sample into ``num_partitions`` equally populated ranges.

    Boundary i (1-based, i = 1..R-1) is the sample value at rank
    ``floor(i * S / R)``. Duplicate boundaries are allowed when the sample has
    fewer distinct values than partitions; the ranges between them are empty.

    An empty sample yields no boundaries at all: everything falls into a
    single partition.
    """
    if num_partitions < 1:
        raise ValueError(f"num_partitions must be >= 1, got {num_partitions}")

    size = len(samples)
    if size == 0:
        return ()

    return tuple(samples[i * size // num_partitions] for i in range(1, num_partitions))
