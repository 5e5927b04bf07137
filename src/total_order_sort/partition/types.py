"""Shared constants and metadata structures for partitioning."""

from dataclasses import dataclass, field
from typing import TypeAlias

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024

# Maximum number of spill file handles a map task keeps open at once.
MAX_OPEN_HANDLES = 128

# Name of the per-directory boundary manifest.
PARTITION_MANIFEST_NAME = "_partitioning"

DEFAULT_SAMPLE_PROBABILITY = 0.01
DEFAULT_MAX_SAMPLES = 100
DEFAULT_PARTITIONS = 4

Boundaries: TypeAlias = tuple[int, ...]


@dataclass
class MapTaskStats:
    """Counters reported by one map task."""

    lines_read: int = 0
    records_written: int = 0
    partition_counts: dict[int, int] = field(default_factory=dict)
