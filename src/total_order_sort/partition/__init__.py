"""Sampling, boundary building and range partitioning."""

from total_order_sort.partition.boundaries import build_boundaries
from total_order_sort.partition.cache import LRUFileCache
from total_order_sort.partition.manifest import manifest_path_for, read_manifest, write_manifest
from total_order_sort.partition.partitioner import RangePartitioner
from total_order_sort.partition.sampler import IntervalSampler

__all__ = [
    "IntervalSampler",
    "LRUFileCache",
    "RangePartitioner",
    "build_boundaries",
    "manifest_path_for",
    "read_manifest",
    "write_manifest",
]
