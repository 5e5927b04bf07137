"""Map and reduce tasks of a sort job."""

import logging
import os
from operator import itemgetter
from pathlib import Path

from total_order_sort.job.types import InputSplit, JobConfig
from total_order_sort.partition.cache import LRUFileCache, spill_path
from total_order_sort.partition.partitioner import RangePartitioner
from total_order_sort.partition.types import MAX_OPEN_HANDLES, MapTaskStats
from total_order_sort.records.parse import extract_key, iter_split_lines
from total_order_sort.shard.writer import ShardWriter, shard_path

logger = logging.getLogger(__name__)


def compute_splits(input_path: str, split_size: int) -> list[InputSplit]:
    """Cut a file into consecutive byte ranges of at most ``split_size`` bytes."""
    if split_size < 1:
        raise ValueError(f"split_size must be >= 1, got {split_size}")

    size = os.path.getsize(input_path)
    return [
        InputSplit(start, min(split_size, size - start))
        for start in range(0, size, split_size)
    ]


def run_map_task(
    config: JobConfig,
    attempt_id: str,
    split: InputSplit,
    spill_dir: str,
) -> MapTaskStats:
    """
    Route the records of one split into per-partition spill files.

    Boundaries are loaded from the published manifest, not passed in, so the
    task runs the same in a worker process as in the job's own thread.
    """
    partitioner = RangePartitioner.from_manifest(config.manifest_path, config.input_name)

    spill_path_dir = Path(spill_dir)
    spill_path_dir.mkdir(parents=True, exist_ok=True)
    cache = LRUFileCache(MAX_OPEN_HANDLES, spill_path_dir)
    stats = MapTaskStats()

    try:
        with open(config.input_path, "rb") as handle:
            for offset, line in iter_split_lines(handle, split.start, split.length):
                stats.lines_read += 1
                key = extract_key(line, config.key_column, offset)
                partition = partitioner.partition(key)

                if not line.endswith(b"\n"):
                    line += b"\n"
                cache.write(partition, line)
                stats.records_written += 1
                stats.partition_counts[partition] = stats.partition_counts.get(partition, 0) + 1
    finally:
        cache.close_all()

    logger.debug(
        "%s: split [%d, +%d) read=%d written=%d",
        attempt_id,
        split.start,
        split.length,
        stats.lines_read,
        stats.records_written,
    )
    return stats


def run_reduce_task(
    config: JobConfig,
    attempt_id: str,
    partition: int,
    spill_dirs: list[str],
) -> str:
    """
    Sort one partition's records by key and write them as a shard.

    ``spill_dirs`` are in map task order; the sort is stable, so records with
    equal keys keep their input order.
    """
    records: list[tuple[int, bytes]] = []
    for spill_dir in spill_dirs:
        path = spill_path(Path(spill_dir), partition)
        if not path.exists():
            continue
        with open(path, "rb") as handle:
            for line in handle:
                records.append((extract_key(line, config.key_column), line))

    records.sort(key=itemgetter(0))

    output = shard_path(config.output_dir, config.input_name, attempt_id, config.extension)
    with ShardWriter(output) as writer:
        for _key, line in records:
            writer.write(line)

    logger.debug("%s: partition %d wrote %d records", attempt_id, partition, len(records))
    return str(output)
