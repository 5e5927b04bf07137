"""Output shard naming and writing."""

from total_order_sort.shard.writer import ShardWriter, check_output_specs, shard_path

__all__ = ["ShardWriter", "check_output_specs", "shard_path"]
