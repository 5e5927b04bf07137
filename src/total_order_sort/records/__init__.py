"""Tab-delimited record parsing and key extraction."""

from total_order_sort.records.parse import (
    extract_key,
    iter_keyed_records,
    iter_split_lines,
    read_keyed_records,
)

__all__ = ["extract_key", "iter_keyed_records", "iter_split_lines", "read_keyed_records"]
