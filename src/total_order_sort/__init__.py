"""Total Order Sort - sort large tab-delimited files into globally ordered shards."""

from total_order_sort.orchestrator import SortOrchestrator, main_sort, sort_files

__all__ = ["SortOrchestrator", "main_sort", "sort_files"]
