"""Interval sampling of sort keys."""

import logging
from collections.abc import Iterable

from total_order_sort.partition.types import DEFAULT_MAX_SAMPLES, DEFAULT_SAMPLE_PROBABILITY
from total_order_sort.records import iter_keyed_records
from total_order_sort.records.types import DEFAULT_KEY_COLUMN

logger = logging.getLogger(__name__)


class IntervalSampler:
    """
    Take keys at evenly spaced intervals while walking an input in order.

    Record n (counting from 1) is kept while ``kept / n < probability``, so
    the first record is always kept and after that roughly one record in
    ``1 / probability``. Sampling stops as soon as ``max_samples`` keys have
    been kept.
    """

    def __init__(
        self,
        probability: float = DEFAULT_SAMPLE_PROBABILITY,
        max_samples: int = DEFAULT_MAX_SAMPLES,
    ):
        if not 0 < probability <= 1:
            raise ValueError(f"probability must be in (0, 1], got {probability}")
        if max_samples < 1:
            raise ValueError(f"max_samples must be >= 1, got {max_samples}")
        self.probability = probability
        self.max_samples = max_samples

    def sample_lines(self, lines: Iterable[bytes], column: int = DEFAULT_KEY_COLUMN) -> list[int]:
        """Return the sampled keys of ``lines``, sorted ascending."""
        samples: list[int] = []
        records = 0
        for key, _line in iter_keyed_records(lines, column):
            records += 1
            if len(samples) / records < self.probability:
                samples.append(key)
                if len(samples) >= self.max_samples:
                    break

        logger.debug("Sampled %d keys from %d records", len(samples), records)
        samples.sort()
        return samples

    def sample(self, input_path: str, column: int = DEFAULT_KEY_COLUMN) -> list[int]:
        """Sample keys from a file."""
        with open(input_path, "rb") as handle:
            return self.sample_lines(handle, column)
