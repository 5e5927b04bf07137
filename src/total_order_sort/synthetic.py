"""Synthetic tab-delimited record generation."""

import random

from total_order_sort.partition.types import BUFFER_SIZE
from total_order_sort.records.types import DEFAULT_KEY_COLUMN, INT64_MAX, INT64_MIN

DISTRIBUTIONS = ("uniform", "skewed", "narrow")


def draw_key(rng: random.Random, distribution: str) -> int:
    """
    Draw one int64 key.

    "uniform" spans the whole int64 range, "skewed" piles most keys near zero
    with a long positive tail, "narrow" repeats a handful of values.
    """
    if distribution == "uniform":
        return rng.randint(INT64_MIN, INT64_MAX)
    if distribution == "skewed":
        return min(int(rng.expovariate(1e-6)), INT64_MAX)
    if distribution == "narrow":
        return rng.randint(-3, 3)
    raise ValueError(f"unknown distribution {distribution!r}")


def format_record(index: int, key: int, columns: int, key_column: int) -> str:
    """Build one line with ``key`` in ``key_column`` and filler everywhere else."""
    fields = [f"f{index}_{col}" for col in range(1, columns + 1)]
    fields[key_column - 1] = str(key)
    return "\t".join(fields) + "\n"


def generate_records(
    output_path: str,
    num_records: int,
    key_column: int = DEFAULT_KEY_COLUMN,
    columns: int | None = None,
    distribution: str = "uniform",
    seed: int = 1,
) -> list[int]:
    """
    Write ``num_records`` lines and return their keys in file order.

    Streams output line by line; only the keys are held in memory.
    """
    columns = columns or key_column
    if columns < key_column:
        raise ValueError(f"columns ({columns}) must be >= key_column ({key_column})")

    rng = random.Random(seed)
    keys: list[int] = []

    with open(output_path, "w", encoding="utf-8", buffering=BUFFER_SIZE) as f:
        for i in range(num_records):
            key = draw_key(rng, distribution)
            keys.append(key)
            f.write(format_record(i, key, columns, key_column))

    return keys
