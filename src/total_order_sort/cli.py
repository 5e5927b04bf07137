"""Command-line interface for the total order sort."""

import argparse
import logging
import sys

from total_order_sort.job.types import DEFAULT_SPLIT_SIZE
from total_order_sort.orchestrator import main_sort
from total_order_sort.partition.sampler import IntervalSampler
from total_order_sort.partition.types import (
    DEFAULT_MAX_SAMPLES,
    DEFAULT_PARTITIONS,
    DEFAULT_SAMPLE_PROBABILITY,
)
from total_order_sort.records.types import DEFAULT_KEY_COLUMN


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="total-order-sort",
        description=(
            "Sort each tab-delimited input file by an integer column into "
            "globally ordered shards in a shared output directory."
        ),
    )

    parser.add_argument("output_dir", help="Output directory (may already exist)")

    parser.add_argument("files", nargs="+", help="Input files, one sort job each")

    parser.add_argument(
        "--partitions",
        type=int,
        default=DEFAULT_PARTITIONS,
        help=f"Number of partitions (output shards) per file (default: {DEFAULT_PARTITIONS})",
    )

    parser.add_argument(
        "--key-column",
        type=int,
        default=DEFAULT_KEY_COLUMN,
        help=f"1-based tab-delimited column holding the key (default: {DEFAULT_KEY_COLUMN})",
    )

    parser.add_argument(
        "--sample-probability",
        type=float,
        default=DEFAULT_SAMPLE_PROBABILITY,
        help=f"Fraction of records sampled for boundaries (default: {DEFAULT_SAMPLE_PROBABILITY})",
    )

    parser.add_argument(
        "--max-samples",
        type=int,
        default=DEFAULT_MAX_SAMPLES,
        help=f"Maximum number of sampled keys (default: {DEFAULT_MAX_SAMPLES})",
    )

    parser.add_argument(
        "--split-size",
        type=int,
        default=DEFAULT_SPLIT_SIZE,
        help=f"Map input split size in bytes (default: {DEFAULT_SPLIT_SIZE})",
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Task workers per job (default: executor default)",
    )

    parser.add_argument(
        "--extension",
        default="",
        help="Extension appended to shard file names (default: none)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    log_level = getattr(logging, args.log_level)
    configure_logging(log_level)

    if args.partitions < 1:
        parser.error(f"--partitions must be >= 1, got {args.partitions}")
    if args.key_column < 1:
        parser.error(f"--key-column must be >= 1, got {args.key_column}")
    if not 0 < args.sample_probability <= 1:
        parser.error(f"--sample-probability must be in (0, 1], got {args.sample_probability}")
    if args.max_samples < 1:
        parser.error(f"--max-samples must be >= 1, got {args.max_samples}")
    if args.split_size < 1:
        parser.error(f"--split-size must be >= 1, got {args.split_size}")
    if args.workers is not None and args.workers < 1:
        parser.error(f"--workers must be >= 1, got {args.workers}")

    return main_sort(
        args.output_dir,
        args.files,
        num_partitions=args.partitions,
        key_column=args.key_column,
        sampler=IntervalSampler(args.sample_probability, args.max_samples),
        split_size=args.split_size,
        extension=args.extension,
        workers=args.workers,
    )


if __name__ == "__main__":
    sys.exit(main())
