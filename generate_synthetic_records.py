#!/usr/bin/env python3
"""
Synthetic dataset generator for total order sort runs.

Writes a tab-delimited file whose key column holds signed 64-bit integers
drawn from a chosen distribution.
"""

import argparse
import sys

from total_order_sort.synthetic import DISTRIBUTIONS, generate_records


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic tab-delimited dataset.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 10M records, key in column 8
  python generate_synthetic_records.py --out data/records.tsv --records 10000000

  # Heavily skewed keys to exercise sampled boundaries
  python generate_synthetic_records.py --out data/skewed.tsv --distribution skewed
""",
    )

    parser.add_argument(
        "--out",
        required=True,
        help="Output file path",
    )
    parser.add_argument(
        "--records",
        type=int,
        default=1_000_000,
        help="Number of records (default: 1000000)",
    )
    parser.add_argument(
        "--key-column",
        type=int,
        default=8,
        help="1-based key column (default: 8)",
    )
    parser.add_argument(
        "--columns",
        type=int,
        default=None,
        help="Total number of columns (default: the key column)",
    )
    parser.add_argument(
        "--distribution",
        choices=DISTRIBUTIONS,
        default="uniform",
        help="Key distribution (default: uniform)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1,
        help="Random seed for reproducibility (default: 1)",
    )

    args = parser.parse_args()

    if args.records < 0:
        parser.error("--records must not be negative")
    if args.key_column < 1:
        parser.error("--key-column must be at least 1")
    if args.columns is not None and args.columns < args.key_column:
        parser.error("--columns must be at least --key-column")

    print(f"Generating {args.records:,} records into {args.out}...", file=sys.stderr)
    generate_records(
        output_path=args.out,
        num_records=args.records,
        key_column=args.key_column,
        columns=args.columns,
        distribution=args.distribution,
        seed=args.seed,
    )
    print(f"Done! Wrote {args.records:,} lines to {args.out}", file=sys.stderr)


if __name__ == "__main__":
    main()
