#!/usr/bin/env python3
"""
Sample Data Generator

Writes a synthetic credit dataset with the benchmark's column layout.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from credit_risk_bench.data.sample_data import RANDOM_SEED, write_credit_data


def main():
    """Main function for CLI usage."""
    parser = argparse.ArgumentParser(
        description="Generate sample data for the credit risk benchmark"
    )
    parser.add_argument(
        '-n', '--n-rows',
        type=int,
        default=1000,
        help='Number of accounts to generate (default: 1000)'
    )
    parser.add_argument(
        '-o', '--output',
        type=str,
        default='data/credit_data.csv',
        help='Output CSV path (default: data/credit_data.csv)'
    )
    parser.add_argument(
        '-s', '--seed',
        type=int,
        default=RANDOM_SEED,
        help=f'Random seed (default: {RANDOM_SEED})'
    )

    args = parser.parse_args()

    df = write_credit_data(args.output, n_rows=args.n_rows, seed=args.seed)
    print(f"Wrote {len(df):,} rows to {args.output} (bad rate {df['bad_flag'].mean():.2%})")


if __name__ == "__main__":
    main()
