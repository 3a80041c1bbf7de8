#!/usr/bin/env python3
"""Sample dataset generation script.

Generates a synthetic CSV with a controllable share of dirty cells so the
audit can be exercised by hand or in perf tests:
- numeric, 0/1 flag, true/false and string columns
- blank cells at --missing-rate
- wrong-type cells (text in numeric columns, numbers in text columns)
  at --mismatch-rate
- a few fully-empty rows, which the audit drops
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd


def generate_dirty_data(
    rows: int, missing_rate: float = 0.05, mismatch_rate: float = 0.02, seed: int = 42
) -> pd.DataFrame:
    """Generate a DataFrame of strings with injected missing / wrong-type cells.

    Args:
        rows: Number of data rows
        missing_rate: Probability that a cell is blank
        mismatch_rate: Probability that a cell holds a wrong-type token
        seed: Random seed for reproducible data

    Returns:
        DataFrame whose cells are all strings (ready for to_csv)
    """
    rng = np.random.default_rng(seed)
    categories = ["Electronics", "Clothing", "Books", "Food", "Sports", "Home"]

    data: dict[str, list[Any]] = {
        "id": [str(i) for i in range(1, rows + 1)],
        "amount": [f"{v:.2f}" for v in rng.uniform(0.01, 9999.99, rows)],
        "quantity": [str(v) for v in rng.integers(1, 1000, rows)],
        "is_member": [str(v) for v in rng.integers(0, 2, rows)],
        "active": rng.choice(["true", "false"], rows).tolist(),
        "category": rng.choice(categories, rows).tolist(),
    }
    df = pd.DataFrame(data)

    wrong_tokens = {
        "amount": "n/a",
        "quantity": "lots",
        "is_member": "2",
        "active": "yes",
        "category": "42",
    }
    for col, token in wrong_tokens.items():
        mask = rng.random(rows) < mismatch_rate
        df.loc[mask, col] = token
    for col in df.columns:
        if col == "id":
            continue
        mask = rng.random(rows) < missing_rate
        df.loc[mask, col] = ""

    # 完全空行を数行混ぜる (監査側で除外される)
    empty_at = sorted(rng.choice(rows, size=min(3, rows), replace=False).tolist())
    for pos in empty_at:
        df.loc[df.index[pos], :] = ""
    return df


def create_csv_file(output_path: Path, rows: int, missing_rate: float, mismatch_rate: float, seed: int) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = generate_dirty_data(rows, missing_rate, mismatch_rate, seed)
    df.to_csv(output_path, index=False)
    print(f"Created CSV file: {output_path}")
    print(f"  Rows: {rows} (+ 1 header row)")
    print(f"  Columns: {len(df.columns)}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic dirty CSV dataset for auditing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s sample.csv
  %(prog)s big.csv --rows 200000 --missing-rate 0.01
        """,
    )
    parser.add_argument("output", type=Path, help="Output CSV path")
    parser.add_argument("--rows", type=int, default=1000, help="Number of data rows (default: 1000)")
    parser.add_argument("--missing-rate", type=float, default=0.05, help="Blank cell probability")
    parser.add_argument("--mismatch-rate", type=float, default=0.02, help="Wrong-type cell probability")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    for name in ("missing_rate", "mismatch_rate"):
        if not 0.0 <= getattr(args, name) <= 1.0:
            print(f"Error: --{name.replace('_', '-')} must be within [0, 1]", file=sys.stderr)
            return 1

    create_csv_file(args.output, args.rows, args.missing_rate, args.mismatch_rate, args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
