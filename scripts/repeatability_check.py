#!/usr/bin/env python3
"""
Repeatability harness: score the same receipts N times; assert identical results.
Exits 0 if stable, 1 if unstable. Prints the receipt hash alongside each result so
runs can be compared against earlier ones.

Usage: python scripts/repeatability_check.py [--runs 10] [--receipts samples/*.json]
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.scoring import points_breakdown
from src.utils import hash_receipt
from src.validation import decode_receipt_json

DEFAULT_RUNS = 10
SAMPLES_DIR = Path(__file__).resolve().parent.parent / "samples"


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--runs", type=int, default=DEFAULT_RUNS)
    parser.add_argument("--receipts", type=Path, nargs="*", default=None)
    args = parser.parse_args()

    paths = args.receipts or sorted(SAMPLES_DIR.glob("*.json"))
    if not paths:
        print(f"Error: no receipt files found in {SAMPLES_DIR}", file=sys.stderr)
        sys.exit(1)

    unstable = []
    for path in paths:
        receipt = decode_receipt_json(path.read_bytes())
        results = [points_breakdown(receipt) for _ in range(args.runs)]
        first = results[0]
        diffs = [i for i, r in enumerate(results[1:], start=2) if r != first]
        status = "STABLE" if not diffs else "UNSTABLE"
        print(f"{status} {path.name} receipt_hash={hash_receipt(receipt)[:16]} points={first['total']} runs={args.runs}")
        if diffs:
            unstable.append((path, diffs))

    if unstable:
        for path, diffs in unstable:
            print(f"  {path.name}: runs {diffs} differ from run 1", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
