#!/usr/bin/env python3
"""CLI for the receipt processor: score receipt files offline or run the HTTP service."""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from src.run_report import write_points_report
from src.scoring import RULES, points_breakdown
from src.validation import InvalidReceiptError, decode_receipt_json


def _load_receipt(path: Path) -> dict:
    if not path.exists():
        print(f"Error: receipt file not found: {path}", file=sys.stderr)
        sys.exit(1)
    try:
        return decode_receipt_json(path.read_bytes())
    except InvalidReceiptError as e:
        print(f"Error: {path}: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_score(args: argparse.Namespace) -> None:
    """Score one or more receipt JSON files and print per-rule points."""
    scored = []
    for path in args.receipts:
        receipt = _load_receipt(path)
        scored.append((str(path), receipt, points_breakdown(receipt)))

    if args.report:
        write_points_report(args.report, scored)
        print(f"Points report: {args.report}", file=sys.stderr)

    if args.json:
        out = [{"source": source, "points": b["total"], "breakdown": b} for source, _, b in scored]
        print(json.dumps(out, indent=2))
        return

    for source, receipt, breakdown in scored:
        print(f"=== {source} ===")
        print(f"Retailer: {receipt['retailer']}")
        print(f"Points: {breakdown['total']}")
        for rule in RULES:
            print(f"  {rule}: {breakdown[rule]}")


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the HTTP service."""
    from app import create_app
    from receipt_processor.settings import load_settings

    settings = load_settings()
    if args.host:
        settings["host"] = args.host
    if args.port:
        settings["port"] = args.port
    app = create_app(settings=settings)
    app.run(host=settings["host"], port=settings["port"], debug=settings["debug"])


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Receipt points calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    p_score = sub.add_parser("score", help="Score receipt JSON files")
    p_score.add_argument("receipts", type=Path, nargs="+", help="Paths to receipt JSON files")
    p_score.add_argument("--json", action="store_true", help="Output JSON")
    p_score.add_argument("--report", type=Path, default=None, help="Write a points report JSON to this path")
    p_score.set_defaults(func=cmd_score)

    p_serve = sub.add_parser("serve", help="Run the HTTP service")
    p_serve.add_argument("--host", default=None, help="Bind address (default: RECEIPT_PROCESSOR_HOST or 0.0.0.0)")
    p_serve.add_argument("--port", type=int, default=None, help="Port (default: RECEIPT_PROCESSOR_PORT or 8080)")
    p_serve.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
