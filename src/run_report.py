"""Write points_report.json for offline scoring runs."""

import json
from pathlib import Path

from src.utils import hash_receipt, iso_now


def write_points_report(output_path: Path, scored: list[tuple[str, dict, dict]]) -> dict:
    """
    Write a report of scored receipts.
    `scored` holds (source_name, receipt, breakdown) tuples.
    Receipts are recorded by hash only, not content.
    """
    entries = []
    for source, receipt, breakdown in scored:
        entries.append({
            "source": source,
            "receipt_hash": hash_receipt(receipt),
            "num_items": len(receipt.get("items", [])),
            "points": breakdown["total"],
            "breakdown": {k: v for k, v in breakdown.items() if k != "total"},
        })
    report = {
        "timestamp": iso_now(),
        "num_receipts": len(entries),
        "total_points": sum(e["points"] for e in entries),
        "receipts": entries,
    }
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    return report
