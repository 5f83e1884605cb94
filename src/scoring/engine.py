"""Deterministic points engine. Pure code, no shared state."""

import math
import re

from src.scoring.parsing import parse_amount, parse_purchase_day, parse_purchase_time

ALNUM_RE = re.compile(r"[A-Za-z0-9]")

ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
POINTS_PER_ITEM_PAIR = 5
DESCRIPTION_PRICE_MULTIPLIER = 0.2
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10
AFTERNOON_START_HOUR = 14
AFTERNOON_END_HOUR = 16  # exclusive

RULES = (
    "retailer",
    "round_dollar",
    "quarter_multiple",
    "item_pairs",
    "item_descriptions",
    "odd_day",
    "afternoon",
)


def _text(value) -> str:
    return value if isinstance(value, str) else ""


def retailer_points(receipt: dict) -> int:
    """One point per ASCII letter or digit in the retailer name."""
    return len(ALNUM_RE.findall(_text(receipt.get("retailer"))))


def round_dollar_points(receipt: dict) -> int:
    total = parse_amount(receipt.get("total"))
    return ROUND_DOLLAR_POINTS if total.is_integer() else 0


def quarter_multiple_points(receipt: dict) -> int:
    # Exact float comparison; every round-dollar total also lands here.
    total = parse_amount(receipt.get("total"))
    if not math.isfinite(total):
        return 0
    return QUARTER_MULTIPLE_POINTS if math.fmod(total, 0.25) == 0 else 0


def item_pair_points(receipt: dict) -> int:
    items = receipt.get("items") or []
    return (len(items) // 2) * POINTS_PER_ITEM_PAIR


def item_description_points(receipt: dict) -> int:
    """
    For each item whose stripped description is a multiple of 3 bytes long
    in UTF-8 (an empty description counts), add ceil(price * 0.2).
    """
    points = 0
    for item in receipt.get("items") or []:
        item = item or {}
        description = _text(item.get("shortDescription")).strip()
        if len(description.encode("utf-8", "surrogatepass")) % 3 != 0:
            continue
        price = parse_amount(item.get("price"))
        if not math.isfinite(price):
            continue
        points += max(0, math.ceil(price * DESCRIPTION_PRICE_MULTIPLIER))
    return points


def odd_day_points(receipt: dict) -> int:
    day = parse_purchase_day(receipt.get("purchaseDate"))
    return ODD_DAY_POINTS if day % 2 == 1 else 0


def afternoon_points(receipt: dict) -> int:
    purchase_time = parse_purchase_time(receipt.get("purchaseTime"))
    if AFTERNOON_START_HOUR <= purchase_time.hour < AFTERNOON_END_HOUR:
        return AFTERNOON_POINTS
    return 0


_RULE_FUNCS = {
    "retailer": retailer_points,
    "round_dollar": round_dollar_points,
    "quarter_multiple": quarter_multiple_points,
    "item_pairs": item_pair_points,
    "item_descriptions": item_description_points,
    "odd_day": odd_day_points,
    "afternoon": afternoon_points,
}


def points_breakdown(receipt: dict) -> dict:
    """
    Evaluate every rule independently against the receipt.
    Returns {rule_name: points, ..., "total": sum}. Never raises on bad field values.
    """
    breakdown = {name: _RULE_FUNCS[name](receipt) for name in RULES}
    breakdown["total"] = sum(breakdown[name] for name in RULES)
    return breakdown


def calculate_points(receipt: dict) -> int:
    """Total points for a receipt: the sum of all seven rule contributions."""
    return points_breakdown(receipt)["total"]
