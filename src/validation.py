"""Decode submitted receipt payloads into the receipt dicts the store and engine use."""

import json
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).resolve().parent / "schemas"

RECEIPT_FIELDS = ("retailer", "purchaseDate", "purchaseTime", "total")
ITEM_FIELDS = ("shortDescription", "price")


class InvalidReceiptError(ValueError):
    """Raised when a request body cannot be decoded as a receipt."""


def _load_schema(name: str) -> dict:
    path = SCHEMAS_DIR / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def validate_receipt_shape(data) -> None:
    """Validate JSON types against the receipt schema. Raises jsonschema.ValidationError if invalid."""
    schema = _load_schema("receipt")
    jsonschema.validate(data, schema)


def _fold_keys(obj: dict, fields: tuple[str, ...]) -> tuple[dict, list[tuple[str, object]]]:
    """
    Map keys onto `fields` ignoring case; unknown keys are dropped.
    When several keys land on one field the last wins; the earlier
    values are returned as (field, value) pairs so they can still be type-checked.
    """
    by_folded = {f.casefold(): f for f in fields}
    folded: dict = {}
    shadowed = []
    for key, value in obj.items():
        field = by_folded.get(key.casefold())
        if field is None:
            continue
        if field in folded:
            shadowed.append((field, folded[field]))
        folded[field] = value
    return folded, shadowed


def _canonicalize(data) -> tuple[object, list[dict]]:
    """Fold receipt and item keys. Returns (data, fragments) where fragments hold shadowed values."""
    if not isinstance(data, dict):
        return data, []
    receipt, shadowed = _fold_keys(data, RECEIPT_FIELDS + ("items",))
    fragments = [{field: value} for field, value in shadowed]
    items = receipt.get("items")
    if isinstance(items, list):
        folded_items = []
        for item in items:
            if isinstance(item, dict):
                item, item_shadowed = _fold_keys(item, ITEM_FIELDS)
                fragments.extend({"items": [{field: value}]} for field, value in item_shadowed)
            folded_items.append(item)
        receipt["items"] = folded_items
    return receipt, fragments


def _decode_item(item: dict | None) -> dict:
    item = item or {}
    return {field: item.get(field) or "" for field in ITEM_FIELDS}


def decode_receipt(data) -> dict:
    """
    Turn a parsed JSON value into a receipt dict.
    Keys match field names case-insensitively ("Retailer" fills retailer).
    Missing or null fields become "" (items become []), unknown keys are dropped.
    Raises InvalidReceiptError when a field has the wrong JSON type.
    """
    data, fragments = _canonicalize(data)
    try:
        for fragment in [data] + fragments:
            validate_receipt_shape(fragment)
    except jsonschema.ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise InvalidReceiptError(f"Invalid receipt at {path}: {e.message}") from e

    data = data or {}
    receipt = {field: data.get(field) or "" for field in RECEIPT_FIELDS}
    receipt["items"] = [_decode_item(item) for item in data.get("items") or []]
    return receipt


def decode_receipt_json(body: bytes | str) -> dict:
    """Parse a raw request body and decode it. Raises InvalidReceiptError on malformed JSON."""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidReceiptError(f"Malformed JSON: {e}") from e
    return decode_receipt(data)
