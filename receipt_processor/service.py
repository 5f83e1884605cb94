"""Service layer: glue between the HTTP routes, the receipt store and the points engine."""

import logging

from src.scoring import calculate_points
from src.store import ReceiptStore
from src.utils import hash_receipt
from src.validation import decode_receipt_json

log = logging.getLogger("receipt_processor.service")


def process_receipt(store: ReceiptStore, body: bytes | str) -> dict:
    """
    Decode a request body and store the receipt.
    Raises InvalidReceiptError for malformed bodies; the store is untouched in that case.
    Returns {"id", "receipt_hash", "num_items"}.
    """
    receipt = decode_receipt_json(body)
    receipt_id = store.insert(receipt)
    log.debug("Stored receipt id=%s items=%d", receipt_id, len(receipt["items"]))
    return {
        "id": receipt_id,
        "receipt_hash": hash_receipt(receipt),
        "num_items": len(receipt["items"]),
    }


def receipt_points(store: ReceiptStore, receipt_id: str) -> int | None:
    """Points for a stored receipt, computed fresh. None if the id is unknown."""
    receipt = store.get(receipt_id)
    if receipt is None:
        return None
    return calculate_points(receipt)

