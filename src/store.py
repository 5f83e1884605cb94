"""In-memory receipt store keyed by generated identifiers."""

import copy
import threading
import uuid


def new_receipt_id() -> str:
    return str(uuid.uuid4())


class ReceiptStore:
    """
    Thread-safe identifier -> receipt mapping for the process lifetime.
    The lock guards only the dict operation itself; ids are generated and
    receipts copied outside it.
    """

    def __init__(self, id_factory=new_receipt_id):
        self._receipts: dict[str, dict] = {}
        self._lock = threading.Lock()
        self._id_factory = id_factory

    def insert(self, receipt: dict) -> str:
        """Store a copy of the receipt under a fresh identifier and return the identifier."""
        stored = copy.deepcopy(receipt)
        while True:
            receipt_id = self._id_factory()
            with self._lock:
                if receipt_id not in self._receipts:
                    self._receipts[receipt_id] = stored
                    return receipt_id

    def get(self, receipt_id: str) -> dict | None:
        """Return a copy of the stored receipt, or None if the id was never issued."""
        with self._lock:
            receipt = self._receipts.get(receipt_id)
        if receipt is None:
            return None
        return copy.deepcopy(receipt)

    def __contains__(self, receipt_id) -> bool:
        with self._lock:
            return receipt_id in self._receipts

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)
