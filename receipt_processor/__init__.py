"""Receipt Processor - in-memory receipt store and points calculator over HTTP."""

from receipt_processor.service import process_receipt, receipt_points
from receipt_processor.settings import load_settings

__all__ = ["process_receipt", "receipt_points", "load_settings"]
