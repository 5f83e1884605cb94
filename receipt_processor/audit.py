"""Audit trail for receipt API operations, plus application logging setup."""

import json
import logging
import os
from pathlib import Path

from src.utils import iso_now

AUDIT_FILENAME = "audit.log"
APP_LOG_FILENAME = "app.log"
LOGGER_NAME = "receipt_processor"


def _ensure_log_dir(log_dir: Path) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)


def audit_log(
    action: str,
    status: str,
    *,
    log_dir: Path,
    receipt_id: str | None = None,
    points: int | None = None,
    receipt_hash: str | None = None,
    error: str | None = None,
    extra: dict | None = None,
):
    """Append a structured audit entry to the audit log (JSONL)."""
    _ensure_log_dir(log_dir)
    entry = {
        "timestamp": iso_now(),
        "action": action,
        "status": status,
    }
    if receipt_id:
        entry["receipt_id"] = receipt_id
    if points is not None:
        entry["points"] = points
    if receipt_hash:
        entry["receipt_hash"] = receipt_hash
    if error:
        entry["error"] = error
    if extra:
        entry.update(extra)

    with open(log_dir / AUDIT_FILENAME, "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, default=str) + "\n")


def read_audit_log(log_dir: Path) -> list[dict]:
    """Load every audit entry. Missing log -> []."""
    path = log_dir / AUDIT_FILENAME
    if not path.exists():
        return []
    with open(path, encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


_FORMATTER = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


def setup_app_logging(log_dir: Path) -> logging.Logger:
    """
    Log to the console (INFO) and to <log_dir>/app.log (DEBUG).
    Calling again with another log_dir moves the file handler there.
    """
    _ensure_log_dir(log_dir)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    log_file = os.path.abspath(log_dir / APP_LOG_FILENAME)

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console = logging.StreamHandler()
        console.setLevel(logging.INFO)
        console.setFormatter(_FORMATTER)
        logger.addHandler(console)

    for handler in [h for h in logger.handlers if isinstance(h, logging.FileHandler)]:
        if handler.baseFilename == log_file:
            return logger
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(_FORMATTER)
    logger.addHandler(file_handler)
    return logger
