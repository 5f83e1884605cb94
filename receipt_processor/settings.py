"""Environment configuration. Values come from the process environment and an optional .env file."""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"

_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in _FALSE_VALUES


def load_settings() -> dict:
    """Read RECEIPT_PROCESSOR_* settings. Raises ValueError on a non-integer port."""
    load_dotenv(find_dotenv(usecwd=True))
    port_raw = os.environ.get("RECEIPT_PROCESSOR_PORT", "").strip()
    try:
        port = int(port_raw) if port_raw else DEFAULT_PORT
    except ValueError:
        raise ValueError(f"RECEIPT_PROCESSOR_PORT must be an integer, got {port_raw!r}")
    log_dir = os.environ.get("RECEIPT_PROCESSOR_LOG_DIR", "").strip()
    return {
        "host": os.environ.get("RECEIPT_PROCESSOR_HOST", "").strip() or DEFAULT_HOST,
        "port": port,
        "log_dir": Path(log_dir) if log_dir else DEFAULT_LOG_DIR,
        "audit_enabled": _env_flag("RECEIPT_PROCESSOR_AUDIT", True),
        "debug": _env_flag("RECEIPT_PROCESSOR_DEBUG", False),
    }
