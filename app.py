#!/usr/bin/env python3
"""Flask web app for the receipt processor: submit receipts, query their points."""

from flask import Flask, Response, jsonify, request

from receipt_processor.audit import audit_log, setup_app_logging
from receipt_processor.service import process_receipt, receipt_points
from receipt_processor.settings import load_settings
from src.store import ReceiptStore
from src.validation import InvalidReceiptError

STORE_EXTENSION = "receipt_store"


def _plain_error(message: str, status: int) -> Response:
    return Response(message + "\n", status=status, content_type="text/plain; charset=utf-8")


def create_app(store: ReceiptStore | None = None, settings: dict | None = None) -> Flask:
    """
    Build the Flask app around a single receipt store.
    The store is created here unless one is injected.
    """
    settings = settings or load_settings()
    log = setup_app_logging(settings["log_dir"])

    app = Flask(__name__)
    app.config["RECEIPT_PROCESSOR"] = settings
    app.extensions[STORE_EXTENSION] = store if store is not None else ReceiptStore()

    def _audit(action: str, status: str, **kwargs):
        if settings["audit_enabled"]:
            audit_log(action, status, log_dir=settings["log_dir"], **kwargs)

    @app.route("/receipts/process", methods=["POST"])
    def api_process_receipt():
        """Store a receipt and return its generated id."""
        body = request.get_data()
        try:
            result = process_receipt(app.extensions[STORE_EXTENSION], body)
        except InvalidReceiptError as e:
            _audit("process", "error", error=str(e), extra={"body_bytes": len(body)})
            log.warning("Process rejected: %s", e)
            return _plain_error("Invalid request", 400)
        except Exception as e:
            _audit("process", "error", error=str(e))
            log.exception("Process failed")
            return _plain_error("Internal server error", 500)

        _audit(
            "process",
            "success",
            receipt_id=result["id"],
            receipt_hash=result["receipt_hash"],
            extra={"num_items": result["num_items"]},
        )
        log.info("Receipt stored: id=%s items=%d", result["id"], result["num_items"])
        return jsonify({"id": result["id"]})

    @app.route("/receipts/<receipt_id>/points", methods=["GET"])
    def api_receipt_points(receipt_id: str):
        """Compute points for a stored receipt."""
        points = receipt_points(app.extensions[STORE_EXTENSION], receipt_id)
        if points is None:
            _audit("points", "not_found", receipt_id=receipt_id)
            log.info("Points lookup for unknown id=%s", receipt_id)
            return _plain_error("Receipt not found", 404)

        _audit("points", "success", receipt_id=receipt_id, points=points)
        log.info("Points computed: id=%s points=%d", receipt_id, points)
        return jsonify({"points": points})

    return app


if __name__ == "__main__":
    app = create_app()
    settings = app.config["RECEIPT_PROCESSOR"]
    log = setup_app_logging(settings["log_dir"])
    log.info(
        "Receipt processor starting on http://%s:%d | Logs: %s | Audit: %s",
        settings["host"],
        settings["port"],
        settings["log_dir"] / "app.log",
        "on" if settings["audit_enabled"] else "off",
    )
    app.run(host=settings["host"], port=settings["port"], debug=settings["debug"])
