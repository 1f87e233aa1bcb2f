from __future__ import annotations

import json
import logging

import structlog

from src.tryon.logging import configure_logging


def test_stdlib_records_render_as_json_with_context(capsys) -> None:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    try:
        configure_logging()
        structlog.contextvars.bind_contextvars(product_id="prod-1")
        logging.getLogger("src.tryon.masterpiece").warning(
            "masterpiece.poll.unknown_status", extra={"job_id": "req-1", "attempt": "1/240"}
        )
        configured = structlog.is_configured()
    finally:
        structlog.contextvars.clear_contextvars()
        root.handlers = handlers
        root.setLevel(level)
        structlog.reset_defaults()

    line = capsys.readouterr().err.strip().splitlines()[-1]
    event = json.loads(line)

    assert configured
    assert event["event"] == "masterpiece.poll.unknown_status"
    assert event["level"] == "warning"
    assert event["job_id"] == "req-1"
    assert event["attempt"] == "1/240"
    assert event["product_id"] == "prod-1"
    assert "timestamp" in event
