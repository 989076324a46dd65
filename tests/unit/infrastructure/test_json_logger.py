# tests/unit/infrastructure/test_json_logger.py
from __future__ import annotations

import json
import logging
from decimal import Decimal

import pytest

from valuescope_api.infrastructure.logging.logger import (
    _JsonFormatter,
    clear_request_context,
    configure_root_logging,
    set_request_context,
)


def _render(msg: str, **attrs: object) -> dict:
    """Format one record with the JSON formatter and parse it back."""
    logger = logging.getLogger("test.json")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn="test_json_logger",
        lno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in attrs.items():
        setattr(record, key, value)
    return json.loads(_JsonFormatter().format(record))


def test_configure_root_logging_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    root = logging.getLogger()
    saved = list(root.handlers)
    saved_level = root.level
    root.handlers.clear()
    try:
        configure_root_logging()
        configure_root_logging()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, _JsonFormatter)
    finally:
        root.handlers[:] = saved
        root.setLevel(saved_level)


def test_stable_keys_and_structured_extras() -> None:
    payload = _render("analytics.x.success", extra={"metric": "per", "value": Decimal("1.50")})

    assert payload["message"] == "analytics.x.success"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.json"
    assert "ts" in payload
    assert payload["metric"] == "per"
    assert payload["value"] == "1.50"


def test_request_id_comes_from_record_then_context(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REQUEST_ID", raising=False)

    assert _render("a", request_id="rec-1")["request_id"] == "rec-1"

    set_request_context(request_id="ctx-1")
    try:
        assert _render("b")["request_id"] == "ctx-1"
    finally:
        clear_request_context()

    assert "request_id" not in _render("c")
