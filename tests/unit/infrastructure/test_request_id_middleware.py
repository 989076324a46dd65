# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Unit tests for RequestIdMiddleware behavior and header rules."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from valuescope_api.infrastructure.logging.logger import get_request_id
from valuescope_api.infrastructure.middleware.request_id import (
    _SAFE_RE,
    REQUEST_ID_HEADER,
    RequestIdMiddleware,
    coerce_request_id,
)


def _echo_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIdMiddleware)

    @app.get("/echo")
    def echo(request: Request) -> dict[str, str | None]:
        return {
            "rid": getattr(request.state, "request_id", None),
            "ctx": get_request_id(),
        }

    return app


def test_generates_id_when_header_missing() -> None:
    client = TestClient(_echo_app())

    r = client.get("/echo")

    assert r.status_code == 200
    rid = r.json()["rid"]
    assert r.headers.get(REQUEST_ID_HEADER) == rid
    assert _SAFE_RE.match(rid)


def test_keeps_valid_incoming_and_replaces_invalid() -> None:
    client = TestClient(_echo_app())

    valid = "abc-123_456:@Z"
    r1 = client.get("/echo", headers={REQUEST_ID_HEADER: valid})
    assert r1.json()["rid"] == valid
    assert r1.headers.get(REQUEST_ID_HEADER) == valid

    invalid = "bad id with space"
    r2 = client.get("/echo", headers={REQUEST_ID_HEADER: invalid})
    generated = r2.headers.get(REQUEST_ID_HEADER)
    assert generated and generated != invalid
    assert _SAFE_RE.match(generated)


def test_request_context_is_cleared_after_the_request() -> None:
    client = TestClient(_echo_app())

    r = client.get("/echo", headers={REQUEST_ID_HEADER: "ctx-1"})

    assert r.json()["ctx"] == "ctx-1"
    assert get_request_id() is None


def test_coerce_request_id() -> None:
    assert coerce_request_id("req-1") == "req-1"
    assert coerce_request_id("x" * 129) != "x" * 129
    assert _SAFE_RE.match(coerce_request_id(None))
