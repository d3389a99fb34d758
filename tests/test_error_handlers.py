"""Unit tests for fitfusion.infra.fastapi.error_handlers."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from fitfusion.foundation.domain import DomainError, PlannerError
from fitfusion.infra.fastapi.error_handlers import (
    PROBLEM_MEDIA_TYPE,
    ProblemDetail,
    _sanitize_context,
    register_exception_handlers,
)


def _make_app(exc: Exception, *, debug: bool = False) -> FastAPI:
    """Minimal app with one route that raises ``exc``."""
    app = FastAPI(debug=debug)
    register_exception_handlers(app)

    @app.get("/raise")
    def _raise() -> None:
        raise exc

    return app


class TestProblemDetail:
    @pytest.mark.unit
    def test_optional_fields_default_none(self) -> None:
        problem = ProblemDetail(type="/errors/test", title="Test", status=400, detail="d")
        assert problem.instance is None
        assert problem.error_code is None
        assert problem.context is None
        assert problem.correlation_id is None

    @pytest.mark.unit
    def test_status_must_be_an_error(self) -> None:
        with pytest.raises(ValueError, match="status"):
            ProblemDetail(type="/errors/test", title="Test", status=200, detail="d")


class TestSanitizeContext:
    @pytest.mark.unit
    def test_drops_sensitive_keys(self) -> None:
        assert _sanitize_context({"public_token": "abc", "owner_id": "U1"}) == {"owner_id": "U1"}

    @pytest.mark.unit
    def test_redacts_sensitive_substrings(self) -> None:
        result = _sanitize_context({"cause": "bad request token=abc123"})
        assert result == {"cause": "bad request token=[REDACTED]"}

    @pytest.mark.unit
    def test_converts_datetimes(self) -> None:
        at = datetime(2026, 3, 1, tzinfo=UTC)
        assert _sanitize_context({"now": at}) == {"now": "2026-03-01T00:00:00+00:00"}

    @pytest.mark.unit
    def test_empty_becomes_none(self) -> None:
        assert _sanitize_context({}) is None
        assert _sanitize_context({"secret": "x"}) is None


class TestHandlers:
    @pytest.mark.unit
    def test_planner_error_is_generic(self) -> None:
        exc = PlannerError("Failed to read dependent records", {"owner_id": "U1"})
        client = TestClient(_make_app(exc))

        resp = client.get("/raise")

        assert resp.status_code == 500
        assert resp.headers["content-type"] == PROBLEM_MEDIA_TYPE
        body = resp.json()
        assert body["error_code"] == "INTERNAL"
        assert "owner_id" not in resp.text
        assert body["correlation_id"]

    @pytest.mark.unit
    def test_plain_domain_error_is_bad_request(self) -> None:
        resp = TestClient(_make_app(DomainError("nope"))).get("/raise")
        assert resp.status_code == 400
        assert resp.json()["error_code"] == "DOMAIN_ERROR"

    @pytest.mark.unit
    def test_unhandled_exception_hides_details(self) -> None:
        client = TestClient(
            _make_app(RuntimeError("db password=hunter2")), raise_server_exceptions=False
        )

        resp = client.get("/raise")

        assert resp.status_code == 500
        assert resp.json()["error_code"] == "INTERNAL_ERROR"
        assert "hunter2" not in resp.text

    @pytest.mark.unit
    def test_unhandled_exception_in_debug_mode(self) -> None:
        client = TestClient(
            _make_app(RuntimeError("boom"), debug=True), raise_server_exceptions=False
        )

        resp = client.get("/raise")

        assert resp.json()["detail"] == "RuntimeError: boom"
