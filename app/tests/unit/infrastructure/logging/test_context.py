"""Unit tests for infrastructure.logging.context module."""

import pytest
import structlog

from infrastructure.logging.context import (
    bind_activation_context,
    clear_activation_context,
    get_correlation_id,
)


@pytest.mark.unit
class TestBindActivationContext:
    """Test suite for bind_activation_context."""

    def test_binds_and_unbinds(self):
        with bind_activation_context(locale="es", section="dashboard", request_token=2) as cid:
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["locale"] == "es"
            assert ctx["section"] == "dashboard"
            assert ctx["request_token"] == 2
            assert ctx["correlation_id"] == cid

        assert structlog.contextvars.get_contextvars() == {}

    def test_generates_correlation_id(self):
        with bind_activation_context() as cid:
            assert cid
            assert get_correlation_id() == cid

    def test_uses_given_correlation_id(self):
        with bind_activation_context(correlation_id="act-1"):
            assert get_correlation_id() == "act-1"

    def test_skips_none_values(self):
        with bind_activation_context(locale="fr"):
            ctx = structlog.contextvars.get_contextvars()
            assert "section" not in ctx
            assert "request_token" not in ctx

    def test_unbinds_on_error(self):
        with pytest.raises(RuntimeError):
            with bind_activation_context(locale="es"):
                raise RuntimeError("boom")
        assert get_correlation_id() is None

    def test_clear_activation_context(self):
        structlog.contextvars.bind_contextvars(correlation_id="x")
        clear_activation_context()
        assert get_correlation_id() is None
