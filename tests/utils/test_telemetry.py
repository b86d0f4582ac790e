"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from opentelemetry import trace

from pollinations_mcp.utils.telemetry import (
    _INSTRUMENTATION_NAME,
    ATTR_IS_ERROR,
    ATTR_MODEL,
    ATTR_TOOL_NAME,
    configure_telemetry,
    get_tracer,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        assert isinstance(get_tracer("test.module"), trace.Tracer)

    def test_default_name(self) -> None:
        assert isinstance(get_tracer(), trace.Tracer)

    def test_noop_span(self) -> None:
        """Without SDK configured, spans should be no-ops."""
        tracer = get_tracer("test.noop")
        with tracer.start_as_current_span("test") as span:
            span.set_attribute("key", "value")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_otlp_raises_without_exporter(self) -> None:
        try:
            import opentelemetry.sdk.trace  # noqa: F401
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        with patch.dict(
            "sys.modules",
            {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None},
        ):
            with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
                configure_telemetry(
                    export_to_console=False,
                    otlp_endpoint="http://localhost:4317",
                )


class TestAdapterSpans:
    async def test_invoke_sets_attributes(self, make_adapter, recorder) -> None:
        span = MagicMock()
        tracer = MagicMock()
        tracer.start_as_current_span.return_value.__enter__.return_value = span

        with patch("pollinations_mcp.protocols.adapter._tracer", tracer):
            await make_adapter(recorder(200, "hi")).invoke(
                "generate_text", {"prompt": "hello", "model": "mistral"}
            )

        span.set_attribute.assert_any_call(ATTR_TOOL_NAME, "generate_text")
        span.set_attribute.assert_any_call(ATTR_MODEL, "mistral")
        span.set_attribute.assert_any_call(ATTR_IS_ERROR, False)

    async def test_failure_marks_span(self, make_adapter, recorder) -> None:
        span = MagicMock()
        tracer = MagicMock()
        tracer.start_as_current_span.return_value.__enter__.return_value = span

        with patch("pollinations_mcp.protocols.adapter._tracer", tracer):
            await make_adapter(recorder(200)).invoke("generate_image", {})

        span.set_attribute.assert_any_call(ATTR_IS_ERROR, True)


class TestAttributeConstants:
    def test_constants_are_namespaced(self) -> None:
        assert ATTR_TOOL_NAME.startswith("pollinations.")

    def test_instrumentation_name(self) -> None:
        assert _INSTRUMENTATION_NAME == "pollinations_mcp"
