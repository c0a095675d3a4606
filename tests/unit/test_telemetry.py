"""
Unit tests for the telemetry context
"""

import asyncio
import os
from unittest.mock import patch

import pytest

from proformat.cli import main
from proformat.orchestrator import RequestOrchestrator, create_orchestrator
from proformat.telemetry import InMemoryReporter, TelemetryContext
from tests.helpers import GatedAdapter, wait_until


@pytest.mark.unit
class TestTelemetryContext:
    """Test enabling and recording telemetry"""

    def test_disabled_by_default(self):
        """Should hand out the shared no-op context"""
        reporter = InMemoryReporter()
        ctx = TelemetryContext(reporter)

        with ctx("scope"):
            ctx.count("hits")

        assert ctx is TelemetryContext()
        assert reporter.timings == {}
        assert reporter.metrics == {}

    def test_records_nested_scopes_when_enabled(self):
        """Should record timings under dotted scope paths"""
        reporter = InMemoryReporter()
        with patch.dict(os.environ, {"PROFORMAT_TELEMETRY": "1"}):
            ctx = TelemetryContext(reporter)

        with ctx("outer"), ctx("inner"):
            ctx.metric("chars", 42)

        assert set(reporter.timings) == {"outer", "outer.inner"}
        assert reporter.metrics["outer.inner.chars"][0][0] == 42
        assert "outer.inner" in reporter.get_report()

    @pytest.mark.asyncio
    async def test_orchestrator_counts_stale_responses(self):
        """Should count responses discarded as stale"""
        reporter = InMemoryReporter()
        with patch.dict(os.environ, {"PROFORMAT_TELEMETRY": "1"}):
            telemetry = TelemetryContext(reporter)
        adapter = GatedAdapter()
        orchestrator = RequestOrchestrator(adapter, telemetry=telemetry)

        first = asyncio.create_task(orchestrator.submit("A"))
        await wait_until(lambda: len(adapter.prompts) == 1)
        second = asyncio.create_task(orchestrator.submit("B"))
        await wait_until(lambda: len(adapter.prompts) == 2)
        adapter.release(1, "B done")
        await second
        adapter.release(0, "A done")
        await first

        assert "orchestrator.stale_response" in reporter.metrics
        assert len(reporter.timings["orchestrator.submit"]) == 2

    @pytest.mark.asyncio
    async def test_create_orchestrator_shares_telemetry(self):
        """Should pass the telemetry context to the orchestrator and its client"""
        reporter = InMemoryReporter()
        with patch.dict(os.environ, {"PROFORMAT_TELEMETRY": "1"}):
            telemetry = TelemetryContext(reporter)

        orchestrator = create_orchestrator(telemetry=telemetry)
        await orchestrator.submit("notes")

        assert "orchestrator.submit" in reporter.timings
        assert "orchestrator.submit.client.generate" in reporter.timings


@pytest.mark.unit
class TestCliTelemetry:
    """Test the telemetry report of the command-line front end"""

    def test_report_printed_when_enabled(self, tmp_path, monkeypatch, capsys):
        """Should print timings for generation and export to stderr"""
        notes = tmp_path / "notes.txt"
        notes.write_text("quarterly notes", encoding="utf-8")
        monkeypatch.setenv("PROFORMAT_TELEMETRY", "1")

        code = main([str(notes), "--quiet", "--out-dir", str(tmp_path), "--export", "md"])

        err = capsys.readouterr().err
        assert code == 0
        assert "=== Telemetry Report ===" in err
        assert "orchestrator.submit" in err
        assert "export.render" in err

    def test_no_report_by_default(self, tmp_path, capsys):
        """Should stay silent when telemetry is off"""
        notes = tmp_path / "notes.txt"
        notes.write_text("quarterly notes", encoding="utf-8")

        assert main([str(notes), "--quiet"]) == 0
        assert "Telemetry Report" not in capsys.readouterr().err
