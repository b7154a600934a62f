"""E2E: ``mcpc --trace`` against a real provider keeps stdout machine-readable."""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from mcpc.cli import main
from tests.e2e.conftest import SAMPLE_TOOLS, WELL_BEHAVED

if TYPE_CHECKING:
    from pathlib import Path

pytest.importorskip("opentelemetry.sdk.trace")

pytestmark = pytest.mark.skipif(os.name != "posix", reason="fake providers are shell scripts")


@pytest.fixture
def local_tracing(monkeypatch: pytest.MonkeyPatch):
    """Route session spans to the provider the CLI builds, without touching
    the process-wide tracer provider (which can only be set once)."""
    from mcpc.protocols.mcp import session

    def _install(provider) -> None:
        monkeypatch.setattr(session, "_tracer", provider.get_tracer(session.__name__))

    with patch("mcpc.utils.telemetry.trace.set_tracer_provider", side_effect=_install):
        yield


class TestTraceOutput:
    def test_json_stdout_with_spans_on_stderr(self, make_provider, local_tracing) -> None:
        path = make_provider(WELL_BEHAVED)

        result = CliRunner().invoke(main, ["--trace", "tools", "list", str(path), "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == SAMPLE_TOOLS
        assert '"name": "mcpc.enumerate_tools"' in result.stderr
        assert '"name": "mcpc.rpc.round_trip"' in result.stderr
        assert "mcpc.enumerate_tools" not in result.stdout

    def test_call_json_stdout_with_spans_on_stderr(
        self, make_provider, local_tracing, tmp_path: Path
    ) -> None:
        path = make_provider(WELL_BEHAVED)
        config = tmp_path / "mcpc.yaml"
        config.write_text("settle_delay: 0\n")

        result = CliRunner().invoke(
            main,
            [
                "--trace",
                "--config",
                str(config),
                "tools",
                "call",
                str(path),
                "add",
                "-a",
                "a=1",
                "-a",
                "b=2",
                "--json",
            ],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == [{"type": "text", "text": '{"a": 1, "b": 2}'}]
        assert '"name": "mcpc.call_tool"' in result.stderr
        assert '"mcpc.tool.name": "add"' in result.stderr
