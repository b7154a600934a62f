"""Tests for the protocol error hierarchy."""

import pytest

from mcpc.protocols.errors import (
    ExecutableMetadataError,
    ExecutableNotFoundError,
    ExecutablePermissionError,
    MissingResultError,
    MissingToolsError,
    PipeError,
    ProviderError,
    ReadError,
    ResponseParseError,
    ResponseTimeoutError,
    SpawnError,
    WriteError,
)


@pytest.mark.parametrize(
    "error_cls",
    [
        ExecutableMetadataError,
        ExecutableNotFoundError,
        ExecutablePermissionError,
        MissingResultError,
        MissingToolsError,
        PipeError,
        ReadError,
        ResponseParseError,
        ResponseTimeoutError,
        SpawnError,
        WriteError,
    ],
)
def test_all_errors_are_provider_errors(error_cls: type) -> None:
    assert issubclass(error_cls, ProviderError)


class TestMessages:
    def test_not_found(self) -> None:
        err = ExecutableNotFoundError("/opt/x")
        assert str(err) == "Executable not found: /opt/x"
        assert err.path == "/opt/x"

    def test_spawn(self) -> None:
        err = SpawnError("/opt/x", "[Errno 13] Permission denied")
        assert str(err) == "Failed to start `/opt/x`: [Errno 13] Permission denied"

    def test_permission_kinds_are_distinct(self) -> None:
        assert str(ExecutableMetadataError("/x", "gone")) == "metadata error: gone"
        assert str(ExecutablePermissionError("/x", "ro")) == "chmod error: ro"

    def test_pipe(self) -> None:
        assert str(PipeError("stdin")) == "Failed to open stdin"

    def test_parse_keeps_line(self) -> None:
        err = ResponseParseError("oops", "Expecting value: line 1 column 1 (char 0)")
        assert err.line == "oops"
        assert str(err) == "Error parsing JSON 'oops': Expecting value: line 1 column 1 (char 0)"

    def test_missing_result_with_error_payload(self) -> None:
        err = MissingResultError("tools/call", {"code": -1, "message": "bad"})
        assert str(err).startswith("tools/call response missing result")
        assert "bad" in str(err)
        assert err.error == {"code": -1, "message": "bad"}

    def test_missing_result_without_error(self) -> None:
        assert str(MissingResultError("tools/list")) == "tools/list response missing result"

    def test_missing_tools(self) -> None:
        assert str(MissingToolsError()) == "tools key not found in result"

    def test_timeout(self) -> None:
        err = ResponseTimeoutError(2.5)
        assert err.timeout == 2.5
        assert "2.5s" in str(err)
