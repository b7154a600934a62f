"""Shared error types for the protocol layer.

Every failure while talking to a provider is a :class:`ProviderError`.  The
string form of each error is the human-readable message handed back to the
caller, so messages carry the offending path, line, or OS error text.
"""

from __future__ import annotations

from typing import Any


class ProviderError(Exception):
    """Base error for all provider-process failures."""


# ---------------------------------------------------------------------------
# Launch failures
# ---------------------------------------------------------------------------


class ExecutableNotFoundError(ProviderError):
    """The provider executable does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Executable not found: {path}")


class ExecutableMetadataError(ProviderError):
    """Reading the executable's file metadata failed."""

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"metadata error: {detail}")


class ExecutablePermissionError(ProviderError):
    """Setting the executable permission bits failed."""

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"chmod error: {detail}")


class SpawnError(ProviderError):
    """The operating system refused to start the provider."""

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to start `{path}`: {detail}")


class PipeError(ProviderError):
    """The child process came up without the expected stdio pipe."""

    def __init__(self, stream: str) -> None:
        self.stream = stream
        super().__init__(f"Failed to open {stream}")


# ---------------------------------------------------------------------------
# Exchange failures
# ---------------------------------------------------------------------------


class WriteError(ProviderError):
    """Writing a request line to the provider's stdin failed."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(f"Error writing stdin: {detail}")


class ReadError(ProviderError):
    """Reading a response line from the provider's stdout failed."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(f"Error reading stdout: {detail}")


class ResponseTimeoutError(ProviderError):
    """The provider did not answer within the configured read timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"No response from provider after {timeout}s")


class ResponseParseError(ProviderError):
    """A response line was not a valid JSON-RPC document."""

    def __init__(self, line: str, detail: str = "") -> None:
        self.line = line
        self.detail = detail
        super().__init__(f"Error parsing JSON '{line}': {detail}")


# ---------------------------------------------------------------------------
# Protocol-shape failures
# ---------------------------------------------------------------------------


class MissingResultError(ProviderError):
    """A response carried no ``result``."""

    def __init__(self, method: str, error: Any = None) -> None:
        self.method = method
        self.error = error
        msg = f"{method} response missing result"
        if error is not None:
            msg += f" (error: {error})"
        super().__init__(msg)


class MissingToolsError(ProviderError):
    """A ``tools/list`` result had no ``tools`` key."""

    def __init__(self) -> None:
        super().__init__("tools key not found in result")
