"""Protocol layer — MCP stdio client."""

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

__all__ = [
    "ExecutableMetadataError",
    "ExecutableNotFoundError",
    "ExecutablePermissionError",
    "MissingResultError",
    "MissingToolsError",
    "PipeError",
    "ProviderError",
    "ReadError",
    "ResponseParseError",
    "ResponseTimeoutError",
    "SpawnError",
    "WriteError",
]
