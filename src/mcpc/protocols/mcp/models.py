"""MCP models — JSON-RPC 2.0 messages and tool definitions.

Implements the message format used by the Model Context Protocol for
tool discovery (``tools/list``) and execution (``tools/call``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

JSONRPC_VERSION = "2.0"

METHOD_TOOLS_LIST = "tools/list"
METHOD_TOOLS_CALL = "tools/call"

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: str = JSONRPC_VERSION
    id: int = 1
    method: str
    params: Any = Field(default_factory=dict)

    def to_line(self) -> bytes:
        """Serialize as a single newline-terminated JSON document."""
        return self.model_dump_json().encode() + b"\n"


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    ``result`` and ``error`` stay untyped: the session hands them back to the
    caller without interpreting their shape.
    """

    model_config = {"extra": "ignore"}

    jsonrpc: str = JSONRPC_VERSION
    id: int | str | None = None
    result: Any = None
    error: Any = None


class RPCResult(BaseModel):
    """Success envelope returned to the host: ``{"result": ...}``."""

    result: Any = None


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class MCPToolDef(BaseModel):
    """A tool definition as returned by ``tools/list``.

    Only used for display and argument coercion; the session itself treats
    tool descriptors as opaque.
    """

    model_config = {"populate_by_name": True, "extra": "ignore"}

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    @property
    def properties(self) -> dict[str, Any]:
        props = self.input_schema.get("properties")
        return props if isinstance(props, dict) else {}
