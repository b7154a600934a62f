"""MCP protocol — stdio Model Context Protocol client."""

from mcpc.protocols.mcp.models import JsonRpcRequest, JsonRpcResponse, MCPToolDef, RPCResult
from mcpc.protocols.mcp.session import ProviderSession, call_tool, enumerate_tools
from mcpc.protocols.mcp.transport import MCPTransport, StdioTransport

__all__ = [
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MCPToolDef",
    "MCPTransport",
    "ProviderSession",
    "RPCResult",
    "StdioTransport",
    "call_tool",
    "enumerate_tools",
]
