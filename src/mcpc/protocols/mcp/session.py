"""MCP session — the two one-shot call protocols.

Each public coroutine launches a fresh provider, performs one or two round
trips over an :class:`MCPTransport`, and terminates the provider on the way
out regardless of outcome.

Requests are strictly sequential: ids are fixed per call shape (``1`` for
the listing, ``2`` for the tool call) and are not matched against the
response ids.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from mcpc.config import ClientSettings
from mcpc.protocols.errors import MissingResultError, MissingToolsError
from mcpc.protocols.mcp.models import (
    METHOD_TOOLS_CALL,
    METHOD_TOOLS_LIST,
    JsonRpcRequest,
    JsonRpcResponse,
)
from mcpc.protocols.mcp.transport import StdioTransport
from mcpc.utils.telemetry import (
    ATTR_PROVIDER_PATH,
    ATTR_RPC_ID,
    ATTR_RPC_METHOD,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from mcpc.protocols.mcp.transport import MCPTransport

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

LIST_REQUEST_ID = 1
CALL_REQUEST_ID = 2


class ProviderSession:
    """Request/response helper bound to one open transport.

    The caller owns the transport's lifetime; the session only sequences
    requests over it.
    """

    def __init__(self, transport: MCPTransport, settings: ClientSettings | None = None) -> None:
        self._transport = transport
        self._settings = settings or ClientSettings()

    async def round_trip(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Send *request* and read exactly one response line."""
        with _tracer.start_as_current_span("mcpc.rpc.round_trip") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            span.set_attribute(ATTR_RPC_ID, request.id)

            await self._transport.send(request)
            response = await self._transport.receive()

            if response.id != request.id:
                logger.debug(
                    "Response id %r does not match request id %r", response.id, request.id
                )
            return response

    async def list_tools(self) -> Any:
        """``tools/list`` → the ``tools`` value, verbatim."""
        response = await self.round_trip(
            JsonRpcRequest(id=LIST_REQUEST_ID, method=METHOD_TOOLS_LIST, params={})
        )
        result = _require_result(response, METHOD_TOOLS_LIST)
        if not isinstance(result, dict) or "tools" not in result:
            raise MissingToolsError
        return result["tools"]

    async def call_tool(self, tool_name: str, arguments: Any) -> Any:
        """Discarded ``tools/list``, settle delay, then ``tools/call``.

        Some providers only accept calls after an initial listing, so the
        listing is always sent and its response read (and any failure
        reading it surfaced) even though the payload is dropped.
        """
        await self.round_trip(
            JsonRpcRequest(id=LIST_REQUEST_ID, method=METHOD_TOOLS_LIST, params={})
        )
        if self._settings.settle_delay:
            await asyncio.sleep(self._settings.settle_delay)

        response = await self.round_trip(
            JsonRpcRequest(
                id=CALL_REQUEST_ID,
                method=METHOD_TOOLS_CALL,
                params={"name": tool_name, "arguments": arguments},
            )
        )
        result = _require_result(response, METHOD_TOOLS_CALL)
        if not isinstance(result, dict):
            return None
        return result.get("content")


def _require_result(response: JsonRpcResponse, method: str) -> Any:
    if response.result is None:
        raise MissingResultError(method, response.error)
    return response.result


async def enumerate_tools(path: str, settings: ClientSettings | None = None) -> Any:
    """Launch the provider at *path* and return its ``tools`` list."""
    settings = settings or ClientSettings()
    with _tracer.start_as_current_span("mcpc.enumerate_tools") as span:
        span.set_attribute(ATTR_PROVIDER_PATH, path)
        async with StdioTransport(path, settings) as transport:
            return await ProviderSession(transport, settings).list_tools()


async def call_tool(
    path: str,
    tool_name: str,
    arguments: Any,
    settings: ClientSettings | None = None,
) -> Any:
    """Launch the provider at *path*, invoke *tool_name*, return its ``content``."""
    settings = settings or ClientSettings()
    with _tracer.start_as_current_span("mcpc.call_tool") as span:
        span.set_attribute(ATTR_PROVIDER_PATH, path)
        span.set_attribute(ATTR_TOOL_NAME, tool_name)
        async with StdioTransport(path, settings) as transport:
            return await ProviderSession(transport, settings).call_tool(tool_name, arguments)
