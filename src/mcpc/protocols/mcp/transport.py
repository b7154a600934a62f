"""MCP stdio transport — newline-delimited JSON over a provider's pipes.

A :class:`StdioTransport` owns exactly one provider process for its whole
lifetime and terminates it exactly once, however the exchange ends.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from mcpc.config import ClientSettings
from mcpc.protocols.errors import ReadError, ResponseParseError, ResponseTimeoutError, WriteError
from mcpc.protocols.mcp.launcher import spawn_provider
from mcpc.protocols.mcp.models import JsonRpcResponse

if TYPE_CHECKING:
    from mcpc.protocols.mcp.models import JsonRpcRequest

logger = logging.getLogger(__name__)


@runtime_checkable
class MCPTransport(Protocol):
    """Abstract transport for MCP JSON-RPC communication."""

    async def connect(self) -> None: ...
    async def send(self, request: JsonRpcRequest) -> None: ...
    async def receive(self) -> JsonRpcResponse: ...
    async def close(self) -> None: ...


class StdioTransport:
    """Communicates with a provider executable via its stdin/stdout.

    Sends one request per line and reads exactly one line per response.

    Usage::

        async with StdioTransport("/opt/tools/provider") as transport:
            await transport.send(JsonRpcRequest(method="tools/list"))
            response = await transport.receive()
    """

    def __init__(self, path: str, settings: ClientSettings | None = None) -> None:
        self._path = path
        self._settings = settings or ClientSettings()
        self._process: asyncio.subprocess.Process | None = None

    async def __aenter__(self) -> StdioTransport:
        await self.connect()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    @property
    def path(self) -> str:
        return self._path

    async def connect(self) -> None:
        """Launch the provider subprocess."""
        self._process = await spawn_provider(
            self._path,
            env=self._settings.provider_env(),
            line_limit=self._settings.line_limit,
        )

    async def send(self, request: JsonRpcRequest) -> None:
        """Write *request* as a JSON line to stdin."""
        if self._process is None or self._process.stdin is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        try:
            line = request.to_line()
        except PydanticSerializationError as exc:
            raise WriteError(str(exc)) from exc
        logger.debug("-> %s id=%s", request.method, request.id)
        try:
            self._process.stdin.write(line)
            await self._process.stdin.drain()
        except OSError as exc:
            raise WriteError(str(exc)) from exc

    async def receive(self) -> JsonRpcResponse:
        """Read one response line from stdout, waiting at most ``read_timeout``."""
        if self._process is None or self._process.stdout is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)

        timeout = self._settings.read_timeout
        try:
            raw = await asyncio.wait_for(self._process.stdout.readline(), timeout=timeout)
        except TimeoutError:
            raise ResponseTimeoutError(timeout) from None
        except ValueError as exc:
            # StreamReader.readline reports an over-long line as ValueError.
            raise ReadError(str(exc)) from exc
        except OSError as exc:
            raise ReadError(str(exc)) from exc

        if not raw:
            raise ReadError("provider closed stdout before responding")
        return _decode_line(raw)

    async def close(self) -> None:
        """Terminate the subprocess. Safe to call more than once."""
        process, self._process = self._process, None
        if process is None:
            return

        if process.stdin is not None and not process.stdin.is_closing():
            process.stdin.close()

        if process.returncode is not None:
            logger.debug("Provider %s already exited with %s", self._path, process.returncode)
            return

        try:
            process.terminate()
        except ProcessLookupError:
            return

        try:
            await asyncio.wait_for(process.wait(), timeout=self._settings.terminate_timeout)
        except TimeoutError:
            logger.warning(
                "Provider %s ignored terminate after %ss; killing",
                self._path,
                self._settings.terminate_timeout,
            )
            try:
                process.kill()
            except ProcessLookupError:
                return
            await process.wait()


def _decode_line(raw: bytes) -> JsonRpcResponse:
    """Parse one response line, keeping the raw text for error messages."""
    text = raw.decode("utf-8", errors="replace").rstrip("\r\n")
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ResponseParseError(text, str(exc)) from exc
    if not isinstance(data, dict):
        raise ResponseParseError(text, "expected a JSON object")
    try:
        response = JsonRpcResponse.model_validate(data)
    except ValidationError as exc:
        raise ResponseParseError(text, str(exc)) from exc
    logger.debug("<- %s", text)
    return response
