"""Host commands — the blocking, caller-facing surface.

Each command runs one session to completion and returns the success
envelope ``{"result": ...}``.  Any failure is reported as a
:class:`CommandError` carrying only a human-readable message.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from mcpc.protocols.errors import ProviderError
from mcpc.protocols.mcp import session
from mcpc.protocols.mcp.models import RPCResult

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from mcpc.config import ClientSettings


class CommandError(Exception):
    """A host command failed; ``message`` describes why."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def list_tools(path: str, settings: ClientSettings | None = None) -> dict[str, Any]:
    """Enumerate the tools of the provider at *path*."""
    tools = _run(session.enumerate_tools(path, settings))
    return RPCResult(result=tools).model_dump()


def call_tool(
    path: str,
    tool: str,
    args: Any,
    settings: ClientSettings | None = None,
) -> dict[str, Any]:
    """Invoke *tool* on the provider at *path* with *args*."""
    content = _run(session.call_tool(path, tool, args, settings))
    return RPCResult(result=content).model_dump()


def _run(coro: Coroutine[Any, Any, Any]) -> Any:
    try:
        return asyncio.run(coro)
    except ProviderError as exc:
        raise CommandError(str(exc)) from exc
