"""Process launcher — locate, chmod, and start a provider executable.

The child gets piped stdin/stdout and inherits this process's stderr so the
provider's diagnostics stay visible to the user.
"""

from __future__ import annotations

import asyncio
import logging
import os
import stat
from pathlib import Path

from mcpc.config import DEFAULT_LINE_LIMIT
from mcpc.protocols.errors import (
    ExecutableMetadataError,
    ExecutableNotFoundError,
    ExecutablePermissionError,
    PipeError,
    SpawnError,
)

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


def check_executable(path: str) -> Path:
    """Return *path* as a :class:`Path`, or raise if nothing exists there."""
    exe = Path(path)
    if not exe.exists():
        raise ExecutableNotFoundError(path)
    return exe


def ensure_executable_bit(exe: Path) -> None:
    """Force ``rwxr-xr-x`` on POSIX; other platforms have no such bit."""
    if os.name != "posix":
        return
    try:
        mode = stat.S_IMODE(exe.stat().st_mode)
    except OSError as exc:
        raise ExecutableMetadataError(str(exe), str(exc)) from exc
    if mode == EXECUTABLE_MODE:
        return
    try:
        exe.chmod(EXECUTABLE_MODE)
    except OSError as exc:
        raise ExecutablePermissionError(str(exe), str(exc)) from exc


async def spawn_provider(
    path: str,
    env: dict[str, str] | None = None,
    line_limit: int = DEFAULT_LINE_LIMIT,
) -> asyncio.subprocess.Process:
    """Check, chmod, and launch the provider at *path*.

    Raises:
        ExecutableNotFoundError: *path* does not exist; nothing is spawned.
        ExecutableMetadataError / ExecutablePermissionError: chmod failed.
        SpawnError: the OS refused to start the process.
        PipeError: the child is missing its stdin or stdout pipe.
    """
    exe = check_executable(path)
    ensure_executable_bit(exe)

    logger.debug("Spawning provider %s", exe)
    try:
        process = await asyncio.create_subprocess_exec(
            str(exe),
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=None,
            env=env,
            limit=line_limit,
        )
    except OSError as exc:
        raise SpawnError(str(exe), str(exc)) from exc

    if process.stdin is None or process.stdout is None:
        stream = "stdin" if process.stdin is None else "stdout"
        _kill_quietly(process)
        raise PipeError(stream)

    logger.debug("Provider %s started with pid %s", exe, process.pid)
    return process


def _kill_quietly(process: asyncio.subprocess.Process) -> None:
    try:
        process.kill()
    except ProcessLookupError:
        pass
