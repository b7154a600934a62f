"""Shared helpers for E2E tests against real provider processes."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

# Prepended to every fake provider script.  ``log()`` appends one JSON line
# to the file named by $MCPC_TEST_LOG so tests can see what the provider got.
_PRELUDE = '''\
import json
import os
import sys
import time

sys.stdin.reconfigure(encoding="utf-8")
sys.stdout.reconfigure(encoding="utf-8")


def reply(obj):
    sys.stdout.write(json.dumps(obj) + "\\n")
    sys.stdout.flush()


def raw_reply(text):
    sys.stdout.write(text + "\\n")
    sys.stdout.flush()


def log(obj):
    path = os.environ.get("MCPC_TEST_LOG")
    if path:
        with open(path, "a", encoding="utf-8") as fh:
            fh.write(json.dumps(obj) + "\\n")


def requests():
    while True:
        line = sys.stdin.readline()
        if not line:
            return
        req = json.loads(line)
        log({"request": req})
        yield req


log({"pid": os.getpid()})
'''

SAMPLE_TOOLS: list[dict[str, Any]] = [
    {
        "name": "read_file",
        "description": "Read a file from disk.",
        "inputSchema": {
            "type": "object",
            "properties": {"path": {"type": "string", "description": "File path"}},
            "required": ["path"],
        },
    },
    {
        "name": "add",
        "description": "Add two numbers.",
        "inputSchema": {
            "type": "object",
            "properties": {"a": {"type": "number"}, "b": {"type": "number"}},
        },
    },
]

# Answers tools/list with SAMPLE_TOOLS and tools/call by echoing the
# arguments back as a text content item.
WELL_BEHAVED = f'''
TOOLS = {json.dumps(SAMPLE_TOOLS)!r}
for req in requests():
    if req["method"] == "tools/list":
        reply({{"jsonrpc": "2.0", "id": req["id"], "result": {{"tools": json.loads(TOOLS)}}}})
    elif req["method"] == "tools/call":
        text = json.dumps(req["params"]["arguments"], sort_keys=True)
        reply({{
            "jsonrpc": "2.0",
            "id": req["id"],
            "result": {{"content": [{{"type": "text", "text": text}}]}},
        }})
'''


@pytest.fixture
def make_provider(tmp_path: Path) -> Callable[[str], Path]:
    """Write a fake provider executable running *body* and return its path.

    The executable is a non-executable shell wrapper around the current
    interpreter; the launcher is expected to set the permission bit itself.
    """
    counter = {"n": 0}

    def _make(body: str) -> Path:
        counter["n"] += 1
        script = tmp_path / f"provider_{counter['n']}.py"
        script.write_text(_PRELUDE + body, encoding="utf-8")
        wrapper = tmp_path / f"provider_{counter['n']}"
        wrapper.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{script}"\n', encoding="utf-8")
        wrapper.chmod(0o644)
        return wrapper

    return _make


@pytest.fixture
def provider_log(tmp_path: Path) -> Path:
    return tmp_path / "provider.log"


def read_log(path: Path) -> list[dict[str, Any]]:
    """Return the JSON entries a fake provider logged."""
    if not path.exists():
        return []
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


def logged_requests(path: Path) -> list[dict[str, Any]]:
    return [entry["request"] for entry in read_log(path) if "request" in entry]


def logged_pid(path: Path) -> int:
    return next(entry["pid"] for entry in read_log(path) if "pid" in entry)
