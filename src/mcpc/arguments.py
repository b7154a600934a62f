"""Turn ``key=value`` strings into typed tool arguments.

Types come from the tool's ``inputSchema.properties``; keys the schema does
not describe are passed through as strings.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mcpc.protocols.mcp.models import MCPToolDef

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


class ArgumentError(ValueError):
    """A ``key=value`` pair could not be parsed or converted."""


def parse_pairs(pairs: Iterable[str]) -> dict[str, str]:
    """Split ``key=value`` strings; the first ``=`` separates key from value."""
    parsed: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"expected key=value, got {pair!r}"
            raise ArgumentError(msg)
        parsed[key] = value
    return parsed


def coerce_arguments(raw: dict[str, str], tool: MCPToolDef | None = None) -> dict[str, Any]:
    """Convert each raw value to the JSON type declared for its key."""
    properties = tool.properties if tool is not None else {}
    coerced: dict[str, Any] = {}
    for key, value in raw.items():
        prop = properties.get(key)
        declared = prop.get("type") if isinstance(prop, dict) else None
        try:
            coerced[key] = coerce_value(value, declared)
        except ValueError as exc:
            msg = f"argument {key!r}: {exc}"
            raise ArgumentError(msg) from exc
    return coerced


def coerce_value(value: str, declared: Any) -> Any:
    """Convert *value* to JSON type *declared* (``None`` keeps the string)."""
    if isinstance(declared, list):
        # Union types: first non-null member wins.
        declared = next((t for t in declared if t != "null"), None)

    if declared == "integer":
        return int(value)
    if declared == "number":
        try:
            return int(value)
        except ValueError:
            return float(value)
    if declared == "boolean":
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        msg = f"not a boolean: {value!r}"
        raise ValueError(msg)
    if declared in ("object", "array"):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as exc:
            msg = f"invalid JSON for {declared}: {exc}"
            raise ValueError(msg) from exc
        expected = dict if declared == "object" else list
        if not isinstance(parsed, expected):
            msg = f"expected a JSON {declared}"
            raise ValueError(msg)
        return parsed
    if declared == "null":
        return None
    return value
