"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mcpc.protocols.mcp.models import MCPToolDef

console = Console()


def print_error(label: str, message: str) -> None:
    """Print ``label: message`` in red; *message* is never parsed as markup."""
    console.print(f"[red]{label}:[/red] {escape(message)}")


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str))


def print_tools_table(tools: list[Any]) -> None:
    """Pretty-print tool descriptors as a table.

    Descriptors that do not look like MCP tool definitions are shown as raw
    JSON in the input column.
    """
    table = Table(title="Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Input")

    for raw in tools:
        try:
            tool = MCPToolDef.model_validate(raw)
        except ValidationError:
            table.add_row("?", "", escape(json.dumps(raw, default=str)))
            continue
        table.add_row(
            escape(tool.name),
            escape(_truncate(tool.description)),
            escape(_describe_properties(tool.properties)),
        )

    console.print(table)


def print_content(content: Any) -> None:
    """Print a ``tools/call`` result.

    A list made only of ``{"type": "text"}`` items is printed as plain text;
    anything else is printed as JSON.
    """
    if content is None:
        console.print("[yellow]No content returned.[/yellow]")
        return

    if isinstance(content, list) and content and all(_is_text_item(c) for c in content):
        for item in content:
            console.print(escape(str(item.get("text", ""))))
        return

    print_json(content)


def _is_text_item(item: Any) -> bool:
    return isinstance(item, dict) and item.get("type") == "text"


def _describe_properties(properties: dict[str, Any]) -> str:
    if not properties:
        return "-"
    parts: list[str] = []
    for name, prop in properties.items():
        declared = prop.get("type", "any") if isinstance(prop, dict) else "any"
        parts.append(f"{name}: {declared}")
    return "\n".join(parts)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
