"""``mcpc tools`` — list and call tools on a provider executable."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any

import click

from mcpc.cli_commands._output import (
    console,
    print_content,
    print_error,
    print_json,
    print_tools_table,
)

if TYPE_CHECKING:
    from mcpc.config import ClientSettings


@click.group()
def tools() -> None:
    """List and call provider tools."""


@tools.command("list")
@click.argument("path")
@click.option("--json", "as_json", is_flag=True, help="Print the raw tools array.")
@click.pass_obj
def list_cmd(settings: ClientSettings | None, path: str, as_json: bool) -> None:
    """List the tools exposed by the provider at PATH."""
    from mcpc.commands import CommandError, list_tools

    try:
        payload = list_tools(path, settings)
    except CommandError as exc:
        print_error("Error", exc.message)
        sys.exit(1)

    tool_list = payload["result"]
    if as_json:
        print_json(tool_list)
        return

    if not isinstance(tool_list, list):
        print_json(tool_list)
        return

    if not tool_list:
        console.print("[yellow]No tools exposed.[/yellow]")
        return

    print_tools_table(tool_list)


@tools.command("call")
@click.argument("path")
@click.argument("tool")
@click.option("--args", "args_json", default=None, help="Tool arguments as a JSON value.")
@click.option(
    "--arg",
    "-a",
    "pairs",
    multiple=True,
    help="key=value argument, typed from the tool's input schema. Repeatable.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the raw content value.")
@click.pass_obj
def call_cmd(
    settings: ClientSettings | None,
    path: str,
    tool: str,
    args_json: str | None,
    pairs: tuple[str, ...],
    as_json: bool,
) -> None:
    """Call TOOL on the provider at PATH."""
    from mcpc.arguments import ArgumentError, coerce_arguments, parse_pairs
    from mcpc.commands import CommandError, call_tool, list_tools

    arguments: Any = {}
    if args_json is not None:
        try:
            arguments = json.loads(args_json)
        except json.JSONDecodeError as exc:
            print_error("Invalid --args", str(exc))
            sys.exit(2)

    try:
        if pairs:
            if not isinstance(arguments, dict):
                print_error("Invalid --args", "must be a JSON object when combined with --arg")
                sys.exit(2)
            raw = parse_pairs(pairs)
            tool_def = _find_tool(list_tools(path, settings)["result"], tool)
            arguments = {**arguments, **coerce_arguments(raw, tool_def)}

        payload = call_tool(path, tool, arguments, settings)
    except ArgumentError as exc:
        print_error("Invalid --arg", str(exc))
        sys.exit(2)
    except CommandError as exc:
        print_error("Error", exc.message)
        sys.exit(1)

    if as_json:
        print_json(payload["result"])
    else:
        print_content(payload["result"])


def _find_tool(tool_list: Any, name: str) -> Any:
    """Return the :class:`MCPToolDef` named *name*, or ``None``."""
    from pydantic import ValidationError

    from mcpc.protocols.mcp.models import MCPToolDef

    if not isinstance(tool_list, list):
        return None
    for raw in tool_list:
        try:
            tool_def = MCPToolDef.model_validate(raw)
        except ValidationError:
            continue
        if tool_def.name == name:
            return tool_def
    return None
