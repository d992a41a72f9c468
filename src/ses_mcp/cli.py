# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Command-line interface for the SES MCP server.

Usage:
    ses-mcp serve --port 8000
    ses-mcp tools
    ses-mcp call get_email_quota
    ses-mcp call send_email --args '{"to": ["a@example.com"], "subject": "Hi", "body": "<b>Hi</b>"}'
    ses-mcp preview --to a@example.com --subject Hi --body "<b>Hi</b>"
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import click
import uvicorn
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .api import create_app, startup_lifespan
from .config import ServerConfig, load_config
from .email_format import build_message, resolve_sender
from .errors import ConfigurationError, InvalidToolArguments
from .handlers import parse_email_request
from .jsonrpc import JSONRPC_VERSION, RpcRequest
from .logger import configure_logging
from .router import handle_rpc_method
from .tools import TOOLS

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")


def print_json(data: Any) -> None:
    """Print data as highlighted JSON."""
    console.print_json(json.dumps(data, indent=2, default=str))


def _load(ctx: click.Context) -> ServerConfig:
    try:
        return load_config(ctx.obj.get("config_path") if ctx.obj else None)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(package_name="ses-smtp-mcp")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to the INI configuration file.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None) -> None:
    """SES SMTP MCP server."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@main.command()
@click.option("--host", "-h", default=None, help="Host to bind to (default from config).")
@click.option("--port", "-p", type=int, default=None, help="Port to listen on (default from config).")
@click.option("--log-level", default=None, help="Logging level (default from config).")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, log_level: str | None) -> None:
    """Run the HTTP server."""
    config = _load(ctx)
    configure_logging(log_level or config.log_level)
    app = create_app(config, lifespan=startup_lifespan(config))

    bind_host = host or config.host
    bind_port = port or config.port
    console.print(f"[bold cyan]Starting MCP server[/bold cyan] on {bind_host}:{bind_port}")
    uvicorn.run(app, host=bind_host, port=bind_port, log_level=(log_level or config.log_level).lower())


@main.command("tools")
def list_tools_command() -> None:
    """List the tools exposed by the server."""
    table = Table(title="MCP Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")
    for tool in TOOLS:
        required = ", ".join(tool.input_schema.get("required", [])) or "-"
        table.add_row(tool.name, tool.description, required)
    console.print(table)


@main.command()
@click.argument("tool")
@click.option("--args", "args_json", default="{}", help="Tool arguments as a JSON object.")
@click.pass_context
def call(ctx: click.Context, tool: str, args_json: str) -> None:
    """Invoke TOOL locally and print the response envelope."""
    try:
        arguments = json.loads(args_json)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"invalid JSON: {exc}", param_hint="--args") from exc

    config = _load(ctx)
    request = RpcRequest(
        jsonrpc=JSONRPC_VERSION,
        method="tools/call",
        params={"name": tool, "arguments": arguments},
        id="cli",
    )
    response = asyncio.run(handle_rpc_method(request, config))
    print_json(response)
    if "error" in response:
        ctx.exit(1)


@main.command()
@click.option("--to", "to", multiple=True, required=True, help="Recipient address (repeatable).")
@click.option("--subject", required=True)
@click.option("--body", required=True)
@click.option("--from", "from_", default=None, help="Sender address.")
@click.option("--reply-to", default=None)
@click.option("--text", "plain_text", is_flag=True, help="Treat the body as plain text.")
@click.pass_context
def preview(
    ctx: click.Context,
    to: tuple[str, ...],
    subject: str,
    body: str,
    from_: str | None,
    reply_to: str | None,
    plain_text: bool,
) -> None:
    """Print the MIME message a send_email call would produce."""
    arguments: dict[str, Any] = {"to": list(to), "subject": subject, "body": body, "isHtml": not plain_text}
    if from_:
        arguments["from"] = from_
    if reply_to:
        arguments["replyTo"] = reply_to

    try:
        request = parse_email_request(arguments)
    except InvalidToolArguments as exc:
        print_error(str(exc))
        ctx.exit(1)
        return

    config = _load(ctx)
    click.echo(build_message(request, resolve_sender(request, config.default_from)), nl=False)
