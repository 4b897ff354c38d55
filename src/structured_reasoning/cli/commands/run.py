"""The ``run`` command: serve the MCP tools on stdio, sse or http.

Status output goes to stderr; on the stdio transport stdout belongs to the
MCP client.
"""

from __future__ import annotations

import asyncio
import errno
import logging
import socket
from typing import TYPE_CHECKING

import typer
from rich.console import Console

if TYPE_CHECKING:
    from structured_reasoning.cli.main import CLIContext
    from structured_reasoning.config import Settings

logger = logging.getLogger(__name__)
console = Console(stderr=True)

VALID_TRANSPORTS = ("stdio", "sse", "http")

_BIND_ERRORS = {
    errno.EADDRINUSE: "Port {port} is already in use on {host}",
    errno.EACCES: "Permission denied binding to {host}:{port}",
    errno.EADDRNOTAVAIL: "Address {host} is not available on this system",
}


def _port_is_free(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def _fail(message: str, *, debug: bool = False) -> typer.Exit:
    console.print(f"[red]Error:[/red] {message}")
    if debug:
        console.print_exception()
    return typer.Exit(1)


def _describe_limits(settings: Settings) -> str:
    mode = "strict" if settings.brainstorm_strict_mutations else "permissive"
    order = "forward-only" if settings.brainstorm_enforce_phase_order else "free"
    return (
        f"{settings.max_sessions} sessions, {settings.max_thoughts_per_run} thoughts per run, "
        f"{mode} brainstorm mutations, {order} phase order"
    )


def run_command(
    ctx: CLIContext,
    host: str = "127.0.0.1",
    port: int = 8000,
    transport: str = "stdio",
    debug: bool = False,
) -> None:
    """Start the server and block until it stops.

    Raises:
        typer.Exit: On an unknown transport, a busy port, or a startup failure
    """
    transport = transport.lower()
    if transport not in VALID_TRANSPORTS:
        raise _fail(
            f"Invalid transport '{transport}'. Must be one of: {', '.join(VALID_TRANSPORTS)}"
        )

    if debug:
        from structured_reasoning.logging import setup_logging

        setup_logging(settings=ctx.settings, log_level="DEBUG")

    if transport != "stdio" and not _port_is_free(host, port):
        raise _fail(f"Port {port} is already in use on {host}; try --port {port + 1}")

    console.print(f"[bold blue]{ctx.settings.server_name}[/bold blue] on {transport}")
    console.print(f"[dim]{_describe_limits(ctx.settings)}[/dim]")
    logger.debug(f"Starting transport={transport} host={host} port={port}")

    try:
        asyncio.run(_serve(transport, host, port))
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped[/yellow]")
    except OSError as e:
        template = _BIND_ERRORS.get(e.errno, "OS error: {error}")
        raise _fail(template.format(host=host, port=port, error=e), debug=debug) from e
    except Exception as e:
        raise _fail(f"Server stopped unexpectedly: {e}", debug=debug) from e


async def _serve(transport: str, host: str, port: int) -> None:
    from structured_reasoning.server import mcp

    if transport == "stdio":
        await mcp.run_async(transport="stdio")
    else:
        console.print(f"[dim]Listening on http://{host}:{port}[/dim]")
        await mcp.run_async(transport=transport, host=host, port=port)


__all__ = ["VALID_TRANSPORTS", "run_command"]
