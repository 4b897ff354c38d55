"""Command-line entry point for structured-reasoning.

``structured-reasoning run`` serves the MCP tools; ``structured-reasoning
config`` shows the settings a server started from the same shell would use.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from structured_reasoning import __version__
from structured_reasoning.config import Settings, configure_settings, get_settings
from structured_reasoning.logging import setup_logging

if TYPE_CHECKING:
    import logging

app = typer.Typer(
    name="structured-reasoning",
    help="Sequential thinking and brainstorming sessions over MCP.",
    add_completion=False,
    rich_markup_mode="rich",
)


@dataclass
class CLIContext:
    """State shared by the commands of one invocation."""

    settings: Settings
    logger: logging.Logger
    verbose: int = 0


_cli_context: CLIContext | None = None


def get_cli_context() -> CLIContext:
    """Return the context built by the top-level callback.

    Raises:
        typer.Exit: If a command runs without the callback having run
    """
    if _cli_context is None:
        typer.echo("Error: CLI context not initialized", err=True)
        raise typer.Exit(1)
    return _cli_context


def load_settings(config_path: Path | None) -> Settings:
    """Load settings, from an env-style file when one is given.

    A loaded file replaces the global settings so the server lifespan reads
    the same values.

    Raises:
        typer.Exit: If the file is missing or cannot be parsed
    """
    if config_path is None:
        return get_settings()

    if not config_path.is_file():
        typer.echo(f"Error: Config file not found: {config_path}", err=True)
        raise typer.Exit(1)
    try:
        return configure_settings(_env_file=str(config_path))
    except ValueError as e:
        typer.echo(f"Error: Invalid settings in {config_path}: {e}", err=True)
        raise typer.Exit(1) from e


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"structured-reasoning version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Env-style file with STRUCTURED_REASONING_* settings",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Log at DEBUG level"),
    ] = 0,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """Sequential thinking and brainstorming sessions over MCP."""
    global _cli_context

    settings = load_settings(config)
    # Any -v switches to DEBUG; otherwise the settings decide
    logger = setup_logging(settings=settings, log_level="DEBUG" if verbose else None)
    _cli_context = CLIContext(settings=settings, logger=logger, verbose=verbose)
    logger.debug(f"Settings loaded from {config or 'environment'}")


@app.command()
def run(
    host: Annotated[
        str,
        typer.Option("--host", "-H", help="Bind address for sse/http"),
    ] = "127.0.0.1",
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Bind port for sse/http"),
    ] = 8000,
    transport: Annotated[
        str,
        typer.Option("--transport", "-t", help="stdio, sse or http"),
    ] = "stdio",
    debug: Annotated[
        bool,
        typer.Option("--debug", "-d", help="Log at DEBUG level and show tracebacks"),
    ] = False,
) -> None:
    """Serve the thinking and brainstorming tools.

    Examples:
        structured-reasoning run
        structured-reasoning run --transport http --port 9000
    """
    from structured_reasoning.cli.commands.run import run_command

    run_command(get_cli_context(), host=host, port=port, transport=transport, debug=debug)


@app.command("config")
def config_command(
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print JSON instead of a table"),
    ] = False,
) -> None:
    """Show the effective settings.

    Examples:
        structured-reasoning --config ./strict.env config --json
    """
    from structured_reasoning.cli.commands.config import show_config

    show_config(get_cli_context(), as_json=as_json)


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("\nInterrupted", err=True)
        sys.exit(130)


__all__ = [
    "CLIContext",
    "app",
    "get_cli_context",
    "main",
]
