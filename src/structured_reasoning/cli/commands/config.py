"""CLI config command for structured-reasoning."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from structured_reasoning.cli.main import CLIContext

console = Console()


def show_config(ctx: CLIContext, *, as_json: bool = False) -> None:
    """Print the effective settings as a table or JSON."""
    values = ctx.settings.model_dump(mode="json")

    if as_json:
        console.print_json(json.dumps(values))
        return

    table = Table(title="structured-reasoning configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Environment variable", style="dim")

    prefix = ctx.settings.model_config.get("env_prefix", "")
    for name, value in values.items():
        table.add_row(name, str(value), f"{prefix}{name.upper()}")

    console.print(table)


__all__ = ["show_config"]
