"""
Command line interface for the test utilities.

Commands:
- dazzle-test-utils events: List simulatable events and their native shapes
- dazzle-test-utils version: Show the installed version
"""

from __future__ import annotations

import json
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from dazzle_test_utils import __version__
from dazzle_test_utils.config import get_config
from dazzle_test_utils.event_types import EventCategory, list_event_specs

app = typer.Typer(
    help="DAZZLE test utilities: tree queries and event simulation",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main_callback(
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log level (default: DAZZLE_TESTUTILS_LOG_LEVEL or WARNING)",
        ),
    ] = None,
) -> None:
    """DAZZLE test utilities."""
    level = (log_level or get_config().log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING))


@app.command("events")
def list_events(
    category: Annotated[
        EventCategory | None,
        typer.Option("--category", "-c", help="Only show events of this category"),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List every event Simulate supports."""
    specs = list_event_specs(category)

    if as_json:
        typer.echo(json.dumps([spec.model_dump(mode="json") for spec in specs], indent=2))
        return

    table = Table(title=f"Simulated events ({len(specs)})")
    table.add_column("Simulate", style="cyan")
    table.add_column("Native type")
    table.add_column("Category")
    table.add_column("Bubbles")
    table.add_column("Cancelable")
    for spec in specs:
        table.add_row(
            spec.attribute_name,
            spec.native_type,
            spec.category.value,
            "yes" if spec.bubbles else "no",
            "yes" if spec.cancelable else "no",
        )
    console.print(table)


@app.command("version")
def show_version() -> None:
    """Show the installed version."""
    typer.echo(f"dazzle-test-utils {__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
