"""
Main CLI entry point for actorstore.
"""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from actorstore import __version__
from actorstore.cli.actor_commands import actor_app
from actorstore.config.database import db_manager
from actorstore.config.settings import settings
from actorstore.exceptions import EXIT_CODE_DATA_SOURCE_UNAVAILABLE

console = Console()

app = typer.Typer(
    name="actorstore",
    help="Actor identity storage and lookup",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

db_app = typer.Typer(
    name="db",
    help="Database management commands",
    no_args_is_help=True,
)

# Add subcommands
app.add_typer(actor_app, name="actors", help="Actor lookup commands")
app.add_typer(db_app, name="db", help="Database management commands")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold blue]actorstore[/bold blue] v{__version__}",
            title="Version",
            border_style="blue",
        )
    )


@db_app.command("init")
def init_db() -> None:
    """Create the actor table if it does not exist."""

    async def run_init() -> None:
        try:
            await db_manager.create_tables()
        finally:
            await db_manager.close()

    try:
        asyncio.run(run_init())
    except Exception as e:
        console.print(
            Panel(
                f"[red]Could not create tables: {e}[/red]",
                title="Database Error",
                border_style="red",
            )
        )
        raise typer.Exit(code=EXIT_CODE_DATA_SOURCE_UNAVAILABLE)

    console.print("[green]✓[/green] Actor table is ready")


@db_app.command("reset")
def reset_db(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """
    Drop and recreate the actor table.

    Every stored actor is deleted and actor ids start again from 1.

    Examples
    --------
    Reset without confirmation:
        $ actorstore db reset --yes
    """
    if not yes and not typer.confirm(
        "This will delete all stored actors.\nAre you sure?", default=False
    ):
        console.print("Cancelled.")
        raise typer.Exit(code=1)

    async def run_reset() -> None:
        try:
            await db_manager.drop_tables()
            await db_manager.create_tables()
        finally:
            await db_manager.close()

    try:
        asyncio.run(run_reset())
    except Exception as e:
        console.print(
            Panel(
                f"[red]Could not reset tables: {e}[/red]",
                title="Database Error",
                border_style="red",
            )
        )
        raise typer.Exit(code=EXIT_CODE_DATA_SOURCE_UNAVAILABLE)

    console.print("[green]✓[/green] Actor table has been reset")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit"
    ),
) -> None:
    """
    actorstore - Actor identity storage and lookup.

    Look up registered users and anonymous editors by name, user id or
    name prefix.
    """
    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    if version:
        console.print(f"actorstore v{__version__}")
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        console.print(
            "[yellow]Use 'actorstore --help' for available commands[/yellow]"
        )
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
