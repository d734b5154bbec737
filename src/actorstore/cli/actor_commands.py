"""
Actor CLI commands for actorstore.

Commands for looking up actor identities: list actors by name prefix,
show a single actor, and register a new one.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from actorstore.config.database import db_manager
from actorstore.config.settings import settings
from actorstore.exceptions import (
    EXIT_CODE_DATA_SOURCE_UNAVAILABLE,
    EXIT_CODE_INVALID_ARGS,
    DataSourceError,
    ValidationError,
)
from actorstore.models.actor import UserIdentity
from actorstore.models.enums import SortDirection
from actorstore.repositories.actor_repository import ActorRepository

console = Console()

actor_app = typer.Typer(
    name="actors",
    help="👤 Actor identity lookup",
    no_args_is_help=True,
)


def _display_identity_table(identities: list[UserIdentity], title: str) -> None:
    table = Table(title=title, show_header=True, header_style="bold blue")
    table.add_column("Actor ID", style="dim", width=10)
    table.add_column("User ID", style="green", width=10)
    table.add_column("Name", style="cyan", width=45)
    table.add_column("Type", width=12)

    for identity in identities:
        table.add_row(
            str(identity.actor_id),
            str(identity.id) if identity.is_registered else "-",
            identity.name,
            "registered" if identity.is_registered else "anonymous",
        )

    console.print(table)


def _exit_for_error(error: Exception, action: str) -> typer.Exit:
    """Print an error panel and build the matching typer.Exit."""
    if isinstance(error, ValidationError):
        title, code = "Invalid Arguments", EXIT_CODE_INVALID_ARGS
    else:
        title, code = "Database Error", EXIT_CODE_DATA_SOURCE_UNAVAILABLE
    console.print(
        Panel(
            f"[red]Error {action}: {error}[/red]",
            title=title,
            border_style="red",
        )
    )
    return typer.Exit(code=code)


@actor_app.command("list")
def list_actors(
    prefix: str = typer.Option(
        "", "--prefix", "-p", help="Only show names starting with this prefix"
    ),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", help="Maximum number of actors to show"
    ),
    descending: bool = typer.Option(
        False, "--desc", help="Sort in descending order"
    ),
    by_user_id: bool = typer.Option(
        False, "--by-user-id", help="Sort by user id instead of name"
    ),
    registered: bool = typer.Option(
        False, "--registered", help="Only show registered users"
    ),
    anon: bool = typer.Option(
        False, "--anon", help="Only show anonymous actors"
    ),
) -> None:
    """List actors ordered by name."""

    async def run_list() -> None:
        actor_repo = ActorRepository()
        direction = SortDirection.DESC if descending else SortDirection.ASC
        identities: list[UserIdentity] = []

        try:
            async for session in db_manager.get_session():
                builder = (
                    actor_repo.new_select_query_builder(session)
                    .user_name_prefix(prefix)
                    .limit(limit if limit is not None else settings.default_query_limit)
                    .caller("cli.actors.list")
                )
                if registered:
                    builder.registered()
                if anon:
                    builder.anon()
                if by_user_id:
                    builder.order_by_user_id(direction)
                else:
                    builder.order_by_name(direction)

                identities = list(await builder.fetch_user_identities())
        except (ValidationError, DataSourceError) as e:
            raise _exit_for_error(e, "listing actors") from e

        if not identities:
            console.print(
                Panel(
                    "[yellow]No actors found[/yellow]",
                    title="No Actors",
                    border_style="yellow",
                )
            )
            return

        _display_identity_table(
            identities, f"Actors (showing {len(identities)})"
        )

    asyncio.run(run_list())


@actor_app.command("show")
def show_actor(
    name: str = typer.Argument(..., help="User name or IP address"),
) -> None:
    """Show the identity stored for a user name or IP address."""

    async def run_show() -> None:
        actor_repo = ActorRepository()
        identity: Optional[UserIdentity] = None

        try:
            async for session in db_manager.get_session():
                identity = await actor_repo.get_user_identity_by_name(session, name)
        except (ValidationError, DataSourceError) as e:
            raise _exit_for_error(e, "looking up actor") from e

        if identity is None:
            console.print(
                Panel(
                    f"[red]Actor '{name}' not found[/red]\n"
                    "Use 'actorstore actors list --prefix' to find similar names",
                    title="Actor Not Found",
                    border_style="red",
                )
            )
            raise typer.Exit(code=1)

        details = f"[bold]Name:[/bold] {identity.name}\n"
        details += f"[bold]Actor ID:[/bold] {identity.actor_id}\n"
        if identity.is_registered:
            details += f"[bold]User ID:[/bold] {identity.id}"
        else:
            details += "[bold]Type:[/bold] anonymous"

        console.print(Panel(details, title=f"Actor: {identity.name}", border_style="blue"))

    asyncio.run(run_show())


@actor_app.command("add")
def add_actor(
    name: str = typer.Argument(..., help="User name or IP address"),
    user_id: int = typer.Option(
        0, "--user-id", "-u", help="User id for registered users (0 for anonymous)"
    ),
) -> None:
    """Register an actor and print its actor id."""

    async def run_add() -> None:
        actor_repo = ActorRepository()

        try:
            identity = UserIdentity(id=user_id, name=name)
        except ValueError as e:
            raise _exit_for_error(
                ValidationError(str(e), field_name="name", invalid_value=name),
                "adding actor",
            ) from e

        actor_id: Optional[int] = None
        try:
            async for session in db_manager.get_session():
                actor_id = await actor_repo.acquire_actor_id(session, identity)
        except (ValidationError, DataSourceError) as e:
            raise _exit_for_error(e, "adding actor") from e

        console.print(f"[green]✓[/green] {identity.name} has actor id {actor_id}")

    asyncio.run(run_add())
