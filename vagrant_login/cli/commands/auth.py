"""Authentication commands for the vagrant-login CLI."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from . import get_client, handle_errors

app = typer.Typer(help="Log in to Vagrant Cloud and manage the access token")
console = Console()


@app.command()
def login(
    ctx: typer.Context,
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Vagrant Cloud username or email"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Description for the new token"),
) -> None:
    """Log in with a username and password and store the issued token."""
    client = get_client(ctx)

    with handle_errors():
        if client.is_authenticated():
            console.print("[green]You are already logged in.[/green]")
            return

        if not username:
            username = typer.prompt("Vagrant Cloud username or email")
        password = typer.prompt("Password (will be hidden)", hide_input=True)

        token = client.login(username, password, description=description)
        if not token:
            console.print("[red]Invalid username or password. Please try again.[/red]")
            raise typer.Exit(1)

        client.token_source.store(token)

    console.print("\n[green]You are now logged in.[/green]")


@app.command()
def logout(ctx: typer.Context) -> None:
    """Remove the stored token."""
    client = get_client(ctx)
    with handle_errors():
        client.token_source.clear()
    console.print("[green]You are logged out.[/green]")


@app.command()
def check(ctx: typer.Context) -> None:
    """Check whether the current token is valid."""
    client = get_client(ctx)
    with handle_errors():
        logged_in = client.is_authenticated()

    if not logged_in:
        console.print("[yellow]You are not currently logged in.[/yellow]")
        console.print("Run [bold]vagrant-login auth login[/bold] to log in.")
        raise typer.Exit(1)

    console.print("[green]You are already logged in.[/green]")


@app.command()
def token(ctx: typer.Context, value: str = typer.Argument(..., help="Access token to store")) -> None:
    """Validate an existing access token and store it."""
    client = get_client(ctx)
    with handle_errors():
        if not client.check_token(value):
            console.print("[red]The given token is invalid.[/red]")
            raise typer.Exit(1)
        client.token_source.store(value)

    console.print("[green]The token was successfully saved.[/green]")


@app.command()
def status(ctx: typer.Context) -> None:
    """Show which token is in effect and where it comes from."""
    client = get_client(ctx)
    with handle_errors():
        info = client.token_source.status()

    if not info.present:
        console.print("[yellow]No access token found.[/yellow]")
        console.print(f"  Token file: {info.token_path}")
        raise typer.Exit(1)

    console.print("[green]Access token found[/green]")
    console.print(f"  Token: {info.masked_token}")
    console.print(f"  Source: {info.source}")
    console.print(f"  Token file: {info.token_path}")
