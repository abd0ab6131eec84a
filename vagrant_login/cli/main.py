"""Command line entry point: ``vagrant-login``."""

from __future__ import annotations

import logging
from typing import Optional

try:
    import typer
except ImportError:
    import sys

    print("vagrant-login CLI requires extras: pip install vagrant-login[cli]")
    sys.exit(1)

from vagrant_login.config import SERVER_URL_ENV, __version__

from .commands import auth

app = typer.Typer(
    name="vagrant-login",
    help="Log in to Vagrant Cloud and manage the access token used by Vagrant.",
    no_args_is_help=True,
)
app.add_typer(auth.app, name="auth")


def _print_version(value: bool) -> None:
    if not value:
        return
    typer.echo(f"vagrant-login {__version__}")
    raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    server_url: Optional[str] = typer.Option(
        None,
        "--server-url",
        envvar=SERVER_URL_ENV,
        help="Vagrant Cloud server to talk to.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Log token lookups and requests to stderr."),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the CLI version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    """Select the server and log level shared by every command."""
    _ = version
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {"server_url": server_url}


@app.command()
def version() -> None:
    """Show the CLI version."""
    typer.echo(f"vagrant-login {__version__}")


if __name__ == "__main__":
    app()
