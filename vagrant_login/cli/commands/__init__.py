"""CLI command modules."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.console import Console

from vagrant_login.auth.credentials import TokenSource
from vagrant_login.client import LoginClient
from vagrant_login.exceptions import (
    APIError,
    ServerRejected,
    ServerUnreachable,
    StorageFailure,
    Unauthenticated,
    UnexpectedFailure,
    VagrantLoginError,
)

_console = Console()


def get_client(ctx: typer.Context | None = None) -> LoginClient:
    """Build a LoginClient whose advisories are shown on the terminal.

    Honors the ``--server-url`` option stored on the root command context.
    """
    settings = (ctx.obj if ctx is not None else None) or {}
    source = TokenSource(warn=lambda message: _console.print(message, style="yellow", markup=False))
    return LoginClient(source, base_url=settings.get("server_url"))


def describe_error(error: VagrantLoginError) -> str:
    """Return the user-facing message for a client error."""
    if isinstance(error, Unauthenticated):
        return "Invalid username or password. Please try again."
    if isinstance(error, ServerRejected):
        return "The server rejected the request:\n" + "\n".join(error.messages)
    if isinstance(error, ServerUnreachable):
        return (
            f"Unable to reach the Vagrant Cloud server at {error.address}. "
            "Check your network connection and the VAGRANT_SERVER_URL setting."
        )
    if isinstance(error, UnexpectedFailure):
        return str(error)
    if isinstance(error, StorageFailure):
        return f"Could not access the stored token: {error.detail}"
    if isinstance(error, APIError):
        return f"Server error ({error.status_code}): {error.message}"
    return str(error)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Render client errors and exit with status 1."""
    try:
        yield
    except VagrantLoginError as e:
        _console.print(describe_error(e), style="red", markup=False)
        raise typer.Exit(1) from e
