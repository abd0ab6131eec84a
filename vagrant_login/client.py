"""Synchronous login client for the Vagrant Cloud account service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ._http import HttpResponse, HttpTransport, TransportOutcome, build_headers, classify
from .auth.constants import AUTHENTICATE_ENDPOINT
from .auth.credentials import TokenSource
from .auth.types import Credentials
from .config import DEFAULT_TIMEOUT_SECONDS, USER_AGENT, find_proxy, get_server_url, sanitize_base_url
from .exceptions import ServerUnreachable, Unauthenticated, UnexpectedFailure

logger = logging.getLogger(__name__)


class LoginClient:
    """Checks login state and performs the login handshake.

    Example:
        >>> from vagrant_login import LoginClient
        >>> client = LoginClient()
        >>> token = client.login("hashicorp", "s3cret", description="laptop")
        >>> if token:
        ...     client.token_source.store(token)
        >>> client.is_authenticated()
        True

    The client keeps no state between calls: every check re-resolves the token.
    """

    def __init__(
        self,
        token_source: TokenSource | None = None,
        *,
        base_url: str | None = None,
        environ: Mapping[str, str] | None = None,
        transport: HttpTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the login client.

        Args:
            token_source: Where tokens are resolved from and stored to. Built from
                ``environ`` when not provided.
            base_url: Account service URL (default: ``VAGRANT_SERVER_URL`` or
                https://vagrantcloud.com).
            environ: Environment lookup used for the server URL and proxy
                settings (default: ``os.environ``).
            transport: Sends the HTTP requests (default: an httpx transport).
            timeout: Request timeout in seconds for the default transport.
        """
        self._environ = environ
        self.token_source = token_source or TokenSource(environ)
        self._base_url = sanitize_base_url(base_url) if base_url else get_server_url(environ)
        self._transport = transport or HttpTransport(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    def _send(self, method: str, **kwargs: Any) -> HttpResponse:
        outcome: TransportOutcome = self._transport.request(
            method, f"{self._base_url}{AUTHENTICATE_ENDPOINT}", **kwargs
        )
        error = classify(outcome, address=self._base_url)
        if error is not None:
            raise error
        if not isinstance(outcome, HttpResponse):
            raise ServerUnreachable(self._base_url)
        return outcome

    def check_token(self, token: str) -> bool:
        """Verify ``token`` with the server.

        Returns False if the server answers 401. Other failures are raised.
        """
        try:
            self._send("GET", headers=build_headers(), params={"access_token": token})
        except Unauthenticated:
            return False
        return True

    def is_authenticated(self) -> bool:
        """Check whether the current token is accepted by the server.

        Returns False without a request when no token is configured.

        Raises:
            ServerRejected: The server refused the token and explained why.
            ServerUnreachable: The server could not be contacted.
            UnexpectedFailure: The server refused the token without a readable reason.
            APIError: Any other non-successful response.
        """
        token = self.token_source.resolve()
        if not token:
            return False
        return self.check_token(token)

    def login(self, login: str, password: str, description: str | None = None) -> str | None:
        """Log in and return the new access token.

        The token is *not* stored; call ``token_source.store(token)`` to keep it.
        A None result means the server accepted the request but issued no token.
        A successful response whose body is not JSON raises UnexpectedFailure.

        Raises:
            Unauthenticated: The login or password was rejected.
            ServerRejected, ServerUnreachable, UnexpectedFailure, APIError:
                As for :meth:`is_authenticated`.
        """
        credentials = Credentials(login=login, password=password, description=description)
        logger.info("Logging in '%s'", credentials.login)

        response = self._send(
            "POST",
            headers=build_headers(USER_AGENT),
            json={
                "user": {"login": credentials.login, "password": credentials.password},
                "token": {"description": credentials.description},
            },
            proxy=find_proxy(self._environ),
        )
        try:
            data = response.json()
        except ValueError as e:
            raise UnexpectedFailure(
                f"{response.status_code} {response.reason}: response body is not JSON: {response.text!r}"
            ) from e
        return data.get("token") if isinstance(data, dict) else None
