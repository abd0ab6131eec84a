"""HTTP transport and response classification shared by the login client."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Union

import httpx

from .config import DEFAULT_TIMEOUT_SECONDS
from .exceptions import (
    APIError,
    ServerRejected,
    ServerUnreachable,
    Unauthenticated,
    UnexpectedFailure,
    VagrantLoginError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """A completed request: the server answered with some status."""

    status_code: int
    body: bytes = b""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.body)


@dataclass(frozen=True)
class ConnectionFailure:
    """The server could not be reached (DNS lookup or socket connect failed)."""

    detail: str


TransportOutcome = Union[HttpResponse, ConnectionFailure]


class HttpTransport:
    """Sends one request per call over a short-lived ``httpx.Client``.

    Redirects are followed for GET requests only.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._timeout = timeout

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        json: Any = None,
        proxy: str | None = None,
    ) -> TransportOutcome:
        try:
            with httpx.Client(
                timeout=self._timeout,
                proxy=proxy,
                follow_redirects=method.upper() == "GET",
            ) as client:
                response = client.request(method, url, headers=headers, params=params, json=json)
        except httpx.ConnectError as e:
            logger.info("Connection to %s failed: %s", url, e)
            return ConnectionFailure(detail=str(e))

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return HttpResponse(
            status_code=response.status_code,
            body=response.content,
            reason=response.reason_phrase,
        )


def _rejection_messages(response: HttpResponse) -> list[str] | None:
    try:
        data = response.json()
    except ValueError:
        return None
    errors = data.get("errors") if isinstance(data, dict) else None
    if not isinstance(errors, list):
        return None
    return [str(e) for e in errors]


def classify(outcome: TransportOutcome, *, address: str) -> VagrantLoginError | None:
    """Map a transport outcome to ``None`` (success) or the error it represents.

    ``address`` is the configured server URL reported when the server is unreachable.
    """
    if isinstance(outcome, ConnectionFailure):
        return ServerUnreachable(address)

    if outcome.ok:
        return None

    if outcome.status_code == 401:
        logger.debug("Unauthorized!")
        return Unauthenticated()

    if outcome.status_code == 406:
        logger.debug("Got unacceptable response: %s", outcome.text)
        messages = _rejection_messages(outcome)
        if messages is not None:
            return ServerRejected(messages)
        status_line = f"{outcome.status_code} {outcome.reason}".strip()
        return UnexpectedFailure(f"{status_line}: {outcome.text}")

    return APIError(
        message=outcome.text or outcome.reason or "Request failed",
        status_code=outcome.status_code,
    )


def build_headers(user_agent: str | None = None) -> dict[str, str]:
    """Build JSON request headers, optionally identifying the client."""
    headers = {"Accept": "application/json", "Content-Type": "application/json"}
    if user_agent:
        headers["User-Agent"] = user_agent
    return headers
