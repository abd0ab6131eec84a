"""Custom exceptions raised by the vagrant-login client."""

from __future__ import annotations

from collections.abc import Iterable


class VagrantLoginError(Exception):
    """Base exception for all client specific failures."""


class Unauthenticated(VagrantLoginError):
    """Raised when the server rejects the credentials or token (HTTP 401)."""

    def __init__(self, message: str = "Invalid or missing credentials") -> None:
        super().__init__(message)


class ServerRejected(VagrantLoginError):
    """Raised when the server refuses the request and explains why (HTTP 406)."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = tuple(messages)
        super().__init__("\n".join(self.messages))


class ServerUnreachable(VagrantLoginError):
    """Raised when the server cannot be reached at all (DNS or socket failure)."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"Unable to reach {address}")


class UnexpectedFailure(VagrantLoginError):
    """Raised when a rejection from the server could not be interpreted."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"An unexpected error occurred: {detail}")


class StorageFailure(VagrantLoginError):
    """Raised when the persisted token cannot be read, written or removed."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class APIError(VagrantLoginError):
    """Raised for non-successful responses that have no more specific class."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:  # pragma: no cover - repr helper
        return f"{self.status_code}: {self.message}"
