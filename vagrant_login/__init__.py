"""vagrant-login - access token resolution and login for Vagrant Cloud."""

from .auth import Credentials, TokenSource, TokenStatus, TokenStore
from .client import LoginClient
from .config import __version__
from .exceptions import (
    APIError,
    ServerRejected,
    ServerUnreachable,
    StorageFailure,
    Unauthenticated,
    UnexpectedFailure,
    VagrantLoginError,
)

__all__ = [
    "__version__",
    "LoginClient",
    "TokenSource",
    "TokenStore",
    "TokenStatus",
    "Credentials",
    "VagrantLoginError",
    "Unauthenticated",
    "ServerRejected",
    "ServerUnreachable",
    "UnexpectedFailure",
    "StorageFailure",
    "APIError",
]
