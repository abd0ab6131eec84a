"""Token resolution and storage for the vagrant-login client."""

from .credentials import TokenSource, get_token_path, resolve_token
from .storage import TokenStore
from .types import Credentials, TokenStatus

__all__ = [
    "get_token_path",
    "resolve_token",
    "Credentials",
    "TokenSource",
    "TokenStatus",
    "TokenStore",
]
