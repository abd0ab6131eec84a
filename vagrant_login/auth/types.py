"""Typed values for authentication operations."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """Login name (or email) and password for a single login call. Never persisted."""

    login: str
    password: str = field(repr=False)
    description: str | None = None


@dataclass
class TokenStatus:
    """Which token is in effect and where it came from."""

    token: str | None = None
    masked_token: str | None = None
    source: str | None = None  # "env_var", "token_file", "legacy_env_var", or None
    token_path: str | None = None

    @property
    def present(self) -> bool:
        return bool(self.token)
