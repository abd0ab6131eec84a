"""Token resolution for the vagrant-login client.

A token can come from three places. They are checked in a fixed order:
``VAGRANT_CLOUD_TOKEN`` > stored token file > ``ATLAS_TOKEN``.
Nothing is cached; every resolution re-reads the environment and the file.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable

from ..config import get_data_dir
from ..exceptions import StorageFailure
from .constants import (
    LEGACY_TOKEN_ENV,
    SOURCE_ENV_VAR,
    SOURCE_LEGACY_ENV_VAR,
    SOURCE_TOKEN_FILE,
    TOKEN_ENV,
    TOKEN_FILE,
    WARNING_LEGACY_TOKEN,
    WARNING_TOKEN_CONFLICT,
)
from .storage import TokenStore
from .types import TokenStatus

logger = logging.getLogger(__name__)


def get_token_path(environ: Mapping[str, str] | None = None) -> Path:
    return get_data_dir(environ) / TOKEN_FILE


def _is_present(value: str | None) -> bool:
    return bool(value and value.strip())


def _mask_token(token: str) -> str:
    if len(token) >= 16:
        return token[:4] + "..." + token[-4:]
    if len(token) >= 8:
        return token[:4] + "..."
    return "***"


class TokenSource:
    """Resolves the current access token and manages the stored one.

    Args:
        environ: Read-only environment lookup (default: ``os.environ``).
        store: Persisted token slot (default: the token file in the data directory).
        warn: Receives advisory messages (default: logged as warnings).
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        store: TokenStore | None = None,
        warn: Callable[[str], None] | None = None,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._store = store or TokenStore(get_token_path(self._environ))
        self._warn = warn or logger.warning

    @property
    def path(self) -> Path:
        return self._store.path

    def _read_stored(self) -> str:
        data = self._store.read()
        try:
            return data.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise StorageFailure(f"Stored token at {self.path} is not valid UTF-8") from e

    def _resolve(self) -> tuple[str | None, str | None]:
        env_token = self._environ.get(TOKEN_ENV)
        stored = self._store.exists()

        if _is_present(env_token) and stored:
            self._warn(WARNING_TOKEN_CONFLICT.format(path=self.path))

        if _is_present(env_token):
            logger.debug("Using authentication token from environment variable")
            return env_token, SOURCE_ENV_VAR

        if stored:
            logger.debug("Using authentication token from disk at %s", self.path)
            return self._read_stored(), SOURCE_TOKEN_FILE

        legacy_token = self._environ.get(LEGACY_TOKEN_ENV)
        if _is_present(legacy_token):
            self._warn(WARNING_LEGACY_TOKEN)
            return legacy_token, SOURCE_LEGACY_ENV_VAR

        logger.debug("No authentication token in environment or %s", self.path)
        return None, None

    def resolve(self) -> str | None:
        """Return the token in effect, or None if there is none."""
        token, _ = self._resolve()
        return token

    def status(self) -> TokenStatus:
        """Resolve the token and report which source supplied it."""
        token, source = self._resolve()
        return TokenStatus(
            token=token,
            masked_token=_mask_token(token) if token else None,
            source=source,
            token_path=str(self.path),
        )

    def store(self, token: str) -> None:
        """Store the given token, replacing any previous one."""
        logger.info("Storing token in %s", self.path)
        self._store.write(token.encode("utf-8"))

    def clear(self) -> None:
        """Remove the stored token. Missing tokens are not an error."""
        logger.info("Clearing token")
        self._store.delete()


def resolve_token(environ: Mapping[str, str] | None = None) -> str | None:
    """Resolve a token using the standard precedence chain.

    Returns None if no token is found (caller decides error behavior).
    """
    return TokenSource(environ).resolve()
