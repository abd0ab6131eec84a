"""Persisted token slot.

The token lives in a single file under the data directory
(``~/.vagrant.d/data/vagrant_login_token`` by default), owner-only permissions.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from ..exceptions import StorageFailure

logger = logging.getLogger(__name__)


class TokenStore:
    """Read, write and delete the token file at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        try:
            return self.path.exists()
        except OSError as e:
            raise StorageFailure(f"Could not access token at {self.path}: {e}") from e

    def read(self) -> bytes:
        try:
            return self.path.read_bytes()
        except OSError as e:
            raise StorageFailure(f"Could not read token from {self.path}: {e}") from e

    def write(self, data: bytes) -> None:
        """Replace the token file atomically.

        - Directory: 0700, only when this call creates it (the data directory is shared)
        - File: 0600 (owner read/write only)
        - Atomic: writes to temp file in same dir, then os.replace()
        """
        token_dir = self.path.parent
        try:
            if not token_dir.exists():
                token_dir.mkdir(parents=True, exist_ok=True)
                os.chmod(token_dir, 0o700)
            fd, tmp_path = tempfile.mkstemp(dir=token_dir, prefix=".token_", suffix=".tmp")
        except OSError as e:
            raise StorageFailure(f"Could not write token to {self.path}: {e}") from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self.path)
        except BaseException as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            if isinstance(e, OSError):
                raise StorageFailure(f"Could not write token to {self.path}: {e}") from e
            raise

    def delete(self) -> None:
        """Delete the token file if it exists."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageFailure(f"Could not remove token at {self.path}: {e}") from e
