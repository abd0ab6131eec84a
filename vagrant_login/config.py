"""Configuration helpers for the vagrant-login client."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DEFAULT_SERVER_URL = "https://vagrantcloud.com"
DEFAULT_TIMEOUT_SECONDS = 30.0

SERVER_URL_ENV = "VAGRANT_SERVER_URL"
HOME_ENV = "VAGRANT_HOME"

# Checked in order, first non-empty value wins.
PROXY_ENV_VARS = ("HTTPS_PROXY", "https_proxy", "HTTP_PROXY", "http_proxy")

try:
    __version__ = version("vagrant-login")
except PackageNotFoundError:
    __version__ = "0.1.0"

USER_AGENT = f"vagrant-login/{__version__} (+https://www.vagrantup.com; python)"


def sanitize_base_url(url: str) -> str:
    """Ensure the base URL never ends with a trailing slash."""

    return url.rstrip("/")


def get_server_url(environ: Mapping[str, str] | None = None) -> str:
    """Return the account service URL, honoring ``VAGRANT_SERVER_URL``."""
    env = os.environ if environ is None else environ
    return sanitize_base_url(env.get(SERVER_URL_ENV) or DEFAULT_SERVER_URL)


def get_data_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return the tool's data directory (``$VAGRANT_HOME/data``, default ``~/.vagrant.d/data``)."""
    env = os.environ if environ is None else environ
    home = env.get(HOME_ENV)
    root = Path(home).expanduser() if home else Path.home() / ".vagrant.d"
    return root / "data"


def find_proxy(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the outbound proxy from the environment, HTTPS before HTTP."""
    env = os.environ if environ is None else environ
    for name in PROXY_ENV_VARS:
        value = env.get(name)
        if value:
            return value
    return None
