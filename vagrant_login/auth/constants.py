"""Constants for token resolution and storage."""

from __future__ import annotations

# Token sources, highest precedence first (the token file sits between them).
TOKEN_ENV = "VAGRANT_CLOUD_TOKEN"
LEGACY_TOKEN_ENV = "ATLAS_TOKEN"

# Credential storage, relative to the data directory
TOKEN_FILE = "vagrant_login_token"

# Token sources reported by TokenSource.status()
SOURCE_ENV_VAR = "env_var"
SOURCE_TOKEN_FILE = "token_file"
SOURCE_LEGACY_ENV_VAR = "legacy_env_var"

# Auth API
AUTHENTICATE_ENDPOINT = "/api/v1/authenticate"

# Advisory messages
WARNING_TOKEN_CONFLICT = (
    f"Detected both the {TOKEN_ENV} environment variable and a stored login token. "
    f"The {TOKEN_ENV} environment variable takes precedence over the locally stored token. "
    f"To remove this warning, either unset {TOKEN_ENV} or remove the login token stored on disk:\n\n"
    "    {path}\n"
)
WARNING_LEGACY_TOKEN = (
    f"{LEGACY_TOKEN_ENV} detected within environment. "
    f"Using {LEGACY_TOKEN_ENV} in place of {TOKEN_ENV}; {LEGACY_TOKEN_ENV} is deprecated."
)
