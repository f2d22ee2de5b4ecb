"""Configuration loaded from environment variables.

Box application credentials come from the environment:
    BOX_CLIENT_ID       - OAuth client ID (required)
    BOX_CLIENT_SECRET   - OAuth client secret (required)
    BOX_REDIRECT_URL    - OAuth redirect URL (optional)
    BOX_SCOPES          - Space separated scopes (optional)

Tokens are stored under the per-user data directory:
    $XDG_DATA_HOME/boxshell/tokens.json
    %LOCALAPPDATA%/boxshell/tokens.json  (when XDG_DATA_HOME is unset)

A .env file in the working directory is honored by the CLI, with real
environment variables taking precedence.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from boxshell.exceptions import ConfigurationError

DEFAULT_REDIRECT_URL = "http://localhost:8585/oauth/callback"
DEFAULT_SCOPES = "root_readwrite manage_managed_users"

APP_DIR_NAME = "boxshell"
TOKEN_FILE_NAME = "tokens.json"
DATA_DIR_VARS = ("XDG_DATA_HOME", "LOCALAPPDATA")


@dataclass(frozen=True)
class BoxConfig:
    """Box OAuth application settings and token location."""

    client_id: str
    client_secret: str
    token_path: Path
    redirect_url: str = DEFAULT_REDIRECT_URL
    scopes: str = DEFAULT_SCOPES


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            # Env vars take precedence
            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


def get_token_path() -> Path:
    """Resolve the token file location from the data directory variables.

    Returns:
        Path to tokens.json under the first non-empty data directory.

    Raises:
        ConfigurationError: If neither XDG_DATA_HOME nor LOCALAPPDATA is set.
    """
    for var in DATA_DIR_VARS:
        data_dir = os.environ.get(var)
        if data_dir:
            return Path(data_dir) / APP_DIR_NAME / TOKEN_FILE_NAME

    raise ConfigurationError(f"{' and '.join(DATA_DIR_VARS)} are not set")


def load_config() -> BoxConfig:
    """Construct a BoxConfig from environment variables.

    Returns:
        Configured BoxConfig instance.

    Raises:
        ConfigurationError: If client credentials or the data directory are missing.
    """
    client_id = os.environ.get("BOX_CLIENT_ID", "")
    client_secret = os.environ.get("BOX_CLIENT_SECRET", "")

    if not client_id or not client_secret:
        raise ConfigurationError("BOX_CLIENT_ID and BOX_CLIENT_SECRET must be set")

    return BoxConfig(
        client_id=client_id,
        client_secret=client_secret,
        token_path=get_token_path(),
        redirect_url=os.environ.get("BOX_REDIRECT_URL") or DEFAULT_REDIRECT_URL,
        scopes=os.environ.get("BOX_SCOPES") or DEFAULT_SCOPES,
    )
