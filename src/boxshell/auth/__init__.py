"""Box OAuth authentication and token storage."""

from boxshell.auth.exceptions import (
    AuthError,
    AuthorizationDeniedError,
    CanceledError,
    CorruptError,
    NotFoundError,
    TokenExchangeError,
    TokenStoreError,
)
from boxshell.auth.oauth import BoxOAuth, acquire_client
from boxshell.auth.store import Token, load_token, save_token

__all__ = [
    "BoxOAuth",
    "acquire_client",
    "Token",
    "load_token",
    "save_token",
    "AuthError",
    "AuthorizationDeniedError",
    "CanceledError",
    "TokenExchangeError",
    "TokenStoreError",
    "NotFoundError",
    "CorruptError",
]
