"""Token persistence for the Box OAuth flow.

Tokens are stored as JSON:
    {
      "access_token": "...",
      "token_type": "Bearer",
      "refresh_token": "...",
      "expiry": "2030-01-01T00:00:00+00:00"
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from boxshell.auth.exceptions import CorruptError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class Token:
    """OAuth2 token as persisted on disk."""

    access_token: str
    refresh_token: str | None = None
    token_type: str = "Bearer"
    expiry: datetime | None = None

    @property
    def is_expired(self) -> bool:
        """Whether the access token has passed its expiry."""
        if self.expiry is None:
            return False
        return self.expiry <= datetime.now(timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the on-disk JSON shape."""
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "refresh_token": self.refresh_token,
            "expiry": self.expiry.isoformat() if self.expiry else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Token:
        """Build a Token from the on-disk JSON shape.

        Raises:
            KeyError: If access_token is missing.
            ValueError: If expiry is not an ISO-8601 timestamp.
        """
        expiry = data.get("expiry")
        if expiry:
            dt = datetime.fromisoformat(expiry.replace("Z", "+00:00"))
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            expiry = dt
        else:
            expiry = None

        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            token_type=data.get("token_type") or "Bearer",
            expiry=expiry,
        )

    def to_authlib(self) -> dict[str, Any]:
        """Convert to the token dict Authlib sessions expect."""
        token: dict[str, Any] = {
            "access_token": self.access_token,
            "token_type": self.token_type,
        }
        if self.refresh_token:
            token["refresh_token"] = self.refresh_token
        if self.expiry:
            token["expires_at"] = int(self.expiry.timestamp())
        return token

    @classmethod
    def from_authlib(cls, token: dict[str, Any]) -> Token:
        """Convert an Authlib token dict, which carries expires_at in epoch seconds."""
        expires_at = token.get("expires_at")
        expiry = datetime.fromtimestamp(expires_at, tz=timezone.utc) if expires_at else None
        return cls(
            access_token=token["access_token"],
            refresh_token=token.get("refresh_token"),
            token_type=token.get("token_type") or "Bearer",
            expiry=expiry,
        )


def save_token(path: str | Path, token: Token) -> None:
    """Write a token to disk, replacing any existing file.

    The parent directory is created readable by the owner only.

    Args:
        path: Destination file.
        token: Token to persist.
    """
    path = Path(path)
    path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    with open(path, "w") as f:
        json.dump(token.to_dict(), f, indent=2)

    logger.info(f"Token saved to {path}")


def load_token(path: str | Path) -> Token:
    """Read a token from disk.

    Args:
        path: Token file location.

    Returns:
        The stored token.

    Raises:
        NotFoundError: If the file does not exist.
        CorruptError: If the file is not a valid token record.
    """
    path = Path(path)
    if not path.exists():
        raise NotFoundError(str(path))

    try:
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        token = Token.from_dict(data)
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
        raise CorruptError(str(path), str(e)) from e

    logger.info(f"Loaded token from {path}")
    return token
