"""Box OAuth management using Authlib.

This module provides OAuth 2.0 authentication for the Box API with:
- Authorization-code login through a local redirect listener
- Automatic token refresh, with every refreshed token written back to disk
- An authenticated requests session ready for Box API calls
"""

from __future__ import annotations

import logging
import threading
import webbrowser
from datetime import datetime, timezone
from typing import Any

import requests
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.requests_client import OAuth2Session

from boxshell.auth.callback import CallbackListener
from boxshell.auth.exceptions import AuthError, TokenExchangeError, TokenStoreError
from boxshell.auth.store import Token, load_token, save_token
from boxshell.config import BoxConfig

logger = logging.getLogger(__name__)

DEFAULT_LOGIN_TIMEOUT = 300


class BoxOAuth:
    """Box OAuth management using Authlib.

    Handles the authorization-code flow, token persistence, and
    construction of the authenticated session.

    Example:
        >>> auth = BoxOAuth(load_config())
        >>> if not auth.is_authorized():
        ...     auth.authorize()
        >>> session = auth.session
    """

    AUTHORIZE_URL = "https://account.box.com/api/oauth2/authorize"
    TOKEN_URL = "https://api.box.com/oauth2/token"
    STATE = "state-token"

    def __init__(self, config: BoxConfig):
        """Initialize Box OAuth.

        Args:
            config: Client credentials, redirect URL and token location.
        """
        self.config = config
        self.token_path = config.token_path

        self.session = OAuth2Session(
            client_id=config.client_id,
            client_secret=config.client_secret,
            scope=config.scopes,
            redirect_uri=config.redirect_url,
            token=self._load_token(),
            update_token=self._save_token,
            token_endpoint=self.TOKEN_URL,
            token_endpoint_auth_method="client_secret_post",
        )

        self.last_refresh: datetime | None = None
        self.refresh_count = 0

    def _load_token(self) -> dict[str, Any] | None:
        """Load token from storage; a missing or unreadable file means no token."""
        try:
            token = load_token(self.token_path)
        except TokenStoreError as e:
            logger.warning(f"No usable token: {e}")
            return None
        return token.to_authlib()

    def _save_token(
        self,
        token: dict[str, Any],
        refresh_token: str | None = None,
        access_token: str | None = None,
    ):
        """Save token to storage (Authlib callback)."""
        save_token(self.token_path, Token.from_authlib(token))

        self.last_refresh = datetime.now(timezone.utc)
        self.refresh_count += 1

    def is_authorized(self) -> bool:
        """Check whether a token is loaded.

        An expired access token still counts when a refresh token is present,
        since the session refreshes it on the next request.
        """
        token = self.session.token
        if not token or not token.get("access_token"):
            return False
        return bool(token.get("refresh_token")) or not token.is_expired()

    def get_authorization_url(self) -> str:
        """Build the URL the user visits to grant access.

        Returns:
            Authorization URL with the fixed state and offline access requested.
        """
        authorization_url, _ = self.session.create_authorization_url(
            self.AUTHORIZE_URL,
            state=self.STATE,
            access_type="offline",
        )
        return authorization_url

    def fetch_token(self, code: str) -> dict[str, Any]:
        """Exchange an authorization code for a token and persist it.

        Args:
            code: Authorization code received on the redirect.

        Returns:
            The fetched OAuth token dict.

        Raises:
            TokenExchangeError: If the provider rejects the code or the request fails.
        """
        try:
            token = self.session.fetch_token(
                self.TOKEN_URL,
                code=code,
                grant_type="authorization_code",
            )
        except (AuthlibBaseError, requests.RequestException) as e:
            raise TokenExchangeError(f"Failed to exchange authorization code: {e}") from e

        self._save_token(token)
        return token

    def authorize(
        self,
        timeout: float | None = DEFAULT_LOGIN_TIMEOUT,
        cancel: threading.Event | None = None,
        open_browser: bool = True,
    ) -> dict[str, Any]:
        """Run the interactive login through a local redirect listener.

        Args:
            timeout: Seconds to wait for the redirect.
            cancel: Event that aborts the wait when set.
            open_browser: Launch the default browser on the authorization URL.

        Returns:
            The fetched OAuth token dict.

        Raises:
            AuthError: If the listener cannot bind its address.
            AuthorizationDeniedError: If the provider reports an error.
            CanceledError: If canceled, interrupted, or timed out.
            TokenExchangeError: If the code exchange fails.
        """
        url = self.get_authorization_url()

        try:
            listener = CallbackListener(self.config.redirect_url, expected_state=self.STATE)
        except OSError as e:
            raise AuthError(
                f"Could not listen on redirect URL {self.config.redirect_url}: {e}"
            ) from e

        with listener:
            print(f"Visit the following URL to authorize boxshell:\n{url}\n")
            if open_browser:
                _open_browser(url)
            code = listener.wait_for_code(timeout=timeout, cancel=cancel)

        return self.fetch_token(code)

    def logout(self) -> None:
        """Forget the current token and delete the token file."""
        self.session.token = None
        if self.token_path.exists():
            self.token_path.unlink()
        logger.info("Token removed")


def _open_browser(url: str) -> None:
    """Open the URL in the default browser; failure only costs convenience."""
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        logger.warning(f"Failed to open browser: {e}")
        opened = False

    if not opened:
        print("Failed to open browser, please visit the URL manually.")


def acquire_client(
    config: BoxConfig,
    cancel: threading.Event | None = None,
    timeout: float | None = DEFAULT_LOGIN_TIMEOUT,
) -> OAuth2Session:
    """Return an authenticated session, logging in first if no token is stored.

    Args:
        config: Box application configuration.
        cancel: Event that aborts an interactive login when set.
        timeout: Seconds to wait for the login redirect.

    Returns:
        OAuth2Session that attaches bearer credentials and refreshes them.
    """
    auth = BoxOAuth(config)

    if not auth.is_authorized():
        print("No token found. Starting new authentication flow.")
        auth.authorize(timeout=timeout, cancel=cancel)
        print(f"Authentication successful. Token saved to {auth.token_path}")

    return auth.session
