"""Box authentication exceptions."""

from boxshell.exceptions import BoxShellError


class AuthError(BoxShellError):
    """Base exception for Box login failures."""

    pass


class AuthorizationDeniedError(AuthError):
    """Raised when the provider redirects back without an authorization code."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Authorization failed: {reason}")


class CanceledError(AuthError):
    """Raised when the login flow is interrupted before a code arrives."""

    pass


class TokenExchangeError(AuthError):
    """Raised when the authorization code cannot be exchanged for a token."""

    pass


class TokenStoreError(BoxShellError):
    """Base exception for token file problems."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class NotFoundError(TokenStoreError):
    """Raised when no token file exists at the expected path."""

    def __init__(self, path: str):
        super().__init__(path, f"Token file not found at {path}")


class CorruptError(TokenStoreError):
    """Raised when the token file exists but cannot be parsed."""

    def __init__(self, path: str, detail: str):
        self.detail = detail
        super().__init__(path, f"Token file at {path} is unreadable: {detail}")
