"""Box API exceptions."""

from boxshell.exceptions import BoxShellError


class BoxAPIError(BoxShellError):
    """Base exception for Box API failures."""

    pass


class RemoteError(BoxAPIError):
    """Raised when a Box API request fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class DecodeError(BoxAPIError):
    """Raised when a Box API response body cannot be decoded."""

    pass


class FolderNotFoundError(BoxAPIError):
    """Raised when a named child folder does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"directory not found: {name}")
