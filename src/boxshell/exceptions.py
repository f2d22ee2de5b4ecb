"""Base exceptions shared by every boxshell component."""


class BoxShellError(Exception):
    """Base exception for all boxshell errors."""

    pass


class ConfigurationError(BoxShellError):
    """Raised when required configuration is missing from the environment."""

    pass
