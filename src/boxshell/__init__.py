"""boxshell - browse a Box account with pwd, ls and cd."""

__version__ = "0.1.0"
