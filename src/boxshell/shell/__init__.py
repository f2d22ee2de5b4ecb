"""Interactive navigation over a Box account."""

from boxshell.shell.navigator import Navigator, SessionState
from boxshell.shell.repl import Shell

__all__ = [
    "Navigator",
    "SessionState",
    "Shell",
]
