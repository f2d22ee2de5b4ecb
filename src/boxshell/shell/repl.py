"""Read-eval-print loop for browsing Box."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from boxshell.exceptions import BoxShellError
from boxshell.shell.navigator import Navigator

logger = logging.getLogger(__name__)


class Shell:
    """Line-oriented command loop over a Navigator.

    Commands:
        pwd             Print the current path
        ls              List the current folder
        cd [target]     Change folder ("/", "..", or a child folder name)
        exit            Leave the shell
    """

    def __init__(
        self,
        navigator: Navigator,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        self.navigator = navigator
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

        self._commands = {
            "pwd": self.do_pwd,
            "ls": self.do_ls,
            "cd": self.do_cd,
        }

    @property
    def prompt(self) -> str:
        return f"box:{self.navigator.path}> "

    def run(self) -> int:
        """Read commands until EOF or ``exit``.

        Returns:
            Process exit code (always 0).
        """
        while True:
            self.stdout.write(self.prompt)
            self.stdout.flush()

            line = self.stdin.readline()
            if not line:
                self.stdout.write("\n")
                return 0

            parts = line.split()
            if not parts:
                continue

            command, args = parts[0], parts[1:]
            if command == "exit":
                return 0

            self.dispatch(command, args)

    def dispatch(self, command: str, args: list[str]) -> None:
        """Run one command, reporting failures without leaving the loop."""
        handler = self._commands.get(command)
        if handler is None:
            print(f"Unknown command: {command}", file=self.stdout)
            return

        try:
            handler(args)
        except BoxShellError as e:
            logger.debug(f"{command} failed: {e!r}")
            print(f"Error: {e}", file=self.stderr)

    def do_pwd(self, args: list[str]) -> None:
        print(self.navigator.pwd(), file=self.stdout)

    def do_ls(self, args: list[str]) -> None:
        for item in self.navigator.ls():
            print(f"[{item.type}] {item.name}", file=self.stdout)

    def do_cd(self, args: list[str]) -> None:
        # Bare "cd" stays put
        self.navigator.cd(args[0] if args else None)
