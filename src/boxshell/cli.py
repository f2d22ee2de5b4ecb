"""CLI for boxshell - browse a Box account interactively.

Usage:
    boxshell                  # Log in if needed, then start the shell

Inside the shell:
    pwd                       # Print the current folder path
    ls                        # List the current folder
    cd <name> | cd .. | cd /  # Change folder
    exit                      # Quit (EOF also quits)

Configuration comes from the environment (or a .env file in the working
directory): BOX_CLIENT_ID, BOX_CLIENT_SECRET, optional BOX_REDIRECT_URL,
and XDG_DATA_HOME or LOCALAPPDATA for the token file.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from boxshell.exceptions import BoxShellError


def _configure_logging() -> None:
    level_name = os.environ.get("BOXSHELL_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def start_session():
    """Load configuration and return an authenticated session."""
    from boxshell.auth import acquire_client
    from boxshell.config import load_config

    config = load_config()
    return acquire_client(config)


def run_shell(session) -> int:
    """Run the interactive shell on an authenticated session."""
    from boxshell.box import BoxClient
    from boxshell.shell import Navigator, Shell

    shell = Shell(Navigator(BoxClient(session)))
    return shell.run()


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="boxshell",
        description="Browse a Box account with pwd, ls and cd",
    )
    parser.parse_args(argv if argv is not None else sys.argv[1:])

    from boxshell.config import load_env_file

    load_env_file(Path.cwd() / ".env")
    _configure_logging()

    try:
        session = start_session()
    except BoxShellError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nError: login interrupted", file=sys.stderr)
        return 1

    try:
        return run_shell(session)
    except KeyboardInterrupt:
        print()
        return 130
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
