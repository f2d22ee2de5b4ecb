"""Tests for the boxshell entry point."""

import io
import os
import sys
from unittest.mock import MagicMock, patch

import pytest

from boxshell import cli
from boxshell.auth import AuthorizationDeniedError


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run from an empty directory so no stray .env is picked up."""
    monkeypatch.chdir(tmp_path)


class TestStartupFailures:
    """Startup errors print Error: and exit 1."""

    def test_missing_credentials(self, capsys):
        with patch.dict(os.environ, {"XDG_DATA_HOME": "/data"}, clear=True):
            code = cli.main([])
        assert code == 1
        assert capsys.readouterr().err.startswith(
            "Error: BOX_CLIENT_ID and BOX_CLIENT_SECRET must be set"
        )

    def test_missing_data_dir(self, capsys):
        env = {"BOX_CLIENT_ID": "cid", "BOX_CLIENT_SECRET": "secret"}
        with patch.dict(os.environ, env, clear=True):
            code = cli.main([])
        assert code == 1
        assert "XDG_DATA_HOME and LOCALAPPDATA are not set" in capsys.readouterr().err

    def test_login_denied(self, capsys):
        with patch(
            "boxshell.cli.start_session", side_effect=AuthorizationDeniedError("access_denied")
        ):
            code = cli.main([])
        assert code == 1
        assert "Error: Authorization failed: access_denied" in capsys.readouterr().err

    def test_env_file_supplies_credentials(self, tmp_path):
        """Should read BOX_* values from .env in the working directory."""
        (tmp_path / ".env").write_text("BOX_CLIENT_ID=from-dotenv\nBOX_CLIENT_SECRET=s\n")
        env = {"XDG_DATA_HOME": str(tmp_path / "data")}
        with (
            patch.dict(os.environ, env, clear=True),
            patch("boxshell.auth.acquire_client") as acquire,
            patch("boxshell.cli.run_shell", return_value=0),
        ):
            code = cli.main([])

        assert code == 0
        config = acquire.call_args.args[0]
        assert config.client_id == "from-dotenv"
        assert config.token_path == tmp_path / "data" / "boxshell" / "tokens.json"


class TestShellRun:
    """Test the shell hand-off after login."""

    def test_clean_exit(self, monkeypatch, capsys):
        session = MagicMock()
        monkeypatch.setattr(sys, "stdin", io.StringIO("pwd\nexit\n"))
        with patch("boxshell.cli.start_session", return_value=session):
            code = cli.main([])

        assert code == 0
        assert capsys.readouterr().out == "box:/> /\nbox:/> "
        session.close.assert_called_once()

    def test_interrupt(self, capsys):
        session = MagicMock()
        with (
            patch("boxshell.cli.start_session", return_value=session),
            patch("boxshell.cli.run_shell", side_effect=KeyboardInterrupt),
        ):
            code = cli.main([])

        assert code == 130
        session.close.assert_called_once()
