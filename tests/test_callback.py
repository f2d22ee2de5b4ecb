"""Tests for the OAuth redirect listener, over a real loopback socket."""

import threading

import pytest
import requests

from boxshell.auth import AuthorizationDeniedError, CanceledError
from boxshell.auth.callback import CallbackListener

REDIRECT_URL = "http://127.0.0.1:0/oauth/callback"


@pytest.fixture
def http():
    """A requests session that ignores proxy settings from the environment."""
    session = requests.Session()
    session.trust_env = False
    yield session
    session.close()


def _callback_url(listener, query):
    return f"http://127.0.0.1:{listener.server_port}/oauth/callback?{query}"


class TestCallbackListener:
    """Test receiving the authorization redirect."""

    def test_receives_code(self, http):
        with CallbackListener(REDIRECT_URL, expected_state="state-token") as listener:
            response = http.get(_callback_url(listener, "code=abc123&state=state-token"))
            code = listener.wait_for_code(timeout=5)

        assert response.status_code == 200
        assert "Authentication successful" in response.text
        assert code == "abc123"

    def test_provider_error(self, http):
        """Should raise AuthorizationDeniedError when the provider sends an error."""
        with CallbackListener(REDIRECT_URL) as listener:
            response = http.get(_callback_url(listener, "error=access_denied"))
            with pytest.raises(AuthorizationDeniedError, match="access_denied"):
                listener.wait_for_code(timeout=5)

        assert response.status_code == 400

    def test_missing_code(self, http):
        with CallbackListener(REDIRECT_URL) as listener:
            http.get(_callback_url(listener, "state=state-token"))
            with pytest.raises(AuthorizationDeniedError, match="'code'"):
                listener.wait_for_code(timeout=5)

    def test_state_mismatch(self, http):
        with CallbackListener(REDIRECT_URL, expected_state="state-token") as listener:
            http.get(_callback_url(listener, "code=abc&state=forged"))
            with pytest.raises(AuthorizationDeniedError, match="state"):
                listener.wait_for_code(timeout=5)

    def test_other_paths_not_found(self, http):
        """Should answer 404 outside the redirect path and keep waiting."""
        with CallbackListener(REDIRECT_URL) as listener:
            response = http.get(f"http://127.0.0.1:{listener.server_port}/favicon.ico")
            assert response.status_code == 404
            with pytest.raises(CanceledError):
                listener.wait_for_code(timeout=0.3)

    def test_timeout(self):
        with CallbackListener(REDIRECT_URL) as listener, pytest.raises(CanceledError):
            listener.wait_for_code(timeout=0.3)

    def test_cancel_event(self):
        """Should stop waiting once the cancel event is set."""
        cancel = threading.Event()
        timer = threading.Timer(0.2, cancel.set)
        timer.start()
        try:
            with CallbackListener(REDIRECT_URL) as listener, pytest.raises(
                CanceledError, match="canceled"
            ):
                listener.wait_for_code(timeout=10, cancel=cancel)
        finally:
            timer.cancel()

    def test_socket_released_on_error(self):
        """Should close the listening socket even when the wait fails."""
        listener = CallbackListener(REDIRECT_URL)
        with pytest.raises(CanceledError), listener:
            listener.wait_for_code(timeout=0.1)

        assert listener._server.socket.fileno() == -1

    def test_parses_redirect_url(self):
        listener = CallbackListener("http://127.0.0.1:0/custom/path")
        try:
            assert listener.host == "127.0.0.1"
            assert listener.path == "/custom/path"
            assert listener.server_port > 0
        finally:
            listener.stop()
