"""Local HTTP listener that receives the OAuth redirect.

Each listener builds its own handler class, so concurrent or repeated
logins never share routing state.
"""

from __future__ import annotations

import logging
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from urllib.parse import parse_qs, urlparse

from boxshell.auth.exceptions import AuthorizationDeniedError, CanceledError

logger = logging.getLogger(__name__)

SUCCESS_PAGE = "Authentication successful! You can close this window."
FAILURE_PAGE = "Authentication failed. You can close this window."


class CallbackListener:
    """One-shot listener for the authorization code redirect.

    Example:
        >>> with CallbackListener("http://localhost:8585/oauth/callback") as listener:
        ...     webbrowser.open(authorization_url)
        ...     code = listener.wait_for_code(timeout=300)
    """

    POLL_INTERVAL = 0.1

    def __init__(self, redirect_url: str, expected_state: str | None = None):
        """Parse the redirect URL and bind the listener socket.

        Args:
            redirect_url: OAuth redirect URL; its host, port and path are served.
            expected_state: If given, callbacks with a different state are rejected.
        """
        parsed = urlparse(redirect_url)
        self.host = parsed.hostname or "localhost"
        self.port = parsed.port if parsed.port is not None else 80
        self.path = parsed.path or "/"
        self.expected_state = expected_state

        self._done = threading.Event()
        self._code: str | None = None
        self._error: str | None = None
        self._thread: threading.Thread | None = None
        self._server = HTTPServer((self.host, self.port), self._make_handler())

    @property
    def server_port(self) -> int:
        """Port actually bound, useful when the redirect URL asks for port 0."""
        return self._server.server_address[1]

    def _make_handler(self) -> type[BaseHTTPRequestHandler]:
        listener = self

        class _CallbackHandler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:
                request = urlparse(self.path)
                if request.path != listener.path:
                    self.send_error(404)
                    return

                _, code = listener._handle_query(parse_qs(request.query))
                self.send_response(200 if code else 400)
                self.send_header("Content-Type", "text/plain; charset=utf-8")
                self.end_headers()
                self.wfile.write((SUCCESS_PAGE if code else FAILURE_PAGE).encode())

            def log_message(self, format: str, *args) -> None:
                logger.debug("callback listener: " + format, *args)

        return _CallbackHandler

    def _handle_query(self, query: dict[str, list[str]]) -> tuple[str | None, str | None]:
        """Record the outcome of a callback request; the first outcome wins."""
        error = query.get("error", [None])[0]
        code = query.get("code", [None])[0]
        state = query.get("state", [None])[0]

        if error:
            description = query.get("error_description", [None])[0]
            outcome_error = f"{error}: {description}" if description else error
            code = None
        elif not code:
            outcome_error = "did not find 'code' query parameter"
        elif self.expected_state is not None and state != self.expected_state:
            outcome_error = "state parameter mismatch"
            code = None
        else:
            outcome_error = None

        if not self._done.is_set():
            self._code = code
            self._error = outcome_error
            self._done.set()

        return outcome_error, code

    def start(self) -> None:
        """Serve requests on a background thread."""
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()
        logger.info(f"Callback listener started on {self.host}:{self.server_port}{self.path}")

    def stop(self) -> None:
        """Stop serving and release the socket."""
        if self._thread is not None:
            self._server.shutdown()
            self._thread.join()
            self._thread = None
        self._server.server_close()
        logger.info("Callback listener stopped")

    def __enter__(self) -> CallbackListener:
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()

    def wait_for_code(
        self,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> str:
        """Block until the redirect arrives.

        Args:
            timeout: Seconds to wait before giving up. None waits indefinitely.
            cancel: Event that aborts the wait when set.

        Returns:
            The authorization code.

        Raises:
            AuthorizationDeniedError: If the provider returned an error.
            CanceledError: If canceled, interrupted, or timed out.
        """
        waited = 0.0
        try:
            while not self._done.wait(self.POLL_INTERVAL):
                if cancel is not None and cancel.is_set():
                    raise CanceledError("Authorization canceled")
                waited += self.POLL_INTERVAL
                if timeout is not None and waited >= timeout:
                    raise CanceledError(f"No authorization received within {timeout} seconds")
        except KeyboardInterrupt as e:
            raise CanceledError("Authorization interrupted") from e

        if self._error:
            raise AuthorizationDeniedError(self._error)
        return self._code
