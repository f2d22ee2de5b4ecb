"""Box API client for read-only folder browsing."""

from __future__ import annotations

import logging
from typing import Any

import requests
from authlib.common.errors import AuthlibBaseError

from boxshell.box.exceptions import DecodeError, RemoteError
from boxshell.box.models import Folder, Item

logger = logging.getLogger(__name__)


class BoxClient:
    """Box API client over an authenticated session.

    Every call is a fresh round trip; nothing is cached or retried.

    Example:
        >>> client = BoxClient(acquire_client(load_config()))
        >>> for item in client.list_children("0"):
        ...     print(item.type, item.name)
    """

    BASE_URL = "https://api.box.com/2.0"

    def __init__(self, session: requests.Session, base_url: str | None = None):
        """Initialize Box client.

        Args:
            session: Session that attaches bearer credentials, normally an
                Authlib OAuth2Session.
            base_url: API root. Defaults to the public Box API.
        """
        self.session = session
        self.base_url = (base_url or self.BASE_URL).rstrip("/")

    def _get(self, endpoint: str) -> Any:
        """Make an authenticated GET request.

        Args:
            endpoint: API endpoint (e.g., "/folders/0").

        Returns:
            Decoded JSON body.

        Raises:
            RemoteError: If the request fails or returns a non-2xx status.
            DecodeError: If the body is not JSON.
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url)
        except AuthlibBaseError as e:
            raise RemoteError(f"Token refresh failed: {e}") from e
        except requests.RequestException as e:
            raise RemoteError(f"Request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise RemoteError(
                f"GET {endpoint} failed: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON from {endpoint}: {e}") from e

    def get_folder(self, folder_id: str) -> Folder:
        """Get a folder's metadata, including its ancestors.

        Args:
            folder_id: Box folder ID ("0" is the root).

        Returns:
            Folder snapshot.
        """
        return Folder.from_dict(self._get(f"/folders/{folder_id}"))

    def list_children(self, folder_id: str) -> list[Item]:
        """List a folder's immediate children (first page only).

        Args:
            folder_id: Box folder ID ("0" is the root).

        Returns:
            Items in the order Box returns them.
        """
        data = self._get(f"/folders/{folder_id}/items")

        entries = data.get("entries") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise DecodeError(f"Malformed item listing for folder {folder_id}: missing 'entries'")

        return [Item.from_dict(entry) for entry in entries]
