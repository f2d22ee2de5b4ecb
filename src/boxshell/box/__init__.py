"""Box API client utilities."""

from boxshell.box.client import BoxClient
from boxshell.box.exceptions import BoxAPIError, DecodeError, FolderNotFoundError, RemoteError
from boxshell.box.models import ROOT_FOLDER_ID, Folder, Item, PathEntry

__all__ = [
    "BoxClient",
    "Folder",
    "Item",
    "PathEntry",
    "ROOT_FOLDER_ID",
    "BoxAPIError",
    "RemoteError",
    "DecodeError",
    "FolderNotFoundError",
]
