"""Current-directory state and the pwd/ls/cd operations."""

from __future__ import annotations

from dataclasses import dataclass

from boxshell.box.client import BoxClient
from boxshell.box.exceptions import FolderNotFoundError
from boxshell.box.models import ROOT_FOLDER_ID, Item

PARENT = ".."
ROOT = "/"


@dataclass(frozen=True)
class SessionState:
    """Where the shell currently is.

    ``path`` always names ``folder_id``; both are replaced together.
    """

    folder_id: str = ROOT_FOLDER_ID
    path: str = "/"


class Navigator:
    """Tracks the current Box folder and moves through the tree one hop at a time.

    A failed ``cd`` leaves the state exactly as it was: the new state is only
    assigned once both the target ID and its path have been resolved.
    """

    def __init__(self, client: BoxClient, state: SessionState | None = None):
        self.client = client
        self.state = state or SessionState()

    @property
    def folder_id(self) -> str:
        return self.state.folder_id

    @property
    def path(self) -> str:
        return self.state.path

    def pwd(self) -> str:
        return self.state.path

    def ls(self) -> list[Item]:
        return self.client.list_children(self.state.folder_id)

    def cd(self, target: str | None) -> None:
        """Change the current folder.

        Args:
            target: "/" for the root, ".." for the parent, or a child folder
                name (exact, case-sensitive). None or "" does nothing.

        Raises:
            FolderNotFoundError: If no child folder has that name.
            BoxAPIError: If a remote call fails.
        """
        if not target:
            return

        if target == ROOT:
            folder_id = ROOT_FOLDER_ID
        elif target == PARENT:
            if self.state.folder_id == ROOT_FOLDER_ID:
                return
            folder_id = self.client.get_folder(self.state.folder_id).parent_id
        else:
            folder_id = self._find_child_folder(target).id

        self.state = SessionState(folder_id=folder_id, path=self.resolve_path(folder_id))

    def _find_child_folder(self, name: str) -> Item:
        for item in self.client.list_children(self.state.folder_id):
            if item.is_folder and item.name == name:
                return item
        raise FolderNotFoundError(name)

    def resolve_path(self, folder_id: str) -> str:
        """Fetch a folder's display path from Box; the root needs no request."""
        if folder_id == ROOT_FOLDER_ID:
            return "/"
        return self.client.get_folder(folder_id).display_path
