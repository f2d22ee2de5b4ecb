"""Shared fixtures: an in-memory Box folder tree."""

import pytest

from boxshell.box import Folder, Item, RemoteError
from boxshell.config import BoxConfig


class FakeBoxClient:
    """Stands in for BoxClient, answering from a dict of folders.

    ``tree`` maps folder ID -> (name, parent ID, [child item dicts]).
    IDs listed in ``fail_get`` or ``fail_list`` raise RemoteError.
    """

    def __init__(self, tree):
        self.tree = tree
        self.fail_get: set[str] = set()
        self.fail_list: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def _ancestors(self, folder_id):
        chain = []
        parent = self.tree[folder_id][1]
        while parent is not None:
            chain.insert(0, {"type": "folder", "id": parent, "name": self.tree[parent][0]})
            parent = self.tree[parent][1]
        return chain

    def get_folder(self, folder_id):
        self.calls.append(("get_folder", folder_id))
        if folder_id in self.fail_get or folder_id not in self.tree:
            raise RemoteError("GET failed: 404 Not Found", status_code=404)
        name, _, children = self.tree[folder_id]
        return Folder.from_dict(
            {
                "type": "folder",
                "id": folder_id,
                "name": name,
                "path_collection": {
                    "total_count": len(self._ancestors(folder_id)),
                    "entries": self._ancestors(folder_id),
                },
                "item_collection": {"entries": children},
            }
        )

    def list_children(self, folder_id):
        self.calls.append(("list_children", folder_id))
        if folder_id in self.fail_list or folder_id not in self.tree:
            raise RemoteError("GET failed: 500 Internal Server Error", status_code=500)
        return [Item.from_dict(entry) for entry in self.tree[folder_id][2]]


@pytest.fixture
def box_tree():
    """Root with Reports/2024 folders, a few files, and a file named like a folder."""
    return {
        "0": (
            "All Files",
            None,
            [
                {"type": "folder", "id": "111", "name": "Reports"},
                {"type": "file", "id": "333", "name": "notes.txt"},
                {"type": "file", "id": "555", "name": "Archive"},
            ],
        ),
        "111": (
            "Reports",
            "0",
            [
                {"type": "file", "id": "222", "name": "q1.pdf"},
                {"type": "folder", "id": "444", "name": "2024"},
            ],
        ),
        "444": ("2024", "111", [{"type": "folder", "id": "666", "name": "reports"}]),
        "666": ("reports", "444", []),
    }


@pytest.fixture
def fake_client(box_tree):
    return FakeBoxClient(box_tree)


@pytest.fixture
def box_config(tmp_path):
    """Config with a throwaway token path and an ephemeral redirect port."""
    return BoxConfig(
        client_id="test-client-id",
        client_secret="test-client-secret",
        token_path=tmp_path / "boxshell" / "tokens.json",
        redirect_url="http://127.0.0.1:0/oauth/callback",
    )
