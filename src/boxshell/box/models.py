"""Data models for Box folders and folder items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from boxshell.box.exceptions import DecodeError

ROOT_FOLDER_ID = "0"

# Box API item types
TYPE_FOLDER = "folder"
TYPE_FILE = "file"


def _require(data: Any, key: str, kind: str) -> Any:
    if not isinstance(data, dict):
        raise DecodeError(f"Malformed {kind}: expected an object, got {type(data).__name__}")
    if key not in data:
        raise DecodeError(f"Malformed {kind}: missing '{key}'")
    return data[key]


def _entries(data: dict[str, Any], collection: str, kind: str) -> list[Any]:
    entries = _require(_require(data, collection, kind), "entries", kind)
    if not isinstance(entries, list):
        raise DecodeError(f"Malformed {kind}: '{collection}.entries' is not a list")
    return entries


@dataclass
class Item:
    """Represents a single entry (file or folder) inside a folder."""

    id: str
    type: str
    name: str

    @property
    def is_folder(self) -> bool:
        return self.type == TYPE_FOLDER

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Item:
        return cls(
            id=str(_require(data, "id", "item")),
            type=str(_require(data, "type", "item")),
            name=str(_require(data, "name", "item")),
        )


@dataclass
class PathEntry:
    """One ancestor in a folder's path collection."""

    id: str
    name: str

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_FOLDER_ID

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PathEntry:
        return cls(
            id=str(_require(data, "id", "path entry")),
            name=str(_require(data, "name", "path entry")),
        )


@dataclass
class Folder:
    """Snapshot of a Box folder's metadata.

    ``path_collection`` lists ancestors from the root down to the direct
    parent; the folder itself is not included.
    """

    id: str
    name: str
    path_collection: list[PathEntry] = field(default_factory=list)
    items: list[Item] = field(default_factory=list)

    @property
    def parent_id(self) -> str:
        """ID of the direct parent, or the root ID for top-level folders."""
        if not self.path_collection:
            return ROOT_FOLDER_ID
        return self.path_collection[-1].id

    @property
    def display_path(self) -> str:
        """Slash-separated path from the root, e.g. ``/Reports/2024``."""
        if self.id == ROOT_FOLDER_ID:
            return "/"
        parts = [entry.name for entry in self.path_collection if not entry.is_root]
        parts.append(self.name)
        return "/" + "/".join(parts)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Folder:
        path_collection = [
            PathEntry.from_dict(entry) for entry in _entries(data, "path_collection", "folder")
        ]

        # item_collection is omitted when the request asks for specific fields
        items = []
        if isinstance(data, dict) and "item_collection" in data:
            items = [Item.from_dict(entry) for entry in _entries(data, "item_collection", "folder")]

        return cls(
            id=str(_require(data, "id", "folder")),
            name=str(_require(data, "name", "folder")),
            path_collection=path_collection,
            items=items,
        )
