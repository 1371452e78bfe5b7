# app/core/embedded.py
"""
Nested collections stored inside a parent row.

Likes, comments, learning languages and travel plans are ordered lists of
sub-documents persisted in JSON columns. ``EmbeddedList`` wraps one such list,
gives each entry a generated ``id`` and exposes add / edit / remove by id so
callers never do index arithmetic themselves.
"""
import uuid
from typing import Any, Callable, Iterator

from app.core.errors import ConflictError, NotFoundError


def new_entry_id() -> str:
    """Generate a unique identifier for a nested entry."""
    return uuid.uuid4().hex


class EmbeddedList:
    """
    Ordered sequence of dict entries, each with a unique ``id`` key.

    Args:
        items: The stored list (copied; the caller's list is not mutated)
        missing: Error raised when an id lookup fails
    """

    def __init__(self, items: list[dict] | None, missing: NotFoundError | None = None):
        self._items: list[dict] = [dict(item) for item in (items or [])]
        self._missing = missing or NotFoundError()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[dict]:
        return iter(self._items)

    def to_list(self) -> list[dict]:
        """Plain list suitable for assigning back to the JSON column."""
        return [dict(item) for item in self._items]

    # -------- lookup --------
    def index_of(self, entry_id: str) -> int:
        """Position of the first entry with ``entry_id``; raises the not-found error."""
        for i, item in enumerate(self._items):
            if str(item.get("id")) == str(entry_id):
                return i
        raise self._missing

    def get(self, entry_id: str) -> dict:
        return self._items[self.index_of(entry_id)]

    def find(self, predicate: Callable[[dict], bool]) -> dict | None:
        return next((item for item in self._items if predicate(item)), None)

    def ensure_absent(self, predicate: Callable[[dict], bool], error: ConflictError) -> None:
        """Duplicate guard: raise ``error`` if any entry matches."""
        if self.find(predicate) is not None:
            raise error

    # -------- mutation --------
    def append(self, fields: dict[str, Any]) -> dict:
        entry = {"id": new_entry_id(), **fields}
        self._items.append(entry)
        return entry

    def prepend(self, fields: dict[str, Any]) -> dict:
        """Insert at the front (most-recent-first collections)."""
        entry = {"id": new_entry_id(), **fields}
        self._items.insert(0, entry)
        return entry

    def replace(self, entry_id: str, fields: dict[str, Any]) -> dict:
        """Overwrite the entry's fields in place, keeping its id and position."""
        i = self.index_of(entry_id)
        entry = {"id": self._items[i]["id"], **fields}
        self._items[i] = entry
        return entry

    def remove(self, entry_id: str) -> dict:
        return self._items.pop(self.index_of(entry_id))
