"""Document store contract shared by the in-memory and Firestore backends.

Reference collections (places, food, tulu, events) are global. Messages and
favorites live under an owner id, passed separately so backends never build
paths out of untrusted strings.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Protocol


class Collection(Enum):
    PLACES = "places"
    FOOD = "food"
    PHRASES = "tulu"
    EVENTS = "events"
    MESSAGES = "messages"
    FAVORITES = "favorites"

    @property
    def owned(self) -> bool:
        return self in (Collection.MESSAGES, Collection.FAVORITES)


class StoreError(RuntimeError):
    """Raised when the backing store cannot complete a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


def check_owner(collection: Collection, owner: Optional[str]) -> Optional[str]:
    """Validate the owner id against the collection's scoping.

    Returns the owner id for owner-scoped collections, None otherwise.
    """
    if not collection.owned:
        if owner is not None:
            raise ValueError(f"Collection {collection.value!r} is not owner-scoped")
        return None
    if not owner or not owner.strip():
        raise ValueError(f"Collection {collection.value!r} requires an owner id")
    if "/" in owner:
        raise ValueError("Owner id must not contain '/'")
    return owner


Document = Dict[str, Any]


class DocumentStore(Protocol):
    """Every returned document carries its store id under ``"id"``."""

    def find_by_name(self, collection: Collection, name: str) -> Optional[Document]:
        ...

    def list_all(self, collection: Collection, owner: Optional[str] = None) -> List[Document]:
        ...

    def append(self, collection: Collection, record: Document, owner: Optional[str] = None) -> str:
        ...

    def delete(self, collection: Collection, doc_id: str, owner: Optional[str] = None) -> None:
        ...

    def delete_all(self, collection: Collection, owner: Optional[str] = None) -> None:
        ...


__all__ = ["Collection", "Document", "DocumentStore", "StoreError", "check_owner"]
