"""In-memory document store used for signed-out sessions and tests."""

from __future__ import annotations

import copy
import uuid
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from mitra.store.base import Collection, Document, check_owner

_Key = Tuple[Collection, Optional[str]]


class InMemoryStore:
    """Dict-backed store. Iteration order is insertion order."""

    def __init__(self, seed: Mapping[Collection, Iterable[Document]] | None = None) -> None:
        self._docs: Dict[_Key, Dict[str, Document]] = {}
        for collection, records in (seed or {}).items():
            for record in records:
                self.append(collection, record)

    def _bucket(self, collection: Collection, owner: Optional[str]) -> Dict[str, Document]:
        key = (collection, check_owner(collection, owner))
        return self._docs.setdefault(key, {})

    def find_by_name(self, collection: Collection, name: str) -> Optional[Document]:
        for doc in self._bucket(collection, None).values():
            if doc.get("name") == name:
                return copy.deepcopy(doc)
        return None

    def list_all(self, collection: Collection, owner: Optional[str] = None) -> List[Document]:
        return [copy.deepcopy(d) for d in self._bucket(collection, owner).values()]

    def append(self, collection: Collection, record: Document, owner: Optional[str] = None) -> str:
        bucket = self._bucket(collection, owner)
        doc_id = str(record.get("id") or uuid.uuid4().hex)
        if doc_id in bucket:
            doc_id = uuid.uuid4().hex
        doc = copy.deepcopy(dict(record))
        doc["id"] = doc_id
        bucket[doc_id] = doc
        return doc_id

    def delete(self, collection: Collection, doc_id: str, owner: Optional[str] = None) -> None:
        self._bucket(collection, owner).pop(doc_id, None)

    def delete_all(self, collection: Collection, owner: Optional[str] = None) -> None:
        self._bucket(collection, owner).clear()


__all__ = ["InMemoryStore"]
