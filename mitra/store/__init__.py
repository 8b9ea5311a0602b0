"""Document store backends and typed repositories."""

from mitra.store.base import Collection, DocumentStore, StoreError
from mitra.store.firestore import FirestoreStore
from mitra.store.memory import InMemoryStore

__all__ = ["Collection", "DocumentStore", "FirestoreStore", "InMemoryStore", "StoreError"]
