"""Typed access to city data, favorites and message history on top of a DocumentStore."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from mitra.services.models import (
    ConversationMessage,
    EventRecord,
    FavoriteRecord,
    FoodRecord,
    PhraseRecord,
    PlaceRecord,
)
from mitra.store.base import Collection, DocumentStore

logger = logging.getLogger(__name__)


def _located(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Drop a half coordinate pair so the record reads as unlocated."""
    if (doc.get("lat") is None) != (doc.get("lng") is None):
        logger.warning("Ignoring incomplete coordinates on %r", doc.get("name"))
        return {**doc, "lat": None, "lng": None}
    return doc


class CityRepository:
    """Read-only view over the reference collections."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def find_place(self, name: str) -> Optional[PlaceRecord]:
        doc = self._store.find_by_name(Collection.PLACES, name)
        return PlaceRecord.from_dict(_located(doc)) if doc else None

    def find_food(self, name: str) -> Optional[FoodRecord]:
        doc = self._store.find_by_name(Collection.FOOD, name)
        return FoodRecord.from_dict(_located(doc)) if doc else None

    def list_food(self) -> List[FoodRecord]:
        return [FoodRecord.from_dict(_located(d)) for d in self._store.list_all(Collection.FOOD)]

    def list_phrases(self) -> List[PhraseRecord]:
        return [PhraseRecord.from_dict(d) for d in self._store.list_all(Collection.PHRASES)]

    def list_events(self) -> List[EventRecord]:
        return [EventRecord.from_dict(d) for d in self._store.list_all(Collection.EVENTS)]


class FavoritesRepository:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def add(self, user_id: str, title: str, content: str) -> FavoriteRecord:
        saved_at = time.time()
        doc_id = self._store.append(
            Collection.FAVORITES,
            {"title": title, "content": content, "saved_at": saved_at},
            owner=user_id,
        )
        return FavoriteRecord(id=doc_id, title=title, content=content, saved_at=saved_at)

    def remove(self, user_id: str, favorite_id: str) -> None:
        self._store.delete(Collection.FAVORITES, favorite_id, owner=user_id)

    def list(self, user_id: str) -> List[FavoriteRecord]:
        return [FavoriteRecord.from_dict(d) for d in self._store.list_all(Collection.FAVORITES, owner=user_id)]


class HistoryRepository:
    """Per-user message history, returned oldest first."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def load(self, user_id: str) -> List[ConversationMessage]:
        docs = self._store.list_all(Collection.MESSAGES, owner=user_id)
        messages = [ConversationMessage.from_dict(d) for d in docs]
        messages.sort(key=lambda m: m.timestamp)
        return messages

    def append(self, user_id: str, message: ConversationMessage) -> ConversationMessage:
        message.id = self._store.append(Collection.MESSAGES, message.to_dict(), owner=user_id)
        return message

    def clear(self, user_id: str) -> None:
        self._store.delete_all(Collection.MESSAGES, owner=user_id)
        logger.info("Cleared message history for user %s", user_id)


__all__ = ["CityRepository", "FavoritesRepository", "HistoryRepository"]
