"""Save, list and remove favorite cards for a signed-in user."""

from __future__ import annotations

import logging
from typing import List, Optional

from mitra.services.models import CardResponse, FavoriteRecord
from mitra.store.repository import FavoritesRepository

logger = logging.getLogger(__name__)


class AuthenticationRequired(RuntimeError):
    """Favorites need a signed-in user."""


def _require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise AuthenticationRequired("Please log in to manage favorites.")
    return user_id


class FavoritesService:
    def __init__(self, repository: FavoritesRepository) -> None:
        self._repository = repository

    def save_favorite(self, user_id: Optional[str], card: CardResponse) -> FavoriteRecord:
        """Store a snapshot of the card. Saving the same card twice stores it twice."""
        owner = _require_user(user_id)
        record = self._repository.add(owner, title=card.title, content=card.content)
        logger.info("Saved favorite %s (%s) for user %s", record.id, record.title, owner)
        return record

    def remove_favorite(self, user_id: Optional[str], favorite_id: str) -> None:
        """Delete a favorite; removing one that is already gone is not an error."""
        owner = _require_user(user_id)
        self._repository.remove(owner, favorite_id)

    def list_favorites(self, user_id: Optional[str]) -> List[FavoriteRecord]:
        return self._repository.list(_require_user(user_id))


__all__ = ["AuthenticationRequired", "FavoritesService"]
