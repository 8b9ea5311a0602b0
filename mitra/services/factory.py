"""Build the real clients and services from settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from mitra.config.settings import Settings
from mitra.services.conversation_engine import ConversationSession
from mitra.services.favorites import FavoritesService
from mitra.services.generation import GeminiClient
from mitra.services.intent_classifier import GenerativeIntentClassifier
from mitra.services.orchestrator import ResponseOrchestrator
from mitra.services.weather import OpenWeatherClient
from mitra.store.base import DocumentStore
from mitra.store.firestore import FirestoreStore
from mitra.store.memory import InMemoryStore
from mitra.store.repository import CityRepository, FavoritesRepository, HistoryRepository

logger = logging.getLogger(__name__)


@dataclass
class Services:
    store: DocumentStore
    classifier: GenerativeIntentClassifier
    orchestrator: ResponseOrchestrator
    favorites: FavoritesService
    history: HistoryRepository

    def new_session(self, user_id: Optional[str] = None) -> ConversationSession:
        return ConversationSession(self.classifier, self.orchestrator, self.history, user_id=user_id)


def build_store(settings: Settings) -> DocumentStore:
    if settings.firestore_configured():
        return FirestoreStore(
            project_id=settings.firestore_project_id,
            credentials_path=settings.google_credentials_path,
            timeout=settings.request_timeout_seconds,
        )
    logger.warning("Firestore not configured; using an empty in-memory store")
    return InMemoryStore()


def build_services(settings: Settings, store: DocumentStore | None = None) -> Services:
    store = store or build_store(settings)
    if not settings.gemini_configured():
        logger.warning("GEMINI_API_KEY is not set; every turn will fail classification")
    generator = GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        timeout=settings.request_timeout_seconds,
    )
    weather = OpenWeatherClient(settings.openweather_api_key, timeout=settings.request_timeout_seconds)
    favorites_repo = FavoritesRepository(store)
    orchestrator = ResponseOrchestrator(
        city=CityRepository(store),
        favorites=favorites_repo,
        generator=generator,
        weather=weather,
    )
    return Services(
        store=store,
        classifier=GenerativeIntentClassifier(generator),
        orchestrator=orchestrator,
        favorites=FavoritesService(favorites_repo),
        history=HistoryRepository(store),
    )


__all__ = ["Services", "build_services", "build_store"]
