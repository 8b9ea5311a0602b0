"""Unit tests for saving, listing and removing favorites."""

from __future__ import annotations

import pytest

from mitra.services.favorites import AuthenticationRequired, FavoritesService
from mitra.services.intent_classifier import ClassifiedIntent, IntentCategory
from mitra.services.models import CardResponse, FavoriteListResponse, Weather
from mitra.services.orchestrator import ResponseOrchestrator
from mitra.store.memory import InMemoryStore
from mitra.store.repository import CityRepository, FavoritesRepository
from tests.fakes import FakeGenerator, FakeWeather


@pytest.fixture
def service() -> FavoritesService:
    return FavoritesService(FavoritesRepository(InMemoryStore()))


CARD = CardResponse(
    title="Panambur Beach",
    content="Clean shores and beautiful sunsets.",
    weather=Weather(30, "clear sky"),
)


class TestFavoritesService:
    def test_round_trip(self, service) -> None:
        saved = service.save_favorite("alice", CARD)
        listed = service.list_favorites("alice")
        assert any(f.title == CARD.title and f.content == CARD.content for f in listed)
        assert saved.id in {f.id for f in listed}

        service.remove_favorite("alice", saved.id)
        assert saved.id not in {f.id for f in service.list_favorites("alice")}

    def test_saving_twice_creates_two_records(self, service) -> None:
        first = service.save_favorite("alice", CARD)
        second = service.save_favorite("alice", CARD)
        assert first.id != second.id
        assert len(service.list_favorites("alice")) == 2

    def test_remove_missing_is_silent(self, service) -> None:
        saved = service.save_favorite("alice", CARD)
        service.remove_favorite("alice", saved.id)
        service.remove_favorite("alice", saved.id)
        service.remove_favorite("alice", "never-existed")
        assert service.list_favorites("alice") == []

    def test_favorites_are_per_user(self, service) -> None:
        service.save_favorite("alice", CARD)
        assert service.list_favorites("bob") == []

    @pytest.mark.parametrize("user_id", [None, ""])
    def test_requires_user(self, service, user_id) -> None:
        with pytest.raises(AuthenticationRequired):
            service.save_favorite(user_id, CARD)
        with pytest.raises(AuthenticationRequired):
            service.list_favorites(user_id)
        with pytest.raises(AuthenticationRequired):
            service.remove_favorite(user_id, "x")

    def test_snapshot_is_not_linked_to_card(self, service) -> None:
        card = CardResponse(title="Neer Dosa", content="Thin rice crepe.")
        service.save_favorite("alice", card)
        card.content = "Edited later."
        assert service.list_favorites("alice")[0].content == "Thin rice crepe."

    def test_favorites_intent_lists_saved_card(self) -> None:
        store = InMemoryStore()
        repo = FavoritesRepository(store)
        FavoritesService(repo).save_favorite("alice", CARD)
        orchestrator = ResponseOrchestrator(CityRepository(store), repo, FakeGenerator(), FakeWeather())
        response = orchestrator.respond(ClassifiedIntent(IntentCategory.FAVORITES, "all"), "alice")
        assert isinstance(response, FavoriteListResponse)
        assert [(f.title, f.content) for f in response.favorites] == [(CARD.title, CARD.content)]
