"""Unit tests for the in-memory document store and owner scoping."""

from __future__ import annotations

import pytest

from mitra.store.base import Collection, check_owner
from mitra.store.memory import InMemoryStore


class TestCheckOwner:
    def test_reference_collection_rejects_owner(self) -> None:
        with pytest.raises(ValueError):
            check_owner(Collection.FOOD, "alice")
        assert check_owner(Collection.FOOD, None) is None

    @pytest.mark.parametrize("owner", [None, "", "  ", "alice/favorites"])
    def test_owned_collection_rejects_bad_owner(self, owner) -> None:
        with pytest.raises(ValueError):
            check_owner(Collection.MESSAGES, owner)

    def test_owned_collection_accepts_owner(self) -> None:
        assert check_owner(Collection.FAVORITES, "alice") == "alice"


class TestInMemoryStore:
    def test_find_by_name_exact(self, city_store) -> None:
        doc = city_store.find_by_name(Collection.FOOD, "Neer Dosa")
        assert doc is not None
        assert doc["id"] == "neer_dosa"
        assert city_store.find_by_name(Collection.FOOD, "neer dosa") is None

    def test_list_all_keeps_insertion_order(self, city_store) -> None:
        names = [d["name"] for d in city_store.list_all(Collection.FOOD)]
        assert names == ["Chicken Ghee Roast", "Neer Dosa", "Golibaje (Mangalore Buns)", "Ideal Ice Cream"]

    def test_returned_documents_are_copies(self, city_store) -> None:
        doc = city_store.find_by_name(Collection.FOOD, "Neer Dosa")
        doc["name"] = "changed"
        assert city_store.find_by_name(Collection.FOOD, "Neer Dosa") is not None

    def test_append_assigns_id(self) -> None:
        store = InMemoryStore()
        doc_id = store.append(Collection.FAVORITES, {"title": "t"}, owner="alice")
        assert doc_id
        assert store.list_all(Collection.FAVORITES, owner="alice") == [{"title": "t", "id": doc_id}]

    def test_owner_partitions_are_independent(self) -> None:
        store = InMemoryStore()
        store.append(Collection.MESSAGES, {"content": "a"}, owner="alice")
        store.append(Collection.MESSAGES, {"content": "b"}, owner="bob")
        store.delete_all(Collection.MESSAGES, owner="alice")
        assert store.list_all(Collection.MESSAGES, owner="alice") == []
        assert len(store.list_all(Collection.MESSAGES, owner="bob")) == 1

    def test_delete_missing_is_noop(self) -> None:
        store = InMemoryStore()
        store.delete(Collection.FAVORITES, "nope", owner="alice")

    def test_duplicate_id_gets_fresh_id(self) -> None:
        store = InMemoryStore()
        first = store.append(Collection.EVENTS, {"id": "x", "name": "a"})
        second = store.append(Collection.EVENTS, {"id": "x", "name": "b"})
        assert first == "x"
        assert second != "x"
