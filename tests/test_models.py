"""Unit tests for records, response shapes and message serialization."""

from __future__ import annotations

import pytest

from mitra.services.models import (
    BOT,
    CardResponse,
    ConversationMessage,
    FoodRecord,
    PlaceRecord,
    TextResponse,
    Weather,
    response_from_dict,
)


class TestRecords:
    def test_coordinates_both_or_neither(self) -> None:
        with pytest.raises(ValueError):
            PlaceRecord(name="Half", lat=12.0)
        with pytest.raises(ValueError):
            FoodRecord.from_dict({"name": "Half", "lng": 74.0})
        assert not PlaceRecord(name="None").has_coordinates
        assert PlaceRecord(name="Both", lat=1.0, lng=2.0).has_coordinates

    def test_food_from_dict_keeps_facts_order(self) -> None:
        record = FoodRecord.from_dict({"name": "Chicken Ghee Roast", "facts": ["fiery", "rich"]})
        assert record.facts == ("fiery", "rich")
        assert record.description is None

    def test_records_are_immutable(self) -> None:
        record = FoodRecord(name="Neer Dosa")
        with pytest.raises(AttributeError):
            record.name = "Other"  # type: ignore[misc]


class TestResponseShapes:
    def test_type_tags(self) -> None:
        assert TextResponse(content="x").type == "text"
        assert CardResponse(title="t", content="c").type == "card"

    def test_card_with_weather_survives_storage(self) -> None:
        card = CardResponse(title="Panambur Beach", content="Sunsets", note="Evenings", weather=Weather(29, "haze"))
        assert response_from_dict(card.to_dict()) == card

    def test_unknown_tag_becomes_text(self) -> None:
        assert response_from_dict({"type": "hologram", "content": "hi"}) == TextResponse(content="hi")

    def test_message_from_stored_document(self) -> None:
        doc = {"id": "m1", "sender": "bot", "timestamp": 12.5, "type": "text", "content": "Namaskara!"}
        message = ConversationMessage.from_dict(doc)
        assert message.sender == BOT
        assert message.id == "m1"
        assert message.timestamp == 12.5
        assert message.response == TextResponse(content="Namaskara!")
