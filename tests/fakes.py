"""City reference data and test doubles shared across the test suite."""

from __future__ import annotations

from typing import List, Optional

from mitra.services.models import Weather

PLACES = [
    {
        "id": "panambur_beach",
        "name": "Panambur Beach",
        "category": "Beach",
        "description": "One of Mangaluru's most popular beaches, known for clean shores and sunsets.",
        "best_time_to_visit": "Evenings (4 PM - 7 PM), September to February.",
        "lat": 12.9723,
        "lng": 74.8055,
    },
    {
        "id": "kadri_temple",
        "name": "Kadri Manjunatha Temple",
        "category": "Temple",
        "facts": ["ancient Shiva temple", "bronze statues", "ponds at the rear"],
    },
]

FOOD = [
    {
        "id": "ghee_roast",
        "name": "Chicken Ghee Roast",
        "type": "Lunch/Dinner",
        "facts": ["fiery", "rich"],
        "origin_story": "Invented at Shetty Lunch Home in Kundapura.",
        "restaurant_name": "Maharaja Restaurant",
        "lat": 12.8739,
        "lng": 74.8425,
    },
    {
        "id": "neer_dosa",
        "name": "Neer Dosa",
        "type": "Breakfast",
        "description": "A thin, soft rice crepe.",
        "restaurant_name": "Hotel Ayodhya",
        "lat": 12.8705,
        "lng": 74.8398,
    },
    {
        "id": "golibaje",
        "name": "Golibaje (Mangalore Buns)",
        "type": "Snack",
        "description": "Soft, fluffy fritters.",
        "restaurant_name": "Taj Mahal Cafe",
        "lat": 12.8679,
        "lng": 74.8416,
    },
    {
        "id": "ideal_ice_cream",
        "name": "Ideal Ice Cream",
        "type": "Dessert",
        "description": "Legendary ice cream, famous for the Gadbad.",
        "restaurant_name": "Pabba's Ideal Cafe",
        "lat": 12.8829,
        "lng": 74.8415,
    },
]

PHRASES = [
    {"id": "how_are_you", "english": "How are you?", "tulu": "Encha Ullar?", "pronunciation": "En-chha Ool-lar"},
    {"id": "thank_you", "english": "Thank you", "tulu": "Solmel", "pronunciation": "Sol-mel"},
]

EVENTS = [
    {
        "id": "mangaluru_kambala",
        "name": "Mangaluru Kambala",
        "description": "The famous annual buffalo race.",
        "location": "Various locations around Mangaluru",
        "date": "November - March (Seasonal)",
    },
]


class FakeGenerator:
    """Text generator returning queued replies and recording prompts."""

    def __init__(self, replies: Optional[List[object]] = None) -> None:
        self.replies: List[object] = list(replies or [])
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.replies:
            return "Generated text."
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return str(reply)


class FakeWeather:
    def __init__(self, result: Optional[Weather] = None) -> None:
        self.result = result
        self.calls: List[tuple] = []

    def current(self, lat: float, lng: float) -> Optional[Weather]:
        self.calls.append((lat, lng))
        return self.result


