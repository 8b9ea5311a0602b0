"""Response orchestration: turn a classified intent into one bot response.

Dispatch is keyed on the intent category:
- CITY_INFO           static city summary
- FOOD_INFO/PLACE_INFO exact name lookup, narration of facts, weather for places
- TULU_PHRASES        all phrases
- CREATE_FOOD_TOUR    coordinate-bearing food stops plus a map route link
- EVENTS              all events
- FAVORITES           the signed-in user's saved cards
- UNKNOWN_QUERY       general-knowledge paragraph (same path as a lookup miss)
- CHITCHAT / other    random friendly acknowledgement

Nothing here writes to the store.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Sequence, Union

from mitra.config.settings import (
    CHITCHAT_RESPONSES,
    CITY_NAME,
    CITY_SUMMARY,
    FAVORITES_LOGIN_REQUIRED,
    FOOD_TOUR_UNAVAILABLE,
    GENERAL_KNOWLEDGE_FALLBACK,
    MAP_DIRECTIONS_BASE_URL,
    NARRATION_FALLBACK,
)
from mitra.services.generation import GenerationError, TextGenerator
from mitra.services.intent_classifier import ClassifiedIntent, IntentCategory
from mitra.services.models import (
    BotResponse,
    CardResponse,
    EventItem,
    EventListResponse,
    FavoriteItem,
    FavoriteListResponse,
    FoodRecord,
    FoodTourResponse,
    Phrase,
    PhraseListResponse,
    PlaceRecord,
    TextResponse,
    TourStop,
)
from mitra.services.weather import WeatherLookup
from mitra.store.repository import CityRepository, FavoritesRepository

logger = logging.getLogger(__name__)


def build_narration_prompt(name: str, facts: Sequence[str]) -> str:
    bullet_points = "\n".join(f"- {fact}" for fact in facts)
    return (
        f"You are a friendly local guide to {CITY_NAME}. "
        f"Turn these facts about {name} into a short, warm, conversational paragraph "
        "of two or three sentences. Do not add facts that are not listed and do not use bullet points.\n\n"
        f"Facts:\n{bullet_points}"
    )


def build_general_knowledge_prompt(entity: str) -> str:
    return (
        f"You are a friendly local guide to {CITY_NAME}, India. "
        f"In one brief paragraph, tell a visitor about \"{entity}\" in the context of {CITY_NAME}. "
        "If you are not sure about something, say so rather than inventing details."
    )


def build_map_url(stops: Sequence[FoodRecord]) -> str:
    """Directions link visiting the stops in the given order."""
    return MAP_DIRECTIONS_BASE_URL + "/".join(f"{s.lat},{s.lng}" for s in stops)


class ResponseOrchestrator:
    def __init__(
        self,
        city: CityRepository,
        favorites: FavoritesRepository,
        generator: TextGenerator,
        weather: WeatherLookup,
        choose: Callable[[Sequence[str]], str] = random.choice,
    ) -> None:
        self._city = city
        self._favorites = favorites
        self._generator = generator
        self._weather = weather
        self._choose = choose

    def respond(self, intent: ClassifiedIntent, user_id: Optional[str] = None) -> BotResponse:
        category = intent.category
        logger.info("Dispatching %s for entity %r", category.value, intent.entity)
        if category is IntentCategory.CITY_INFO:
            return TextResponse(content=CITY_SUMMARY)
        if category is IntentCategory.FOOD_INFO:
            return self._food_info(intent.entity)
        if category is IntentCategory.PLACE_INFO:
            return self._place_info(intent.entity)
        if category is IntentCategory.TULU_PHRASES:
            return self._phrases()
        if category is IntentCategory.CREATE_FOOD_TOUR:
            return self._food_tour()
        if category is IntentCategory.EVENTS:
            return self._events()
        if category is IntentCategory.FAVORITES:
            return self._favorite_list(user_id)
        if category is IntentCategory.UNKNOWN_QUERY:
            return self._general_knowledge(intent.entity)
        return self._chitchat()

    # Handlers -----------------------------------------------------------
    def _food_info(self, entity: str) -> BotResponse:
        record = self._city.find_food(entity)
        if record is None:
            return self._general_knowledge(entity)
        return CardResponse(
            title=record.name,
            content=self._describe(record),
            note=record.origin_story,
        )

    def _place_info(self, entity: str) -> BotResponse:
        record = self._city.find_place(entity)
        if record is None:
            return self._general_knowledge(entity)
        weather = None
        if record.has_coordinates:
            weather = self._weather.current(record.lat, record.lng)
            if weather is None:
                logger.warning("No weather for %s; returning card without it", record.name)
        return CardResponse(
            title=record.name,
            content=self._describe(record),
            note=record.best_time_to_visit,
            weather=weather,
        )

    def _describe(self, record: Union[FoodRecord, PlaceRecord]) -> str:
        if record.description:
            return record.description
        if not record.facts:
            return NARRATION_FALLBACK
        try:
            narration = self._generator.generate(build_narration_prompt(record.name, record.facts)).strip()
        except GenerationError as exc:
            logger.warning("Narration failed for %s: %s", record.name, exc)
            return NARRATION_FALLBACK
        return narration or NARRATION_FALLBACK

    def _general_knowledge(self, entity: str) -> TextResponse:
        # Shared by lookup misses and UNKNOWN_QUERY.
        try:
            content = self._generator.generate(build_general_knowledge_prompt(entity)).strip()
        except GenerationError as exc:
            logger.warning("General-knowledge answer failed for %r: %s", entity, exc)
            return TextResponse(content=GENERAL_KNOWLEDGE_FALLBACK)
        return TextResponse(content=content or GENERAL_KNOWLEDGE_FALLBACK)

    def _phrases(self) -> PhraseListResponse:
        phrases = [
            Phrase(id=p.id, source=p.english, target=p.tulu, pronunciation=p.pronunciation)
            for p in self._city.list_phrases()
        ]
        return PhraseListResponse(title="Here are a few useful Tulu phrases:", phrases=phrases)

    def _food_tour(self) -> BotResponse:
        stops: List[FoodRecord] = [f for f in self._city.list_food() if f.has_coordinates]
        if len(stops) < 2:
            return TextResponse(content=FOOD_TOUR_UNAVAILABLE)
        return FoodTourResponse(
            title=f"Your Dynamic {CITY_NAME} Food Tour!",
            stops=[TourStop(meal=s.type, name=s.name, restaurant=s.restaurant_name or "") for s in stops],
            map_url=build_map_url(stops),
        )

    def _events(self) -> EventListResponse:
        events = [
            EventItem(id=e.id, name=e.name, description=e.description, location=e.location, date=e.date)
            for e in self._city.list_events()
        ]
        return EventListResponse(title=f"Upcoming Events in {CITY_NAME}", events=events)

    def _favorite_list(self, user_id: Optional[str]) -> BotResponse:
        if not user_id:
            return TextResponse(content=FAVORITES_LOGIN_REQUIRED)
        favorites = [FavoriteItem(id=f.id, title=f.title, content=f.content) for f in self._favorites.list(user_id)]
        return FavoriteListResponse(title="Your saved favorites", favorites=favorites)

    def _chitchat(self) -> TextResponse:
        return TextResponse(content=self._choose(CHITCHAT_RESPONSES))


__all__ = [
    "ResponseOrchestrator",
    "build_general_knowledge_prompt",
    "build_map_url",
    "build_narration_prompt",
]
