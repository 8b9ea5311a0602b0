"""Reference records, favorites, conversation messages and bot response shapes.

Every bot response is one of a closed set of dataclasses, each tagged with a
``type`` string so it can be stored in history and rebuilt later.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union


def _coords(lat: Optional[float], lng: Optional[float], name: str) -> None:
    if (lat is None) != (lng is None):
        raise ValueError(f"Record {name!r} must have both lat and lng or neither")


def _facts(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(str(v) for v in value)


@dataclass(frozen=True)
class PlaceRecord:
    name: str
    category: str = ""
    description: Optional[str] = None
    facts: Tuple[str, ...] = ()
    best_time_to_visit: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    def __post_init__(self) -> None:
        _coords(self.lat, self.lng, self.name)

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlaceRecord":
        return cls(
            name=str(data.get("name", "")),
            category=str(data.get("category", "")),
            description=data.get("description") or None,
            facts=_facts(data.get("facts")),
            best_time_to_visit=data.get("best_time_to_visit") or None,
            lat=data.get("lat"),
            lng=data.get("lng"),
        )


@dataclass(frozen=True)
class FoodRecord:
    name: str
    type: str = ""
    description: Optional[str] = None
    facts: Tuple[str, ...] = ()
    origin_story: Optional[str] = None
    restaurant_name: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    def __post_init__(self) -> None:
        _coords(self.lat, self.lng, self.name)

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FoodRecord":
        return cls(
            name=str(data.get("name", "")),
            type=str(data.get("type", "")),
            description=data.get("description") or None,
            facts=_facts(data.get("facts")),
            origin_story=data.get("origin_story") or None,
            restaurant_name=data.get("restaurant_name") or None,
            lat=data.get("lat"),
            lng=data.get("lng"),
        )


@dataclass(frozen=True)
class PhraseRecord:
    id: str
    english: str
    tulu: str
    pronunciation: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhraseRecord":
        return cls(
            id=str(data.get("id", "")),
            english=str(data.get("english", "")),
            tulu=str(data.get("tulu", "")),
            pronunciation=str(data.get("pronunciation", "")),
        )


@dataclass(frozen=True)
class EventRecord:
    id: str
    name: str
    description: str
    location: str
    date: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventRecord":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            location=str(data.get("location", "")),
            date=str(data.get("date", "")),
        )


@dataclass(frozen=True)
class FavoriteRecord:
    """Snapshot of a card saved by a user. Never linked back to its source record."""

    id: str
    title: str
    content: str
    saved_at: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FavoriteRecord":
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            content=str(data.get("content", "")),
            saved_at=float(data.get("saved_at") or 0.0),
        )


@dataclass(frozen=True)
class Weather:
    temperature_celsius: int
    description: str


# Response shapes ---------------------------------------------------------


@dataclass
class TextResponse:
    content: str
    type: str = field(default="text", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CardResponse:
    title: str
    content: str
    note: Optional[str] = None
    weather: Optional[Weather] = None
    type: str = field(default="card", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Phrase:
    id: str
    source: str
    target: str
    pronunciation: str


@dataclass
class PhraseListResponse:
    title: str
    phrases: List[Phrase] = field(default_factory=list)
    type: str = field(default="phrase_list", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TourStop:
    meal: str
    name: str
    restaurant: str


@dataclass
class FoodTourResponse:
    title: str
    stops: List[TourStop]
    map_url: str
    type: str = field(default="food_tour", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EventItem:
    id: str
    name: str
    description: str
    location: str
    date: str


@dataclass
class EventListResponse:
    title: str
    events: List[EventItem] = field(default_factory=list)
    type: str = field(default="event_list", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class FavoriteItem:
    id: str
    title: str
    content: str


@dataclass
class FavoriteListResponse:
    title: str
    favorites: List[FavoriteItem] = field(default_factory=list)
    type: str = field(default="favorite_list", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


BotResponse = Union[
    TextResponse,
    CardResponse,
    PhraseListResponse,
    FoodTourResponse,
    EventListResponse,
    FavoriteListResponse,
]


def response_from_dict(data: Dict[str, Any]) -> BotResponse:
    """Rebuild a response from its ``to_dict`` form. Unknown tags become text."""
    kind = data.get("type", "text")
    if kind == "card":
        weather = data.get("weather")
        return CardResponse(
            title=data.get("title", ""),
            content=data.get("content", ""),
            note=data.get("note"),
            weather=Weather(int(weather["temperature_celsius"]), str(weather["description"])) if weather else None,
        )
    if kind == "phrase_list":
        return PhraseListResponse(
            title=data.get("title", ""),
            phrases=[Phrase(**p) for p in data.get("phrases") or []],
        )
    if kind == "food_tour":
        return FoodTourResponse(
            title=data.get("title", ""),
            stops=[TourStop(**s) for s in data.get("stops") or []],
            map_url=data.get("map_url", ""),
        )
    if kind == "event_list":
        return EventListResponse(
            title=data.get("title", ""),
            events=[EventItem(**e) for e in data.get("events") or []],
        )
    if kind == "favorite_list":
        return FavoriteListResponse(
            title=data.get("title", ""),
            favorites=[FavoriteItem(**f) for f in data.get("favorites") or []],
        )
    return TextResponse(content=str(data.get("content", "")))


USER = "user"
BOT = "bot"


@dataclass
class ConversationMessage:
    sender: str  # USER or BOT
    response: BotResponse
    timestamp: float
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"sender": self.sender, "timestamp": self.timestamp, **self.response.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversationMessage":
        payload = {k: v for k, v in data.items() if k not in ("sender", "timestamp", "id")}
        return cls(
            sender=str(data.get("sender", BOT)),
            response=response_from_dict(payload),
            timestamp=float(data.get("timestamp") or 0.0),
            id=data.get("id"),
        )


__all__ = [
    "BOT",
    "USER",
    "BotResponse",
    "CardResponse",
    "ConversationMessage",
    "EventItem",
    "EventListResponse",
    "EventRecord",
    "FavoriteItem",
    "FavoriteListResponse",
    "FavoriteRecord",
    "FoodRecord",
    "FoodTourResponse",
    "Phrase",
    "PhraseListResponse",
    "PhraseRecord",
    "PlaceRecord",
    "TextResponse",
    "TourStop",
    "Weather",
    "response_from_dict",
]
