"""Intent classification through the generative language service.

The classifier builds one fixed prompt (taxonomy, the user's words, worked
examples), sends it to the text generator and decodes the answer as a JSON
object with ``category`` and ``entity``. Categories outside the closed set fall
back to CHITCHAT; output that is not a JSON object is an error.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from mitra.config.settings import BOT_NAME, CITY_NAME
from mitra.services.generation import GenerationError, TextGenerator

logger = logging.getLogger(__name__)


class IntentCategory(str, Enum):
    CITY_INFO = "CITY_INFO"
    PLACE_INFO = "PLACE_INFO"
    FOOD_INFO = "FOOD_INFO"
    EVENTS = "EVENTS"
    CREATE_FOOD_TOUR = "CREATE_FOOD_TOUR"
    FAVORITES = "FAVORITES"
    TULU_PHRASES = "TULU_PHRASES"
    CHITCHAT = "CHITCHAT"
    UNKNOWN_QUERY = "UNKNOWN_QUERY"


# One-line definitions, in prompt order
CATEGORY_DEFINITIONS: Dict[IntentCategory, str] = {
    IntentCategory.CITY_INFO: f"User wants a general overview of {CITY_NAME} itself.",
    IntentCategory.FOOD_INFO: "User is asking for information about a specific local food.",
    IntentCategory.PLACE_INFO: "User is asking for information about a specific local place.",
    IntentCategory.TULU_PHRASES: "User is asking for Tulu language phrases.",
    IntentCategory.CREATE_FOOD_TOUR: "User wants a one-day food tour, an itinerary, or a plan.",
    IntentCategory.EVENTS: "User is asking about events, festivals, or things happening in the city.",
    IntentCategory.FAVORITES: "User wants to see the items they saved as favorites.",
    IntentCategory.CHITCHAT: 'The user is making small talk (e.g., "hello", "how are you?", "what\'s your name?", "hi").',
    IntentCategory.UNKNOWN_QUERY: f"The user is asking about a specific {CITY_NAME} topic that is not covered above.",
}

WORKED_EXAMPLES: List[Tuple[str, IntentCategory, str]] = [
    ("Tell me about Chicken Ghee Roast", IntentCategory.FOOD_INFO, "Chicken Ghee Roast"),
    ("What's Panambur beach like?", IntentCategory.PLACE_INFO, "Panambur Beach"),
    ("Teach me some Tulu", IntentCategory.TULU_PHRASES, "all"),
    ("Plan a food tour for me", IntentCategory.CREATE_FOOD_TOUR, "all"),
    ("What events are happening?", IntentCategory.EVENTS, "all"),
    ("Show my favorites", IntentCategory.FAVORITES, "all"),
    (f"Tell me about {CITY_NAME}", IntentCategory.CITY_INFO, CITY_NAME),
    ("hi", IntentCategory.CHITCHAT, "greeting"),
    ("Tell me about Tannirbhavi Beach", IntentCategory.UNKNOWN_QUERY, "Tannirbhavi Beach"),
]

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class ClassificationError(RuntimeError):
    """The classification call failed or its answer could not be used. Fatal to the turn."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class IntentDecodeError(ClassificationError):
    """The service answered, but not with a JSON intent object."""


@dataclass(frozen=True)
class ClassifiedIntent:
    category: IntentCategory
    entity: str


def build_classification_prompt(user_text: str) -> str:
    categories = "\n".join(
        f"{i}. \"{cat.value}\": {definition}"
        for i, (cat, definition) in enumerate(CATEGORY_DEFINITIONS.items(), start=1)
    )
    examples = "\n".join(
        f'- User: "{text}" -> {json.dumps({"category": cat.value, "entity": entity})}'
        for text, cat, entity in WORKED_EXAMPLES
    )
    return (
        f'You are "{BOT_NAME}", a friendly and expert guide to {CITY_NAME} city.\n'
        "Your goal is to understand what the user is asking and classify their request "
        "into one of the following categories.\n"
        "You must respond in JSON format only: a single object with exactly two string "
        'fields, "category" and "entity".\n\n'
        f"Categories:\n{categories}\n\n"
        f'User\'s question: "{user_text}"\n\n'
        "Analyze the user's question and provide the JSON response.\n\n"
        f"Example Responses:\n{examples}\n"
    )


def strip_code_fences(raw: str) -> str:
    return _FENCE_RE.sub("", raw).strip()


def parse_category(value: str) -> IntentCategory:
    """Exact match against the closed set; anything else is CHITCHAT."""
    try:
        return IntentCategory(value)
    except ValueError:
        logger.info("Unrecognized category %r, treating as CHITCHAT", value)
        return IntentCategory.CHITCHAT


def decode_intent(raw: str) -> ClassifiedIntent:
    """Strip markdown fences and decode the classifier's answer."""
    text = strip_code_fences(raw or "")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise IntentDecodeError(f"Could not understand the classifier response: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise IntentDecodeError("Classifier response is not a JSON object")
    category = payload.get("category")
    if not isinstance(category, str):
        raise IntentDecodeError("Classifier response has no category")
    entity = payload.get("entity")
    if entity is None:
        entity = ""
    return ClassifiedIntent(category=parse_category(category), entity=str(entity))


class GenerativeIntentClassifier:
    """Classify free text with one call to the text generator. No retries."""

    def __init__(self, generator: TextGenerator) -> None:
        self._generator = generator

    def classify(self, text: str) -> ClassifiedIntent:
        user_text = text.strip()
        if not user_text:
            raise ValueError("Cannot classify blank input")
        prompt = build_classification_prompt(user_text)
        try:
            raw = self._generator.generate(prompt)
        except GenerationError as exc:
            raise ClassificationError(
                f"API call failed with status {exc.status_code}: {exc.message}"
                if exc.status_code
                else exc.message,
                status_code=exc.status_code,
            ) from exc
        intent = decode_intent(raw)
        logger.info("Classified %r as %s (%r)", user_text, intent.category.value, intent.entity)
        return intent


__all__ = [
    "CATEGORY_DEFINITIONS",
    "ClassificationError",
    "ClassifiedIntent",
    "GenerativeIntentClassifier",
    "IntentCategory",
    "IntentDecodeError",
    "WORKED_EXAMPLES",
    "build_classification_prompt",
    "decode_intent",
    "parse_category",
    "strip_code_fences",
]
