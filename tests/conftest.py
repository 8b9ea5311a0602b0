"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root is on path when running: pytest tests/
_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from mitra.services.generation import GenerationError  # noqa: E402
from mitra.services.models import Weather  # noqa: E402
from mitra.store.base import Collection  # noqa: E402
from mitra.store.memory import InMemoryStore  # noqa: E402
from tests.fakes import EVENTS, FOOD, PHRASES, PLACES, FakeGenerator, FakeWeather  # noqa: E402


@pytest.fixture
def city_store() -> InMemoryStore:
    return InMemoryStore(
        {
            Collection.PLACES: PLACES,
            Collection.FOOD: FOOD,
            Collection.PHRASES: PHRASES,
            Collection.EVENTS: EVENTS,
        }
    )


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def weather() -> FakeWeather:
    return FakeWeather(Weather(temperature_celsius=29, description="scattered clouds"))


@pytest.fixture
def failing_generator() -> FakeGenerator:
    return FakeGenerator([GenerationError("quota exceeded", status_code=429)] * 5)
