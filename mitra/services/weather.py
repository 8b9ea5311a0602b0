"""Current weather from OpenWeather. Every failure collapses to ``None``."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from mitra.services.models import Weather

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"


class WeatherLookup(Protocol):
    def current(self, lat: float, lng: float) -> Optional[Weather]:
        ...


class OpenWeatherClient:
    def __init__(self, api_key: str, timeout: float = 10.0, client: httpx.Client | None = None) -> None:
        self._api_key = api_key
        self._client = client or httpx.Client(base_url=OPENWEATHER_BASE_URL, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def current(self, lat: float, lng: float) -> Optional[Weather]:
        if not self._api_key:
            return None
        try:
            response = self._client.get(
                "/weather",
                params={"lat": lat, "lon": lng, "appid": self._api_key, "units": "metric"},
            )
            response.raise_for_status()
            data = response.json()
            return Weather(
                temperature_celsius=int(round(float(data["main"]["temp"]))),
                description=str(data["weather"][0]["description"]),
            )
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as exc:
            logger.warning("Weather lookup failed for %s,%s: %s", lat, lng, exc)
            return None


__all__ = ["OPENWEATHER_BASE_URL", "OpenWeatherClient", "WeatherLookup"]
