import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any

import httpx

from . import config
from .errors import CityNotFoundError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentWeather:
    city: str
    temperature: float
    description: str

    @property
    def display_temperature(self) -> int:
        return round(self.temperature)

    @classmethod
    def from_payload(cls, payload: dict) -> "CurrentWeather":
        try:
            return cls(
                city=payload["name"],
                temperature=float(payload["main"]["temp"]),
                description=payload["weather"][0]["description"],
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise UpstreamUnavailableError(f"Unexpected current weather payload: {e!r}", 502) from e

    def to_dict(self) -> dict:
        return {
            "city": self.city,
            "temp": self.temperature,
            "temp_display": self.display_temperature,
            "description": self.description,
        }


async def _get(endpoint: str, city: str) -> dict[str, Any]:
    """
    Retry policy:
    - 200 -> JSON
    - 404 -> CityNotFoundError, no retry
    - other 4xx -> UpstreamUnavailableError with that status, no retry
    - 5xx / network errors -> exponential backoff + jitter; 503 once exhausted
    """
    last_err: Exception | None = None
    params = {"q": city, "units": config.OPENWEATHER_UNITS, "appid": config.OPENWEATHER_API_KEY}

    for attempt in range(config.MAX_RETRIES):
        try:
            async with httpx.AsyncClient(timeout=config.PER_REQ_TIMEOUT) as client:
                r = await client.get(f"{config.OPENWEATHER_BASE_URL}/{endpoint}", params=params)
        except httpx.RequestError as e:
            last_err = e
            logger.warning("%s %s: network error on attempt %d: %r", endpoint, city, attempt + 1, e)
        else:
            if r.status_code == 200:
                return r.json()

            if r.status_code == 404:
                raise CityNotFoundError(city)

            if 400 <= r.status_code < 500:
                logger.error("%s %s: upstream rejected request (%d)", endpoint, city, r.status_code)
                raise UpstreamUnavailableError(f"{r.status_code}: {r.text}", r.status_code)

            last_err = UpstreamUnavailableError(f"{r.status_code}: {r.text}")
            logger.warning("%s %s: upstream %d on attempt %d", endpoint, city, r.status_code, attempt + 1)

        if attempt < config.MAX_RETRIES - 1:
            base = 2 ** attempt  # 1, 2, 4...
            jitter = base * random.uniform(0.0, 0.2)
            await asyncio.sleep(base + jitter)

    raise UpstreamUnavailableError(f"OpenWeather unavailable: {last_err}")


async def fetch_current(city: str) -> CurrentWeather:
    return CurrentWeather.from_payload(await _get("weather", city))


async def fetch_forecast(city: str) -> list[dict]:
    """Raw 3-hourly entries of the 5 day forecast, oldest first."""
    payload = await _get("forecast", city)
    return payload.get("list", [])
