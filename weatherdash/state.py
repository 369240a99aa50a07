"""
Dashboard state for one city query.

    idle --start()--> loading --load()--> loaded
                              --fail()--> failed

loaded/failed may start() again for a new city. The forecast is only
aggregated on the loading -> loaded transition.
"""
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from .aggregations import DEFAULT_WINDOW_DAYS, aggregate_items
from .clients import CurrentWeather
from .errors import CityNotFoundError, WeatherDashError
from .models import DailySummary
from .series import build_series, chart_config

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "City not found."
UNAVAILABLE_MESSAGE = "Weather data unavailable."


# states
IDLE = "idle"
LOADING = "loading"
LOADED = "loaded"
FAILED = "failed"


class InvalidTransitionError(WeatherDashError):
    pass


@dataclass
class DashboardSession:
    window_size: int = DEFAULT_WINDOW_DAYS
    status: str = IDLE
    city: str = ""
    weather: Optional[CurrentWeather] = None
    forecast: list[DailySummary] = field(default_factory=list)
    error: str = ""

    def _move(self, expected: tuple[str, ...], target: str) -> None:
        if self.status not in expected:
            raise InvalidTransitionError(f"cannot go from {self.status} to {target}")
        logger.info("dashboard %r: %s -> %s", self.city, self.status, target)
        self.status = target

    def start(self, city: str) -> None:
        self._move((IDLE, LOADED, FAILED), LOADING)
        self.city = city
        self.error = ""

    def load(self, weather: CurrentWeather, forecast_items: Sequence[dict]) -> None:
        if self.status != LOADING:
            raise InvalidTransitionError(f"cannot go from {self.status} to loaded")
        # aggregate before moving, so a malformed payload leaves us in loading for fail()
        forecast = aggregate_items(forecast_items, self.window_size)
        self._move((LOADING,), LOADED)
        self.weather = weather
        self.forecast = forecast

    def fail(self, exc: Exception) -> None:
        self._move((LOADING,), FAILED)
        self.error = NOT_FOUND_MESSAGE if isinstance(exc, CityNotFoundError) else UNAVAILABLE_MESSAGE
        self.weather = None
        self.forecast = []

    def snapshot(self) -> dict:
        chart = chart_config(build_series(self.forecast)) if self.forecast else None
        return {
            "status": self.status,
            "city": self.city,
            "weather": self.weather.to_dict() if self.weather else None,
            "forecast": [d.to_dict() for d in self.forecast],
            "chart": chart,
            "error": self.error or None,
        }
