from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from .errors import MalformedSampleError

DT_TXT_FORMAT = "%Y-%m-%d %H:%M:%S"


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise MalformedSampleError(f"timestamp must be a string, got {type(value).__name__}")
    try:
        return datetime.strptime(value, DT_TXT_FORMAT)
    except ValueError:
        raise MalformedSampleError(f"unparseable timestamp {value!r}") from None


def _number(value: Any, name: str) -> float:
    # bool is an int subclass; a True temperature is a bug upstream
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedSampleError(f"{name} must be numeric, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class Sample:
    """One 3-hourly forecast entry, in the location's local time."""

    timestamp: datetime
    temperature: float
    temperature_min: float
    temperature_max: float
    condition_text: str
    precipitation: float = 0.0

    @property
    def date(self) -> date:
        return self.timestamp.date()

    def validate(self) -> "Sample":
        """Raise MalformedSampleError unless the fields can be folded into a day."""
        if not isinstance(self.timestamp, datetime):
            raise MalformedSampleError(f"timestamp must be a datetime, got {self.timestamp!r}")
        temp_min = _number(self.temperature_min, "temperature_min")
        temp_max = _number(self.temperature_max, "temperature_max")
        _number(self.temperature, "temperature")
        if temp_min > temp_max:
            raise MalformedSampleError(f"temperature_min {temp_min} above temperature_max {temp_max}")
        # None means no rain reported
        if self.precipitation is not None and _number(self.precipitation, "precipitation") < 0:
            raise MalformedSampleError(f"negative precipitation {self.precipitation}")
        return self

    @classmethod
    def from_item(cls, item: dict) -> "Sample":
        """
        Build a sample from an OpenWeather /forecast list entry:
        {"dt_txt": "...", "main": {"temp", "temp_min", "temp_max"},
         "weather": [{"description": ...}], "rain": {"3h": ...}}
        """
        if not isinstance(item, dict):
            raise MalformedSampleError(f"expected an object, got {type(item).__name__}")
        if "dt_txt" not in item:
            raise MalformedSampleError("missing 'dt_txt'")
        main = item.get("main")
        if not isinstance(main, dict):
            raise MalformedSampleError("missing 'main'")
        for key in ("temp", "temp_min", "temp_max"):
            if key not in main:
                raise MalformedSampleError(f"missing 'main.{key}'")

        weather = item.get("weather") or []
        first = weather[0] if isinstance(weather, list) and weather else None
        if not isinstance(first, dict) or "description" not in first:
            raise MalformedSampleError("missing 'weather[0].description'")

        # rain is absent (or {}) when nothing falls in the window
        rain = item.get("rain") or {}
        precip = rain.get("3h") if isinstance(rain, dict) else None
        precipitation = 0.0 if precip is None else _number(precip, "rain.3h")

        return cls(
            timestamp=_parse_timestamp(item["dt_txt"]),
            temperature=_number(main["temp"], "main.temp"),
            temperature_min=_number(main["temp_min"], "main.temp_min"),
            temperature_max=_number(main["temp_max"], "main.temp_max"),
            condition_text=str(first["description"]),
            precipitation=precipitation,
        ).validate()


@dataclass
class DailySummary:
    date: date
    min: float
    max: float
    condition_text: str
    precipitation_total: float = 0.0
    # collected per day but not charted
    temperatures: list[float] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "temp_min": self.min,
            "temp_max": self.max,
            "precip_total_mm": self.precipitation_total,
            "condition": self.condition_text,
            "temperatures": list(self.temperatures),
        }
