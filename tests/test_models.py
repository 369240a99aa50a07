from datetime import date, datetime

import pytest

from weatherdash.errors import MalformedSampleError
from weatherdash.models import DailySummary, Sample


def test_from_item_reads_openweather_entry(make_item):
    s = Sample.from_item(make_item("2025-10-15 12:00:00", temp=21.3, temp_min=20.1, temp_max=22.4, rain=1.2, desc="light rain"))
    assert s.timestamp == datetime(2025, 10, 15, 12, 0)
    assert s.date == date(2025, 10, 15)
    assert s.temperature == 21.3
    assert s.temperature_min == 20.1
    assert s.temperature_max == 22.4
    assert s.precipitation == 1.2
    assert s.condition_text == "light rain"


def test_from_item_without_rain_is_zero(make_item):
    item = make_item("2025-10-15 12:00:00")
    assert Sample.from_item(item).precipitation == 0.0

    item["rain"] = {}
    assert Sample.from_item(item).precipitation == 0.0


def test_from_item_bad_timestamp(make_item):
    with pytest.raises(MalformedSampleError, match="timestamp"):
        Sample.from_item(make_item("15/10/2025 12h"))


@pytest.mark.parametrize("field", ["temp", "temp_min", "temp_max"])
def test_from_item_missing_temperature(make_item, field):
    item = make_item("2025-10-15 12:00:00")
    del item["main"][field]
    with pytest.raises(MalformedSampleError, match=field):
        Sample.from_item(item)


def test_from_item_non_numeric_temperature(make_item):
    item = make_item("2025-10-15 12:00:00")
    item["main"]["temp_max"] = "hot"
    with pytest.raises(MalformedSampleError) as ei:
        Sample.from_item(item)
    assert ei.value.index is None


def test_from_item_missing_description(make_item):
    item = make_item("2025-10-15 12:00:00")
    item["weather"] = []
    with pytest.raises(MalformedSampleError, match="description"):
        Sample.from_item(item)


def test_summary_to_dict():
    d = DailySummary(date=date(2025, 10, 15), min=8.1, max=18.0, condition_text="few clouds",
                     precipitation_total=1.4, temperatures=[10.0, 12.5])
    assert d.to_dict() == {
        "date": "2025-10-15",
        "temp_min": 8.1,
        "temp_max": 18.0,
        "precip_total_mm": 1.4,
        "condition": "few clouds",
        "temperatures": [10.0, 12.5],
    }


@pytest.mark.parametrize("weather", [{"description": "haze"}, "haze", [None]])
def test_from_item_weather_not_a_list_of_objects(make_item, weather):
    item = make_item("2025-10-15 12:00:00")
    item["weather"] = weather
    with pytest.raises(MalformedSampleError, match="description"):
        Sample.from_item(item)


def test_from_item_min_above_max(make_item):
    with pytest.raises(MalformedSampleError, match="above"):
        Sample.from_item(make_item("2025-10-15 12:00:00", temp=15.0, temp_min=20.0, temp_max=10.0))


def test_from_item_negative_rain(make_item):
    with pytest.raises(MalformedSampleError, match="negative"):
        Sample.from_item(make_item("2025-10-15 12:00:00", rain=-0.1))


def test_validate_returns_sample():
    s = Sample(timestamp=datetime(2025, 10, 15), temperature=12.0, temperature_min=11.0,
               temperature_max=13.0, condition_text="mist", precipitation=None)
    assert s.validate() is s
