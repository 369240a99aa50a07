import pytest

from weatherdash import cache, config


@pytest.fixture(autouse=True)
def memory_cache(monkeypatch):
    # never touch a real redis from tests
    monkeypatch.setattr(config, "REDIS_URL", "")
    monkeypatch.setattr(cache, "_redis", None)
    cache.clear_memory()
    yield
    cache.clear_memory()


@pytest.fixture
def make_item():
    """OpenWeather /forecast list entry."""
    def _make(dt_txt, temp=20.0, temp_min=None, temp_max=None, rain=None, desc="clear sky"):
        item = {
            "dt_txt": dt_txt,
            "main": {
                "temp": temp,
                "temp_min": temp if temp_min is None else temp_min,
                "temp_max": temp if temp_max is None else temp_max,
            },
            "weather": [{"description": desc}],
        }
        if rain is not None:
            item["rain"] = {"3h": rain}
        return item
    return _make


@pytest.fixture
def make_day(make_item):
    """Eight 3-hourly entries for one date, temps 10..17, 0.5 mm each."""
    def _make(day, rain=0.5):
        return [
            make_item(f"{day} {h:02d}:00:00", temp=10.0 + i, temp_min=9.0 + i, temp_max=11.0 + i, rain=rain)
            for i, h in enumerate(range(0, 24, 3))
        ]
    return _make
