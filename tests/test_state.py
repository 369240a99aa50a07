import pytest

from weatherdash.clients import CurrentWeather
from weatherdash.errors import CityNotFoundError, InvalidConfigurationError, UpstreamUnavailableError
from weatherdash import state
from weatherdash.state import DashboardSession, InvalidTransitionError

WEATHER = CurrentWeather(city="Kolkata", temperature=29.6, description="haze")


def test_idle_loading_loaded(make_day):
    s = DashboardSession()
    assert s.status == state.IDLE

    s.start("Kolkata")
    assert s.status == state.LOADING

    s.load(WEATHER, make_day("2025-10-15") + make_day("2025-10-16"))
    assert s.status == state.LOADED
    assert len(s.forecast) == 2

    snap = s.snapshot()
    assert snap["status"] == "loaded"
    assert snap["weather"]["temp_display"] == 30
    assert snap["chart"]["labels"] == ["Wed, Oct 15", "Thu, Oct 16"]
    assert snap["error"] is None


@pytest.mark.parametrize("exc, message", [
    (CityNotFoundError("Atlantis"), "City not found."),
    (UpstreamUnavailableError("boom"), "Weather data unavailable."),
])
def test_failed_clears_data(make_day, exc, message):
    s = DashboardSession()
    s.start("Kolkata")
    s.load(WEATHER, make_day("2025-10-15"))
    s.start("Atlantis")
    s.fail(exc)

    snap = s.snapshot()
    assert snap["status"] == "failed"
    assert snap["error"] == message
    assert snap["weather"] is None
    assert snap["forecast"] == [] and snap["chart"] is None


def test_load_requires_loading():
    s = DashboardSession()
    with pytest.raises(InvalidTransitionError):
        s.load(WEATHER, [])
    with pytest.raises(InvalidTransitionError):
        s.fail(CityNotFoundError("x"))


def test_bad_window_leaves_session_loading(make_day):
    s = DashboardSession(window_size=0)
    s.start("Kolkata")
    with pytest.raises(InvalidConfigurationError):
        s.load(WEATHER, make_day("2025-10-15"))
    assert s.status == state.LOADING
