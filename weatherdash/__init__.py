"""Weather dashboard backend: current weather, 5-day forecast and chart payload."""

__version__ = "1.0.0"
