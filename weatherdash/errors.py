from typing import Optional


class WeatherDashError(Exception):
    """Base class for every error raised by weatherdash."""


class AggregationError(WeatherDashError):
    pass


class MalformedSampleError(AggregationError):
    """A forecast entry could not be read as a sample.

    ``index`` is the entry's position in the input sequence (None when the
    sample was built outside of a sequence).
    """

    def __init__(self, reason: str, index: Optional[int] = None):
        self.reason = reason
        self.index = index
        where = f"sample #{index}" if index is not None else "sample"
        super().__init__(f"Malformed {where}: {reason}")

    def at(self, index: int) -> "MalformedSampleError":
        return MalformedSampleError(self.reason, index)


class InvalidConfigurationError(WeatherDashError, ValueError):
    pass


class CityNotFoundError(WeatherDashError):
    def __init__(self, city: str):
        self.city = city
        super().__init__(f"City not found: {city}")


class UpstreamUnavailableError(WeatherDashError):
    def __init__(self, detail: str, status_code: int = 503):
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)
