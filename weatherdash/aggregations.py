import logging
from collections.abc import Iterable, Sequence
from datetime import date

from .errors import InvalidConfigurationError, MalformedSampleError
from .models import DailySummary, Sample

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 5


def _check_window(window_size) -> None:
    if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size <= 0:
        raise InvalidConfigurationError(f"window_size must be a positive integer, got {window_size!r}")


def aggregate_daily(samples: Iterable[Sample], window_size: int = DEFAULT_WINDOW_DAYS) -> list[DailySummary]:
    """
    Fold 3-hourly samples into one summary per calendar date.

    Dates keep their first-seen order (the source is already sorted). The
    whole input is folded and only then cut to the first `window_size` dates.
    """
    _check_window(window_size)

    order: list[date] = []
    days: dict[date, DailySummary] = {}
    for i, s in enumerate(samples):
        if not isinstance(s, Sample):
            raise MalformedSampleError(f"expected a Sample, got {type(s).__name__}", i)
        try:
            s.validate()
        except MalformedSampleError as e:
            raise e.at(i) from None

        d = s.timestamp.date()
        summary = days.get(d)
        if summary is None:
            summary = DailySummary(
                date=d,
                min=s.temperature_min,
                max=s.temperature_max,
                condition_text=s.condition_text,
            )
            days[d] = summary
            order.append(d)

        summary.temperatures.append(s.temperature)
        summary.min = min(summary.min, s.temperature_min)
        summary.max = max(summary.max, s.temperature_max)
        summary.precipitation_total += s.precipitation or 0.0

    out = [days[d] for d in order[:window_size]]
    logger.debug("aggregated %d dates into %d summaries", len(order), len(out))
    return out


def samples_from_items(items: Sequence[dict]) -> list[Sample]:
    out: list[Sample] = []
    for i, it in enumerate(items):
        try:
            out.append(Sample.from_item(it))
        except MalformedSampleError as e:
            raise e.at(i) from None
    return out


def aggregate_items(items: Sequence[dict], window_size: int = DEFAULT_WINDOW_DAYS) -> list[DailySummary]:
    # window is validated before touching the payload
    _check_window(window_size)
    return aggregate_daily(samples_from_items(items), window_size)
