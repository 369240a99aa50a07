from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from .models import DailySummary

# fixed English names so labels don't depend on the process locale
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class ChartSeries:
    labels: list[str]
    temperature_series: list[float]
    precipitation_series: list[float]


def format_label(d: date) -> str:
    """2025-10-15 -> 'Wed, Oct 15'"""
    return f"{_WEEKDAYS[d.weekday()]}, {_MONTHS[d.month - 1]} {d.day}"


def build_series(summaries: Sequence[DailySummary]) -> ChartSeries:
    return ChartSeries(
        labels=[format_label(s.date) for s in summaries],
        temperature_series=[s.max for s in summaries],
        precipitation_series=[s.precipitation_total for s in summaries],
    )


def chart_config(series: ChartSeries) -> dict:
    """
    Dual-axis chart: max temperature as a line on the left axis (y1),
    precipitation as bars on the right axis (y2), shared date labels.
    """
    return {
        "labels": list(series.labels),
        "datasets": [
            {
                "label": "Max Temp (°C)",
                "type": "line",
                "data": list(series.temperature_series),
                "borderColor": "orange",
                "backgroundColor": "orange",
                "fill": False,
                "yAxisID": "y1",
            },
            {
                "label": "Precipitation (mm)",
                "type": "bar",
                "data": list(series.precipitation_series),
                "backgroundColor": "rgba(135, 206, 250, 0.7)",
                "yAxisID": "y2",
            },
        ],
        "options": {
            "responsive": True,
            "plugins": {"legend": {"position": "bottom"}},
            "scales": {
                "y1": {
                    "type": "linear",
                    "position": "left",
                    "title": {"display": True, "text": "Temperature (°C)"},
                },
                "y2": {
                    "type": "linear",
                    "position": "right",
                    "grid": {"drawOnChartArea": False},
                    "title": {"display": True, "text": "Rainfall (mm)"},
                },
            },
        },
    }
