import logging
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import cache, config
from .aggregations import aggregate_items
from .clients import fetch_current, fetch_forecast
from .errors import (
    CityNotFoundError,
    InvalidConfigurationError,
    MalformedSampleError,
    UpstreamUnavailableError,
    WeatherDashError,
)
from .logging_config import setup_logging
from .series import build_series, chart_config
from .state import NOT_FOUND_MESSAGE, DashboardSession

setup_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# App
# ------------------------------------------------------------
app = FastAPI(title="Weather Dashboard API", version="1.0.0")

# --- CORS ---
origins = config.split_csv(config.ALLOW_ORIGINS)
methods = config.split_csv(config.ALLOW_METHODS)
headers = config.split_csv(config.ALLOW_HEADERS)

allow_origins_cfg = ["*"] if (origins == ["*"] and not config.ALLOW_CREDENTIALS) else origins or ["*"]
allow_methods_cfg = ["*"] if methods == ["*"] else (methods or ["GET", "OPTIONS"])
allow_headers_cfg = ["*"] if headers == ["*"] else (headers or ["*"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins_cfg,
    allow_credentials=config.ALLOW_CREDENTIALS,
    allow_methods=allow_methods_cfg,
    allow_headers=allow_headers_cfg,
    expose_headers=config.split_csv(config.EXPOSE_HEADERS),
    max_age=config.CORS_MAX_AGE,
)


# --- error mapping ---
@app.exception_handler(CityNotFoundError)
async def city_not_found(request: Request, exc: CityNotFoundError):
    return JSONResponse(status_code=404, content={"detail": NOT_FOUND_MESSAGE})


@app.exception_handler(UpstreamUnavailableError)
async def upstream_unavailable(request: Request, exc: UpstreamUnavailableError):
    logger.error("upstream failure on %s: %s", request.url.path, exc.detail)
    # upstream 4xx are passed through; retries exhausted is 503
    return JSONResponse(status_code=exc.status_code, content={"detail": "Weather data unavailable."})


@app.exception_handler(MalformedSampleError)
async def malformed_sample(request: Request, exc: MalformedSampleError):
    logger.error("bad forecast payload on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": str(exc), "index": exc.index})


@app.exception_handler(InvalidConfigurationError)
async def invalid_configuration(request: Request, exc: InvalidConfigurationError):
    logger.error("configuration error: %s", exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health")
async def health():
    """OK while the process is alive; reports which cache backend is in use."""
    return {"status": "ok", "cache": await cache.backend()}


@app.get("/weather/{city}")
async def get_weather(city: str):
    key = cache.make_key("weather", city)
    cached = await cache.aget(key)
    if cached is not None:
        return JSONResponse(content=cached, headers={"X-Cache": "HIT"})

    current = await fetch_current(city)
    result = current.to_dict()
    await cache.aset(key, result, config.CACHE_TTL)
    return JSONResponse(content=result, headers={"X-Cache": "MISS"})


@app.get("/forecast/{city}")
async def get_forecast(
    city: str,
    days: Optional[int] = Query(None, ge=1, le=6, description="Number of daily buckets"),
):
    window = days if days is not None else config.FORECAST_WINDOW_DAYS

    # 1) Cache
    key = cache.make_key("forecast", city, window)
    cached = await cache.aget(key)
    if cached is not None:
        return JSONResponse(content=cached, headers={"X-Cache": "HIT"})

    # 2) OpenWeather (with retries)
    items = await fetch_forecast(city)

    # 3) Daily buckets + chart
    summaries = aggregate_items(items, window)
    result = {
        "city": city,
        "days": [d.to_dict() for d in summaries],
        "chart": chart_config(build_series(summaries)),
    }
    await cache.aset(key, result, config.CACHE_TTL)
    return JSONResponse(content=result, headers={"X-Cache": "MISS"})


async def _load_dashboard(city: str) -> dict:
    session = DashboardSession(window_size=config.FORECAST_WINDOW_DAYS)
    session.start(city)
    try:
        current = await fetch_current(city)
        items = await fetch_forecast(city)
        session.load(current, items)
    except InvalidConfigurationError:
        raise
    except WeatherDashError as e:
        logger.warning("dashboard %r failed: %s", city, e)
        session.fail(e)
    return session.snapshot()


@app.get("/dashboard")
async def get_default_dashboard():
    return await _load_dashboard(config.DEFAULT_CITY)


@app.get("/dashboard/{city}")
async def get_dashboard(city: str):
    return await _load_dashboard(city)

