import os

# --- OpenWeather ---
OPENWEATHER_API_KEY = os.getenv("OPENWEATHER_API_KEY", "")
OPENWEATHER_BASE_URL = os.getenv("OPENWEATHER_BASE_URL", "https://api.openweathermap.org/data/2.5").rstrip("/")
OPENWEATHER_UNITS = os.getenv("OPENWEATHER_UNITS", "metric")

# --- Retries ---
MAX_RETRIES = int(os.getenv("MAX_RETRIES", "3"))
PER_REQ_TIMEOUT = float(os.getenv("PER_REQ_TIMEOUT", "5"))

# --- Dashboard ---
FORECAST_WINDOW_DAYS = int(os.getenv("FORECAST_WINDOW_DAYS", "5"))
DEFAULT_CITY = os.getenv("DEFAULT_CITY", "Kolkata")

# --- Cache ---
CACHE_TTL = int(os.getenv("CACHE_TTL_SECONDS", "600"))
REDIS_URL = os.getenv("REDIS_URL", "").strip()

# --- CORS ---
ALLOW_ORIGINS = os.getenv("ALLOW_ORIGINS", "*")
ALLOW_METHODS = os.getenv("ALLOW_METHODS", "*")
ALLOW_HEADERS = os.getenv("ALLOW_HEADERS", "*")
EXPOSE_HEADERS = os.getenv("EXPOSE_HEADERS", "X-Cache")
ALLOW_CREDENTIALS = os.getenv("ALLOW_CREDENTIALS", "false").lower() == "true"
CORS_MAX_AGE = int(os.getenv("CORS_MAX_AGE", "600"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def split_csv(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]
