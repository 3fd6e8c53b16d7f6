import os


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}

APP_ENV = os.getenv("APP_ENV", "development")
APP_TITLE = os.getenv("APP_TITLE", "Rezervacija Menzi")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:4200").split(",")
    if origin.strip()
]

# /debug/clear wipes the whole store; off by default outside development.
ENABLE_DEBUG_ROUTES = _get_bool(os.getenv("ENABLE_DEBUG_ROUTES"), default=APP_ENV.lower() != "production")
