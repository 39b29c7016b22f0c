"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class Settings:
    google_maps_api_key: str
    secret_key: str = ""
    auth_username: str = ""
    auth_password: str = ""
    port: int = 8080
    max_result_count: int = 20
    search_max_workers: int = 8
    session_cookie_secure: bool = False


def require_api_key(settings: Settings) -> str:
    """Return the Places API key or raise ConfigError when it is not configured."""
    if not settings.google_maps_api_key:
        raise ConfigError("Google Maps API key not configured")
    return settings.google_maps_api_key


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_maps_api_key = os.getenv("GOOGLE_MAPS_API_KEY", "")
    secret_key = os.getenv("SECRET_KEY", "")
    auth_username = os.getenv("AUTH_USERNAME", "")
    auth_password = os.getenv("AUTH_PASSWORD", "")
    port = int(os.getenv("PORT") or "8080")
    max_result_count = int(os.getenv("SEARCH_MAX_RESULTS") or "20")
    search_max_workers = int(os.getenv("SEARCH_MAX_WORKERS") or "8")
    session_cookie_secure = os.getenv("SESSION_COOKIE_SECURE", "false").lower() in {"1", "true", "yes"}

    if not google_maps_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not configured; lead searches will fail.")
    if not secret_key:
        logger.warning("SECRET_KEY is not set; sessions will not survive a restart.")
    if not auth_username or not auth_password:
        logger.warning("AUTH_USERNAME/AUTH_PASSWORD are not configured; every login will be rejected.")

    return Settings(
        google_maps_api_key=google_maps_api_key,
        secret_key=secret_key,
        auth_username=auth_username,
        auth_password=auth_password,
        port=port,
        max_result_count=max_result_count,
        search_max_workers=search_max_workers,
        session_cookie_secure=session_cookie_secure,
    )
