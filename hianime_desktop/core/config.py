# config.py
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


class Config:
    """Base configuration class"""
    # Scraping target
    HIANIME_BASE_URL = os.getenv("HIANIME_BASE_URL", "https://hianime.to").rstrip("/")
    REQUEST_TIMEOUT = _env_int("REQUEST_TIMEOUT", 20)

    # Result cache windows (seconds)
    CACHE_FRESHNESS_SECONDS = _env_int("CACHE_FRESHNESS_SECONDS", 300)
    CACHE_STALENESS_SECONDS = _env_int("CACHE_STALENESS_SECONDS", 1800)

    # Periodic tasks (seconds)
    CACHE_SWEEP_INTERVAL = _env_int("CACHE_SWEEP_INTERVAL", 3600)
    EPISODE_CHECK_INTERVAL = _env_int("EPISODE_CHECK_INTERVAL", 1800)

    # Local user data
    STORAGE_PATH = os.getenv(
        "STORAGE_PATH",
        str(Path.home() / ".hianime-desktop" / "storage.json"),
    )

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Local shell server
    HOST = os.getenv("HOST", "127.0.0.1")
    PORT = _env_int("PORT", 5000)

    # Application settings
    DEBUG = os.getenv("FLASK_ENV") == "development"

    # Background tasks are skipped when False (tests, one-off scripts)
    START_SCHEDULER = True


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    START_SCHEDULER = False


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
