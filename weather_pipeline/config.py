"""Environment-backed settings for the weather acquisition pipeline."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Union

from .entities import Coordinates
from .errors import ConfigurationError


def env(name: str, default: Optional[str] = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ConfigurationError(f"Environment variable {name} is required")
    return value


def _env_float(name: str, default: float) -> float:
    raw = env(name, str(default))
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable {name} must be a number, got {raw!r}") from exc


@dataclass
class Settings:
    api_key: str = field(default_factory=lambda: os.getenv("WEATHER_API_KEY", ""))
    weather_base_url: str = field(
        default_factory=lambda: os.getenv("WEATHER_BASE_URL", "https://api.openweathermap.org/data/2.5/")
    )
    geocoder_base_url: str = field(
        default_factory=lambda: os.getenv("GEOCODER_BASE_URL", "https://nominatim.openstreetmap.org")
    )
    geocoder_user_agent: str = field(
        default_factory=lambda: os.getenv("GEOCODER_USER_AGENT", "weather-pipeline/0.1")
    )
    default_place: str = field(default_factory=lambda: os.getenv("WEATHER_DEFAULT_PLACE", "Noida"))
    default_latitude: float = field(default_factory=lambda: _env_float("WEATHER_DEFAULT_LATITUDE", 37.5485))
    default_longitude: float = field(default_factory=lambda: _env_float("WEATHER_DEFAULT_LONGITUDE", -121.9886))
    location_timeout: float = field(default_factory=lambda: _env_float("WEATHER_LOCATION_TIMEOUT", 10.0))
    location_max_age: float = field(default_factory=lambda: _env_float("WEATHER_LOCATION_MAX_AGE", 300.0))
    request_timeout: float = field(default_factory=lambda: _env_float("WEATHER_REQUEST_TIMEOUT", 10.0))
    geocode_ttl: float = field(default_factory=lambda: _env_float("WEATHER_GEOCODE_TTL", 24 * 60 * 60))
    log_level: str = field(default_factory=lambda: os.getenv("WEATHER_LOG_LEVEL", "INFO"))

    @classmethod
    def from_env(cls) -> "Settings":
        return cls()

    @property
    def default_coordinates(self) -> Coordinates:
        return Coordinates(self.default_latitude, self.default_longitude)

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError("Environment variable WEATHER_API_KEY is required")
        return self.api_key


def setup_logging(level: Union[str, int, None] = None, settings: Optional[Settings] = None) -> logging.Logger:
    """Attach a console handler to the package logger.

    Without an explicit ``level`` the one from ``settings`` (or the
    environment, ``WEATHER_LOG_LEVEL``) is used.
    """
    if level is None:
        level = (settings or Settings.from_env()).log_level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ConfigurationError(f"Unknown log level {level!r}")
        level = resolved

    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(fmt)
    console_handler.setLevel(level)

    root = logging.getLogger("weather_pipeline")
    root.setLevel(level)
    root.addHandler(console_handler)
    return root


__all__ = ["Settings", "env", "setup_logging"]
