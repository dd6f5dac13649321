"""Wire the default providers into a ready-to-start orchestrator."""
from __future__ import annotations

from typing import Optional

import requests

from .cache import TTLCache
from .config import Settings
from .location import DeviceLocationProvider, LocationPlatform
from .providers.base import RequestConfig
from .providers.nominatim import NominatimGeocoder
from .providers.openweather import OpenWeatherFetcher
from .resolver import CoordinateResolver
from .services.orchestrator import AcquisitionOrchestrator


def build_orchestrator(
    platform: LocationPlatform,
    settings: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
) -> AcquisitionOrchestrator:
    settings = settings or Settings.from_env()
    geocoder = NominatimGeocoder(
        base_url=settings.geocoder_base_url,
        session=session,
        request_config=RequestConfig(timeout=settings.request_timeout, user_agent=settings.geocoder_user_agent),
    )
    fetcher = OpenWeatherFetcher(
        api_key=settings.require_api_key(),
        base_url=settings.weather_base_url,
        session=session,
        request_config=RequestConfig(timeout=settings.request_timeout),
    )
    location = DeviceLocationProvider(
        platform,
        timeout=settings.location_timeout,
        max_fix_age=settings.location_max_age,
    )
    resolver = CoordinateResolver(geocoder, cache=TTLCache(settings.geocode_ttl))
    return AcquisitionOrchestrator(
        resolver=resolver,
        fetcher=fetcher,
        location_provider=location,
        settings=settings,
    )


__all__ = ["build_orchestrator"]
