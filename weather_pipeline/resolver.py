from __future__ import annotations

import logging
from typing import Optional, Protocol

from .cache import TTLCache
from .entities import Coordinates
from .errors import AcquisitionError, PlaceNotFound, ResolverUnavailable

logger = logging.getLogger(__name__)

UNKNOWN_PLACE = "Unknown"


class Geocoder(Protocol):
    """A geocoding backend. Misses are ``None``, failures raise."""

    def forward(self, name: str) -> Optional[Coordinates]:
        ...

    def reverse(self, coords: Coordinates) -> Optional[str]:
        ...


class CoordinateResolver:
    """Turn place names into coordinates and coordinates into labels."""

    def __init__(self, geocoder: Geocoder, cache: Optional[TTLCache[Coordinates]] = None) -> None:
        self.geocoder = geocoder
        self.cache = cache

    def resolve(self, name: str) -> Coordinates:
        query = " ".join((name or "").split())
        if not query:
            raise PlaceNotFound("empty place name")
        key = query.casefold()
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                return cached
        try:
            coords = self.geocoder.forward(query)
        except AcquisitionError as exc:
            logger.error("Geocoder failed for %r: %s", query, exc)
            raise ResolverUnavailable(str(exc)) from exc
        if coords is None:
            logger.info("No geocoding match for %r", query)
            raise PlaceNotFound(query)
        if self.cache is not None:
            self.cache.set(key, coords)
        return coords

    def describe(self, coords: Coordinates) -> str:
        try:
            label = self.geocoder.reverse(coords)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Reverse geocoding failed for %s: %s", coords, exc, exc_info=exc)
            return UNKNOWN_PLACE
        return label or UNKNOWN_PLACE


__all__ = ["CoordinateResolver", "Geocoder", "UNKNOWN_PLACE"]
