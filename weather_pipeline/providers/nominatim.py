"""Nominatim (OpenStreetMap) geocoding adapter."""
from __future__ import annotations

from typing import Optional

from ..entities import Coordinates
from ..errors import DecodingError
from .base import HttpProvider, RequestConfig

# Most specific first.
LOCALITY_KEYS = ("city", "town", "village", "hamlet", "municipality", "suburb")


class NominatimGeocoder(HttpProvider):
    """Forward and reverse geocoding against a Nominatim instance.

    Misses are reported as ``None``; transport and status failures raise the
    provider errors from :mod:`weather_pipeline.errors`.
    """

    base_url = "https://nominatim.openstreetmap.org"

    def __init__(self, base_url: Optional[str] = None, user_agent: str = "weather-pipeline/0.1", **kwargs) -> None:
        kwargs.setdefault("request_config", RequestConfig(user_agent=user_agent))
        super().__init__(**kwargs)
        self.base_url = (base_url or self.base_url).rstrip("/")

    def forward(self, name: str) -> Optional[Coordinates]:
        params = {"q": name, "format": "json", "limit": 1}
        response = self._request("GET", f"{self.base_url}/search", params=params)
        results = self._json(response)
        if not isinstance(results, list):
            raise DecodingError("schema", "search response is not a list")
        if not results:
            return None
        first = results[0]
        try:
            return Coordinates(latitude=float(first["lat"]), longitude=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodingError("schema", f"search result without coordinates: {exc}") from exc

    def reverse(self, coords: Coordinates) -> Optional[str]:
        params = {
            "lat": coords.latitude,
            "lon": coords.longitude,
            "format": "jsonv2",
            "zoom": 10,
        }
        response = self._request("GET", f"{self.base_url}/reverse", params=params)
        data = self._json(response)
        if not isinstance(data, dict) or "error" in data:
            return None
        address = data.get("address")
        if not isinstance(address, dict):
            return None
        for key in LOCALITY_KEYS:
            if address.get(key):
                return address[key]
        return None


__all__ = ["NominatimGeocoder"]
