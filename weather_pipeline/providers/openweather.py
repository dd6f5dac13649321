"""OpenWeather One Call fetcher."""
from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from ..entities import Coordinates, WeatherSnapshot
from ..errors import DecodingError
from ..schemas import DAILY_LIMIT, HOURLY_LIMIT, OneCallPayload
from .base import HttpProvider


class OpenWeatherFetcher(HttpProvider):
    """Fetch and decode a full weather snapshot for a pair of coordinates."""

    base_url = "https://api.openweathermap.org/data/2.5/"
    # Downstream formatting assumes Fahrenheit and mph.
    units = "imperial"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        hours: int = HOURLY_LIMIT,
        days: int = DAILY_LIMIT,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url
        self.hours = hours
        self.days = days

    @property
    def endpoint(self) -> str:
        return self.base_url.rstrip("/") + "/onecall"

    def build_params(self, coords: Coordinates) -> dict:
        return {
            "lat": coords.latitude,
            "lon": coords.longitude,
            "exclude": "minutely",
            "appid": self.api_key,
            "units": self.units,
        }

    def fetch(self, coords: Coordinates) -> WeatherSnapshot:
        response = self._request("GET", self.endpoint, params=self.build_params(coords))
        data = self._json(response)
        try:
            payload = OneCallPayload.model_validate(data)
        except ValidationError as exc:
            self._log.error("One Call payload for %s failed validation: %s", coords, exc)
            raise DecodingError("schema", f"{exc.error_count()} validation errors", exc.errors()) from exc
        snapshot = payload.to_snapshot(hours=self.hours, days=self.days)
        self._log.debug(
            "Fetched snapshot for %s: %d hourly, %d daily", coords, len(snapshot.hourly), len(snapshot.daily)
        )
        return snapshot


__all__ = ["OpenWeatherFetcher"]
