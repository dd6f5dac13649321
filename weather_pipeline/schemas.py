"""Wire schema for the OpenWeather One Call payload.

Only the fields the snapshot needs are declared; everything else the provider
sends is ignored. Condition lists must carry at least one entry so icon and
condition lookups on a decoded snapshot are always defined.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .entities import Condition, DailyForecast, Observation, WeatherSnapshot

HOURLY_LIMIT = 24
DAILY_LIMIT = 8


def _to_datetime(value: int) -> datetime:
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class WireCondition(_WireModel):
    main: str
    description: str
    icon: str

    def to_entity(self) -> Condition:
        return Condition(main=self.main, description=self.description, icon=self.icon)


def _conditions(items: List[WireCondition]) -> Tuple[Condition, ...]:
    return tuple(item.to_entity() for item in items)


class WireObservation(_WireModel):
    dt: int
    temp: float
    feels_like: Optional[float] = None
    humidity: int
    dew_point: Optional[float] = None
    wind_speed: float
    pop: Optional[float] = None
    weather: List[WireCondition] = Field(min_length=1)

    def to_entity(self) -> Observation:
        return Observation(
            timestamp=_to_datetime(self.dt),
            temperature=self.temp,
            feels_like=self.feels_like,
            humidity=self.humidity,
            wind_speed=self.wind_speed,
            dew_point=self.dew_point,
            precipitation_chance=self.pop,
            conditions=_conditions(self.weather),
        )


class WireDailyTemperature(_WireModel):
    min: float
    max: float


class WireDaily(_WireModel):
    dt: int
    temp: WireDailyTemperature
    humidity: int
    wind_speed: float
    pop: Optional[float] = None
    weather: List[WireCondition] = Field(min_length=1)

    def to_entity(self) -> DailyForecast:
        return DailyForecast(
            timestamp=_to_datetime(self.dt),
            temperature_min=self.temp.min,
            temperature_max=self.temp.max,
            humidity=self.humidity,
            wind_speed=self.wind_speed,
            precipitation_chance=self.pop,
            conditions=_conditions(self.weather),
        )


class OneCallPayload(_WireModel):
    current: WireObservation
    hourly: List[WireObservation] = Field(default_factory=list)
    daily: List[WireDaily] = Field(default_factory=list)

    def to_snapshot(self, hours: int = HOURLY_LIMIT, days: int = DAILY_LIMIT) -> WeatherSnapshot:
        return WeatherSnapshot(
            current=self.current.to_entity(),
            hourly=tuple(item.to_entity() for item in self.hourly[:hours]),
            daily=tuple(item.to_entity() for item in self.daily[:days]),
        )


__all__ = ["DAILY_LIMIT", "HOURLY_LIMIT", "OneCallPayload"]
