from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from .errors import AcquisitionError


@dataclass(frozen=True)
class Coordinates:
    """Latitude/longitude pair in degrees."""

    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"{self.latitude:.4f},{self.longitude:.4f}"


@dataclass(frozen=True)
class PlaceQuery:
    """Where an acquisition attempt gets its coordinates from.

    Exactly one of ``name`` (a typed city) or ``coordinates`` is set. A query
    built with :meth:`device` carries neither and asks the device location
    provider for a fix when the attempt runs.
    """

    name: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    use_device: bool = False

    def __post_init__(self) -> None:
        sources = sum((self.name is not None, self.coordinates is not None, self.use_device))
        if sources != 1:
            raise ValueError("a place query needs exactly one source")

    @classmethod
    def city(cls, name: str) -> "PlaceQuery":
        return cls(name=name)

    @classmethod
    def at(cls, coordinates: Coordinates) -> "PlaceQuery":
        return cls(coordinates=coordinates)

    @classmethod
    def device(cls) -> "PlaceQuery":
        return cls(use_device=True)

    @property
    def is_city(self) -> bool:
        return self.name is not None


@dataclass(frozen=True)
class Condition:
    main: str
    description: str
    icon: str


@dataclass(frozen=True)
class Observation:
    """A single current or hourly observation.

    Units follow the provider's imperial system: temperatures in Fahrenheit and
    wind speed in miles per hour. ``precipitation_chance`` is the provider's
    probability of precipitation (0..1) and is absent on current observations.
    """

    timestamp: datetime
    temperature: float
    feels_like: Optional[float]
    humidity: int
    wind_speed: float
    dew_point: Optional[float]
    precipitation_chance: Optional[float]
    conditions: Tuple[Condition, ...]


@dataclass(frozen=True)
class DailyForecast:
    timestamp: datetime
    temperature_min: float
    temperature_max: float
    humidity: int
    wind_speed: float
    precipitation_chance: Optional[float]
    conditions: Tuple[Condition, ...]


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current, hourly and daily weather for one place at one point in time."""

    current: Optional[Observation]
    hourly: Tuple[Observation, ...] = ()
    daily: Tuple[DailyForecast, ...] = ()

    @classmethod
    def empty(cls) -> "WeatherSnapshot":
        return cls(current=None)

    @property
    def is_empty(self) -> bool:
        return self.current is None


class PermissionState(Enum):
    NOT_DETERMINED = "not_determined"
    AUTHORIZED = "authorized"
    DENIED = "denied"


@dataclass(frozen=True)
class LocationFix:
    coordinates: Coordinates
    taken_at: float


class AttemptPhase(Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    COMMITTED = "committed"
    FAILED = "failed"


class AttemptOutcome(Enum):
    COMMITTED = "committed"
    FAILED = "failed"
    SUPERSEDED = "superseded"


@dataclass(frozen=True)
class AcquisitionState:
    """The published aggregate. Always replaced as a whole."""

    active_place: str
    snapshot: WeatherSnapshot = field(default_factory=WeatherSnapshot.empty)
    is_invalid_place: bool = False
    last_error: Optional[AcquisitionError] = None
    is_loading: bool = False
    generation: int = 0
    phase: AttemptPhase = AttemptPhase.IDLE


__all__ = [
    "AcquisitionState",
    "AttemptOutcome",
    "AttemptPhase",
    "Condition",
    "Coordinates",
    "DailyForecast",
    "LocationFix",
    "Observation",
    "PermissionState",
    "PlaceQuery",
    "WeatherSnapshot",
]
