"""Resolve a place, fetch its weather and publish the result as observable state."""
from .app import build_orchestrator
from .config import Settings, setup_logging
from .entities import (
    AcquisitionState,
    AttemptOutcome,
    AttemptPhase,
    Condition,
    Coordinates,
    DailyForecast,
    LocationFix,
    Observation,
    PermissionState,
    PlaceQuery,
    WeatherSnapshot,
)
from .errors import (
    AcquisitionError,
    ConfigurationError,
    DecodingError,
    InvalidResponse,
    LocationUnavailable,
    PermissionDenied,
    PlaceNotFound,
    ResolverUnavailable,
    Timeout,
    TransportError,
)
from .location import DeviceLocationProvider, LocationPlatform
from .resolver import UNKNOWN_PLACE, CoordinateResolver, Geocoder
from .services.orchestrator import AcquisitionOrchestrator

__version__ = "0.1.0"
