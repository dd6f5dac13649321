from __future__ import annotations

import copy
import logging
import threading

import pytest

from requests_mock import Mocker

BASE_TS = 1718438400  # 2024-06-15T08:00:00Z

_CONDITION = {"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}


def _hour(offset: int, temp: float) -> dict:
    return {
        "dt": BASE_TS + offset * 3600,
        "temp": temp,
        "feels_like": temp - 1,
        "pressure": 1012,
        "humidity": 40,
        "dew_point": 51.3,
        "wind_speed": 6.9,
        "pop": 0.2,
        "weather": [dict(_CONDITION)],
    }


def _day(offset: int) -> dict:
    return {
        "dt": BASE_TS + offset * 86400,
        "temp": {"day": 75.0, "min": 60.1, "max": 80.4, "night": 62.0, "eve": 70.0, "morn": 61.0},
        "humidity": 35,
        "wind_speed": 9.2,
        "pop": 0.05,
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
    }


ONE_CALL_PAYLOAD = {
    "lat": 37.5485,
    "lon": -121.9886,
    "timezone": "America/Los_Angeles",
    "current": {
        "dt": BASE_TS,
        "sunrise": BASE_TS - 7200,
        "sunset": BASE_TS + 43200,
        "temp": 72.5,
        "feels_like": 71.8,
        "pressure": 1013,
        "humidity": 42,
        "dew_point": 48.2,
        "uvi": 3.1,
        "clouds": 0,
        "visibility": 10000,
        "wind_speed": 5.75,
        "wind_deg": 300,
        "weather": [dict(_CONDITION)],
    },
    "hourly": [_hour(i, 70.0 + i * 0.1) for i in range(48)],
    "daily": [_day(i) for i in range(8)],
}


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture
def one_call_payload() -> dict:
    return copy.deepcopy(ONE_CALL_PAYLOAD)


class _JoinWatcher(logging.Handler):
    """Sets ``joined`` once a caller has attached to an in-flight location request."""

    def __init__(self) -> None:
        super().__init__(logging.DEBUG)
        self.joined = threading.Event()

    def emit(self, record: logging.LogRecord) -> None:
        if record.getMessage().startswith("Joining in-flight"):
            self.joined.set()


@pytest.fixture
def location_joins():
    logger = logging.getLogger("weather_pipeline.location")
    watcher = _JoinWatcher()
    previous = logger.level
    logger.setLevel(logging.DEBUG)
    logger.addHandler(watcher)
    yield watcher.joined
    logger.removeHandler(watcher)
    logger.setLevel(previous)
