"""Derived values a presentation layer reads off a snapshot.

These are plain conversions with fallbacks for the empty snapshot. Layout,
styling and localized wording stay with the presentation layer.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Union

from .entities import Condition, DailyForecast, Observation, WeatherSnapshot

DEFAULT_ICON = "dayClearSky"
DEFAULT_SYMBOL = "sun.max.fill"

ICON_SYMBOLS: Dict[str, str] = {
    "01d": "sun.max.fill",
    "01n": "moon.fill",
    "02d": "cloud.sun.fill",
    "02n": "cloud.moon.fill",
    "03d": "cloud.fill",
    "03n": "cloud.fill",
    "04d": "cloud.fill",
    "04n": "cloud.fill",
    "09d": "cloud.drizzle.fill",
    "09n": "cloud.drizzle.fill",
    "10d": "cloud.heavyrain.fill",
    "10n": "cloud.heavyrain.fill",
    "11d": "cloud.bolt.fill",
    "11n": "cloud.bolt.fill",
    "13d": "cloud.snow.fill",
    "13n": "cloud.snow.fill",
    "50d": "cloud.fog.fill",
    "50n": "cloud.fog.fill",
}


def primary_condition(entry: Union[Observation, DailyForecast, None]) -> Optional[Condition]:
    if entry is None or not entry.conditions:
        return None
    return entry.conditions[0]


def current_icon(snapshot: WeatherSnapshot) -> str:
    condition = primary_condition(snapshot.current)
    return condition.icon if condition else DEFAULT_ICON


def current_conditions(snapshot: WeatherSnapshot) -> str:
    condition = primary_condition(snapshot.current)
    return condition.main if condition else ""


def icon_symbol(icon: str) -> str:
    return ICON_SYMBOLS.get(icon, DEFAULT_SYMBOL)


def fahrenheit_to_celsius(value: float) -> float:
    return 5.0 / 9 * (value - 32)


def format_celsius(value: float) -> str:
    return f"{fahrenheit_to_celsius(value):0.1f}"


def format_humidity(value: int) -> str:
    return f"{value}%"


def format_wind_speed(value: float) -> str:
    return f"{value:0.1f}"


def format_chance(value: Optional[float]) -> str:
    """Probability of precipitation as a percentage, ``--`` when the provider sent none."""
    if value is None:
        return "--"
    return f"{value * 100:0.0f}%"


def day_label(timestamp: datetime) -> str:
    return timestamp.strftime("%a")


def full_date(timestamp: datetime) -> str:
    return timestamp.strftime("%A, %B %d, %Y")


__all__ = [
    "DEFAULT_ICON",
    "ICON_SYMBOLS",
    "current_conditions",
    "current_icon",
    "day_label",
    "fahrenheit_to_celsius",
    "format_celsius",
    "format_chance",
    "format_humidity",
    "format_wind_speed",
    "full_date",
    "icon_symbol",
    "primary_condition",
]
