from .base import HttpProvider, RequestConfig
from .nominatim import NominatimGeocoder
from .openweather import OpenWeatherFetcher

__all__ = ["HttpProvider", "NominatimGeocoder", "OpenWeatherFetcher", "RequestConfig"]
