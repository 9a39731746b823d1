"""HTTP clients for weather data sources."""

from .wunderground import WundergroundClient

__all__ = ["WundergroundClient"]
