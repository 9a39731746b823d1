"""MQTT producers for weather data sources."""

from .weather import WeatherProducer

__all__ = ["WeatherProducer"]
