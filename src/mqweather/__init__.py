"""mqweather - publish Weather Underground conditions over MQTT.

Polls the current conditions for one station and publishes five metrics
under `mqweather/<station>/<metric>`:

- temperature, dewpoint, wind: value x 1000, truncated to an integer
- pressure: provider string, unchanged
- humidity: provider string without its percent sign

Usage:
    from mqweather.producers import WeatherProducer
    from mqweather.schemas import Reading, PublishTarget
"""

__version__ = "0.1.0"

from .config import Settings, get_settings
from .errors import (
    ConfigurationError,
    FetchError,
    ParseFailure,
    ProviderRejected,
    PublishError,
    TransportFailure,
)
from .producers import WeatherProducer
from .schemas import Metric, PublishTarget, Reading

__all__ = [
    "ConfigurationError",
    "FetchError",
    "Metric",
    "ParseFailure",
    "ProviderRejected",
    "PublishError",
    "PublishTarget",
    "Reading",
    "Settings",
    "TransportFailure",
    "WeatherProducer",
    "get_settings",
]
