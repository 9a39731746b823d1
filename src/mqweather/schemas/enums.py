"""Enums for weather readings and publish targets."""

from enum import Enum


class Metric(str, Enum):
    """Measurement published for a station, used as the last topic segment."""

    TEMPERATURE = "temperature"
    DEWPOINT = "dewpoint"
    WIND = "wind"
    PRESSURE = "pressure"
    HUMIDITY = "humidity"


class FetchErrorKind(str, Enum):
    """Reason a reading could not be obtained from the provider."""

    TRANSPORT_FAILURE = "transport_failure"
    PARSE_FAILURE = "parse_failure"
    PROVIDER_REJECTED = "provider_rejected"
