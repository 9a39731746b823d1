"""Exceptions raised by the fetcher, the MQTT writer and startup."""

from .schemas import FetchErrorKind


class MQWeatherError(Exception):
    """Base class for mqweather errors."""


class ConfigurationError(MQWeatherError):
    """Static configuration is unusable; fatal at startup."""


class FetchError(MQWeatherError):
    """A reading could not be obtained for a station.

    Attributes:
        kind: Which failure occurred.
        station: Station the fetch was for.
        detail: Human readable cause.
    """

    kind: FetchErrorKind

    def __init__(self, station: str, detail: str) -> None:
        super().__init__(f"{self.kind.value} for station {station}: {detail}")
        self.station = station
        self.detail = detail


class TransportFailure(FetchError):
    """Provider unreachable: connection, DNS, timeout or HTTP status error."""

    kind = FetchErrorKind.TRANSPORT_FAILURE


class ParseFailure(FetchError):
    """Provider response is not the expected conditions document."""

    kind = FetchErrorKind.PARSE_FAILURE


class ProviderRejected(FetchError):
    """Provider answered with an embedded application-level error.

    Recurs every cycle until the key or station is fixed.
    """

    kind = FetchErrorKind.PROVIDER_REJECTED

    def __init__(self, station: str, detail: str, error_type: str = "unknown") -> None:
        super().__init__(station, detail)
        self.error_type = error_type


class PublishError(MQWeatherError):
    """Broker rejected or did not confirm a single message."""

    def __init__(self, topic: str, reason: str) -> None:
        super().__init__(f"Failed to publish to {topic}: {reason}")
        self.topic = topic
        self.reason = reason
