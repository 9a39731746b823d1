"""Weather Underground conditions API client."""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from ..config import WundergroundConfig
from ..errors import ConfigurationError, ParseFailure, ProviderRejected, TransportFailure
from ..schemas import Reading

logger = logging.getLogger(__name__)


class ProviderError(BaseModel):
    """Embedded error object in a provider response."""

    type: str = "unknown"
    description: str = ""


class ProviderStatus(BaseModel):
    """The `response` envelope returned with every API call."""

    version: str | None = None
    error: ProviderError | None = None
    results: list[dict[str, Any]] | None = None  # Present when a query is ambiguous


class WundergroundClient:
    """HTTP client for fetching current conditions from Weather Underground.

    Each call is a single request; retry policy is left to the caller's
    polling cadence.
    """

    def __init__(
        self,
        config: WundergroundConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize Weather Underground client.

        Args:
            config: Provider configuration settings.
            http_client: Optional custom HTTP client for testing.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        if not config.api_key.strip():
            raise ConfigurationError("Weather Underground API key is required")
        self.config = config
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                follow_redirects=True,
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def conditions_url(self, station: str) -> str:
        """Build the conditions endpoint URL for a station."""
        host = self.config.api_host.rstrip("/")
        return f"{host}/api/{self.config.api_key}/conditions/q/{station}.json"

    async def get_conditions(self, station: str) -> Reading:
        """Fetch current conditions for a station.

        Args:
            station: Weather Underground station or location identifier.

        Returns:
            Reading for the station.

        Raises:
            ValueError: If station is empty.
            TransportFailure: Provider could not be reached.
            ParseFailure: Response was not a conditions document.
            ProviderRejected: Provider reported an error (bad key, unknown
                station, rate limit, ambiguous location).
        """
        if not station.strip():
            raise ValueError("station must not be empty")

        url = self.conditions_url(station)
        logger.debug("Requesting conditions for %s", station)

        try:
            response = await self.http_client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportFailure(station, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise TransportFailure(station, f"{type(e).__name__}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ParseFailure(station, f"invalid JSON: {e}") from e

        return self._parse_conditions(station, data)

    def _parse_conditions(self, station: str, data: Any) -> Reading:
        """Parse a conditions response into a Reading.

        Args:
            station: Station identifier.
            data: Decoded JSON body.

        Returns:
            Reading built from `current_observation`.
        """
        if not isinstance(data, dict):
            raise ParseFailure(station, "response is not a JSON object")

        try:
            status = ProviderStatus.model_validate(data.get("response") or {})
        except ValidationError as e:
            raise ParseFailure(station, f"malformed response envelope: {e}") from e

        if status.error is not None:
            raise ProviderRejected(
                station,
                status.error.description or status.error.type,
                error_type=status.error.type,
            )

        observation = data.get("current_observation")
        if observation is None and status.results:
            raise ProviderRejected(
                station,
                f"location matches {len(status.results)} results",
                error_type="ambiguous_location",
            )
        if not isinstance(observation, dict):
            raise ParseFailure(station, "response has no current_observation")

        try:
            return Reading.model_validate({**observation, "station": station})
        except ValidationError as e:
            raise ParseFailure(station, f"malformed current_observation: {e}") from e
