"""Weather Underground to MQTT producer."""

import asyncio
import logging

from ..clients import WundergroundClient
from ..config import MQTTConfig, WundergroundConfig
from ..errors import ConfigurationError, FetchError, ProviderRejected, PublishError
from ..outputs import MQTTWriter, OutputWriter
from ..schemas import Reading

logger = logging.getLogger(__name__)


class WeatherProducer:
    """Producer that republishes current conditions for one station.

    Each cycle fetches one reading and publishes five metrics:
    temperature, dewpoint, wind, pressure and humidity.
    """

    def __init__(
        self,
        wunderground_config: WundergroundConfig,
        mqtt_config: MQTTConfig | None = None,
        client: WundergroundClient | None = None,
        writer: OutputWriter | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize weather producer.

        Args:
            wunderground_config: Provider configuration (key, station, interval).
            mqtt_config: MQTT output configuration.
            client: Optional WundergroundClient for testing.
            writer: Optional output writer for testing.
            debug: Log tracebacks for cycle errors.

        Raises:
            ConfigurationError: If no station or API key is configured.
        """
        self.station = wunderground_config.station.strip()
        if not self.station:
            raise ConfigurationError("Weather Underground station is required")

        self.wunderground_config = wunderground_config
        self.mqtt_config = mqtt_config or MQTTConfig()
        self.debug = debug
        self.client = client or WundergroundClient(wunderground_config)
        self._writer = writer

    @property
    def interval_seconds(self) -> int:
        """Seconds to wait after a cycle completes."""
        return self.wunderground_config.fetch_interval_seconds

    @property
    def writer(self) -> OutputWriter:
        """Lazy-initialize MQTT writer."""
        if self._writer is None:
            self._writer = MQTTWriter(
                self.mqtt_config,
                client_id=self.mqtt_config.get_client_id(self.station),
                debug=self.debug,
            )
        return self._writer

    async def connect(self) -> bool:
        """Connect the writer to the broker.

        Returns:
            True if the initial connection attempt succeeded.
        """
        return await asyncio.to_thread(self.writer.connect)

    async def fetch(self) -> Reading | None:
        """Fetch a reading, logging provider failures.

        Returns:
            Reading, or None if this cycle should publish nothing.
        """
        try:
            return await self.client.get_conditions(self.station)
        except ProviderRejected as e:
            logger.error(
                "Provider rejected request for station %s (%s): %s. "
                "This repeats every cycle until the API key or station is fixed",
                e.station,
                e.error_type,
                e.detail,
            )
        except FetchError as e:
            logger.warning(
                "Could not read weather for station %s (%s): %s",
                e.station,
                e.kind.value,
                e.detail,
                exc_info=self.debug,
            )
        return None

    async def publish_reading(self, reading: Reading) -> int:
        """Publish every metric of a reading, each independently.

        Args:
            reading: Reading to publish.

        Returns:
            Number of metrics published.
        """
        published = 0
        for target in reading.publish_targets(self.mqtt_config.topic_prefix):
            try:
                await asyncio.to_thread(self.writer.publish, target.topic, target.payload)
            except PublishError as e:
                logger.error(
                    "Failed to publish %s for station %s to %s: %s",
                    target.metric.value,
                    reading.station,
                    e.topic,
                    e.reason,
                )
                continue
            published += 1
        return published

    async def run_once(self) -> int:
        """Fetch current conditions and publish them once.

        Returns:
            Number of metrics published this cycle.
        """
        logger.debug("Starting weather fetch for %s", self.station)

        reading = await self.fetch()
        if reading is None:
            return 0

        published = await self.publish_reading(reading)
        logger.info(
            "Weather cycle complete for %s: %d metrics published",
            self.station,
            published,
        )
        return published

    async def close(self) -> None:
        """Clean up resources."""
        await self.client.close()
        if self._writer is not None:
            await asyncio.to_thread(self._writer.close)
