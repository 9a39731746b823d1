"""MQTT writer for weather readings."""

import logging
import time
from typing import Any

import paho.mqtt.client as mqtt

from ..config import MQTTConfig
from ..errors import PublishError
from .protocols import MQTTClientProtocol

logger = logging.getLogger(__name__)

# At most once; failed messages are not retried
QOS_AT_MOST_ONCE = 0

_FLUSH_POLL_SECONDS = 0.01


class MQTTWriter:
    """Publishes topic/payload pairs to an MQTT broker.

    The paho network loop runs in its own thread once `connect` has been
    called, and keeps reconnecting in the background if the broker drops.
    """

    def __init__(
        self,
        config: MQTTConfig,
        client_id: str,
        client: MQTTClientProtocol | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize MQTT writer.

        Args:
            config: MQTT configuration settings.
            client_id: Client id to register with the broker.
            client: Optional MQTT client for testing.
            debug: Attach paho's internal logger.
        """
        self.config = config
        self.client_id = client_id
        self.debug = debug
        self._client: MQTTClientProtocol | None = client
        self._started = False

    @property
    def client(self) -> MQTTClientProtocol:
        """Lazy-initialize MQTT client."""
        if self._client is None:
            client = mqtt.Client(
                mqtt.CallbackAPIVersion.VERSION2,
                client_id=self.client_id,
            )
            client.on_connect = self._on_connect
            client.on_disconnect = self._on_disconnect
            client.reconnect_delay_set(
                min_delay=1, max_delay=self.config.reconnect_max_delay_seconds
            )
            if self.debug:
                client.enable_logger(logging.getLogger("paho.mqtt"))
            self._client = client  # type: ignore[assignment]
        assert self._client is not None
        return self._client

    def _on_connect(
        self, client: Any, userdata: Any, flags: Any, reason_code: Any, properties: Any
    ) -> None:
        """Callback for broker CONNACK."""
        if getattr(reason_code, "is_failure", False):
            logger.error("MQTT connection refused by broker: %s", reason_code)
        else:
            logger.info(
                "Connected to MQTT broker %s:%d as %s",
                self.config.host,
                self.config.port,
                self.client_id,
            )

    def _on_disconnect(
        self, client: Any, userdata: Any, flags: Any, reason_code: Any, properties: Any
    ) -> None:
        """Callback for broker disconnects."""
        if getattr(reason_code, "is_failure", False):
            logger.warning("Disconnected from MQTT broker: %s", reason_code)
        else:
            logger.info("Disconnected from MQTT broker")

    def connect(self) -> bool:
        """Connect to the broker and start the network loop.

        A failed initial connection is logged, and the network loop is
        started anyway so the client keeps retrying.

        Returns:
            True if the initial connection attempt succeeded.
        """
        connected = True
        try:
            self.client.connect(
                self.config.host,
                self.config.port,
                keepalive=self.config.keepalive_seconds,
            )
        except OSError as e:
            logger.error(
                "Could not connect to MQTT broker %s:%d: %s",
                self.config.host,
                self.config.port,
                e,
            )
            connected = False

        self.client.loop_start()
        self._started = True
        return connected

    def publish(self, topic: str, payload: str) -> None:
        """Publish a payload and wait for it to leave the client.

        Args:
            topic: MQTT topic.
            payload: Message body.

        Raises:
            PublishError: If the client rejects the message or it is not
                sent within the publish timeout.
        """
        info = self.client.publish(topic, payload, qos=QOS_AT_MOST_ONCE, retain=False)
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            raise PublishError(topic, mqtt.error_string(info.rc))

        try:
            info.wait_for_publish(timeout=self.config.publish_timeout_seconds)
        except (RuntimeError, ValueError) as e:
            raise PublishError(topic, str(e)) from e

        if not info.is_published():
            raise PublishError(
                topic,
                f"not sent within {self.config.publish_timeout_seconds}s",
            )
        logger.debug("Published %s = %s", topic, payload)

    def flush(self, grace_ms: int) -> None:
        """Wait up to grace_ms for buffered outbound data to be written.

        Args:
            grace_ms: Maximum time to wait in milliseconds.
        """
        deadline = time.monotonic() + grace_ms / 1000
        while self.client.want_write():
            if time.monotonic() >= deadline:
                logger.warning("Outbound MQTT data still pending after %d ms", grace_ms)
                return
            time.sleep(_FLUSH_POLL_SECONDS)

    def close(self) -> None:
        """Flush pending messages, disconnect and stop the network loop."""
        if self._client is None:
            return
        self.flush(self.config.disconnect_grace_ms)
        self._client.disconnect()
        if self._started:
            self._client.loop_stop()
            self._started = False
