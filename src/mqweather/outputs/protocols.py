"""Protocols for output writers and the MQTT client they drive."""

from typing import Any, Protocol


class MessageInfoProtocol(Protocol):
    """Result handle returned by an MQTT publish call."""

    rc: int

    def wait_for_publish(self, timeout: float | None = None) -> None:
        """Block until the message is sent or the timeout expires."""
        ...

    def is_published(self) -> bool:
        """Whether the message has been sent."""
        ...


class MQTTClientProtocol(Protocol):
    """Protocol for the paho MQTT client to allow mocking."""

    def connect(self, host: str, port: int = 1883, keepalive: int = 60) -> Any:
        """Connect to a broker."""
        ...

    def loop_start(self) -> Any:
        """Start the background network thread."""
        ...

    def loop_stop(self) -> Any:
        """Stop the background network thread."""
        ...

    def publish(
        self,
        topic: str,
        payload: str | bytes | None = None,
        qos: int = 0,
        retain: bool = False,
    ) -> MessageInfoProtocol:
        """Publish a message."""
        ...

    def want_write(self) -> bool:
        """Whether outbound data is still buffered."""
        ...

    def disconnect(self) -> Any:
        """Disconnect from the broker."""
        ...


class OutputWriter(Protocol):
    """Protocol for output writers."""

    def connect(self) -> bool:
        """Open the connection, returning whether it succeeded."""
        ...

    def publish(self, topic: str, payload: str) -> None:
        """Publish a payload to a topic."""
        ...

    def close(self) -> None:
        """Flush and release the connection."""
        ...
