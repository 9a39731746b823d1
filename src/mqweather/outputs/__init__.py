"""Output writers for weather readings."""

from .mqtt_writer import MQTTWriter
from .protocols import MQTTClientProtocol, OutputWriter

__all__ = ["MQTTClientProtocol", "MQTTWriter", "OutputWriter"]
