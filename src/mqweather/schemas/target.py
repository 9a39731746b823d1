"""Publish target schema."""

from pydantic import BaseModel, ConfigDict

from .enums import Metric


class PublishTarget(BaseModel):
    """Topic and payload ready to hand to the broker.

    Topic format: `{prefix}/{station}/{metric}`
    """

    model_config = ConfigDict(frozen=True)

    metric: Metric
    topic: str
    payload: str

    @staticmethod
    def topic_for(prefix: str, station: str, metric: Metric) -> str:
        """Build the topic for a station metric."""
        return f"{prefix}/{station}/{metric.value}"

    def as_pair(self) -> tuple[str, str]:
        """Return the (topic, payload) tuple."""
        return self.topic, self.payload
