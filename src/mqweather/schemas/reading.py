"""Reading schema for current weather conditions."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import Metric
from .target import PublishTarget

# Scale applied to float measurements so they travel as integer strings
MILLI_SCALE = 1000


def scale_milli(value: float) -> str:
    """Scale a measurement by 1000 and truncate toward zero.

    >>> scale_milli(-3.0001)
    '-3000'
    """
    return str(int(value * MILLI_SCALE))


def strip_percent(value: str) -> str:
    """Remove the first percent sign from a provider humidity string."""
    return value.replace("%", "", 1)


class Reading(BaseModel):
    """Current conditions snapshot for one station.

    Built from the provider's `current_observation` object, so the fields
    accept the provider's key names as aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    station: Annotated[str, Field(min_length=1)]
    temperature_c: Annotated[float, Field(alias="temp_c")]
    dewpoint_c: float
    wind_speed_kph: Annotated[float, Field(alias="wind_kph")]
    pressure_mb: str
    relative_humidity: str

    @field_validator("pressure_mb", "relative_humidity", mode="before")
    @classmethod
    def coerce_to_text(cls, v: Any) -> Any:
        """Keep provider text as-is, render bare JSON numbers as text."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    def publish_targets(self, topic_prefix: str = "mqweather") -> list[PublishTarget]:
        """Derive the five topic/payload pairs for this reading.

        Args:
            topic_prefix: First topic segment.

        Returns:
            Targets in the order temperature, dewpoint, wind, pressure, humidity.
        """
        payloads = {
            Metric.TEMPERATURE: scale_milli(self.temperature_c),
            Metric.DEWPOINT: scale_milli(self.dewpoint_c),
            Metric.WIND: scale_milli(self.wind_speed_kph),
            Metric.PRESSURE: self.pressure_mb,
            Metric.HUMIDITY: strip_percent(self.relative_humidity),
        }
        return [
            PublishTarget(
                metric=metric,
                topic=PublishTarget.topic_for(topic_prefix, self.station, metric),
                payload=payload,
            )
            for metric, payload in payloads.items()
        ]
