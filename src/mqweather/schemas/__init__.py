"""Weather reading schemas.

Pydantic models for provider readings and outbound MQTT messages.
"""

from .enums import FetchErrorKind, Metric
from .reading import Reading, scale_milli, strip_percent
from .target import PublishTarget

__all__ = [
    "FetchErrorKind",
    "Metric",
    "PublishTarget",
    "Reading",
    "scale_milli",
    "strip_percent",
]
