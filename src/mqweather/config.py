"""Configuration settings loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class MQTTConfig(BaseSettings):
    """MQTT broker connection configuration."""

    host: str = "localhost"
    port: int = Field(default=1883, ge=1, le=65535)
    client_id: str = ""  # Empty = mqweather-<station>
    keepalive_seconds: int = Field(default=60, gt=0)
    topic_prefix: str = "mqweather"
    publish_timeout_seconds: float = Field(default=5.0, gt=0)
    disconnect_grace_ms: int = Field(default=250, ge=0)
    reconnect_max_delay_seconds: int = Field(default=120, ge=1)

    model_config = {"env_prefix": "MQTT_"}

    def get_client_id(self, station: str) -> str:
        """Client id to register with the broker."""
        return self.client_id.strip() or f"mqweather-{station}"


class WundergroundConfig(BaseSettings):
    """Weather Underground API configuration."""

    api_key: str = ""
    station: str = ""
    api_host: str = "http://api.wunderground.com"
    fetch_interval_seconds: int = Field(default=60, gt=0)
    timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = {"env_prefix": "WUNDERGROUND_"}


class Settings(BaseSettings):
    """Application settings combining all configs."""

    log_level: str = "INFO"
    debug: bool = False
    verbose: bool = False
    shutdown_timeout_seconds: float = Field(default=5.0, gt=0)
    mqtt: MQTTConfig = MQTTConfig()
    wunderground: WundergroundConfig = WundergroundConfig()


def get_settings() -> Settings:
    """Load settings from environment."""
    return Settings()
