"""Unit test fixtures - mocks and sample data."""

import json
from pathlib import Path

import pytest

from mqweather.config import MQTTConfig, WundergroundConfig
from mqweather.schemas import Reading

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures" / "wunderground"


def _load(name: str) -> dict:
    return json.loads((FIXTURES_DIR / name).read_text())


@pytest.fixture
def load_fixture():
    """Loader for Weather Underground JSON fixtures."""
    return _load


@pytest.fixture
def wunderground_config(sample_api_key: str, sample_station_id: str) -> WundergroundConfig:
    """Weather Underground configuration for testing."""
    return WundergroundConfig(
        api_key=sample_api_key,
        station=sample_station_id,
        api_host="http://api.wunderground.com",
        fetch_interval_seconds=60,
    )


@pytest.fixture
def mqtt_config() -> MQTTConfig:
    """MQTT configuration for testing."""
    return MQTTConfig(
        host="localhost",
        port=1883,
        publish_timeout_seconds=1.0,
        disconnect_grace_ms=250,
    )


@pytest.fixture
def conditions_payload() -> dict:
    """Conditions response for KXATEST1."""
    return _load("conditions_KXATEST1.json")


@pytest.fixture
def sample_reading(sample_station_id: str) -> Reading:
    """Reading matching the KXATEST1 conditions fixture."""
    return Reading(
        station=sample_station_id,
        temperature_c=20.1234,
        dewpoint_c=15.0,
        wind_speed_kph=10.9999,
        pressure_mb="1013.2",
        relative_humidity="65%",
    )
