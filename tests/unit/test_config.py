"""Unit tests for configuration and error types."""

import pytest
from pydantic import ValidationError

from mqweather.config import MQTTConfig, Settings, WundergroundConfig
from mqweather.errors import FetchError, ProviderRejected, PublishError, TransportFailure
from mqweather.schemas import FetchErrorKind


class TestMQTTConfig:
    def test_defaults(self):
        config = MQTTConfig()

        assert config.host == "localhost"
        assert config.port == 1883
        assert config.topic_prefix == "mqweather"
        assert config.disconnect_grace_ms == 250

    def test_default_client_id_uses_station(self):
        assert MQTTConfig().get_client_id("KXATEST1") == "mqweather-KXATEST1"

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MQTT_HOST", "broker.local")
        monkeypatch.setenv("MQTT_PORT", "8883")

        config = MQTTConfig()

        assert config.host == "broker.local"
        assert config.port == 8883

    def test_port_out_of_range(self):
        with pytest.raises(ValidationError):
            MQTTConfig(port=0)


class TestWundergroundConfig:
    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("WUNDERGROUND_API_KEY", "secret")
        monkeypatch.setenv("WUNDERGROUND_STATION", "KXATEST1")
        monkeypatch.setenv("WUNDERGROUND_FETCH_INTERVAL_SECONDS", "120")

        config = WundergroundConfig()

        assert config.api_key == "secret"
        assert config.station == "KXATEST1"
        assert config.fetch_interval_seconds == 120

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            WundergroundConfig(fetch_interval_seconds=0)


class TestSettings:
    def test_nested_defaults(self):
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.mqtt.port == 1883
        assert settings.wunderground.fetch_interval_seconds == 60


class TestErrors:
    def test_fetch_error_kinds(self):
        error = TransportFailure("KXATEST1", "ReadTimeout: timed out")

        assert isinstance(error, FetchError)
        assert error.kind == FetchErrorKind.TRANSPORT_FAILURE
        assert str(error) == "transport_failure for station KXATEST1: ReadTimeout: timed out"

    def test_provider_rejected_keeps_error_type(self):
        error = ProviderRejected("KXATEST1", "invalid key", error_type="keynotfound")

        assert error.error_type == "keynotfound"
        assert error.kind == FetchErrorKind.PROVIDER_REJECTED

    def test_publish_error(self):
        error = PublishError("mqweather/KXATEST1/wind", "no connection")

        assert str(error) == "Failed to publish to mqweather/KXATEST1/wind: no connection"
