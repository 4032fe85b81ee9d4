"""Tests for configuration loading and validation."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from app_health.checks import FunctionCheck
from app_health.config import Config, HealthConfig


class TestHealthConfig:
    """Test cases for HealthConfig."""

    def test_defaults(self) -> None:
        """Test the default endpoint configuration."""
        config = HealthConfig()

        assert config.registry_key == "readiness"
        assert config.return_body is False
        assert config.alive_url == "/health/alive"
        assert config.ready_url == "/health/ready"
        assert config.custom_only is False
        assert config.custom_checks == ()

    def test_callables_are_wrapped(self) -> None:
        """Test that plain callables become FunctionCheck objects in a tuple."""

        def database_client(app) -> bool:
            return True

        config = HealthConfig(custom_checks=[database_client])

        assert isinstance(config.custom_checks, tuple)
        assert isinstance(config.custom_checks[0], FunctionCheck)
        assert config.custom_checks[0].name == "database_client"

    def test_is_frozen(self) -> None:
        """Test that the configuration is immutable."""
        config = HealthConfig()

        with pytest.raises(FrozenInstanceError):
            config.return_body = True  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"registry_key": ""}, "registry_key"),
            ({"registry_key": 1}, "Must be a non-empty string"),
            ({"registry_key": "TRACER"}, "reserved application config key"),
            ({"registry_key": "SECRET_KEY"}, "reserved application config key"),
            ({"alive_url": "health/alive"}, "alive_url"),
            ({"ready_url": ""}, "ready_url"),
            ({"alive_url": "/health", "ready_url": "/health"}, "must differ"),
            ({"custom_checks": [42]}, "Invalid custom check"),
        ],
    )
    def test_invalid_values(self, kwargs: dict, message: str) -> None:
        """Test that invalid settings are rejected at construction."""
        with pytest.raises(ValueError, match=message):
            HealthConfig(**kwargs)


class TestConfigFromEnv:
    """Test cases for Config.from_env."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test defaults when no environment variables are set."""
        for name in (
            "PORT",
            "READINESS_KEYS",
            "HEALTH_REGISTRY_KEY",
            "HEALTH_RETURN_BODY",
            "HEALTH_ALIVE_URL",
            "HEALTH_READY_URL",
            "HEALTH_CUSTOM_ONLY",
            "OTEL_TRACES_EXPORTER",
            "CORS_ORIGINS",
            "SWAGGER_SCHEMES",
        ):
            monkeypatch.delenv(name, raising=False)

        config = Config.from_env()

        assert config.port == 8080
        assert config.readiness_keys == ()
        assert config.health_registry_key == "readiness"
        assert config.health_return_body is False
        assert config.swagger_schemes == ("http",)
        assert config.cors_origins == ()
        assert config.health_custom_only is False
        assert config.traces_exporter == "otlp"

    def test_health_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that health settings are read from the environment."""
        monkeypatch.setenv("READINESS_KEYS", "database, cache,,queue")
        monkeypatch.setenv("HEALTH_REGISTRY_KEY", "subsystems")
        monkeypatch.setenv("HEALTH_RETURN_BODY", "True")
        monkeypatch.setenv("HEALTH_ALIVE_URL", "/livez")
        monkeypatch.setenv("HEALTH_READY_URL", "/readyz")
        monkeypatch.setenv("HEALTH_CUSTOM_ONLY", "yes")
        monkeypatch.setenv("OTEL_TRACES_EXPORTER", "None")

        config = Config.from_env()

        assert config.readiness_keys == ("database", "cache", "queue")
        assert config.health_registry_key == "subsystems"
        assert config.health_return_body is True
        assert config.health_alive_url == "/livez"
        assert config.health_ready_url == "/readyz"
        assert config.health_custom_only is True
        assert config.traces_exporter == "none"

    def test_invalid_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a non-integer PORT raises ValueError."""
        monkeypatch.setenv("PORT", "eighty")

        with pytest.raises(ValueError, match="Invalid PORT value"):
            Config.from_env()

    def test_health_config(self) -> None:
        """Test that Config builds a matching HealthConfig."""
        config = Config(
            health_registry_key="subsystems",
            health_return_body=True,
            health_alive_url="/livez",
            health_ready_url="/readyz",
            health_custom_only=True,
        )

        health = config.health_config(custom_checks=[lambda _: True])

        assert health.registry_key == "subsystems"
        assert health.return_body is True
        assert health.alive_url == "/livez"
        assert health.ready_url == "/readyz"
        assert health.custom_only is True
        assert len(health.custom_checks) == 1

    def test_health_config_rejects_bad_path(self) -> None:
        """Test that invalid health paths from the environment fail fast."""
        with pytest.raises(ValueError, match="ready_url"):
            Config(health_ready_url="readyz").health_config()
