"""
Pytest configuration and fixtures.

Provides fixtures for testing the health endpoints, both on the full
application (with mocked OpenTelemetry export) and on bare Flask apps
configured with `configure_health`.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
from flask import Flask

from app_health import create_app
from app_health.config import Config, HealthConfig
from app_health.health import configure_health

if TYPE_CHECKING:
    from flask.testing import FlaskClient


@pytest.fixture
def test_config() -> Config:
    """Create a test configuration."""
    return Config(
        port=8080,
        otel_endpoint="localhost:4317",
        service_name="app-health-test",
        service_namespace="test",
        environment="test",
        app_version="1.0.0-test",
        readiness_keys=("database", "cache"),
        health_registry_key="readiness",
        health_return_body=True,
        swagger_host="",
        swagger_schemes=("http",),
        cors_origins=(),
    )


@pytest.fixture
def mock_otel() -> Generator[MagicMock, None, None]:
    """Mock OpenTelemetry to avoid actual trace export during tests."""
    with (
        patch("app_health.telemetry.OTLPSpanExporter") as mock_exporter,
        patch("app_health.telemetry.BatchSpanProcessor") as mock_processor,
    ):
        mock_exporter.return_value = MagicMock()
        mock_processor.return_value = MagicMock()
        yield mock_exporter


@pytest.fixture
def app(test_config: Config, mock_otel: MagicMock) -> Flask:
    """Create test Flask application."""
    flask_app = create_app(test_config)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create test client for making requests."""
    return app.test_client()


@pytest.fixture
def make_app() -> Callable[..., Flask]:
    """Factory for bare Flask apps with health endpoints installed.

    Usage:
        flask_app = make_app(HealthConfig(return_body=True), readiness={"mongoose": False})
    """

    def _make_app(
        config: HealthConfig | None = None, readiness: dict[str, bool] | None = None
    ) -> Flask:
        config = config or HealthConfig()
        flask_app = Flask(__name__)
        flask_app.config["TESTING"] = True
        configure_health(flask_app, config)
        if readiness is not None:
            flask_app.config[config.registry_key] = dict(readiness)
        return flask_app

    return _make_app
