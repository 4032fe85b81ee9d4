"""
App Health - liveness and readiness endpoints for Flask applications.

This package provides:
- A readiness registry of named subsystem flags
- Custom readiness checks evaluated on every probe
- Liveness and readiness endpoints for Kubernetes probes
- An application factory wiring in tracing, logging and Swagger docs
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from flask import Flask

from app_health.checks import FunctionCheck, HealthChecker
from app_health.config import Config, HealthConfig
from app_health.errors import BadRequest, HealthError
from app_health.extensions import init_extensions
from app_health.health import configure_health, set_ready
from app_health.telemetry import configure_logging, configure_opentelemetry
from app_health.tracker import ReadinessReport, ReadinessTracker, get_tracker

__all__ = [
    "create_app",
    "Config",
    "HealthConfig",
    "HealthChecker",
    "FunctionCheck",
    "HealthError",
    "BadRequest",
    "ReadinessReport",
    "ReadinessTracker",
    "configure_health",
    "get_tracker",
    "set_ready",
]

logger = logging.getLogger(__name__)


def create_app(
    config: Config | None = None,
    custom_checks: Sequence[HealthChecker | Callable[[Any], bool]] = (),
) -> Flask:
    """Application factory for creating Flask app instances.

    Args:
        config: Optional configuration object. If not provided,
                configuration is loaded from environment variables.
        custom_checks: Custom readiness checks evaluated on every probe.

    Returns:
        Configured Flask application instance. Subsystems listed in
        `config.readiness_keys` start out not ready.
    """
    if config is None:
        config = Config.from_env()

    # Configure OpenTelemetry before creating app
    tracer = configure_opentelemetry(config)
    configure_logging()

    flask_app = Flask(__name__)
    flask_app.config["TRACER"] = tracer

    init_extensions(flask_app, config)

    tracker = configure_health(flask_app, config.health_config(custom_checks))
    if config.readiness_keys:
        tracker.establish(config.readiness_keys)
    else:
        logger.warning(
            "No READINESS_KEYS configured; readiness probes will fail until "
            f"config.{config.health_registry_key} is set"
        )

    return flask_app
