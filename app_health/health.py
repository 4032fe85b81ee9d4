"""
Health endpoint setup.

Attaches a ReadinessTracker to a Flask application and installs the
liveness/readiness routes and their error handler.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app_health.blueprints.health import create_health_blueprint
from app_health.config import HealthConfig
from app_health.errors import HealthError, handle_health_error
from app_health.tracker import EXTENSION_KEY, ReadinessTracker, get_tracker

if TYPE_CHECKING:
    from flask import Flask

logger = logging.getLogger(__name__)


def configure_health(flask_app: Flask, config: HealthConfig | None = None) -> ReadinessTracker:
    """Install liveness and readiness endpoints on an application.

    The readiness registry does not need to exist yet; it is read from
    `flask_app.config[config.registry_key]` on every readiness probe.

    Args:
        flask_app: Flask application instance.
        config: Health endpoint configuration. Defaults to HealthConfig().

    Returns:
        The ReadinessTracker attached to the application.

    Raises:
        RuntimeError: If health endpoints are already configured on the app.
    """
    if config is None:
        config = HealthConfig()

    if EXTENSION_KEY in flask_app.extensions:
        raise RuntimeError("Health endpoints already configured for this application")

    tracker = ReadinessTracker(flask_app, config)
    flask_app.extensions[EXTENSION_KEY] = tracker

    flask_app.register_error_handler(HealthError, handle_health_error)
    flask_app.register_blueprint(create_health_blueprint(config))

    logger.info(
        f"Health endpoints installed: alive={config.alive_url} ready={config.ready_url} "
        f"(registry={config.registry_key!r}, custom_checks={len(config.custom_checks)}, "
        f"custom_only={config.custom_only})"
    )
    return tracker


def set_ready(flask_app: Flask, key: str) -> None:
    """Mark a subsystem ready on an application configured with health endpoints.

    Equivalent to `get_tracker(flask_app).mark_ready(key)`.

    Raises:
        RuntimeError: If health endpoints were never configured.
    """
    get_tracker(flask_app).mark_ready(key)
