"""
Health check endpoints for Kubernetes probes.

Provides the liveness and readiness endpoints. Paths come from the
HealthConfig, so the blueprint is built per application rather than
declared at import time.
"""

import logging

from flask import Blueprint, current_app, jsonify
from opentelemetry import trace

from app_health.config import HealthConfig
from app_health.errors import BadRequest
from app_health.tracker import get_tracker

logger = logging.getLogger(__name__)


def get_tracer() -> trace.Tracer:
    """Get the tracer from the current app context."""
    return current_app.config.get("TRACER") or trace.get_tracer(__name__)


def alive():
    """Liveness check endpoint.
    ---
    tags:
      - Health
    summary: Liveness check
    description: Answers whether the process is running. Used by Kubernetes liveness probes.
    security: []
    responses:
      204:
        description: Process is alive
    """
    return "", 204


def ready():
    """Readiness check endpoint.
    ---
    tags:
      - Health
    summary: Readiness check
    description: |
      Aggregates the readiness registry and custom checks. Used by Kubernetes
      readiness probes. Flag values and custom results are included only when
      return_body is enabled.
    security: []
    responses:
      200:
        description: Application is ready (return_body enabled)
        schema:
          type: object
          additionalProperties:
            type: boolean
          properties:
            custom:
              type: array
              items:
                type: boolean
      204:
        description: Application is ready (return_body disabled)
      400:
        description: Readiness not configured or application not ready
        schema:
          type: object
          properties:
            name:
              type: string
              example: BadRequest
            message:
              type: string
              example: Application is not ready
            code:
              type: integer
              example: 400
            className:
              type: string
              example: bad-request
            data:
              type: object
    """
    flask_app = current_app._get_current_object()
    tracker = get_tracker(flask_app)

    with get_tracer().start_as_current_span("readiness-check") as span:
        report = tracker.evaluate(flask_app)
        span.set_attribute("health.registry_key", tracker.registry_key)
        span.set_attribute("health.configured", report.configured)
        span.set_attribute("health.ready", report.ready)

    if not report.configured:
        logger.warning(f"Readiness probe failed: config.{tracker.registry_key} not configured")
        raise BadRequest(f"config.{tracker.registry_key} not configured", report.data)

    if not report.ready:
        logger.warning("Readiness probe failed: application is not ready")
        raise BadRequest("Application is not ready", report.data)

    if tracker.config.return_body:
        return jsonify(report.data), 200
    return "", 204


def create_health_blueprint(config: HealthConfig) -> Blueprint:
    """Build the health blueprint for the configured paths.

    Args:
        config: Health endpoint configuration.

    Returns:
        Blueprint exposing GET alive_url and GET ready_url.
    """
    health_bp = Blueprint("health", __name__)
    health_bp.add_url_rule(config.alive_url, view_func=alive, methods=["GET"])
    health_bp.add_url_rule(config.ready_url, view_func=ready, methods=["GET"])
    return health_bp
