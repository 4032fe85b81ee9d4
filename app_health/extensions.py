"""
Flask extensions initialization.

Centralizes the setup of Flask extensions for the host application:
- CORS for probe dashboards served from other origins
- Flask instrumentation
- Swagger/OpenAPI documentation of the health endpoints
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flasgger import Swagger
from flask_cors import CORS
from opentelemetry.instrumentation.flask import FlaskInstrumentor

if TYPE_CHECKING:
    from flask import Flask

    from app_health.config import Config


def init_extensions(flask_app: Flask, config: Config) -> None:
    """Initialize all Flask extensions.

    Args:
        flask_app: Flask application instance.
        config: Application configuration.
    """
    if config.cors_origins:
        origins = {"origins": list(config.cors_origins)}
        CORS(
            flask_app,
            resources={config.health_alive_url: origins, config.health_ready_url: origins},
            methods=["GET"],
            expose_headers=["X-Trace-Id"],
        )

    FlaskInstrumentor().instrument_app(flask_app)

    _init_swagger(flask_app, config)


def _init_swagger(flask_app: Flask, config: Config) -> Swagger:
    """Initialize Swagger/OpenAPI documentation.

    Returns:
        Configured Swagger instance.
    """
    swagger_config = {
        "headers": [],
        "specs": [
            {
                "endpoint": "apispec",
                "route": "/apispec.json",
                "rule_filter": lambda rule: True,  # noqa: ARG005
                "model_filter": lambda tag: True,  # noqa: ARG005
            }
        ],
        "static_url_path": "/flasgger_static",
        "swagger_ui": True,
        "specs_route": "/apidocs/",
    }

    swagger_template = {
        "info": {
            "title": "App Health API",
            "description": "Liveness and readiness probes aggregated from subsystem flags",
            "version": config.app_version,
            "license": {
                "name": "MIT",
                "url": "https://opensource.org/licenses/MIT",
            },
        },
        "host": config.swagger_host,
        "basePath": "/",
        "schemes": list(config.swagger_schemes),
        "tags": [
            {"name": "Health", "description": "Liveness and readiness endpoints"},
        ],
    }

    return Swagger(flask_app, config=swagger_config, template=swagger_template)
