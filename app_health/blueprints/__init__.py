"""Blueprints package for Flask route handlers."""

from app_health.blueprints.health import create_health_blueprint

__all__ = ["create_health_blueprint"]
