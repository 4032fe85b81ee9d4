"""
Health endpoint errors.

Errors raised by the readiness handler carry a machine-readable name,
an HTTP status code and an optional diagnostic payload. They are rendered
to JSON by the error handler installed in `configure_health`.
"""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify


class HealthError(Exception):
    """Base class for errors returned by the health endpoints.

    Attributes:
        name: Error name exposed to clients (e.g. "BadRequest").
        code: HTTP status code used for the response.
        class_name: Kebab-case error class identifier.
        message: Human-readable description.
        data: Diagnostic payload (readiness flags, custom check results).
    """

    name = "GeneralError"
    code = 500
    class_name = "general-error"

    def __init__(self, message: str, data: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.data = dict(data) if data else {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "message": self.message,
            "code": self.code,
            "className": self.class_name,
            "data": self.data,
        }


class BadRequest(HealthError):
    """The application is not configured for, or not yet ready to serve, traffic."""

    name = "BadRequest"
    code = 400
    class_name = "bad-request"


def handle_health_error(error: HealthError) -> tuple[Response, int]:
    """Render a HealthError as a JSON response."""
    return jsonify(error.to_dict()), error.code
