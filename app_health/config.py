"""
Application configuration management.

Provides the health endpoint configuration (`HealthConfig`) and the host
application configuration (`Config`) with environment variable loading
and validation.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from flask import Flask

from app_health.checks import HealthChecker, as_checker

# Application config keys the registry must not overwrite
RESERVED_CONFIG_KEYS = frozenset({"TRACER", *Flask.default_config})


@dataclass(frozen=True)
class HealthConfig:
    """Configuration for one set of liveness/readiness endpoints.

    Attributes:
        registry_key: Key under which the readiness registry is stored in
            the application config (default: readiness)
        return_body: Include flag values and custom results in responses
            (default: False)
        alive_url: Liveness endpoint path (default: /health/alive)
        ready_url: Readiness endpoint path (default: /health/ready)
        custom_only: Ignore the registry and rely solely on custom checks
            (default: False)
        custom_checks: Ordered custom checks; callables are wrapped into
            FunctionCheck objects (default: empty)
    """

    registry_key: str = "readiness"
    return_body: bool = False
    alive_url: str = "/health/alive"
    ready_url: str = "/health/ready"
    custom_only: bool = False
    custom_checks: Sequence[HealthChecker | Callable[[Any], bool]] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.registry_key, str) or not self.registry_key:
            raise ValueError(
                f"Invalid registry_key value: {self.registry_key!r}. Must be a non-empty string."
            )
        if self.registry_key in RESERVED_CONFIG_KEYS:
            raise ValueError(
                f"Invalid registry_key value: {self.registry_key!r}. "
                "It clashes with a reserved application config key."
            )

        for name in ("alive_url", "ready_url"):
            url = getattr(self, name)
            if not isinstance(url, str) or not url.startswith("/"):
                raise ValueError(f"Invalid {name} value: {url!r}. Path must start with '/'.")

        if self.alive_url == self.ready_url:
            raise ValueError(f"alive_url and ready_url must differ (both {self.alive_url!r})")

        # frozen dataclass: bypass __setattr__ to store the normalized tuple
        object.__setattr__(
            self, "custom_checks", tuple(as_checker(check) for check in self.custom_checks)
        )


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_list(value: str) -> tuple[str, ...]:
    return tuple(s.strip() for s in value.split(",") if s.strip())


@dataclass(frozen=True)
class Config:
    """Host application configuration loaded from environment variables.

    Attributes:
        port: HTTP server port (default: 8080)

        # OpenTelemetry settings
        otel_endpoint: OTLP exporter endpoint (default: localhost:4317)
        traces_exporter: Trace exporter, "otlp" or "none" (default: otlp)
        service_name: Service name for traces (default: app-health)
        service_namespace: Service namespace (default: app-health)
        environment: Deployment environment (default: homelab)
        app_version: Application version (default: 1.0.0)

        # Health settings
        readiness_keys: Subsystems that must be marked ready (default: none)
        health_registry_key: Readiness registry config key (default: readiness)
        health_return_body: Return flag values in readiness responses (default: False)
        health_alive_url: Liveness path (default: /health/alive)
        health_ready_url: Readiness path (default: /health/ready)
        health_custom_only: Decide readiness from custom checks only (default: False)

        # Swagger settings
        swagger_host: Override host for Swagger UI (default: "")
        swagger_schemes: URL schemes for Swagger (default: ["http"])

        # CORS settings
        cors_origins: Allowed origins (default: none)
    """

    # Server settings
    port: int = 8080

    # OpenTelemetry settings
    otel_endpoint: str = "localhost:4317"
    traces_exporter: str = "otlp"
    service_name: str = "app-health"
    service_namespace: str = "app-health"
    environment: str = "homelab"
    app_version: str = "1.0.0"

    # Health settings
    readiness_keys: tuple[str, ...] = ()
    health_registry_key: str = "readiness"
    health_return_body: bool = False
    health_alive_url: str = "/health/alive"
    health_ready_url: str = "/health/ready"
    health_custom_only: bool = False

    # Swagger settings
    swagger_host: str = ""
    swagger_schemes: tuple[str, ...] = ("http",)

    # CORS settings
    cors_origins: tuple[str, ...] = ()

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables.

        Returns:
            Config instance populated from environment variables.

        Raises:
            ValueError: If PORT is not a valid integer.
        """
        port_env = os.getenv("PORT", "8080")
        try:
            port = int(port_env)
        except ValueError as exc:
            raise ValueError(f"Invalid PORT value: {port_env!r}. Port must be an integer.") from exc

        return cls(
            # Server
            port=port,
            # OpenTelemetry
            otel_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "localhost:4317"),
            traces_exporter=os.getenv("OTEL_TRACES_EXPORTER", "otlp").strip().lower(),
            service_name=os.getenv("OTEL_SERVICE_NAME", "app-health"),
            service_namespace=os.getenv("OTEL_SERVICE_NAMESPACE", "app-health"),
            environment=os.getenv("OTEL_ENVIRONMENT", "homelab"),
            app_version=os.getenv("APP_VERSION", "1.0.0"),
            # Health
            readiness_keys=_parse_list(os.getenv("READINESS_KEYS", "")),
            health_registry_key=os.getenv("HEALTH_REGISTRY_KEY", "readiness"),
            health_return_body=_parse_bool(os.getenv("HEALTH_RETURN_BODY", "false")),
            health_alive_url=os.getenv("HEALTH_ALIVE_URL", "/health/alive"),
            health_ready_url=os.getenv("HEALTH_READY_URL", "/health/ready"),
            health_custom_only=_parse_bool(os.getenv("HEALTH_CUSTOM_ONLY", "false")),
            # Swagger
            swagger_host=os.getenv("SWAGGER_HOST", ""),
            swagger_schemes=_parse_list(os.getenv("SWAGGER_SCHEMES", "http")),
            # CORS
            cors_origins=_parse_list(os.getenv("CORS_ORIGINS", "")),
        )

    def health_config(
        self, custom_checks: Sequence[HealthChecker | Callable[[Any], bool]] = ()
    ) -> HealthConfig:
        """Build the health endpoint configuration for the host application.

        Args:
            custom_checks: Optional custom checks to evaluate on readiness probes.

        Returns:
            HealthConfig derived from the health settings.

        Raises:
            ValueError: If the health settings are invalid.
        """
        return HealthConfig(
            registry_key=self.health_registry_key,
            return_body=self.health_return_body,
            alive_url=self.health_alive_url,
            ready_url=self.health_ready_url,
            custom_only=self.health_custom_only,
            custom_checks=tuple(custom_checks),
        )
