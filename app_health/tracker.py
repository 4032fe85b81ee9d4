"""
Readiness tracking.

Holds a handle to the readiness registry stored in the host application's
config and aggregates registry flags with custom check results.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app_health.checks import run_checks

if TYPE_CHECKING:
    from flask import Flask

    from app_health.config import HealthConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadinessReport:
    """Outcome of a readiness evaluation.

    Attributes:
        configured: False when the registry is empty and custom-only mode is off.
        ready: True when every registry flag and custom check passed.
        data: Response payload (empty unless return_body is enabled).
    """

    configured: bool
    ready: bool
    data: dict[str, Any] = field(default_factory=dict)


class ReadinessTracker:
    """Tracks named readiness flags for a Flask application.

    The registry lives in `flask_app.config[config.registry_key]` so the host
    can inspect or reset it. Every write replaces the whole mapping under a
    lock, so readers never observe a partially updated registry.

    Example:
        tracker = ReadinessTracker(flask_app, HealthConfig())
        tracker.establish(["database", "cache"])
        tracker.mark_ready("database")
        tracker.evaluate(flask_app).ready  # False until "cache" is ready
    """

    def __init__(self, flask_app: Flask, config: HealthConfig) -> None:
        self._app = flask_app
        self._config = config
        self._lock = threading.Lock()

    @property
    def config(self) -> HealthConfig:
        return self._config

    @property
    def registry_key(self) -> str:
        return self._config.registry_key

    def _read(self) -> dict[str, bool]:
        return dict(self._app.config.get(self.registry_key) or {})

    def registry(self) -> dict[str, bool]:
        """Return a copy of the current readiness registry."""
        with self._lock:
            return self._read()

    def keys(self) -> frozenset[str]:
        """Return the established readiness keys."""
        return frozenset(self.registry())

    def is_ready(self, key: str) -> bool:
        """Return the flag for `key`; unknown keys are never ready."""
        return bool(self.registry().get(key, False))

    def establish(self, keys: Iterable[str]) -> None:
        """(Re)create the registry with every key marked not ready.

        Args:
            keys: Names of the subsystems that must report readiness.
        """
        registry = dict.fromkeys(keys, False)
        with self._lock:
            self._app.config[self.registry_key] = registry
        logger.info(f"Readiness registry {self.registry_key!r} established: {sorted(registry)}")

    def mark_ready(self, key: str) -> None:
        """Mark a registered subsystem as ready.

        Keys that are not already present in the registry are ignored and
        never added, so a mistyped key cannot introduce a new health
        dimension.

        Args:
            key: Registry key of the subsystem.
        """
        with self._lock:
            registry = self._read()
            if key not in registry:
                logger.debug(f"Ignoring unknown readiness key {key!r}")
                return
            self._app.config[self.registry_key] = {**registry, key: True}
        logger.info(f"Subsystem {key!r} marked ready")

    def evaluate(self, context: Any) -> ReadinessReport:
        """Aggregate registry flags and custom check results.

        Args:
            context: Application context handed to each custom check.

        Returns:
            ReadinessReport for the current state.
        """
        config = self._config
        registry = self.registry()

        is_ready = True if config.custom_only else all(registry.values())
        custom_results = run_checks(config.custom_checks, context)
        ready = is_ready and all(custom_results)

        data: dict[str, Any] = {}
        if config.return_body:
            if not config.custom_only:
                data.update(registry)
            if custom_results:
                data["custom"] = custom_results

        configured = bool(registry) or config.custom_only
        return ReadinessReport(configured=configured, ready=ready, data=data)


EXTENSION_KEY = "app_health"


def get_tracker(flask_app: Flask) -> ReadinessTracker:
    """Get the readiness tracker attached to an application.

    Returns:
        The ReadinessTracker installed by `configure_health`.

    Raises:
        RuntimeError: If health endpoints were never configured.
    """
    tracker = flask_app.extensions.get(EXTENSION_KEY)
    if tracker is None:
        raise RuntimeError("Health endpoints not configured. Call configure_health() first.")
    return tracker
