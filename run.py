"""
App Health - Flask application exposing liveness and readiness probes.

This is the application entrypoint that uses the app factory pattern.
Subsystems listed in READINESS_KEYS start out not ready; the hosting
process marks them ready with `set_ready(app, key)` once initialized.
"""

import logging

from app_health import create_app
from app_health.config import Config

# Create application with configuration from environment
config = Config.from_env()
app = create_app(config)

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logger.info(f"Starting app-health on port {config.port}")
    app.run(host="0.0.0.0", port=config.port, debug=False)  # noqa: S104
