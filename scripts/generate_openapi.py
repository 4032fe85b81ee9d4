#!/usr/bin/env python3
"""
Generate the OpenAPI specification of the health endpoints.

Builds the Flask app with the default configuration and reads
/apispec.json through the test client, so no server or collector is
needed. The app is built with trace export disabled.

Usage:
    python scripts/generate_openapi.py [--output openapi.json]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from app_health import create_app
from app_health.config import Config


def generate_spec(config: Config) -> dict:
    """Return the OpenAPI document served by the application.

    Raises:
        RuntimeError: If /apispec.json does not answer with HTTP 200.
    """
    flask_app = create_app(config)
    with flask_app.test_client() as client:
        response = client.get("/apispec.json")

    if response.status_code != 200:
        raise RuntimeError(f"Failed to get spec from /apispec.json: HTTP {response.status_code}")
    return response.get_json()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--output", type=Path, help="Write to this file instead of stdout")
    args = parser.parse_args(argv)

    try:
        spec = generate_spec(Config(traces_exporter="none", readiness_keys=("application",)))
    except RuntimeError as exc:
        print(f"Error generating spec: {exc}", file=sys.stderr)
        return 1

    document = json.dumps(spec, indent=2)
    if args.output:
        args.output.write_text(document + "\n")
    else:
        print(document)
    return 0


if __name__ == "__main__":
    sys.exit(main())
