"""
CLI script to launch the HTTP API.

Usage:
    python scripts/run_server.py              # Default port 3000
    python scripts/run_server.py --port 8080  # Custom port
    python scripts/run_server.py --reload     # Restart on code changes
"""

import argparse
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from pdfsearch.core import get_config, ConfigurationError
from pdfsearch.core.config_loader import CONFIG_ENV_VAR, reload_config


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Launch the PDF Search Service API"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=3000,
        help="Port to run the server on (default: 3000)"
    )

    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker processes (default: 1)"
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (development only)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    return parser.parse_args()


def main():
    """Main entry point for launching the server."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        os.environ[CONFIG_ENV_VAR] = str(config_path.resolve())
        reload_config(config_path)

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    print("=" * 60)
    print(config.api.title)
    print("=" * 60)
    print(f"Starting server on http://{args.host}:{args.port}")
    print(f"Elasticsearch:     {', '.join(config.elasticsearch.hosts)}")
    print(f"Redis:             {config.redis.url}")
    print("Press Ctrl+C to stop")
    print("=" * 60)

    uvicorn.run(
        "pdfsearch.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        workers=args.workers,
        reload=args.reload
    )


if __name__ == "__main__":
    main()
