"""Prose Pod API module entry point.

   python -m prose_pod_api --reload --port 8080
"""

import argparse

from prose_pod_common.config.settings import config
from prose_pod_common.utils.env import load_environment


def main():
    """Run the Prose Pod API server."""
    load_environment()

    parser = argparse.ArgumentParser(description="Prose Pod API Server")
    parser.add_argument(
        "--host",
        default=config.api_host,
        help=f"Host to bind to (default: {config.api_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(config.api_port),
        help=f"Port to bind to (default: {config.api_port})",
    )
    parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )
    parser.add_argument(
        "--workers", type=int, default=config.api_workers, help="Number of worker processes (default: 1)"
    )

    args = parser.parse_args()

    import uvicorn

    if args.reload or args.workers > 1:
        # Reload and multiple workers need an import string
        uvicorn.run(
            "prose_pod_api.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            workers=None if args.reload else args.workers,
            log_level=config.log_level.lower(),
        )
    else:
        from .main import app

        uvicorn.run(app, host=args.host, port=args.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
