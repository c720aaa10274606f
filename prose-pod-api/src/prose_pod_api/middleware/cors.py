"""CORS middleware configuration."""

from fastapi.middleware.cors import CORSMiddleware
from prose_pod_common.config.settings import config


def setup_cors(app):
    """Configure CORS middleware."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        # Browsers hide response headers from scripts unless listed
        expose_headers=["X-Request-ID"],
    )
