"""Centralized Prose Pod configuration using Pydantic Settings."""

import json
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class PodConfig(BaseSettings):
    """Centralized configuration for all Prose Pod services."""

    model_config = SettingsConfigDict(
        env_prefix="PROSE_POD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    service_name: str = "prose-pod-api"
    service_version: str = "0.1.0"

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: str | int = Field(default=8080)
    api_workers: int = 1
    cors_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    # Authentication
    jwt_secret_key: str = "dev-secret-change-in-production"
    jwt_algorithm: str = "HS256"

    # Server configuration (XMPP domain served by the pod)
    server_domain: str | None = None
    federation_enabled: bool = Field(
        default=False,
        description="Whether the server accepts server-to-server connections",
    )

    # Pod address seed, used until an administrator sets it through the API
    pod_ipv4: str | None = None
    pod_ipv6: str | None = None
    pod_hostname: str | None = None

    # Network checks (all durations in seconds)
    network_checks_default_retry_interval: float = 5.0
    network_checks_min_retry_interval: float = 1.0
    network_checks_max_retry_interval: float = 60.0
    network_checks_tcp_connect_timeout: float = 3.0
    network_checks_dns_lifetime: float | None = Field(
        default=None,
        description="Overall DNS query lifetime; None keeps the resolver default",
    )
    network_checks_event_queue_capacity: int = 32
    network_checks_attempt_timeout: float | None = None
    network_checks_max_attempts: int | None = Field(
        default=None,
        description="Upper bound on attempts per check in streaming mode (None retries until cancelled)",
    )
    network_checks_stream_timeout: float | None = Field(
        default=None,
        description="Deadline for a whole streaming session (None keeps it open until checks settle)",
    )

    @field_validator("api_port", mode="before")
    @classmethod
    def validate_api_port(cls, v):
        """Validate and parse API port, handling Kubernetes format."""
        if isinstance(v, int):
            return v
        if not isinstance(v, str) or not v:
            return 8080
        # Kubernetes service links look like tcp://10.107.144.156:8080
        if v.startswith("tcp://"):
            v = v.rsplit(":", 1)[-1]
        try:
            return int(v)
        except ValueError:
            return 8080

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Accept a JSON array or comma-separated origins."""
        if not isinstance(v, str):
            return v
        if v.lstrip().startswith("["):
            return json.loads(v)
        return [origin.strip() for origin in v.split(",") if origin.strip()]

    @field_validator("network_checks_event_queue_capacity")
    @classmethod
    def validate_queue_capacity(cls, v: int) -> int:
        if v < 1:
            raise ValueError("event queue capacity must be at least 1")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() in ("development", "dev")


# Global configuration instance
config = PodConfig()
