"""
Configuration management for the control plane MCP server.

Supports both in-cluster (service account) and local (kubeconfig) authentication.
Configuration is read from environment variables with sensible defaults and
can be overridden from the command line.
"""

import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_EVENTS = 10
DEFAULT_MAX_LOG_LINES = 10

SERVICE_ACCOUNT_TOKEN = "/var/run/secrets/kubernetes.io/serviceaccount/token"


class AccessorConfig(BaseModel):
    """
    Output limits applied by the pod accessor.

    Attributes:
        max_events: Maximum number of events returned for a pod.
        max_log_lines: Number of log lines read from the tail of a pod's log.
    """

    model_config = ConfigDict(frozen=True)

    max_events: int = Field(default=DEFAULT_MAX_EVENTS, gt=0)
    max_log_lines: int = Field(default=DEFAULT_MAX_LOG_LINES, gt=0)


class Settings(BaseSettings):
    """
    Application configuration settings.

    All settings can be configured via environment variables with the
    CONTROLPLANE_MCP_ prefix (e.g., CONTROLPLANE_MCP_MAX_EVENTS).

    Attributes:
        kubeconfig_path: Path to kubeconfig file. If not set, uses in-cluster
            config or the default kubeconfig.
        kubernetes_context: Kubernetes context to use (optional).
        max_events: Maximum number of events to return.
        max_log_lines: Maximum number of log lines to return.
        transport: MCP transport to serve on.
        host: Address the streamable HTTP transport binds to.
        port: Port the streamable HTTP transport listens on.
        debug: Enable debug logging.
        dev_mode: Enable verbose development log formatting.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTROLPLANE_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Kubernetes configuration
    kubeconfig_path: str | None = None
    kubernetes_context: str | None = None

    # Output limits to prevent AI overload
    max_events: int = Field(default=DEFAULT_MAX_EVENTS, gt=0)
    max_log_lines: int = Field(default=DEFAULT_MAX_LOG_LINES, gt=0)

    # Server configuration
    transport: Literal["streamable-http", "stdio"] = "streamable-http"
    host: str = "0.0.0.0"
    port: int = Field(default=8081, gt=0, lt=65536)

    # Logging
    debug: bool = False
    dev_mode: bool = False

    def is_in_cluster(self) -> bool:
        """Check if running inside a Kubernetes cluster."""
        return os.path.exists(SERVICE_ACCOUNT_TOKEN)

    def accessor_config(self) -> AccessorConfig:
        """Output limits for the pod accessor."""
        return AccessorConfig(
            max_events=self.max_events,
            max_log_lines=self.max_log_lines,
        )

