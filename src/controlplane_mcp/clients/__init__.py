"""Clients package - Kubernetes API access for pods."""

from controlplane_mcp.clients.kubernetes import (
    K8sClientError,
    K8sNotFoundError,
    load_core_v1,
)
from controlplane_mcp.clients.pods import PodAccessor

__all__ = ["K8sClientError", "K8sNotFoundError", "PodAccessor", "load_core_v1"]
