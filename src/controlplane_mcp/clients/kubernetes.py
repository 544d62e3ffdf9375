"""
Kubernetes API client bootstrap.

Loads credentials from either an in-cluster service account or a local
kubeconfig file, and defines the errors raised for failed cluster calls.
"""

from kubernetes import client, config

from controlplane_mcp.config import Settings


class K8sClientError(Exception):
    """Base exception for Kubernetes client errors."""

    pass


class K8sNotFoundError(K8sClientError):
    """Resource not found in the cluster."""

    pass


def load_core_v1(settings: Settings) -> client.CoreV1Api:
    """
    Load Kubernetes configuration and build a Core V1 API client.

    An explicit kubeconfig path wins, then in-cluster service account
    credentials, then the default kubeconfig.

    Args:
        settings: Application settings naming the kubeconfig and context.

    Returns:
        CoreV1Api bound to the loaded configuration.

    Raises:
        K8sClientError: If no usable configuration could be loaded.
    """
    try:
        if settings.kubeconfig_path:
            config.load_kube_config(
                config_file=settings.kubeconfig_path,
                context=settings.kubernetes_context,
            )
        elif settings.is_in_cluster():
            config.load_incluster_config()
        else:
            config.load_kube_config(context=settings.kubernetes_context)
    except Exception as e:
        raise K8sClientError(f"Failed to load Kubernetes config: {e}") from e

    return client.CoreV1Api()
