"""
Base utilities for tool implementations.

Provides argument extraction and the decorator that turns handler failures
into in-band error results.
"""

import logging
from functools import wraps
from typing import Any, Callable, Mapping, TypeVar

from controlplane_mcp.clients.kubernetes import K8sClientError, K8sNotFoundError
from controlplane_mcp.models.responses import ToolResult

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., ToolResult])


class ArgumentError(ValueError):
    """A tool argument is missing or has the wrong type."""

    pass


def require_string(arguments: Mapping[str, Any] | None, key: str) -> str:
    """
    Extract a required string argument.

    Raises:
        ArgumentError: If the argument is missing, not a string, or empty.
    """
    if not arguments or key not in arguments:
        raise ArgumentError(f'required argument "{key}" not found')
    value = arguments[key]
    if not isinstance(value, str):
        raise ArgumentError(f'argument "{key}" is not a string')
    if not value:
        raise ArgumentError(f'argument "{key}" must not be empty')
    return value


def optional_string(arguments: Mapping[str, Any] | None, key: str) -> str | None:
    """
    Extract an optional string argument.

    Returns:
        The value, or None if the argument is absent, null or empty.

    Raises:
        ArgumentError: If the argument is present but not a string.
    """
    value = (arguments or {}).get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ArgumentError(f'argument "{key}" is not a string')
    return value or None


def tool_handler(func: F) -> F:
    """
    Decorator for tool handlers that reports every failure in-band.

    Args:
        func: Tool handler to wrap.

    Returns:
        Wrapped handler that always returns a ToolResult.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> ToolResult:
        logger.debug("%s: received request", func.__name__)
        try:
            return func(*args, **kwargs)
        except ArgumentError as e:
            return ToolResult.error(str(e))
        except K8sNotFoundError as e:
            logger.debug("%s: %s", func.__name__, e)
            return ToolResult.error(str(e))
        except K8sClientError as e:
            logger.info("%s: cluster call failed: %s", func.__name__, e)
            return ToolResult.error(str(e))
        except Exception as e:
            logger.exception("%s: unexpected error", func.__name__)
            return ToolResult.error(f"Unexpected error: {e}")

    return wrapper  # type: ignore


def pod_input_schema(container_description: str) -> dict[str, Any]:
    """JSON schema shared by the pod tools."""
    return {
        "type": "object",
        "properties": {
            "namespace": {
                "type": "string",
                "description": "The Kubernetes namespace of the pod",
            },
            "pod": {
                "type": "string",
                "description": "The name of the Kubernetes pod",
            },
            "container": {
                "type": "string",
                "description": container_description,
            },
        },
        "required": ["namespace", "pod"],
    }
