"""
Pod diagnostics tools.

Tools for reading a pod's logs and events.
"""

from typing import Any, Mapping

from mcp import types

from controlplane_mcp.clients.pods import PodAccessor
from controlplane_mcp.models.pods import PodIdentity
from controlplane_mcp.models.responses import ToolResult
from controlplane_mcp.tools.base import (
    optional_string,
    pod_input_schema,
    require_string,
    tool_handler,
)

GET_POD_LOGS = "get_pod_logs"
GET_POD_EVENTS = "get_pod_events"


def _pod_identity(arguments: Mapping[str, Any] | None) -> PodIdentity:
    namespace = require_string(arguments, "namespace")
    name = require_string(arguments, "pod")
    return PodIdentity(namespace=namespace, name=name)


POD_LOGS_TOOL = types.Tool(
    name=GET_POD_LOGS,
    description=(
        "Read the logs of the given container of the given Kubernetes pod "
        "in the given namespace."
    ),
    inputSchema=pod_input_schema(
        "The name of the container of the pod whose logs are being read"
    ),
)

POD_EVENTS_TOOL = types.Tool(
    name=GET_POD_EVENTS,
    description="Read the events of the given Kubernetes pod in the given namespace.",
    inputSchema=pod_input_schema(
        "The name of a container of the pod. Events are pod-scoped, so this is ignored"
    ),
)


@tool_handler
def get_pod_logs(
    accessor: PodAccessor,
    arguments: Mapping[str, Any] | None,
) -> ToolResult:
    """
    Get the tail of a pod's log.

    Args:
        accessor: Pod accessor to read through.
        arguments: Tool call arguments with "namespace", "pod" and an
            optional "container".

    Returns:
        ToolResult with the raw log text, or an error result.
    """
    identity = _pod_identity(arguments)
    container = optional_string(arguments, "container")
    return ToolResult.ok(accessor.get_logs(identity, container=container))


@tool_handler
def get_pod_events(
    accessor: PodAccessor,
    arguments: Mapping[str, Any] | None,
) -> ToolResult:
    """
    Get events for a pod.

    Args:
        accessor: Pod accessor to read through.
        arguments: Tool call arguments with "namespace" and "pod". A
            "container" argument is validated but otherwise unused.

    Returns:
        ToolResult with back-to-back JSON event objects, or an error result.
    """
    identity = _pod_identity(arguments)
    optional_string(arguments, "container")
    return ToolResult.ok(accessor.get_events(identity))
