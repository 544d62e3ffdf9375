"""Tools package - pod diagnostics tools and their dispatcher."""

import logging
from typing import Any, Callable, Mapping, NamedTuple

from mcp import types

from controlplane_mcp.clients.pods import PodAccessor
from controlplane_mcp.models.responses import ToolResult
from controlplane_mcp.tools.pods import (
    GET_POD_EVENTS,
    GET_POD_LOGS,
    POD_EVENTS_TOOL,
    POD_LOGS_TOOL,
    get_pod_events,
    get_pod_logs,
)

logger = logging.getLogger(__name__)

Handler = Callable[[PodAccessor, Mapping[str, Any] | None], ToolResult]


class RegisteredTool(NamedTuple):
    definition: types.Tool
    handler: Handler


TOOLS: dict[str, RegisteredTool] = {
    GET_POD_LOGS: RegisteredTool(POD_LOGS_TOOL, get_pod_logs),
    GET_POD_EVENTS: RegisteredTool(POD_EVENTS_TOOL, get_pod_events),
}


class ToolDispatcher:
    """
    Routes tool calls to their handlers.

    The dispatcher is stateless across calls; it only holds the shared
    accessor.

    Args:
        accessor: Pod accessor used by every tool.
    """

    def __init__(self, accessor: PodAccessor):
        self._accessor = accessor

    def list_tools(self) -> list[types.Tool]:
        return [tool.definition for tool in TOOLS.values()]

    def call(self, name: str, arguments: Mapping[str, Any] | None) -> ToolResult:
        """
        Invoke a tool by name.

        Never raises: unknown tools and handler failures come back as error
        results.
        """
        tool = TOOLS.get(name)
        if tool is None:
            logger.debug("unknown tool requested: %s", name)
            return ToolResult.error(f"Unknown tool: {name}")
        return tool.handler(self._accessor, arguments)


__all__ = [
    "GET_POD_EVENTS",
    "GET_POD_LOGS",
    "TOOLS",
    "ToolDispatcher",
    "get_pod_events",
    "get_pod_logs",
]
