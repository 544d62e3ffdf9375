"""Models package - Pydantic models for pods, events and tool results."""

from controlplane_mcp.models.events import EventRecord
from controlplane_mcp.models.pods import PodIdentity
from controlplane_mcp.models.responses import ToolResult, ToolStatus

__all__ = [
    "EventRecord",
    "PodIdentity",
    "ToolResult",
    "ToolStatus",
]
