"""
Control Plane MCP Server - Kubernetes pod diagnostics over MCP.

Exposes read-only tools for retrieving a pod's logs and events, bounded so
the output stays small enough for an AI agent to consume.
"""

from controlplane_mcp.config import AccessorConfig, Settings
from controlplane_mcp.models.responses import ToolResult, ToolStatus

__version__ = "0.0.1"
__all__ = ["AccessorConfig", "Settings", "ToolResult", "ToolStatus"]
