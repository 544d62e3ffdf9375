"""
Tool result model returned by every tool handler.

Failures are reported in-band: the protocol call succeeds and the result
carries the error message with the error flag set.
"""

from enum import Enum

from mcp import types
from pydantic import BaseModel, Field


class ToolStatus(str, Enum):
    """
    Status of tool execution.

    Attributes:
        SUCCESS: Tool completed and the text holds the payload.
        ERROR: Tool failed and the text holds the error message.
    """

    SUCCESS = "success"
    ERROR = "error"


class ToolResult(BaseModel):
    """
    Tagged result of a tool call: either a payload or an error message.

    Example:
        ```python
        ToolResult.ok(b"line 1\\nline 2\\n")
        ToolResult.error("failed to look up pod: Not Found")
        ```
    """

    status: ToolStatus = Field(description="Execution status: success or error")
    text: str = Field(default="", description="Payload text or error message")

    @classmethod
    def ok(cls, payload: bytes | str) -> "ToolResult":
        """
        Create a successful result.

        Args:
            payload: Raw bytes from the accessor or already decoded text.
                Bytes are decoded as UTF-8, replacing invalid sequences.

        Returns:
            ToolResult with SUCCESS status.
        """
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8", errors="replace")
        return cls(status=ToolStatus.SUCCESS, text=payload)

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        """Create an error result carrying a human-readable message."""
        return cls(status=ToolStatus.ERROR, text=message)

    @property
    def is_error(self) -> bool:
        return self.status == ToolStatus.ERROR

    def to_call_tool_result(self) -> types.CallToolResult:
        """Convert to the protocol's CallToolResult."""
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )
