"""MCP error hierarchy for agent-drugs.

Exception Hierarchy:
    AgentDrugsError (base from core.errors)
    └── MCPError (MCP base)
        ├── MCPProtocolError  - Malformed request; always a hard failure
        └── MCPToolError      - Tool-level domain error; carried in Result and
                                rendered as a soft error payload
"""

from typing import Any

from agent_drugs.core.errors import AgentDrugsError
from agent_drugs.mcp.types import SoftErrorCode


class MCPError(AgentDrugsError):
    """Base exception for protocol-level errors."""


class MCPProtocolError(MCPError):
    """The request cannot be attributed to any tool or argument set.

    Raised for a missing ``params`` object, a missing tool name, a missing
    required argument or arguments that are not an object.

    Attributes:
        method: The protocol method being handled.
        tool_name: The tool being called, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        tool_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.method = method
        self.tool_name = tool_name


class MCPToolError(MCPError):
    """A tool reached an expected negative outcome.

    Attributes:
        code: Soft error code reported to the caller.
        tool_name: Name of the tool that produced the error.
    """

    def __init__(
        self,
        message: str,
        *,
        code: SoftErrorCode,
        tool_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.code = code
        self.tool_name = tool_name
