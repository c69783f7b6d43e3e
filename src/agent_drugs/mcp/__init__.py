"""Tool protocol for agent-drugs.

Public API:
    Errors:
        MCPError, MCPProtocolError, MCPToolError

    Types:
        MCPToolDefinition, MCPToolParameter, MCPToolResult, MCPContentItem,
        MCPRequest, MCPResponse, ContentType, SoftErrorCode, ToolInputType
"""

from agent_drugs.mcp.errors import MCPError, MCPProtocolError, MCPToolError
from agent_drugs.mcp.types import (
    HARD_ERROR_CODE,
    ContentType,
    MCPContentItem,
    MCPRequest,
    MCPResponse,
    MCPToolDefinition,
    MCPToolParameter,
    MCPToolResult,
    SoftErrorCode,
    ToolInputType,
)

__all__ = [
    # Errors
    "MCPError",
    "MCPProtocolError",
    "MCPToolError",
    # Types
    "HARD_ERROR_CODE",
    "ContentType",
    "MCPContentItem",
    "MCPRequest",
    "MCPResponse",
    "MCPToolDefinition",
    "MCPToolParameter",
    "MCPToolResult",
    "SoftErrorCode",
    "ToolInputType",
]
