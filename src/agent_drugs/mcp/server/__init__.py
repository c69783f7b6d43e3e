"""MCP server package.

Modules:
    protocol: ToolHandler protocol and the per-call ToolCallContext
    dispatcher: Dispatcher routing protocol requests to the tool handlers
    http: FastAPI transport (``create_app``)
    adapter: FastMCP stdio transport (``MCPServerAdapter``)

Transports are imported from their modules directly; this package only
re-exports the handler protocol so tool modules can depend on it.
"""

from agent_drugs.mcp.server.protocol import ToolCallContext, ToolHandler

__all__ = [
    "ToolCallContext",
    "ToolHandler",
]
